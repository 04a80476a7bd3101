"""Compiled strftime-style patterns for rendering durations.

Durations are displayed by converting them into a time of day (seconds since
midnight) and formatting that value.  Patterns are compiled once while the
configuration is loaded so that malformed specifiers are reported at startup;
specifiers that are valid strftime items but have no meaning for a time of
day (dates, time zones) are accepted here and only fail when a duration is
actually formatted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional, Tuple, Union

__all__ = [
    "DEFAULT_TIME_PATTERN",
    "TimePatternError",
    "TimeFormatError",
    "TimePattern",
]


DEFAULT_TIME_PATTERN = "%M:%S"

_SECONDS_PER_DAY = 24 * 60 * 60

_PAD_MODIFIERS = frozenset("-_0")
_TIME_SPECIFIERS = frozenset("HkIlMSPpfRTXr")
_DATE_SPECIFIERS = frozenset("YCymbhBdeaAwuUWGgVjDxFvcsZz+")
_LITERAL_SPECIFIERS = {"%": "%", "n": "\n", "t": "\t"}
_FRACTION_SPECIFIERS = frozenset({".f", ".3f", ".6f", ".9f", "3f", "6f", "9f"})

# natural padding of each numeric specifier: (width, fill)
_NUMERIC_PADDING = {
    "H": (2, "0"),
    "k": (2, " "),
    "I": (2, "0"),
    "l": (2, " "),
    "M": (2, "0"),
    "S": (2, "0"),
}


class TimePatternError(ValueError):
    """Raised when a time pattern cannot be compiled."""

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        super().__init__(f"{reason} at position {position} in {pattern!r}")
        self.pattern = pattern
        self.position = position
        self.reason = reason


class TimeFormatError(ValueError):
    """Raised when a compiled pattern cannot format a duration."""


@dataclass(frozen=True, slots=True)
class _Specifier:
    code: str
    pad: Optional[str] = None


_Item = Union[str, _Specifier]


@dataclass(frozen=True, slots=True)
class TimePattern:
    """Validated sequence of literal text and time specifiers.

    Two patterns compare equal when they were compiled from the same source
    text.
    """

    source: str
    items: Tuple[_Item, ...] = field(compare=False, repr=False, default=())

    @classmethod
    def compile(cls, source: str) -> "TimePattern":
        """Compile ``source`` or raise :class:`TimePatternError`."""

        items: list[_Item] = []
        literal: list[str] = []
        index = 0
        length = len(source)
        while index < length:
            char = source[index]
            if char != "%":
                literal.append(char)
                index += 1
                continue
            start = index
            index += 1
            if index >= length:
                raise TimePatternError(source, start, "dangling '%'")
            pad: Optional[str] = None
            if source[index] in _PAD_MODIFIERS:
                pad = source[index]
                index += 1
                if index >= length:
                    raise TimePatternError(source, start, "dangling padding modifier")
            code, index = _read_code(source, index)
            if code is None:
                raise TimePatternError(source, start, "unknown specifier")
            if code in _LITERAL_SPECIFIERS:
                if pad is not None:
                    raise TimePatternError(source, start, "padding modifier on literal specifier")
                literal.append(_LITERAL_SPECIFIERS[code])
                continue
            if literal:
                items.append("".join(literal))
                literal = []
            items.append(_Specifier(code, pad))
        if literal:
            items.append("".join(literal))
        return cls(source=source, items=tuple(items))

    def format(self, duration: timedelta) -> str:
        """Render ``duration`` as a time of day using the compiled items."""

        micros_total = (
            duration.days * _SECONDS_PER_DAY + duration.seconds
        ) * 1_000_000 + duration.microseconds
        if micros_total < 0 or micros_total >= _SECONDS_PER_DAY * 1_000_000:
            raise TimeFormatError(
                f"Duration {duration} cannot be represented as a time of day"
            )
        seconds_total, micros = divmod(micros_total, 1_000_000)
        hours, remainder = divmod(seconds_total, 3600)
        minutes, seconds = divmod(remainder, 60)
        clock = _Clock(hours, minutes, seconds, micros)

        parts: list[str] = []
        for item in self.items:
            if isinstance(item, str):
                parts.append(item)
            else:
                parts.append(clock.render(item))
        return "".join(parts)

    def __str__(self) -> str:
        return self.source


def _read_code(source: str, index: int) -> Tuple[Optional[str], int]:
    for fraction in sorted(_FRACTION_SPECIFIERS, key=len, reverse=True):
        if source.startswith(fraction, index):
            return fraction, index + len(fraction)
    char = source[index]
    if char in _TIME_SPECIFIERS or char in _DATE_SPECIFIERS or char in _LITERAL_SPECIFIERS:
        return char, index + 1
    return None, index


@dataclass(frozen=True, slots=True)
class _Clock:
    hours: int
    minutes: int
    seconds: int
    micros: int

    def render(self, spec: _Specifier) -> str:
        code = spec.code
        if code in _DATE_SPECIFIERS:
            raise TimeFormatError(f"Unsupported time specifier '%{code}'")
        if code in _FRACTION_SPECIFIERS:
            return self._fraction(code)
        if code == "R":
            return f"{self.hours:02d}:{self.minutes:02d}"
        if code in ("T", "X"):
            return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"
        if code == "r":
            return f"{self._hour12():02d}:{self.minutes:02d}:{self.seconds:02d} {self._meridiem()}"
        if code == "p":
            return self._meridiem()
        if code == "P":
            return self._meridiem().lower()
        if code == "f":
            return f"{self.micros * 1000:09d}"
        value = {
            "H": self.hours,
            "k": self.hours,
            "I": self._hour12(),
            "l": self._hour12(),
            "M": self.minutes,
            "S": self.seconds,
        }[code]
        width, fill = _NUMERIC_PADDING[code]
        if spec.pad == "-":
            return str(value)
        if spec.pad == "_":
            fill = " "
        elif spec.pad == "0":
            fill = "0"
        return str(value).rjust(width, fill)

    def _hour12(self) -> int:
        return (self.hours % 12) or 12

    def _meridiem(self) -> str:
        return "AM" if self.hours < 12 else "PM"

    def _fraction(self, code: str) -> str:
        nanos = self.micros * 1000
        if code == ".f":
            if nanos == 0:
                return ""
            if nanos % 1_000_000 == 0:
                return f".{nanos // 1_000_000:03d}"
            if nanos % 1000 == 0:
                return f".{nanos // 1000:06d}"
            return f".{nanos:09d}"
        digits = int(code.lstrip(".")[0])
        text = f"{nanos:09d}"[:digits]
        return f".{text}" if code.startswith(".") else text
