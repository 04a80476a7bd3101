"""Placeholder kinds and the values they resolve to.

Every placeholder is a frozen dataclass deriving from :class:`Placeholder`.
The family is closed: :data:`PLACEHOLDERS` maps each bare template name to
its class and the parser refuses anything else.  A placeholder knows how to

* :meth:`~Placeholder.resolve` itself against a :class:`Snapshot` into a
  comparable :class:`ResolvedValue` (used for change detection), and
* :meth:`~Placeholder.render` itself into output text.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import ClassVar, Mapping, Optional, Type

from ..icons import IconSet, Toggle
from ..snapshot import PlaybackState, QueuePlace, Snapshot
from ..timefmt import DEFAULT_TIME_PATTERN, TimePattern, TimePatternError
from .errors import PadParseError, PatternError, RedundantFormat

__all__ = [
    "PLACEHOLDERS",
    "Album",
    "AlbumArtist",
    "Artist",
    "ConsumeIcon",
    "Count",
    "Date",
    "ElapsedTime",
    "Filename",
    "Flag",
    "Integer",
    "Literal",
    "OptionalDuration",
    "OptionalQueuePlace",
    "OptionalText",
    "Placeholder",
    "QueueLength",
    "RandomIcon",
    "RenderContext",
    "RepeatIcon",
    "ResolvedValue",
    "SingleIcon",
    "SongPosition",
    "StateIcon",
    "StateValue",
    "Text",
    "Title",
    "TotalTime",
    "Volume",
]


_PAD_PATTERN = re.compile(r"\+?[0-9]+")
_DEFAULT_PATTERN = TimePattern.compile(DEFAULT_TIME_PATTERN)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Read-only rendering configuration shared by every template."""

    icons: IconSet
    default: str = ""


# ----------------------------------------------------------------------
# Resolved values
# ----------------------------------------------------------------------
class ResolvedValue:
    """Marker base for the comparable result of resolving a placeholder."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Text(ResolvedValue):
    text: str


@dataclass(frozen=True, slots=True)
class OptionalText(ResolvedValue):
    value: Optional[str]


@dataclass(frozen=True, slots=True)
class Integer(ResolvedValue):
    value: int


@dataclass(frozen=True, slots=True)
class Count(ResolvedValue):
    value: int


@dataclass(frozen=True, slots=True)
class OptionalDuration(ResolvedValue):
    value: Optional[timedelta]
    pattern: TimePattern


@dataclass(frozen=True, slots=True)
class OptionalQueuePlace(ResolvedValue):
    value: Optional[QueuePlace]


@dataclass(frozen=True, slots=True)
class Flag(ResolvedValue):
    value: bool


@dataclass(frozen=True, slots=True)
class StateValue(ResolvedValue):
    state: PlaybackState
    pad: int


# ----------------------------------------------------------------------
# Placeholders
# ----------------------------------------------------------------------
class Placeholder(ABC):
    """A single entry of a template program."""

    __slots__ = ()

    name: ClassVar[str] = ""
    """Bare template name; empty for literal text."""

    argument: ClassVar[Optional[str]] = None
    """Kind of argument accepted after ``:`` (``"pattern"``, ``"pad"`` or ``None``)."""

    @classmethod
    def from_argument(cls, argument: Optional[str]) -> "Placeholder":
        if argument is not None:
            raise RedundantFormat(cls.name)
        return cls()

    @abstractmethod
    def resolve(self, snapshot: Snapshot) -> ResolvedValue:
        """Return the comparable value of this placeholder for ``snapshot``."""

    @abstractmethod
    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        """Return the output text of this placeholder for ``snapshot``."""

    def serialize(self) -> str:
        return "{" + self.name + "}"


@dataclass(frozen=True, slots=True)
class Literal(Placeholder):
    """Verbatim text between placeholders."""

    text: str

    def resolve(self, snapshot: Snapshot) -> ResolvedValue:
        return Text(self.text)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        return self.text

    def serialize(self) -> str:
        return self.text.replace("{", "{{").replace("}", "}}")


class _SongField(Placeholder):
    __slots__ = ()

    def resolve(self, snapshot: Snapshot) -> OptionalText:
        if snapshot.song is None:
            return OptionalText(None)
        return OptionalText(self._read(snapshot))

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        value = self.resolve(snapshot).value
        return context.default if value is None else value

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Artist(_SongField):
    name: ClassVar[str] = "artist"

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        return snapshot.song.artist


@dataclass(frozen=True, slots=True)
class AlbumArtist(_SongField):
    name: ClassVar[str] = "albumArtist"

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        return snapshot.song.tag("AlbumArtist")


@dataclass(frozen=True, slots=True)
class Album(_SongField):
    name: ClassVar[str] = "album"

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        return snapshot.song.tag("Album")


@dataclass(frozen=True, slots=True)
class Title(_SongField):
    name: ClassVar[str] = "title"

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        return snapshot.song.title


@dataclass(frozen=True, slots=True)
class Filename(_SongField):
    name: ClassVar[str] = "filename"

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        return snapshot.song.file


@dataclass(frozen=True, slots=True)
class Date(_SongField):
    name: ClassVar[str] = "date"

    def _read(self, snapshot: Snapshot) -> Optional[str]:
        return snapshot.song.tag("Date")


@dataclass(frozen=True, slots=True)
class Volume(Placeholder):
    """Raw volume level; ``-1`` when the mixer is unavailable."""

    name: ClassVar[str] = "volume"

    def resolve(self, snapshot: Snapshot) -> Integer:
        return Integer(snapshot.volume)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        return str(self.resolve(snapshot).value)


@dataclass(frozen=True, slots=True)
class SongPosition(Placeholder):
    name: ClassVar[str] = "songPosition"

    def resolve(self, snapshot: Snapshot) -> OptionalQueuePlace:
        return OptionalQueuePlace(snapshot.position)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        place = self.resolve(snapshot).value
        return context.default if place is None else str(place.id)


@dataclass(frozen=True, slots=True)
class QueueLength(Placeholder):
    name: ClassVar[str] = "queueLength"

    def resolve(self, snapshot: Snapshot) -> Count:
        return Count(snapshot.queue_length)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        return str(self.resolve(snapshot).value)


class _Duration(Placeholder):
    __slots__ = ()

    argument: ClassVar[Optional[str]] = "pattern"
    pattern: TimePattern

    @classmethod
    def from_argument(cls, argument: Optional[str]) -> "Placeholder":
        if argument is None:
            return cls(_DEFAULT_PATTERN)
        try:
            return cls(TimePattern.compile(argument))
        except TimePatternError as exc:
            raise PatternError(cls.name, exc) from exc

    def resolve(self, snapshot: Snapshot) -> OptionalDuration:
        return OptionalDuration(self._read(snapshot), self.pattern)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        value = self.resolve(snapshot).value
        if value is None:
            return context.default
        return self.pattern.format(value)

    def _read(self, snapshot: Snapshot) -> Optional[timedelta]:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ElapsedTime(_Duration):
    pattern: TimePattern = _DEFAULT_PATTERN
    name: ClassVar[str] = "elapsedTime"

    def _read(self, snapshot: Snapshot) -> Optional[timedelta]:
        return snapshot.elapsed


@dataclass(frozen=True, slots=True)
class TotalTime(_Duration):
    pattern: TimePattern = _DEFAULT_PATTERN
    name: ClassVar[str] = "totalTime"

    def _read(self, snapshot: Snapshot) -> Optional[timedelta]:
        return snapshot.duration


class _Padded(Placeholder):
    __slots__ = ()

    argument: ClassVar[Optional[str]] = "pad"
    pad: int

    @classmethod
    def from_argument(cls, argument: Optional[str]) -> "Placeholder":
        raw = "0" if argument is None else argument
        if not _PAD_PATTERN.fullmatch(raw):
            raise PadParseError(cls.name, raw)
        return cls(int(raw))


@dataclass(frozen=True, slots=True)
class StateIcon(_Padded):
    pad: int = 0
    name: ClassVar[str] = "stateIcon"

    def resolve(self, snapshot: Snapshot) -> StateValue:
        return StateValue(snapshot.state, self.pad)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        value = self.resolve(snapshot)
        return context.icons.state.render(value.state, value.pad)


class _ToggleIcon(_Padded):
    __slots__ = ()

    toggle: ClassVar[Toggle]

    def resolve(self, snapshot: Snapshot) -> Flag:
        return Flag(getattr(snapshot, self.toggle))

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        # the default text never stands in for an absent glyph
        icons = context.icons.toggle(self.toggle)
        return icons.render(self.resolve(snapshot).value, self.pad)


@dataclass(frozen=True, slots=True)
class ConsumeIcon(_ToggleIcon):
    pad: int = 0
    name: ClassVar[str] = "consumeIcon"
    toggle: ClassVar[Toggle] = "consume"


@dataclass(frozen=True, slots=True)
class RandomIcon(_ToggleIcon):
    pad: int = 0
    name: ClassVar[str] = "randomIcon"
    toggle: ClassVar[Toggle] = "random"


@dataclass(frozen=True, slots=True)
class RepeatIcon(_ToggleIcon):
    pad: int = 0
    name: ClassVar[str] = "repeatIcon"
    toggle: ClassVar[Toggle] = "repeat"


@dataclass(frozen=True, slots=True)
class SingleIcon(_ToggleIcon):
    pad: int = 0
    name: ClassVar[str] = "singleIcon"
    toggle: ClassVar[Toggle] = "single"


PLACEHOLDERS: Mapping[str, Type[Placeholder]] = {
    cls.name: cls
    for cls in (
        Artist,
        AlbumArtist,
        Album,
        Title,
        Filename,
        Date,
        Volume,
        SongPosition,
        QueueLength,
        ElapsedTime,
        TotalTime,
        StateIcon,
        ConsumeIcon,
        RandomIcon,
        RepeatIcon,
        SingleIcon,
    )
}
