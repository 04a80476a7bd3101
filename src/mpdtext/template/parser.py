"""Single-pass scanner turning template strings into placeholder entries.

Grammar summary::

    {{          literal '{'
    }}          literal '}'
    {name}      placeholder with its default argument
    {name:arg}  placeholder with an argument (time pattern or pad count)

Any other ``}`` outside a placeholder is an error, as is a ``{`` inside a
placeholder body or a placeholder left open at the end of the input.  The
scan only ever looks at the next delimiter, which fixes which error is
reported for inputs that are malformed in more than one way.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import UnknownPlaceholder, UnmatchedDelimiter
from .placeholders import PLACEHOLDERS, Literal, Placeholder

__all__ = ["parse_entries"]


_DELIMITERS = "{}"


def _find_delimiter(text: str, start: int) -> int:
    for index in range(start, len(text)):
        if text[index] in _DELIMITERS:
            return index
    return -1


def parse_entries(text: str) -> List[Placeholder]:
    """Return the ordered placeholder entries described by ``text``.

    Raises a :class:`~mpdtext.template.errors.TemplateError` subclass on the
    first problem found; no partial result is returned.
    """

    entries: List[Placeholder] = []
    literal: List[str] = []
    position = 0
    length = len(text)

    while position < length:
        found = _find_delimiter(text, position)
        if found < 0:
            literal.append(text[position:])
            break

        following = text[found + 1] if found + 1 < length else None
        if text[found] == "}":
            if following != "}":
                raise UnmatchedDelimiter(found)
            literal.append(text[position : found + 1])
            position = found + 2
            continue

        if following == "{":
            literal.append(text[position : found + 1])
            position = found + 2
            continue

        literal.append(text[position:found])
        if any(literal):
            entries.append(Literal("".join(literal)))
        literal = []

        body_start = found + 1
        closing = _find_delimiter(text, body_start)
        if closing < 0 or text[closing] == "{":
            raise UnmatchedDelimiter(found)
        entries.append(_parse_placeholder(text[body_start:closing]))
        position = closing + 1

    if any(literal):
        entries.append(Literal("".join(literal)))
    return entries


def _parse_placeholder(spec: str) -> Placeholder:
    name, separator, raw_argument = spec.partition(":")
    argument: Optional[str] = raw_argument if separator else None
    kind = PLACEHOLDERS.get(name)
    if kind is None:
        raise UnknownPlaceholder(name)
    return kind.from_argument(argument)
