"""Parsed templates: parsing, canonical serialization and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from ..snapshot import Snapshot
from .parser import parse_entries
from .placeholders import Literal, Placeholder, RenderContext, ResolvedValue

__all__ = ["TemplateProgram"]


@dataclass(frozen=True, slots=True)
class TemplateProgram:
    """Immutable, ordered sequence of placeholder entries.

    Entries render in insertion order.  ``str(program)`` yields the canonical
    form: literal braces are doubled and every placeholder is written with
    its bare name, dropping custom time patterns and pad counts.
    """

    entries: Tuple[Placeholder, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "TemplateProgram":
        return cls(tuple(parse_entries(text)))

    @classmethod
    def literal(cls, text: str) -> "TemplateProgram":
        """Program rendering ``text`` verbatim."""

        return cls((Literal(text),) if text else ())

    def __iter__(self) -> Iterator[Placeholder]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def serialize(self) -> str:
        return "".join(entry.serialize() for entry in self.entries)

    def __str__(self) -> str:
        return self.serialize()

    def resolve(self, snapshot: Snapshot) -> Tuple[ResolvedValue, ...]:
        return tuple(entry.resolve(snapshot) for entry in self.entries)

    def differs(self, old: Snapshot, new: Snapshot) -> bool:
        """Whether any entry resolves differently for ``old`` and ``new``."""

        return any(entry.resolve(old) != entry.resolve(new) for entry in self.entries)

    def render(self, snapshot: Snapshot, context: RenderContext) -> str:
        """Render the program against ``snapshot``.

        :class:`~mpdtext.timefmt.TimeFormatError` propagates when a duration
        pattern cannot format the snapshot's value.
        """

        return "".join(entry.render(snapshot, context) for entry in self.entries)
