"""Differential re-rendering of the prefix, main and suffix sections."""

from __future__ import annotations

import logging
from enum import Flag, auto
from typing import Dict, Optional

from .icons import IconSet
from .snapshot import Snapshot
from .template import RenderContext, TemplateProgram
from .timefmt import TimeFormatError

__all__ = ["RefreshController", "SectionChange"]


logger = logging.getLogger(__name__)


class SectionChange(Flag):
    """Set of output sections regenerated by a tick."""

    NONE = 0
    PREFIX = auto()
    SUFFIX = auto()
    MAIN = auto()


class RefreshController:
    """Keep three rendered sections in sync with the latest snapshot.

    The controller is the sole owner of the previous snapshot.  Each
    :meth:`tick` compares it with the new snapshot section by section and
    re-renders only the sections whose placeholders resolve to different
    values; the other buffers are left untouched.

    Parameters
    ----------
    main, prefix, suffix:
        Template programs of the three sections.
    icons:
        Icon tables used for the state and toggle placeholders.
    default_placeholder:
        Text emitted in place of missing metadata.
    snapshot:
        Snapshot used for the initial render.  Defaults to an empty one.
    """

    def __init__(
        self,
        main: TemplateProgram,
        *,
        prefix: Optional[TemplateProgram] = None,
        suffix: Optional[TemplateProgram] = None,
        icons: Optional[IconSet] = None,
        default_placeholder: str = "",
        snapshot: Optional[Snapshot] = None,
    ) -> None:
        self._programs: Dict[SectionChange, TemplateProgram] = {
            SectionChange.PREFIX: prefix or TemplateProgram(),
            SectionChange.SUFFIX: suffix or TemplateProgram(),
            SectionChange.MAIN: main,
        }
        self._context = RenderContext(
            icons=icons or IconSet.default(), default=default_placeholder
        )
        self._snapshot = snapshot or Snapshot()
        self._buffers: Dict[SectionChange, str] = {
            section: program.render(self._snapshot, self._context)
            for section, program in self._programs.items()
        }

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def context(self) -> RenderContext:
        return self._context

    @property
    def prefix(self) -> str:
        return self._buffers[SectionChange.PREFIX]

    @property
    def suffix(self) -> str:
        return self._buffers[SectionChange.SUFFIX]

    @property
    def main(self) -> str:
        return self._buffers[SectionChange.MAIN]

    @property
    def text(self) -> str:
        return self.prefix + self.main + self.suffix

    def program(self, section: SectionChange) -> TemplateProgram:
        return self._programs[section]

    def changes(self, snapshot: Snapshot) -> SectionChange:
        """Sections whose resolved values differ between the stored and ``snapshot``."""

        changed = SectionChange.NONE
        for section, program in self._programs.items():
            if program.differs(self._snapshot, snapshot):
                changed |= section
        return changed

    def tick(self, snapshot: Snapshot) -> SectionChange:
        """Adopt ``snapshot`` and re-render the sections it affects.

        Rendering happens before any state is replaced, so a
        :class:`~mpdtext.timefmt.TimeFormatError` leaves both the buffers and
        the stored snapshot exactly as they were.
        """

        changed = self.changes(snapshot)
        rendered: Dict[SectionChange, str] = {}
        for section, program in self._programs.items():
            if section not in changed:
                continue
            try:
                rendered[section] = program.render(snapshot, self._context)
            except TimeFormatError:
                logger.error(
                    "Failed to render section.",
                    extra={
                        "event": "refresh.render_failed",
                        "section": section.name.lower(),
                        "template": str(program),
                    },
                )
                raise
        self._buffers.update(rendered)
        self._snapshot = snapshot
        logger.debug(
            "Refresh tick complete.",
            extra={
                "event": "refresh.tick",
                "changed": sorted(section.name.lower() for section in rendered),
            },
        )
        return changed

    def render(self, program: TemplateProgram) -> str:
        """Render an auxiliary ``program`` against the stored snapshot."""

        return program.render(self._snapshot, self._context)
