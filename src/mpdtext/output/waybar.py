"""Status-bar JSON output.

The bar reads one JSON object per line from the module's stdout::

    {"text": "...", "tooltip": "...", "class": "play"}

``class`` carries the playback state so that the bar stylesheet can react
to it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import IO, Optional, Union

from ..refresh import RefreshController
from ..template import TemplateProgram

__all__ = [
    "TemplateTooltip",
    "TextTooltip",
    "Tooltip",
    "WaybarEmitter",
    "build_payload",
]


@dataclass(frozen=True, slots=True)
class TextTooltip:
    """Fixed tooltip text."""

    text: str

    def render(self, controller: RefreshController) -> str:
        return _single_line(self.text)


@dataclass(frozen=True, slots=True)
class TemplateTooltip:
    """Tooltip rendered from a template against the current snapshot."""

    program: TemplateProgram

    def render(self, controller: RefreshController) -> str:
        return _single_line(controller.render(self.program))


Tooltip = Union[TextTooltip, TemplateTooltip]


def _single_line(text: str) -> str:
    return text.replace("\n", "")


def build_payload(
    controller: RefreshController, tooltip: Optional[Tooltip] = None
) -> dict[str, str]:
    payload = {"text": controller.text}
    if tooltip is not None:
        payload["tooltip"] = tooltip.render(controller)
    payload["class"] = controller.snapshot.state.value
    return payload


class WaybarEmitter:
    """Write status-bar payloads as JSON lines to ``stream``."""

    def __init__(self, stream: IO[str], tooltip: Optional[Tooltip] = None) -> None:
        self.stream = stream
        self.tooltip = tooltip
        self.lines_written = 0

    def emit(self, controller: RefreshController) -> str:
        line = json.dumps(build_payload(controller, self.tooltip), ensure_ascii=False)
        self.stream.write(line + "\n")
        self.stream.flush()
        self.lines_written += 1
        return line
