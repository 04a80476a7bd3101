"""Output adapters for rendered status text."""

from .waybar import TemplateTooltip, TextTooltip, Tooltip, WaybarEmitter, build_payload

__all__ = ["TemplateTooltip", "TextTooltip", "Tooltip", "WaybarEmitter", "build_payload"]
