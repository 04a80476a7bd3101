"""Placeholder template language for player status strings."""

from .errors import (
    PadParseError,
    PatternError,
    RedundantFormat,
    TemplateError,
    UnknownPlaceholder,
    UnmatchedDelimiter,
)
from .placeholders import PLACEHOLDERS, Placeholder, RenderContext, ResolvedValue
from .program import TemplateProgram

__all__ = [
    "PLACEHOLDERS",
    "PadParseError",
    "PatternError",
    "Placeholder",
    "RedundantFormat",
    "RenderContext",
    "ResolvedValue",
    "TemplateError",
    "TemplateProgram",
    "UnknownPlaceholder",
    "UnmatchedDelimiter",
]
