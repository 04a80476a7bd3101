"""Errors raised while parsing template strings."""

from __future__ import annotations

from ..errors import ConfigurationError
from ..timefmt import TimePatternError

__all__ = [
    "PadParseError",
    "PatternError",
    "RedundantFormat",
    "TemplateError",
    "UnknownPlaceholder",
    "UnmatchedDelimiter",
]


class TemplateError(ConfigurationError):
    """Base class for every template parse failure."""


class UnknownPlaceholder(TemplateError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown placeholder '{name}'")
        self.name = name


class RedundantFormat(TemplateError):
    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' does not have additional formatting")
        self.name = name


class PatternError(TemplateError):
    def __init__(self, name: str, cause: TimePatternError) -> None:
        super().__init__(f"Invalid duration format for '{name}': {cause}")
        self.name = name
        self.cause = cause


class PadParseError(TemplateError):
    def __init__(self, name: str, argument: str) -> None:
        super().__init__(
            f"Padding parse error for '{name}': {argument!r} is not a non-negative integer"
        )
        self.name = name
        self.argument = argument


class UnmatchedDelimiter(TemplateError):
    def __init__(self, position: int) -> None:
        super().__init__(f"Unmatched '{{' or '}}' at position {position}")
        self.position = position
