"""Exception hierarchy shared by the configuration parsers."""

from __future__ import annotations

__all__ = ["ConfigurationError"]


class ConfigurationError(ValueError):
    """Base class for errors raised while parsing user configuration.

    Every subclass is fatal at startup: a process must refuse to run with a
    partially parsed template or icon table.
    """
