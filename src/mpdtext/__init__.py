"""Top-level package for mpdtext.

mpdtext renders music player daemon status into short text strings driven by
a small placeholder template language (``"{artist} - {title}"``), and keeps
the rendered prefix, main text and suffix up to date by re-rendering only the
sections whose underlying values changed between two polls.
"""

from ._version import __version__
from .errors import ConfigurationError
from .icons import IconCountError, IconSet, StateIcons, ToggleIcons
from .refresh import RefreshController, SectionChange
from .snapshot import PlaybackState, QueuePlace, Snapshot, Song
from .sources import MPDSnapshotSource, SnapshotSource, SourceError
from .template import (
    PadParseError,
    PatternError,
    RedundantFormat,
    TemplateError,
    TemplateProgram,
    UnknownPlaceholder,
    UnmatchedDelimiter,
)
from .timefmt import TimeFormatError, TimePattern

__all__ = [
    "ConfigurationError",
    "IconCountError",
    "IconSet",
    "MPDSnapshotSource",
    "PadParseError",
    "PatternError",
    "PlaybackState",
    "QueuePlace",
    "RedundantFormat",
    "RefreshController",
    "SectionChange",
    "Snapshot",
    "SnapshotSource",
    "Song",
    "SourceError",
    "StateIcons",
    "TemplateError",
    "TemplateProgram",
    "TimeFormatError",
    "TimePattern",
    "ToggleIcons",
    "UnknownPlaceholder",
    "UnmatchedDelimiter",
    "__version__",
]
