"""Package version lookup."""

from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path

from packaging.version import InvalidVersion, Version

_DISTRIBUTION = "mpdtext"
_CHANGELOG_HEADING = re.compile(r"^## v(?P<version>\d+\.\d+\.\d+)\b")


def _changelog_version() -> str:
    # source checkouts without installed metadata
    for parent in Path(__file__).resolve().parents[1:3]:
        changelog = parent / "CHANGELOG.md"
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = _CHANGELOG_HEADING.match(line)
            if match:
                return match.group("version")
    raise RuntimeError(f"Unable to determine the {_DISTRIBUTION!r} version.")


def _load_version() -> str:
    try:
        raw = metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        raw = _changelog_version()
    try:
        Version(raw)
    except InvalidVersion as exc:
        raise RuntimeError(f"Invalid version string for {_DISTRIBUTION!r}: {raw!r}") from exc
    return raw


__version__ = _load_version()

__all__ = ["__version__"]
