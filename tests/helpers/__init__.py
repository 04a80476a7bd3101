"""Convenience re-exports for test helpers."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Tuple

_MODULE_EXPORTS: Tuple[Tuple[str, Iterable[str]], ...] = (
    (
        "snapshots",
        (
            "build_snapshot",
            "build_song",
            "mpd_status",
            "mpd_song",
        ),
    ),
    ("sources", ("FailingSource", "FakeMPDClient", "ScriptedSource")),
    ("cli", ("run_cli_in_tmp", "stop_after")),
)

_NAME_TO_MODULE: Dict[str, str] = {
    name: module for module, names in _MODULE_EXPORTS for name in names
}

__all__ = [name for _, names in _MODULE_EXPORTS for name in names]


def __getattr__(name: str) -> Any:
    try:
        module_name = _NAME_TO_MODULE[name]
    except KeyError as exc:  # pragma: no cover - standard AttributeError path
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc

    module = importlib.import_module(f".{module_name}", __name__)
    return getattr(module, name)


def __dir__() -> List[str]:
    return sorted(set(__all__) | set(globals()))


if TYPE_CHECKING:
    from .cli import run_cli_in_tmp, stop_after
    from .snapshots import build_snapshot, build_song, mpd_song, mpd_status
    from .sources import FailingSource, FakeMPDClient, ScriptedSource
