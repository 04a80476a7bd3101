from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
for entry in (SRC_ROOT, ROOT):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user configuration and environment overrides out of every test."""

    monkeypatch.delenv("MPDTEXT_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("mpdtext")
    for handler in list(logger.handlers):
        if getattr(handler, "_mpdtext_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def pyproject_factory(tmp_path: Path):
    """Return a callable that writes ``pyproject.toml`` files under ``tmp_path``."""

    def _factory(contents: str, directory: Path | None = None) -> Path:
        return write_pyproject(directory or tmp_path, contents)

    return _factory
