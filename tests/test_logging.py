from __future__ import annotations

import json
import sys
import logging
from pathlib import Path

import pytest

from mpdtext.logging import JsonFormatter, setup_logging


def _read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf8").splitlines()


def test_json_logs_include_extra_fields(tmp_path: Path) -> None:
    target = tmp_path / "logs" / "mpdtext.log"
    logger = setup_logging({"logging": {"level": "debug", "output": str(target)}})

    logging.getLogger("mpdtext.refresh").debug(
        "Refresh tick complete.", extra={"event": "refresh.tick", "changed": ["main"]}
    )
    for handler in logger.handlers:
        handler.flush()

    (line,) = _read_lines(target)
    payload = json.loads(line)
    assert payload["level"] == "debug"
    assert payload["logger"] == "mpdtext.refresh"
    assert payload["message"] == "Refresh tick complete."
    assert payload["event"] == "refresh.tick"
    assert payload["changed"] == ["main"]
    assert "timestamp" in payload


def test_text_format_and_level_filtering(tmp_path: Path) -> None:
    target = tmp_path / "mpdtext.log"
    logger = setup_logging(
        {"logging": {"level": "warning", "output": str(target), "format": "text"}}
    )

    logger.info("hidden")
    logger.warning("shown")
    for handler in logger.handlers:
        handler.flush()

    lines = _read_lines(target)
    assert len(lines) == 1
    assert lines[0].endswith("WARNING mpdtext: shown")


def test_repeated_setup_replaces_handlers(tmp_path: Path) -> None:
    setup_logging({"logging": {"output": str(tmp_path / "a.log")}})
    logger = setup_logging({"logging": {"output": str(tmp_path / "b.log")}})

    installed = [h for h in logger.handlers if getattr(h, "_mpdtext_handler", False)]
    assert len(installed) == 1


@pytest.mark.parametrize(
    "section",
    [{"level": "loud"}, {"format": "xml"}],
)
def test_invalid_logging_settings(section: dict) -> None:
    with pytest.raises(ValueError):
        setup_logging({"logging": section})


def test_formatter_serializes_exceptions() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        exc_info = sys.exc_info()
    record = logging.LogRecord("mpdtext", logging.ERROR, __file__, 1, "failed", (), exc_info)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "failed"
    assert "RuntimeError: boom" in payload["exc_info"]
