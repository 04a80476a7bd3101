"""Logging configuration helpers for mpdtext."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

__all__ = ["JsonFormatter", "setup_logging"]


_ROOT_LOGGER_NAME = "mpdtext"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# attributes present on every LogRecord; anything else came from ``extra``
_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRIBUTES or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    name = str(value or "info").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    raise ValueError(f"Unknown logging level: {value!r}")


def _build_handler(output: str) -> logging.Handler:
    target = (output or "stderr").strip()
    if target.lower() == "stderr":
        return logging.StreamHandler(sys.stderr)
    if target.lower() == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def setup_logging(
    config: Optional[Mapping[str, Any]] = None,
    *,
    logger_name: str = _ROOT_LOGGER_NAME,
) -> logging.Logger:
    """Configure the package logger from the ``logging`` table of ``config``.

    Recognised keys are ``level`` (default ``info``), ``output`` (``stderr``,
    ``stdout`` or a file path; default ``stderr``) and ``format`` (``json`` or
    ``text``; default ``json``).  Calling the function again replaces the
    handlers installed by the previous call.
    """

    logging_cfg: Mapping[str, Any] = {}
    if config is not None:
        section = config.get("logging", {})
        if isinstance(section, Mapping):
            logging_cfg = section

    logger = logging.getLogger(logger_name)
    logger.setLevel(_resolve_level(logging_cfg.get("level", "info")))
    for handler in list(logger.handlers):
        if getattr(handler, "_mpdtext_handler", False):
            logger.removeHandler(handler)
            handler.close()

    fmt = str(logging_cfg.get("format", "json")).strip().lower()
    if fmt == "text":
        formatter = logging.Formatter(_TEXT_FORMAT)
    elif fmt == "json":
        formatter = JsonFormatter()
    else:
        raise ValueError(f"Unknown logging format: {fmt!r}")
    handler = _build_handler(str(logging_cfg.get("output", "stderr")))
    handler.setFormatter(formatter)
    handler._mpdtext_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
