"""Error helpers for the mpdtext command line tool."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

__all__ = ["CliError", "ErrorPayload", "log_cli_error"]


_CATEGORY_STATUS_CODES: Mapping[str, int] = {
    "runtime": 1,
    "usage": 2,
    "io": 3,
}

_DEFAULT_CATEGORY = "runtime"
_DEFAULT_LOGGER_NAME = "mpdtext.cli"


def _plain_context(context: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in (context or {}).items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        else:
            payload[key] = str(value)
    return payload


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    """Structured description of a CLI failure."""

    message: str
    category: str = _DEFAULT_CATEGORY
    context: Mapping[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return _CATEGORY_STATUS_CODES.get(
            self.category, _CATEGORY_STATUS_CODES[_DEFAULT_CATEGORY]
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "category": self.category,
            "message": self.message,
            "context": dict(self.context),
        }


def log_cli_error(
    payload: ErrorPayload,
    *,
    logger: Optional[logging.Logger] = None,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Emit ``payload`` through ``logger.error`` with structured context."""

    target = logger or logging.getLogger(_DEFAULT_LOGGER_NAME)
    target.error(
        payload.message,
        extra={
            "event": "cli.error",
            "category": payload.category,
            "status_code": payload.status_code,
            "context": dict(payload.context),
        },
        exc_info=exc_info,
    )


class CliError(RuntimeError):
    """Failure that ends the command with the status code of its category.

    ``usage`` (2) covers invalid configuration and templates, ``io`` (3)
    covers the snapshot source and ``runtime`` (1) everything else.
    """

    def __init__(
        self,
        message: str,
        *,
        category: str = _DEFAULT_CATEGORY,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.payload = ErrorPayload(
            message=message,
            category=category or _DEFAULT_CATEGORY,
            context=_plain_context(context),
        )
        self.logged = False

    @property
    def category(self) -> str:
        return self.payload.category

    @property
    def status_code(self) -> int:
        return self.payload.status_code

    @property
    def context(self) -> Mapping[str, Any]:
        return self.payload.context

    def log(self, logger: Optional[logging.Logger] = None) -> None:
        if self.logged:
            return
        log_cli_error(self.payload, logger=logger, exc_info=self.__cause__ or self)
        self.logged = True
