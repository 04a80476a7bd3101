"""Snapshot sources feeding the refresh controller."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional, Protocol, runtime_checkable

from mpd import MPDClient, MPDError

from .snapshot import Snapshot

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "MPDSnapshotSource",
    "SnapshotSource",
    "SourceError",
]


logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 5.0


class SourceError(RuntimeError):
    """Raised when a snapshot cannot be fetched."""


@runtime_checkable
class SnapshotSource(Protocol):
    """Anything able to produce the current player snapshot."""

    def fetch(self) -> Snapshot:
        ...


class MPDSnapshotSource:
    """Fetch snapshots from a music player daemon over its text protocol.

    The connection is opened lazily by the first :meth:`fetch` (or explicitly
    with :meth:`connect`).  Failures are reported as :class:`SourceError` and
    are never retried here; the caller decides whether a failed tick ends the
    process.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        password: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[MPDClient] = None,
    ) -> None:
        self.host = host
        self.port = int(port)
        self.password = password
        self.timeout = timeout
        self._client = client if client is not None else MPDClient()
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        if self._connected:
            return
        self._client.timeout = self.timeout
        try:
            self._client.connect(self.host, self.port)
            if self.password:
                self._client.password(self.password)
        except (MPDError, OSError) as exc:
            raise SourceError(
                f"MPD connection error ({self.host}:{self.port}): {exc}"
            ) from exc
        self._connected = True
        logger.info(
            "Connected to MPD.",
            extra={"event": "source.connected", "host": self.host, "port": self.port},
        )

    def fetch(self) -> Snapshot:
        self.connect()
        try:
            song = self._client.currentsong()
            status = self._client.status()
        except (MPDError, OSError) as exc:
            logger.warning(
                "Failed to fetch MPD status.",
                extra={
                    "event": "source.fetch_failed",
                    "host": self.host,
                    "port": self.port,
                    "error": str(exc),
                },
            )
            raise SourceError(f"MPD server error: {exc}") from exc
        return Snapshot.from_mpd(status, song)

    def close(self) -> None:
        if not self._connected:
            return
        self._connected = False
        try:
            self._client.close()
            self._client.disconnect()
        except (MPDError, OSError):
            logger.debug(
                "Ignoring error while closing MPD connection.",
                extra={"event": "source.close_failed", "host": self.host},
                exc_info=True,
            )

    def __enter__(self) -> "MPDSnapshotSource":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()
