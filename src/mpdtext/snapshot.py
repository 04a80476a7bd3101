"""Immutable player/status snapshots consumed by the template renderer.

A :class:`Snapshot` captures one poll of the music player daemon: the song
currently queued (if any) together with the status fields exposed by the
``status`` command.  Snapshots never change after construction; the refresh
controller compares the previous and the current snapshot to decide which
output sections must be regenerated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Mapping, Optional

__all__ = [
    "PlaybackState",
    "QueuePlace",
    "Snapshot",
    "Song",
    "UNKNOWN_VOLUME",
]


UNKNOWN_VOLUME = -1
_ENABLED_TOGGLE_VALUES = frozenset({"1", "oneshot"})


class PlaybackState(Enum):
    """Playback state reported by the daemon."""

    STOP = "stop"
    PLAY = "play"
    PAUSE = "pause"

    @classmethod
    def from_mpd(cls, value: Any) -> "PlaybackState":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STOP


@dataclass(frozen=True, slots=True)
class QueuePlace:
    """Location of the current song inside the play queue."""

    id: int
    pos: int


@dataclass(frozen=True, slots=True)
class Song:
    """Metadata of the song currently loaded by the player.

    ``tags`` holds every additional tag keyed by its lower-cased name.  Only a
    handful are used by placeholders (``albumartist``, ``album`` and
    ``date``) but the mapping is kept whole so that snapshots compare equal
    only when the daemon reported identical metadata.
    """

    file: str
    artist: Optional[str] = None
    title: Optional[str] = None
    tags: Mapping[str, str] = field(default_factory=dict)

    def tag(self, name: str) -> Optional[str]:
        return self.tags.get(name.lower())

    @classmethod
    def from_mpd(cls, payload: Mapping[str, Any]) -> Optional["Song"]:
        """Build a :class:`Song` from a ``currentsong`` response.

        Returns ``None`` when the response is empty, which is how the daemon
        signals that nothing is queued.
        """

        if not payload:
            return None
        values = {str(key).lower(): _join_tag(value) for key, value in payload.items()}
        file = values.pop("file", "")
        artist = values.pop("artist", None)
        title = values.pop("title", None)
        return cls(file=file, artist=artist, title=title, tags=values)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One fetched instant of player state."""

    song: Optional[Song] = None
    volume: int = UNKNOWN_VOLUME
    elapsed: Optional[timedelta] = None
    duration: Optional[timedelta] = None
    position: Optional[QueuePlace] = None
    queue_length: int = 0
    state: PlaybackState = PlaybackState.STOP
    consume: bool = False
    random: bool = False
    repeat: bool = False
    single: bool = False

    @classmethod
    def from_mpd(
        cls,
        status: Mapping[str, Any],
        song: Optional[Mapping[str, Any]] = None,
    ) -> "Snapshot":
        """Convert raw ``status``/``currentsong`` dictionaries into a snapshot.

        Parameters
        ----------
        status:
            Mapping returned by the ``status`` command.  Values are strings
            as sent over the wire.
        song:
            Mapping returned by the ``currentsong`` command, or ``None``.
        """

        position: Optional[QueuePlace] = None
        song_id = _optional_int(status.get("songid"))
        song_pos = _optional_int(status.get("song"))
        if song_id is not None:
            position = QueuePlace(id=song_id, pos=song_pos if song_pos is not None else -1)

        volume = _optional_int(status.get("volume"))
        return cls(
            song=Song.from_mpd(song or {}),
            volume=UNKNOWN_VOLUME if volume is None else volume,
            elapsed=_optional_seconds(status.get("elapsed")),
            duration=_optional_seconds(status.get("duration")),
            position=position,
            queue_length=_optional_int(status.get("playlistlength")) or 0,
            state=PlaybackState.from_mpd(status.get("state", "stop")),
            consume=_toggle(status.get("consume")),
            random=_toggle(status.get("random")),
            repeat=_toggle(status.get("repeat")),
            single=_toggle(status.get("single")),
        )


def _join_tag(value: Any) -> str:
    # multi-valued tags arrive as lists
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _optional_seconds(value: Any) -> Optional[timedelta]:
    if value is None:
        return None
    try:
        seconds = float(str(value).strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return timedelta(seconds=seconds)


def _toggle(value: Any) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() in _ENABLED_TOGGLE_VALUES
