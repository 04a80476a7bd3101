"""Resolution of placeholders against snapshots."""

from __future__ import annotations

from datetime import timedelta

import pytest

from mpdtext.snapshot import PlaybackState, QueuePlace, Snapshot
from mpdtext.template import TemplateProgram
from mpdtext.template.placeholders import (
    Count,
    Flag,
    Integer,
    OptionalDuration,
    OptionalQueuePlace,
    OptionalText,
    StateValue,
    Text,
)
from mpdtext.timefmt import TimePattern
from tests.helpers import build_snapshot, build_song


def _resolve(text: str, snapshot: Snapshot) -> tuple:
    return TemplateProgram.parse(text).resolve(snapshot)


def test_metadata_fields_resolve_to_optional_text() -> None:
    snapshot = build_snapshot(
        song=build_song(
            file="a/b.flac",
            artist="Band",
            title="Song",
            albumartist="Various",
            album="Record",
            date="2001",
        )
    )

    assert _resolve("{artist}{albumArtist}{album}{title}{filename}{date}", snapshot) == (
        OptionalText("Band"),
        OptionalText("Various"),
        OptionalText("Record"),
        OptionalText("Song"),
        OptionalText("a/b.flac"),
        OptionalText("2001"),
    )


def test_missing_song_resolves_to_empty_values() -> None:
    snapshot = Snapshot()

    assert _resolve("{artist}{filename}", snapshot) == (OptionalText(None), OptionalText(None))


def test_missing_tags_resolve_to_empty_values() -> None:
    snapshot = build_snapshot(song=build_song(artist=None))

    assert _resolve("{artist} {album}", snapshot) == (
        OptionalText(None),
        Text(" "),
        OptionalText(None),
    )


def test_volume_keeps_unknown_sentinel() -> None:
    assert _resolve("{volume}", build_snapshot(volume=-1)) == (Integer(-1),)


def test_queue_values() -> None:
    snapshot = build_snapshot(position=QueuePlace(id=7, pos=2), queue_length=9)

    assert _resolve("{songPosition}{queueLength}", snapshot) == (
        OptionalQueuePlace(QueuePlace(id=7, pos=2)),
        Count(9),
    )


def test_durations_are_paired_with_their_pattern() -> None:
    snapshot = build_snapshot(elapsed=timedelta(seconds=3), duration=None)

    assert _resolve("{elapsedTime:%S}{totalTime}", snapshot) == (
        OptionalDuration(timedelta(seconds=3), TimePattern.compile("%S")),
        OptionalDuration(None, TimePattern.compile("%M:%S")),
    )


def test_state_and_toggles() -> None:
    snapshot = build_snapshot(state=PlaybackState.PAUSE, random=True)

    assert _resolve(
        "{stateIcon:1}{consumeIcon}{randomIcon}{repeatIcon}{singleIcon}", snapshot
    ) == (
        StateValue(PlaybackState.PAUSE, 1),
        Flag(False),
        Flag(True),
        Flag(False),
        Flag(False),
    )


@pytest.mark.parametrize(
    ("text", "field", "value"),
    [
        ("{title}", "song", build_song(title="Other")),
        ("{volume}", "volume", 80),
        ("{elapsedTime}", "elapsed", timedelta(seconds=12)),
        ("{queueLength}", "queue_length", 3),
        ("{singleIcon}", "single", True),
        ("{stateIcon}", "state", PlaybackState.STOP),
    ],
)
def test_changed_fields_are_detected(text: str, field: str, value: object) -> None:
    old = build_snapshot(elapsed=timedelta(seconds=11))
    new = build_snapshot(old, **{field: value})
    program = TemplateProgram.parse(text)

    assert program.differs(old, new)
    assert not program.differs(old, old)


def test_unreferenced_fields_do_not_count_as_changes() -> None:
    old = build_snapshot(volume=10)
    new = build_snapshot(old, volume=90, elapsed=timedelta(seconds=5), random=True)

    assert not TemplateProgram.parse("{artist} - {title}").differs(old, new)
