from __future__ import annotations

from datetime import timedelta

import pytest

from mpdtext.icons import IconSet
from mpdtext.snapshot import PlaybackState, QueuePlace, Snapshot
from mpdtext.template import RenderContext, TemplateProgram
from mpdtext.timefmt import TimeFormatError
from tests.helpers import build_snapshot, build_song


@pytest.fixture
def context() -> RenderContext:
    return RenderContext(icons=IconSet.default(), default="N/A")


def _render(text: str, snapshot: Snapshot, context: RenderContext) -> str:
    return TemplateProgram.parse(text).render(snapshot, context)


def test_renders_metadata_and_literals(context: RenderContext) -> None:
    snapshot = build_snapshot(song=build_song(artist="Band", title="Song"))

    assert _render("{artist} - {title}", snapshot, context) == "Band - Song"
    assert _render("{{{title}}}", snapshot, context) == "{Song}"


@pytest.mark.parametrize(
    "name", ["artist", "albumArtist", "album", "title", "filename", "date"]
)
def test_missing_metadata_uses_default_text(name: str, context: RenderContext) -> None:
    assert _render("{" + name + "}", Snapshot(), context) == "N/A"


def test_missing_durations_and_position_use_default_text(context: RenderContext) -> None:
    assert _render("{elapsedTime}|{totalTime}|{songPosition}", Snapshot(), context) == "N/A|N/A|N/A"


def test_numbers_render_in_decimal(context: RenderContext) -> None:
    snapshot = build_snapshot(volume=-1, queue_length=12, position=QueuePlace(id=42, pos=3))

    assert _render("{volume} {songPosition}/{queueLength}", snapshot, context) == "-1 42/12"


def test_durations_use_compiled_pattern(context: RenderContext) -> None:
    snapshot = build_snapshot(
        elapsed=timedelta(seconds=75.5), duration=timedelta(hours=1, seconds=1)
    )

    assert _render("{elapsedTime}/{totalTime:%H:%M:%S}", snapshot, context) == "01:15/01:00:01"


@pytest.mark.parametrize("name", ["consumeIcon", "randomIcon", "repeatIcon", "singleIcon"])
def test_disabled_toggle_without_glyph_is_empty(name: str, context: RenderContext) -> None:
    assert _render("{" + name + ":2}", build_snapshot(), context) == ""


def test_enabled_toggles_are_padded(context: RenderContext) -> None:
    snapshot = build_snapshot(consume=True, random=True, repeat=True, single=True)

    assert _render(
        "{consumeIcon}{randomIcon:1}{repeatIcon}{singleIcon:2}", snapshot, context
    ) == "cz rs  "


def test_disabled_glyph_is_rendered() -> None:
    icons = IconSet.parse(state="PAS", consume="cC", random="z", repeat="r", single="s")
    context = RenderContext(icons=icons, default="?")

    assert _render("{consumeIcon:1}|", build_snapshot(), context) == "C |"


@pytest.mark.parametrize(
    ("state", "expected"),
    [
        (PlaybackState.PLAY, "▶ "),
        (PlaybackState.PAUSE, "⏸ "),
        (PlaybackState.STOP, "⏹ "),
    ],
)
def test_state_icon(state: PlaybackState, expected: str, context: RenderContext) -> None:
    assert _render("{stateIcon:1}", build_snapshot(state=state), context) == expected


def test_unsupported_specifier_fails_at_render_time(context: RenderContext) -> None:
    program = TemplateProgram.parse("{elapsedTime:%d}")

    with pytest.raises(TimeFormatError):
        program.render(build_snapshot(elapsed=timedelta(seconds=1)), context)
    assert program.render(Snapshot(), context) == "N/A"
