"""Tests for the differential refresh controller."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from mpdtext.icons import IconSet
from mpdtext.refresh import RefreshController, SectionChange
from mpdtext.snapshot import PlaybackState, Snapshot
from mpdtext.template import TemplateProgram
from mpdtext.timefmt import TimeFormatError
from tests.helpers import build_snapshot, build_song


def _controller(
    main: str = "{artist} - {title}",
    *,
    prefix: str = "{stateIcon:1}",
    suffix: str = " {elapsedTime}",
    snapshot: Snapshot | None = None,
) -> RefreshController:
    return RefreshController(
        TemplateProgram.parse(main),
        prefix=TemplateProgram.parse(prefix),
        suffix=TemplateProgram.parse(suffix),
        icons=IconSet.default(),
        default_placeholder="N/A",
        snapshot=snapshot,
    )


def test_construction_renders_every_section() -> None:
    snapshot = build_snapshot(elapsed=timedelta(seconds=5))
    controller = _controller(snapshot=snapshot)

    assert controller.prefix == "▶ "
    assert controller.main == "Artist - Title"
    assert controller.suffix == " 00:05"
    assert controller.text == "▶ Artist - Title 00:05"
    assert controller.snapshot is snapshot


def test_empty_snapshot_by_default() -> None:
    controller = _controller()

    assert controller.main == "N/A - N/A"
    assert controller.snapshot == Snapshot()


def test_title_change_leaves_volume_section_unchanged() -> None:
    old = build_snapshot(song=build_song(title="A"))
    new = build_snapshot(old, song=build_song(title="B"))
    controller = _controller("{title}", prefix="", suffix="{volume}", snapshot=old)

    changed = controller.tick(new)

    assert changed == SectionChange.MAIN
    assert SectionChange.SUFFIX not in changed
    assert controller.main == "B"
    assert controller.suffix == "50"


def test_only_elapsed_time_changes() -> None:
    old = build_snapshot(elapsed=timedelta(seconds=1))
    controller = _controller(snapshot=old)

    changed = controller.tick(build_snapshot(old, elapsed=timedelta(seconds=2)))

    assert changed == SectionChange.SUFFIX
    assert controller.suffix == " 00:02"
    assert controller.main == "Artist - Title"


def test_multiple_sections_can_change_together() -> None:
    old = build_snapshot()
    controller = _controller(snapshot=old)

    changed = controller.tick(
        build_snapshot(old, state=PlaybackState.PAUSE, song=build_song(artist="Other"))
    )

    assert changed == SectionChange.PREFIX | SectionChange.MAIN
    assert controller.text == "⏸ Other - Title N/A"


def test_unchanged_buffers_are_not_rewritten(monkeypatch: pytest.MonkeyPatch) -> None:
    old = build_snapshot()
    controller = _controller(snapshot=old)
    rendered: list[str] = []
    original = TemplateProgram.render

    def _tracking(self: TemplateProgram, snapshot: Snapshot, context) -> str:
        rendered.append(str(self))
        return original(self, snapshot, context)

    monkeypatch.setattr(TemplateProgram, "render", _tracking)
    changed = controller.tick(build_snapshot(old, volume=99, random=True))

    assert changed == SectionChange.NONE
    assert not changed
    assert rendered == []


def test_snapshot_is_replaced_even_without_changes() -> None:
    old = build_snapshot()
    new = build_snapshot(old, volume=10)
    controller = _controller(snapshot=old)

    assert controller.tick(new) == SectionChange.NONE
    assert controller.snapshot is new


def test_changes_do_not_mutate_state() -> None:
    old = build_snapshot()
    controller = _controller(snapshot=old)

    assert controller.changes(build_snapshot(old, state=PlaybackState.STOP)) == SectionChange.PREFIX
    assert controller.snapshot is old
    assert controller.prefix == "▶ "


def test_render_failure_leaves_buffers_and_snapshot(caplog: pytest.LogCaptureFixture) -> None:
    old = build_snapshot(elapsed=None)
    controller = _controller("{title}", prefix="{volume}", suffix="{elapsedTime:%Y}", snapshot=old)
    new = build_snapshot(old, volume=1, elapsed=timedelta(seconds=3))

    with caplog.at_level(logging.ERROR, logger="mpdtext"):
        with pytest.raises(TimeFormatError):
            controller.tick(new)

    assert controller.snapshot is old
    assert controller.prefix == "50"
    assert controller.suffix == "N/A"
    assert any(
        getattr(record, "event", None) == "refresh.render_failed" for record in caplog.records
    )


def test_auxiliary_program_uses_stored_snapshot() -> None:
    controller = _controller(snapshot=build_snapshot(volume=33))

    assert controller.render(TemplateProgram.parse("vol {volume}")) == "vol 33"
    assert controller.program(SectionChange.MAIN) == TemplateProgram.parse("{artist} - {title}")
