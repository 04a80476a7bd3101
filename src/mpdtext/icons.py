"""Icon tables for the playback state and the boolean player toggles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .errors import ConfigurationError
from .snapshot import PlaybackState

__all__ = [
    "DEFAULT_STATE_ICONS",
    "DEFAULT_TOGGLE_ICONS",
    "IconCountError",
    "IconSet",
    "StateIcons",
    "ToggleIcons",
]


DEFAULT_STATE_ICONS = "▶⏸⏹"
DEFAULT_TOGGLE_ICONS = {
    "consume": "c",
    "random": "z",
    "repeat": "r",
    "single": "s",
}

Toggle = Literal["consume", "random", "repeat", "single"]


class IconCountError(ConfigurationError):
    """Raised when an icon string holds the wrong number of characters."""

    def __init__(self, problem: Literal["too_few", "too_many"], expected: int) -> None:
        if problem == "too_few":
            message = f"Not enough characters (expected {expected})"
        else:
            message = f"Too many characters (expected {expected})"
        super().__init__(message)
        self.problem = problem
        self.expected = expected

    @property
    def too_few(self) -> bool:
        return self.problem == "too_few"

    @property
    def too_many(self) -> bool:
        return self.problem == "too_many"


@dataclass(frozen=True, slots=True)
class StateIcons:
    """Glyphs shown for the play, pause and stop states."""

    play: str
    pause: str
    stop: str

    @classmethod
    def parse(cls, text: str) -> "StateIcons":
        """Read exactly three characters in play/pause/stop order."""

        chars = list(text)
        if len(chars) < 3:
            raise IconCountError("too_few", 3)
        if len(chars) > 3:
            raise IconCountError("too_many", 3)
        return cls(play=chars[0], pause=chars[1], stop=chars[2])

    def icon(self, state: PlaybackState) -> str:
        if state is PlaybackState.PLAY:
            return self.play
        if state is PlaybackState.PAUSE:
            return self.pause
        return self.stop

    def render(self, state: PlaybackState, pad: int) -> str:
        return self.icon(state) + " " * pad


@dataclass(frozen=True, slots=True)
class ToggleIcons:
    """Glyph shown when a toggle is enabled and, optionally, when disabled."""

    enabled: str
    disabled: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "ToggleIcons":
        """Read one or two characters: the enabled and optional disabled glyph."""

        chars = list(text)
        if not chars:
            raise IconCountError("too_few", 2)
        if len(chars) > 2:
            raise IconCountError("too_many", 2)
        return cls(enabled=chars[0], disabled=chars[1] if len(chars) == 2 else None)

    def icon(self, value: bool) -> Optional[str]:
        return self.enabled if value else self.disabled

    def render(self, value: bool, pad: int) -> str:
        # a disabled toggle without a glyph renders nothing at all, padding included
        glyph = self.icon(value)
        if glyph is None:
            return ""
        return glyph + " " * pad


@dataclass(frozen=True, slots=True)
class IconSet:
    """Every icon table used while rendering templates."""

    state: StateIcons
    consume: ToggleIcons
    random: ToggleIcons
    repeat: ToggleIcons
    single: ToggleIcons

    @classmethod
    def default(cls) -> "IconSet":
        return cls.parse(
            state=DEFAULT_STATE_ICONS,
            **DEFAULT_TOGGLE_ICONS,
        )

    @classmethod
    def parse(
        cls,
        *,
        state: str,
        consume: str,
        random: str,
        repeat: str,
        single: str,
    ) -> "IconSet":
        return cls(
            state=StateIcons.parse(state),
            consume=ToggleIcons.parse(consume),
            random=ToggleIcons.parse(random),
            repeat=ToggleIcons.parse(repeat),
            single=ToggleIcons.parse(single),
        )

    def toggle(self, name: Toggle) -> ToggleIcons:
        return getattr(self, name)
