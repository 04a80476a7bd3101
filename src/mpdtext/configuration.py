"""Helpers to locate, load and validate mpdtext configuration files."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping as ABCMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from .errors import ConfigurationError
from .icons import (
    DEFAULT_STATE_ICONS,
    DEFAULT_TOGGLE_ICONS,
    IconSet,
    StateIcons,
    ToggleIcons,
)
from .output import TemplateTooltip, TextTooltip, Tooltip
from .sources import DEFAULT_HOST, DEFAULT_PORT
from .template import TemplateProgram

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULTS",
    "InvalidSetting",
    "Settings",
    "build_settings",
    "load_config",
    "load_config_file",
]


CONFIG_ENV_VAR = "MPDTEXT_CONFIG"
PROJECT_CONFIG_FILENAME = "pyproject.toml"
USER_CONFIG_FILENAME = "config.toml"
_TOOL_SECTION = "mpdtext"
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})

DEFAULTS: Mapping[str, Any] = {
    "host": DEFAULT_HOST,
    "port": DEFAULT_PORT,
    "password": None,
    "interval": 1.0,
    "format": "{artist} - {title}",
    "prefix": "",
    "suffix": "",
    "tooltip": None,
    "tooltip_format": None,
    "default_placeholder": "N/A",
}


class InvalidSetting(ConfigurationError):
    """A configuration value could not be turned into a usable setting."""

    def __init__(self, key: str, cause: Exception | str) -> None:
        super().__init__(f"Invalid value for '{key}': {cause}")
        self.key = key
        self.cause = cause


def _as_dict(payload: ABCMapping[str, Any]) -> dict[str, Any]:
    """Recursively coerce TOML/YAML mappings into regular dictionaries."""

    result: dict[str, Any] = {}
    for key, value in payload.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            result[key_str] = _as_dict(value)
        elif isinstance(value, list):
            result[key_str] = [
                _as_dict(item) if isinstance(item, ABCMapping) else item for item in value
            ]
        else:
            result[key_str] = value
    return result


def _iter_unique_paths(paths: Iterable[Path]) -> list[Path]:
    seen: dict[Path, None] = {}
    ordered: list[Path] = []
    for path in paths:
        resolved = path.expanduser().resolve(strict=False)
        if resolved in seen:
            continue
        seen[resolved] = None
        ordered.append(resolved)
    return ordered


def _user_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / _TOOL_SECTION / USER_CONFIG_FILENAME


def load_config_file(path: Path) -> dict[str, Any] | None:
    """Load the mpdtext table stored in ``path``.

    ``pyproject.toml`` files contribute their ``[tool.mpdtext]`` table,
    other ``.toml`` files and ``.yaml``/``.yml`` files are used whole.
    Returns ``None`` when the file does not exist or holds no mpdtext table.
    """

    path = path.expanduser()
    if not path.is_file():
        return None
    if path.suffix.lower() in _YAML_SUFFIXES:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    else:
        with path.open("rb") as handle:
            try:
                data = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, ABCMapping):
        raise ConfigurationError(f"Configuration in {path} must decode to a mapping")

    if path.name == PROJECT_CONFIG_FILENAME:
        tool_section = data.get("tool")
        if not isinstance(tool_section, ABCMapping):
            return None
        section = tool_section.get(_TOOL_SECTION)
        if not isinstance(section, ABCMapping):
            return None
        return _as_dict(section)
    return _as_dict(data)


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Locate and load the active configuration.

    The search order is ``path``, the ``MPDTEXT_CONFIG`` environment variable,
    ``pyproject.toml`` in the working directory and finally the per-user
    ``$XDG_CONFIG_HOME/mpdtext/config.toml``.  An explicitly requested file
    that does not exist is an error; the implicit locations are optional.
    """

    env_config = os.environ.get(CONFIG_ENV_VAR)
    explicit: list[Path] = []
    if path is not None:
        explicit.append(Path(path))
    if env_config:
        explicit.append(Path(env_config))

    for candidate in explicit:
        candidate = candidate.expanduser()
        if candidate.is_dir():
            candidate = candidate / PROJECT_CONFIG_FILENAME
        if not candidate.is_file():
            raise ConfigurationError(f"Configuration file {candidate} does not exist")
        loaded = load_config_file(candidate)
        payload = loaded if loaded is not None else {}
        payload["_config_path"] = str(candidate.resolve())
        return payload

    implicit = [Path.cwd() / PROJECT_CONFIG_FILENAME, _user_config_path()]
    for candidate in _iter_unique_paths(implicit):
        loaded = load_config_file(candidate)
        if loaded is None:
            continue
        loaded["_config_path"] = str(candidate)
        return loaded

    return {"_config_path": None}


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated runtime settings with every template already parsed."""

    host: str
    port: int
    password: Optional[str]
    interval: float
    main: TemplateProgram
    prefix: TemplateProgram
    suffix: TemplateProgram
    tooltip: Optional[Tooltip]
    icons: IconSet
    default_placeholder: str


def _template(config: Mapping[str, Any], key: str) -> TemplateProgram:
    raw = config.get(key, DEFAULTS.get(key))
    if raw is None:
        return TemplateProgram()
    try:
        return TemplateProgram.parse(str(raw))
    except ConfigurationError as exc:
        raise InvalidSetting(key, exc) from exc


def _icons(config: Mapping[str, Any]) -> IconSet:
    icons_cfg = config.get("icons", {})
    if not isinstance(icons_cfg, ABCMapping):
        raise InvalidSetting("icons", "expected a table")
    try:
        state = StateIcons.parse(str(icons_cfg.get("state", DEFAULT_STATE_ICONS)))
    except ConfigurationError as exc:
        raise InvalidSetting("icons.state", exc) from exc
    toggles: dict[str, ToggleIcons] = {}
    for name, default in DEFAULT_TOGGLE_ICONS.items():
        try:
            toggles[name] = ToggleIcons.parse(str(icons_cfg.get(name, default)))
        except ConfigurationError as exc:
            raise InvalidSetting(f"icons.{name}", exc) from exc
    return IconSet(state=state, **toggles)


def _number(config: Mapping[str, Any], key: str, kind: type) -> Any:
    raw = config.get(key, DEFAULTS[key])
    try:
        value = kind(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidSetting(key, exc) from exc
    if value <= 0:
        raise InvalidSetting(key, "must be positive")
    return value


def build_settings(config: Mapping[str, Any]) -> Settings:
    """Validate ``config`` and parse every template and icon string.

    Raises :class:`InvalidSetting` naming the first offending key.
    """

    tooltip: Optional[Tooltip] = None
    if config.get("tooltip_format") is not None:
        tooltip = TemplateTooltip(_template(config, "tooltip_format"))
    elif config.get("tooltip") is not None:
        tooltip = TextTooltip(str(config["tooltip"]))

    password = config.get("password", DEFAULTS["password"])
    return Settings(
        host=str(config.get("host", DEFAULTS["host"])),
        port=_number(config, "port", int),
        password=str(password) if password else None,
        interval=_number(config, "interval", float),
        main=_template(config, "format"),
        prefix=_template(config, "prefix"),
        suffix=_template(config, "suffix"),
        tooltip=tooltip,
        icons=_icons(config),
        default_placeholder=str(
            config.get("default_placeholder", DEFAULTS["default_placeholder"])
        ),
    )
