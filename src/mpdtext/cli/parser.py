"""Argument parsing helpers for the mpdtext CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping

from .._version import __version__

__all__ = ["OVERRIDES", "add_bootstrap_arguments", "build_parser", "namespace_overrides"]


# CLI destination -> configuration key
OVERRIDES: Mapping[str, str] = {
    "host": "host",
    "port": "port",
    "password": "password",
    "interval": "interval",
    "format": "format",
    "prefix": "prefix",
    "suffix": "suffix",
    "tooltip": "tooltip",
    "tooltip_format": "tooltip_format",
    "default_placeholder": "default_placeholder",
    "state_icons": "icons.state",
    "consume_icons": "icons.consume",
    "random_icons": "icons.random",
    "repeat_icons": "icons.repeat",
    "single_icons": "icons.single",
}


def add_bootstrap_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to a TOML or YAML configuration file.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (e.g. debug, info, warning; default: info).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=None,
        help="Logging destination (stdout, stderr or a file path; default: stderr).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=("json", "text"),
        default=None,
        help="Logging formatter (json or text; default: json).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the CLI parser.

    Every setting flag defaults to ``None`` so that only explicit flags
    override the loaded configuration (see :func:`namespace_overrides`).
    """

    parser = argparse.ArgumentParser(
        prog="mpdtext",
        description="Render MPD player status into status-bar text.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    add_bootstrap_arguments(parser)

    connection = parser.add_argument_group("connection")
    connection.add_argument("--host", default=None, help="MPD host or socket path.")
    connection.add_argument("--port", type=int, default=None, help="MPD port.")
    connection.add_argument("--password", default=None, help="MPD password.")
    connection.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between two status polls (default: 1.0).",
    )

    templates = parser.add_argument_group("templates")
    templates.add_argument("--format", default=None, help="Template of the main text.")
    templates.add_argument("--prefix", default=None, help="Template shown before the text.")
    templates.add_argument("--suffix", default=None, help="Template shown after the text.")
    templates.add_argument("--tooltip", default=None, help="Fixed tooltip text.")
    templates.add_argument(
        "--tooltip-format",
        dest="tooltip_format",
        default=None,
        help="Template rendered as the tooltip.",
    )
    templates.add_argument(
        "--default-placeholder",
        dest="default_placeholder",
        default=None,
        help="Text shown for missing metadata (default: N/A).",
    )

    icons = parser.add_argument_group("icons")
    icons.add_argument(
        "--state-icons",
        dest="state_icons",
        default=None,
        help="Three characters for play, pause and stop.",
    )
    for name in ("consume", "random", "repeat", "single"):
        icons.add_argument(
            f"--{name}-icons",
            dest=f"{name}_icons",
            default=None,
            help=f"Enabled and optional disabled character for {name} mode.",
        )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--once",
        action="store_true",
        help="Print a single status line and exit.",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Validate the configuration, print the canonical templates and exit.",
    )
    return parser


def namespace_overrides(namespace: argparse.Namespace) -> dict[str, Any]:
    """Collect explicit CLI settings as a nested configuration mapping."""

    overrides: dict[str, Any] = {}
    for dest, key in OVERRIDES.items():
        value = getattr(namespace, dest, None)
        if value is None:
            continue
        section, _, leaf = key.rpartition(".")
        target = overrides.setdefault(section, {}) if section else overrides
        target[leaf] = value
    return overrides
