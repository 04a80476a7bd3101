"""Command line application entry point for mpdtext."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import IO, Any, Callable, Mapping, Optional, Sequence

from ..configuration import Settings, build_settings, load_config
from ..errors import ConfigurationError
from ..logging.config import setup_logging
from ..output import TemplateTooltip, WaybarEmitter
from ..refresh import RefreshController
from ..snapshot import Snapshot
from ..sources import MPDSnapshotSource, SnapshotSource, SourceError
from ..timefmt import TimeFormatError
from .errors import CliError
from .parser import add_bootstrap_arguments, build_parser, namespace_overrides

__all__ = ["main", "run_cli"]


logger = logging.getLogger(__name__)


def _merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge(existing, value)
        else:
            merged[key] = value
    return merged


def _logging_config(config: Mapping[str, Any], preliminary: argparse.Namespace) -> dict[str, Any]:
    section = config.get("logging")
    logging_config = dict(section) if isinstance(section, Mapping) else {}
    if preliminary.log_level is not None:
        logging_config["level"] = preliminary.log_level
    if preliminary.log_output is not None:
        logging_config["output"] = preliminary.log_output
    if preliminary.log_format is not None:
        logging_config["format"] = preliminary.log_format
    logging_config.setdefault("level", "info")
    logging_config.setdefault("output", "stderr")
    logging_config.setdefault("format", "json")
    return logging_config


def _load_settings(config: Mapping[str, Any]) -> Settings:
    try:
        return build_settings(config)
    except ConfigurationError as exc:
        raise CliError(
            str(exc),
            category="usage",
            context={"key": getattr(exc, "key", None), "config_path": config.get("_config_path")},
        ) from exc


def _describe(settings: Settings) -> str:
    lines = [
        f"format: {settings.main}",
        f"prefix: {settings.prefix}",
        f"suffix: {settings.suffix}",
    ]
    if isinstance(settings.tooltip, TemplateTooltip):
        lines.append(f"tooltip_format: {settings.tooltip.program}")
    return "\n".join(lines) + "\n"


def _fetch(source: SnapshotSource) -> Snapshot:
    try:
        return source.fetch()
    except SourceError as exc:
        raise CliError(str(exc), category="io") from exc


def _render_failure(exc: TimeFormatError) -> CliError:
    return CliError(f"Failed to render status: {exc}", category="runtime")


def _needs_emit(
    controller: RefreshController, settings: Settings, snapshot: Snapshot
) -> bool:
    # tooltip and css class are not part of any section
    previous = controller.snapshot
    if previous.state != snapshot.state:
        return True
    tooltip = settings.tooltip
    return isinstance(tooltip, TemplateTooltip) and tooltip.program.differs(previous, snapshot)


def run_status_loop(
    settings: Settings,
    source: SnapshotSource,
    emitter: WaybarEmitter,
    *,
    once: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Poll ``source`` and emit a status line whenever the output changes.

    The loop ends on :class:`KeyboardInterrupt`; fetch and render failures
    are raised as :class:`CliError`.
    """

    try:
        controller = RefreshController(
            settings.main,
            prefix=settings.prefix,
            suffix=settings.suffix,
            icons=settings.icons,
            default_placeholder=settings.default_placeholder,
            snapshot=_fetch(source),
        )
    except TimeFormatError as exc:
        raise _render_failure(exc) from exc
    emitter.emit(controller)
    if once:
        return

    try:
        while True:
            sleep(settings.interval)
            snapshot = _fetch(source)
            emit = _needs_emit(controller, settings, snapshot)
            try:
                changed = controller.tick(snapshot)
            except TimeFormatError as exc:
                raise _render_failure(exc) from exc
            if changed or emit:
                emitter.emit(controller)
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting.", extra={"event": "cli.interrupted"})


def run_cli(
    args: Optional[Sequence[str]] = None,
    *,
    source: Optional[SnapshotSource] = None,
    stream: Optional[IO[str]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Execute the mpdtext command line interface.

    ``source``, ``stream`` and ``sleep`` replace the MPD connection, stdout
    and the poll delay respectively.
    """

    output = stream if stream is not None else sys.stdout
    bootstrap = argparse.ArgumentParser(add_help=False)
    add_bootstrap_arguments(bootstrap)
    preliminary, _ = bootstrap.parse_known_args(args)

    try:
        try:
            config = load_config(preliminary.config_path)
        except ConfigurationError as exc:
            raise CliError(
                str(exc),
                category="usage",
                context={"config_path": preliminary.config_path},
            ) from exc
        config["logging"] = _logging_config(config, preliminary)
        try:
            setup_logging(config)
        except (ValueError, OSError) as exc:
            raise CliError(str(exc), category="usage", context={"section": "logging"}) from exc

        namespace = build_parser().parse_args(args)
        settings = _load_settings(_merge(config, namespace_overrides(namespace)))

        if namespace.check:
            output.write(_describe(settings))
            output.flush()
            return 0

        owned = source is None
        if source is None:
            source = MPDSnapshotSource(
                settings.host, settings.port, password=settings.password
            )
        try:
            run_status_loop(
                settings,
                source,
                WaybarEmitter(output, settings.tooltip),
                once=namespace.once,
                sleep=sleep,
            )
        finally:
            if owned and isinstance(source, MPDSnapshotSource):
                source.close()
    except CliError as exc:
        exc.log()
        sys.stderr.write(exc.payload.message.rstrip("\n") + "\n")
        raise SystemExit(exc.status_code) from exc
    return 0


def main() -> None:  # pragma: no cover - thin wrapper
    raise SystemExit(run_cli())


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
