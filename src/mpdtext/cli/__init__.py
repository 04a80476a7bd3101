"""Command line utilities for mpdtext."""

from mpdtext.cli.app import main, run_cli, run_status_loop
from mpdtext.cli.errors import CliError

__all__ = ["CliError", "main", "run_cli", "run_status_loop"]
