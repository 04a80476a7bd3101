"""Logging utilities for mpdtext."""

from mpdtext.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
