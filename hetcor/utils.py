"""Small helpers shared across hetcor: console logging and progress pacing.

Log lines go to stderr so stdout only ever carries the result pair.
"""
from __future__ import annotations

import sys
from datetime import datetime

from .config import PROGRESS_SCHEDULE, PROGRESS_INTERVAL_MAX

_QUIET = False
_VERBOSE = False


def configure_logging(quiet: bool = False, verbose: bool = False) -> None:
    """Set module-wide verbosity. ``quiet`` wins over ``verbose``."""
    global _QUIET, _VERBOSE
    _QUIET = quiet
    _VERBOSE = verbose and not quiet


def _emit(level: str, msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] [{level}] {msg}", file=sys.stderr)


def log_info(msg: str):
    """Print info log message."""
    if not _QUIET:
        _emit("INFO", msg)


def log_debug(msg: str):
    """Print detail message, only shown in verbose mode."""
    if _VERBOSE:
        _emit("DEBUG", msg)


def log_warn(msg: str):
    """Print warning log message."""
    _emit("WARN", msg)


def log_error(msg: str):
    """Print error log message. Exiting is left to the caller."""
    _emit("ERROR", msg)


def progress_interval(processed: int) -> int:
    """Adaptive progress display: start with 1K, then widen the interval."""
    for upper, interval in PROGRESS_SCHEDULE:
        if processed <= upper:
            return interval
    return PROGRESS_INTERVAL_MAX


def should_report(processed: int) -> bool:
    return processed > 0 and processed % progress_interval(processed) == 0


__all__ = [
    "configure_logging",
    "log_info",
    "log_debug",
    "log_warn",
    "log_error",
    "progress_interval",
    "should_report",
]
