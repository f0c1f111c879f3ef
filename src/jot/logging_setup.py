# src/jot/logging_setup.py

"""
Logging for the jot CLI.

Two sinks:
- stderr, filtered: jot commands often hand the terminal to $EDITOR, and stdout carries
  command replies (`jot pending` output is meant to be piped). Only jot's own records and
  errors from anything else reach the console.
- <log_dir>/jot.log at DEBUG: every queue step, save, move and discard, for later
  inspection of what a review session actually did to the workspace.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "jot.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Pass jot.* records; everything else (yaml, py.warnings, ...) only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "jot" or record.name.startswith("jot."):
            return True
        return record.levelno >= logging.ERROR


def _console_handler(level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(log_file: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(str(log_file), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Replace the root logger's handlers with the jot console and file handlers.

    Call once per process, before the first command runs. Returns the log file path.
    """
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
    root.addHandler(_console_handler(console_level, fmt))
    root.addHandler(_file_handler(log_file, file_level, fmt))

    # warnings.warn(...) arrives as 'py.warnings' and is kept off the console by the filter.
    logging.captureWarnings(True)
    return log_file
