# src/nexttask/logging_setup.py

"""
Logging for a one-shot CLI.

stdout carries command output only. Diagnostics go to stderr (WARNING by
default) and, when the data directory is writable, to a DEBUG log file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "nexttask.log"

_BRIEF = "%(levelname)s: %(message)s"
_VERBOSE = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    """Map "info", "DEBUG", ... to a level; anything unknown gives `default`."""
    if not name:
        return default
    return logging.getLevelNamesMapping().get(name.strip().upper(), default)


class _OwnLogsFilter(logging.Filter):
    """Pass nexttask records at the handler level; other libraries only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "nexttask" or record.name.startswith("nexttask."):
            return True
        return record.levelno >= logging.ERROR


def _file_handler(log_dir: Path) -> logging.FileHandler | None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("File logging disabled (%s): %s", log_dir, e)
        return None
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(_VERBOSE, datefmt=_DATEFMT))
    return fh


def setup_logging(
    *,
    level: str | int = "WARNING",
    log_dir: str | Path | None = None,
) -> Path | None:
    """
    Configure the root logger once per process and return the log file path
    (None when file logging is off or unavailable).

    At DEBUG the console gets timestamps and logger names; otherwise one short
    line per record.
    """
    console_level = level if isinstance(level, int) else level_from_name(level)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    if console_level <= logging.DEBUG:
        ch.setFormatter(logging.Formatter(_VERBOSE, datefmt=_DATEFMT))
    else:
        ch.setFormatter(logging.Formatter(_BRIEF))
    ch.addFilter(_OwnLogsFilter())
    root.addHandler(ch)
    root.setLevel(console_level)

    log_file: Path | None = None
    if log_dir is not None:
        fh = _file_handler(Path(log_dir).expanduser())
        if fh is not None:
            root.addHandler(fh)
            root.setLevel(logging.DEBUG)
            log_file = Path(fh.baseFilename)

    logging.captureWarnings(True)
    return log_file
