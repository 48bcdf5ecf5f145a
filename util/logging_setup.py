"""Logging configuration for the ivly command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE = "ivly.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


class _ConsoleNoiseFilter(logging.Filter):
    """Keep ivly records on the console; other libraries only from ERROR up."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "ivly" or record.name.startswith("ivly."):
            return True
        return record.levelno >= logging.ERROR


def parse_level(value: str | int | None, default: int = logging.WARNING) -> int:
    if isinstance(value, int):
        return value
    if not value:
        return default
    level = logging.getLevelName(str(value).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    console_level: str | int | None = logging.WARNING,
    log_dir: str | Path | None = None,
    file_level: int = logging.DEBUG,
) -> None:
    """Install a filtered stderr handler and, with ``log_dir``, a file handler.

    Safe to call more than once: previously installed handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.setFormatter(_FORMAT)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_dir / LOG_FILE), encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(_FORMAT)
        root.addHandler(file_handler)

    logging.captureWarnings(True)
