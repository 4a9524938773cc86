"""Loguru sinks for the CLI and the library's per-component loggers."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "zonesync.log"

# Terse on the terminal; the file keeps source locations for later digging.
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> "
    "<cyan>[{extra[component]}]</cyan> {message}"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} | "
    "{name}:{line} - {message}"
)


def configure_logging(log_dir: Path | str | None = None, level: str = "INFO") -> None:
    level = level.upper()
    logger.remove()
    logger.configure(extra={"component": "zonesync"})
    logger.add(sys.stderr, format=CONSOLE_FORMAT, colorize=sys.stderr.isatty(), level=level)
    if log_dir is None:
        return

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    logger.add(
        path / LOG_FILE_NAME,
        format=FILE_FORMAT,
        level=level,
        rotation="1 day",
        retention="14 days",
        compression="gz",
        diagnose=False,
    )


def get_logger(component: str | None = None):
    """Logger tagged with ``component``; the bare root logger when omitted."""

    return logger.bind(component=component) if component else logger
