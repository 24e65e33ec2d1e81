"""Centralised Loguru logger shared by every layer of the assistant."""
from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_LEVEL = "WARNING"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: Path | None = None, console: bool = True) -> None:
    """Route log records away from the interactive console.

    With ``console`` enabled, warnings and errors also reach stderr. An
    interactive session disables it, since the user already sees those events
    through the text channel, and keeps the full record in ``log_file``.
    """

    logger.remove()
    if console:
        logger.add(sys.stderr, level=_CONSOLE_LEVEL, format="{level}: {message}")
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level.upper(),
            format=_FILE_FORMAT,
            rotation="1 MB",
            retention=5,
            encoding="utf-8",
        )
    logger.debug("Logging configured at level {} (file: {})", level, log_file)


__all__ = ["configure_logging", "logger"]
