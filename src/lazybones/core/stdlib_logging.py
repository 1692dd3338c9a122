from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "lazybones"

_LAZYBONES_STREAM_HANDLER: logging.Handler | None = None


class PlainFormatter(logging.Formatter):
    """Message-only formatter for console output.

    Warnings and errors keep their level name as a prefix so they stand out
    from normal informational output.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            message = f"{record.levelname}: {message}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def level_from_name(name: str) -> int:
    """Return the numeric level for ``name``.

    Raises:
        ValueError: If ``name`` is not a standard logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_cli_logging(level: int | str = logging.WARNING, *, stream: Optional[TextIO] = None) -> None:
    """Send ``lazybones`` log records to stderr as plain messages.

    Idempotent per-process: a second call replaces the handler installed by
    the first one.
    """
    global _LAZYBONES_STREAM_HANDLER

    numeric = level_from_name(level) if isinstance(level, str) else int(level)
    logger = logging.getLogger(LOGGER_NAME)

    if _LAZYBONES_STREAM_HANDLER is not None:
        logger.removeHandler(_LAZYBONES_STREAM_HANDLER)
        _LAZYBONES_STREAM_HANDLER.close()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(PlainFormatter())
    handler.setLevel(numeric)
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False

    _LAZYBONES_STREAM_HANDLER = handler


def reset_cli_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_cli_logging``."""
    global _LAZYBONES_STREAM_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _LAZYBONES_STREAM_HANDLER is not None:
        logger.removeHandler(_LAZYBONES_STREAM_HANDLER)
        _LAZYBONES_STREAM_HANDLER.close()
    _LAZYBONES_STREAM_HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["PlainFormatter", "configure_cli_logging", "level_from_name", "reset_cli_logging_for_tests"]
