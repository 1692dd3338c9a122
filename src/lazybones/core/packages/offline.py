"""Detect failures caused by having no network connection."""
from __future__ import annotations

import logging
import socket
from typing import Optional
from urllib.error import URLError

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "(Offline mode - run with -v or --stacktrace to find out why)"

_OFFLINE_CAUSES = (socket.gaierror, ConnectionRefusedError)


def is_offline(exc: Optional[BaseException]) -> bool:
    """Return True if ``exc`` was caused by a DNS failure or a refused connection.

    The exception chain is followed through ``URLError.reason``, ``__cause__``
    and ``__context__``.
    """
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, _OFFLINE_CAUSES):
            return True
        if isinstance(current, URLError) and isinstance(current.reason, BaseException):
            current = current.reason
            continue
        current = current.__cause__ or current.__context__
    return False


def log_offline(exc: BaseException, *, stacktrace: bool = False) -> None:
    """Log why an operation is running in offline mode."""
    root = exc.reason if isinstance(exc, URLError) and isinstance(exc.reason, BaseException) else exc
    logger.debug("(Error message: %s - %s)", type(root).__name__, root)
    if stacktrace:
        logger.warning("Network failure", exc_info=exc)


__all__ = ["OFFLINE_MESSAGE", "is_offline", "log_offline"]
