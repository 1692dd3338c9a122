"""Shared CLI utility functions.

This module provides common utilities used across CLI commands to reduce
duplication and ensure consistent behavior.
"""
from __future__ import annotations

import argparse
import logging
import traceback
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from lazybones.core.config import Configuration, init_configuration
from lazybones.core.packages.offline import OFFLINE_MESSAGE, is_offline, log_offline
from lazybones.core.stdlib_logging import level_from_name

logger = logging.getLogger(__name__)

OPTIONS_ROOT = "options"


def get_configuration(args: argparse.Namespace) -> Configuration:
    """Return the configuration loaded for this invocation.

    The dispatcher loads it once and stores it on ``args``; commands invoked
    directly (e.g. from tests) load it on first use.
    """
    config = getattr(args, "_config", None)
    if config is None:
        config = init_configuration()
        args._config = config
    return config


def global_options(args: argparse.Namespace, config: Optional[Configuration]) -> Dict[str, Any]:
    """Merge the ``options.*`` settings with the command line flags (flags win)."""
    options: Dict[str, Any] = {}
    if config is not None:
        options.update(config.get_sub_settings(OPTIONS_ROOT))
    for key, attr in (
        ("verbose", "verbose"),
        ("quiet", "quiet"),
        ("info", "info"),
        ("stacktrace", "stacktrace"),
        ("logLevel", "log_level"),
    ):
        value = getattr(args, attr, None)
        if value is not None:
            options[key] = value
    return options


def resolve_log_level(options: Dict[str, Any]) -> int:
    """Pick the log level from the global options.

    Raises:
        ValueError: If ``logLevel`` names an unknown level.
    """
    if options.get("verbose"):
        return logging.DEBUG
    if options.get("quiet"):
        return logging.WARNING
    if options.get("info"):
        return logging.INFO
    if options.get("logLevel"):
        return level_from_name(str(options["logLevel"]))
    return logging.INFO


def stacktrace_enabled(args: argparse.Namespace) -> bool:
    if getattr(args, "stacktrace", None) is not None:
        return bool(args.stacktrace)
    config = getattr(args, "_config", None)
    if config is None:
        return False
    return bool(config.get_setting("options.stacktrace"))


def print_stacktrace(exc: BaseException) -> None:
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


def report_network_failure(args: argparse.Namespace, exc: BaseException) -> None:
    """Explain a transport failure, distinguishing offline mode from other errors."""
    if is_offline(exc):
        print(OFFLINE_MESSAGE)
        log_offline(exc, stacktrace=stacktrace_enabled(args))
    else:
        logger.error("Unexpected failure: %s", exc)
        if stacktrace_enabled(args):
            print_stacktrace(exc)
    print()


def parse_params(params: List[str]) -> Dict[str, str]:
    """Turn ``key=value`` strings into a dict.

    Raises:
        ValueError: If an entry has no ``=``.
    """
    result: Dict[str, str] = {}
    for param in params:
        key, sep, value = param.partition("=")
        if not sep or not key:
            raise ValueError(f"Parameters must be given as key=value, not '{param}'")
        result[key] = value
    return result


def is_current_directory(path: Path) -> bool:
    return Path(path).resolve() == Path.cwd().resolve()


__all__ = [
    "get_configuration",
    "global_options",
    "resolve_log_level",
    "stacktrace_enabled",
    "print_stacktrace",
    "report_network_failure",
    "parse_params",
    "is_current_directory",
]
