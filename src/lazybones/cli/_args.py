"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_setting_name_arg(parser: argparse.ArgumentParser, help_text: str = "Dotted setting name (e.g., 'cache.dir')") -> None:
    """Add the positional setting name used by the config commands."""
    parser.add_argument("name", metavar="<option>", help=help_text)


def add_params_arg(parser: argparse.ArgumentParser) -> None:
    """Add the repeatable ``-P key=value`` post-install parameter."""
    parser.add_argument(
        "-P",
        dest="params",
        action="append",
        default=[],
        metavar="key=value",
        help="Pass a parameter to the post-install script (repeatable)",
    )


def add_global_flags(parser: argparse.ArgumentParser) -> None:
    """Add the logging and diagnostics flags shared by every command.

    Unset flags default to None so that the ``options.*`` settings can
    supply their values.
    """
    group = parser.add_argument_group("global options")
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Show debug output",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=None,
        help="Only show warnings and errors",
    )
    group.add_argument(
        "--info",
        action="store_true",
        default=None,
        help="Show informational output",
    )
    group.add_argument(
        "--log-level",
        dest="log_level",
        metavar="LEVEL",
        help="Set the log level explicitly (DEBUG, INFO, WARNING, ERROR)",
    )
    group.add_argument(
        "--stacktrace",
        action="store_true",
        default=None,
        help="Show stack traces for failures",
    )


__all__ = [
    "add_json_flag",
    "add_setting_name_arg",
    "add_params_arg",
    "add_global_flags",
]
