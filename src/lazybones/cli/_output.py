"""Unified CLI output formatting utilities.

This module provides consistent output formatting for all Lazybones CLI
commands, supporting both JSON and text output modes.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Mapping, Optional

from lazybones.core.exceptions import LazybonesError

INDENT = "    "


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result to stderr.

        Args:
            error: The exception that occurred
            message: Optional human-readable message (defaults to str(error))
            error_code: Error code for JSON output
        """
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {"error": error_code, "message": msg}
            if isinstance(error, LazybonesError):
                output["context"] = error.context
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        """Output raw JSON data."""
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str = "") -> None:
        """Output plain text (suppressed in JSON mode)."""
        if not self.json_mode:
            print(message)

    def columns(self, rows: Mapping[str, Any], *, separator: str = "", padding: int = 3) -> None:
        """Output ``key  value`` rows with the values aligned in one column."""
        if self.json_mode or not rows:
            return
        width = max(len(k) for k in rows) + padding
        for key, value in rows.items():
            print(f"{INDENT}{key.ljust(width)}{separator}{value}")


__all__ = [
    "INDENT",
    "OutputFormatter",
]
