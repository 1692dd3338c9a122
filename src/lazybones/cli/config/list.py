"""
Lazybones config list command.

SUMMARY: List every recognised setting and its type
"""
from __future__ import annotations

import argparse
import sys

from lazybones.cli import OutputFormatter, add_json_flag, get_configuration

SUMMARY = "List every recognised setting and its type"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    schema = get_configuration(args).valid_settings
    rows = {str(pattern): str(setting_type) for pattern, setting_type in sorted(schema.items(), key=lambda i: i[0].name)}

    if formatter.json_mode:
        formatter.json_output(rows)
        return 0

    formatter.text("Valid Lazybones configuration settings:")
    formatter.text()
    formatter.columns(rows)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
