"""
Lazybones config show command.

SUMMARY: Show the current value of one or all settings

Values come from the effective configuration: bundled defaults, managed
settings, the user config file and environment overrides.
"""
from __future__ import annotations

import argparse
import sys

from lazybones.cli import OutputFormatter, add_json_flag, get_configuration
from lazybones.core.config import format_setting_value
from lazybones.core.exceptions import SettingError

SUMMARY = "Show the current value of one or all settings"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "name",
        nargs="?",
        metavar="<option>",
        help="Dotted setting name (e.g., 'cache.dir')",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Show every setting",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    if not args.all and not args.name:
        formatter.error(ValueError("Specify a setting name or --all"))
        return 1

    try:
        config = get_configuration(args)

        if args.all:
            settings = config.get_all_settings()
            if formatter.json_mode:
                formatter.json_output(settings)
                return 0
            formatter.text("Current configuration settings:")
            formatter.text()
            formatter.columns(
                {k: format_setting_value(config, k, v) for k, v in sorted(settings.items())},
                separator="= ",
            )
            return 0

        value = config.get_setting(args.name)
        if formatter.json_mode:
            formatter.json_output({args.name: value})
        elif value is None:
            formatter.text(f"{args.name} has no value")
        else:
            formatter.text(f"{args.name} = {format_setting_value(config, args.name, value)}")
        return 0

    except SettingError as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
