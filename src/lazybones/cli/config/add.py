"""
Lazybones config add command.

SUMMARY: Append a value to a list setting
"""
from __future__ import annotations

import argparse
import sys

from lazybones.cli import OutputFormatter, add_setting_name_arg, get_configuration
from lazybones.core.exceptions import SettingError

from ._shared import store_and_warn

SUMMARY = "Append a value to a list setting"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_setting_name_arg(parser)
    parser.add_argument("value", metavar="<value>", help="Value to append")


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()
    try:
        config = get_configuration(args)
        takes_effect = config.append_to_setting(args.name, args.value)
        store_and_warn(config, args.name, takes_effect)
    except SettingError as e:
        formatter.error(e)
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
