"""
Lazybones config set command.

SUMMARY: Set the value of a configuration setting

Several values are joined with ", " before conversion, which is how list
settings are given on the command line.
"""
from __future__ import annotations

import argparse
import sys

from lazybones.cli import OutputFormatter, add_setting_name_arg, get_configuration
from lazybones.core.exceptions import SettingError

from ._shared import store_and_warn

SUMMARY = "Set the value of a configuration setting"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_setting_name_arg(parser)
    parser.add_argument("values", nargs="+", metavar="<value>", help="New value")


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()
    value = ", ".join(args.values)
    try:
        config = get_configuration(args)
        takes_effect = config.put_setting(args.name, value)
        store_and_warn(config, args.name, takes_effect)
    except SettingError as e:
        formatter.error(e)
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
