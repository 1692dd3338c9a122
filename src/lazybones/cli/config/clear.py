"""
Lazybones config clear command.

SUMMARY: Clear a setting so its default value applies again
"""
from __future__ import annotations

import argparse
import sys

from lazybones.cli import OutputFormatter, add_setting_name_arg, get_configuration
from lazybones.core.exceptions import SettingError

from ._shared import store_and_warn

SUMMARY = "Clear a setting so its default value applies again"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_setting_name_arg(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()
    try:
        config = get_configuration(args)
        config.clear_setting(args.name)
        store_and_warn(config, args.name, config.get_override_setting(args.name) is None)
    except SettingError as e:
        formatter.error(e)
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
