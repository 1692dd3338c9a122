"""
Auto-discovery CLI dispatcher for Lazybones.

Scans subfolders for commands and automatically registers them.
Adding new commands = just add a .py file to the appropriate subfolder:

- ``cli/commands/<name>.py`` => ``lazybones <name>``
- ``cli/<domain>/<name>.py`` => ``lazybones <domain> <name>``

Each command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from lazybones.cli._args import add_global_flags
from lazybones.cli._utils import global_options, print_stacktrace, resolve_log_level
from lazybones.core.config import init_configuration
from lazybones.core.exceptions import LazybonesError
from lazybones.core.stdlib_logging import configure_cli_logging


def _load_command(module_name: str, default_summary: str) -> dict[str, Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        print(f"Warning: Could not import command {module_name}: {e}", file=sys.stderr)
        return None
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """
    Discover all CLI domain subfolders (config, etc.).

    Returns:
        Dict mapping domain name to directory path
    """
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands":
            continue
        if item.is_dir() and not item.name.startswith("_"):
            # Must have at least one non-init .py file
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    if not commands_dir.exists():
        return commands

    for item in commands_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue
        info = _load_command(f"lazybones.cli.commands.{item.stem}", item.stem)
        if info is not None:
            commands[item.stem] = info
    return commands


@lru_cache(maxsize=8)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """
    Discover all commands in a domain subfolder.

    Args:
        domain: Name of the domain (e.g., "config")

    Returns:
        Dict mapping command name to command info dict
    """
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}

    for item in domain_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue
        info = _load_command(f"lazybones.cli.{domain}.{item.stem}", f"{domain} {item.stem}")
        if info is not None:
            commands[item.stem] = info
    return commands


def _domain_summary(domain: str) -> str:
    try:
        pkg = importlib.import_module(f"lazybones.cli.{domain}")
    except ImportError:
        return f"{domain.title()} commands"
    doc = (pkg.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else f"{domain.title()} commands"


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered domains and commands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lazybones",
        description="Lazybones - create projects from remote templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Lazybones version {_get_version()}",
    )
    add_global_flags(parser)

    subparsers = parser.add_subparsers(
        dest="domain",
        title="commands",
        description="Available commands",
        metavar="<command>",
    )

    # Register top-level commands (no domain prefix)
    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        cmd_parser = subparsers.add_parser(cmd_name, help=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    # Auto-register domains
    for domain_name in sorted(discover_domains().keys()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue

        domain_parser = subparsers.add_parser(domain_name, help=_domain_summary(domain_name))
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )

        for cmd_name, cmd_info in sorted(domain_commands.items()):
            cmd_parser = cmd_subparsers.add_parser(cmd_name, help=cmd_info["summary"])

            # Let module register its own arguments
            if cmd_info["register_args"]:
                cmd_info["register_args"](cmd_parser)

            # Set the main function as default handler
            if cmd_info["main"]:
                cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    """Get Lazybones version string."""
    from lazybones import __version__

    return __version__


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for Lazybones CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, show help
    if not args.domain:
        parser.print_help()
        return 0

    # If no domain command specified and no handler bound, show domain help
    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 0

    # Configuration problems are reported before logging is set up.
    try:
        config = init_configuration()
    except LazybonesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    args._config = config

    options = global_options(args, config)
    try:
        configure_cli_logging(resolve_log_level(options))
    except ValueError as e:
        print(f"Error: Invalid log level provided: {e}", file=sys.stderr)
        return 1
    args.stacktrace = bool(options.get("stacktrace"))

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.stacktrace:
            print_stacktrace(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
