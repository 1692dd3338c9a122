"""
Lazybones list command.

SUMMARY: List the available templates

Shows the templates published by each configured repository, then any
template mappings. When every repository is unreachable because there is no
network, the cached templates are listed instead.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from lazybones.cli import (
    OutputFormatter,
    add_json_flag,
    get_configuration,
    stacktrace_enabled,
)
from lazybones.cli._output import INDENT
from lazybones.core.config import Configuration
from lazybones.core.install import LAZYBONES_DIR_NAME, SUBTEMPLATE_PATTERN
from lazybones.core.packages import TemplateCache, build_package_sources, is_offline
from lazybones.core.packages.offline import OFFLINE_MESSAGE, log_offline
from lazybones.core.packages.cache import version_sort_key
from lazybones.core.schemas import SchemaValidationError

SUMMARY = "List the available templates"

logger = logging.getLogger(__name__)

MAPPINGS_ROOT = "templates.mappings"
CACHED_NAME_WIDTH = 30


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cached",
        action="store_true",
        help="List the templates in the local cache",
    )
    parser.add_argument(
        "--subs",
        action="store_true",
        help="List the sub-templates of the project in the current directory",
    )
    add_json_flag(parser)


def _remote_templates(
    config: Configuration, args: argparse.Namespace
) -> Tuple[Dict[str, Optional[List[str]]], bool]:
    """Return ``{repository: names}`` and whether every repository was offline.

    The names are None for repositories that could not be reached.
    """
    results: Dict[str, Optional[List[str]]] = {}
    offline_count = 0
    for source in build_package_sources(config):
        repo = source.name
        try:
            results[repo] = source.list_package_names()
        except (OSError, SchemaValidationError) as e:
            results[repo] = None
            if is_offline(e):
                offline_count += 1
                log_offline(e, stacktrace=stacktrace_enabled(args))
            else:
                logger.warning("Can't connect to %s: %s", repo, e)
                logger.debug("Repository failure", exc_info=e)
    return results, bool(results) and offline_count == len(results)


def _cached_templates(config: Configuration) -> Dict[str, List[str]]:
    return TemplateCache(Path(config.get_setting("cache.dir"))).cached_templates()


def _subtemplates(project_dir: Path) -> Optional[Dict[str, List[str]]]:
    lazybones_dir = project_dir / LAZYBONES_DIR_NAME
    if not lazybones_dir.is_dir():
        return None
    found: Dict[str, List[str]] = {}
    for path in sorted(lazybones_dir.glob("*.zip")):
        match = SUBTEMPLATE_PATTERN.match(path.name)
        if match:
            found.setdefault(match.group(1), []).append(match.group(2))
    return {name: sorted(v, key=version_sort_key, reverse=True) for name, v in found.items()}


def _print_versions(formatter: OutputFormatter, heading: str, templates: Dict[str, List[str]]) -> None:
    formatter.text(heading)
    formatter.text()
    for name, versions in templates.items():
        formatter.text(f"{INDENT}{name.ljust(CACHED_NAME_WIDTH)}{', '.join(versions)}")
    formatter.text()


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    if args.subs:
        templates = _subtemplates(Path.cwd())
        if templates is None:
            formatter.error(
                FileNotFoundError(LAZYBONES_DIR_NAME),
                "You can only use --subs in a Lazybones-created project directory",
            )
            return 1
        if formatter.json_mode:
            formatter.json_output({"subtemplates": templates})
        else:
            _print_versions(formatter, "Available sub-templates", templates)
        return 0

    config = get_configuration(args)
    mappings = config.get_sub_settings(MAPPINGS_ROOT)

    if args.cached:
        cached = _cached_templates(config)
        if formatter.json_mode:
            formatter.json_output({"cached": cached, "mappings": mappings})
        else:
            _print_versions(formatter, "Cached templates", cached)
            _print_mappings(formatter, mappings)
        return 0

    results, offline = _remote_templates(config, args)

    if formatter.json_mode:
        payload: Dict[str, object] = {"repositories": results, "mappings": mappings}
        if offline:
            payload["cached"] = _cached_templates(config)
        formatter.json_output(payload)
        return 0

    if offline:
        formatter.text(OFFLINE_MESSAGE)
        formatter.text()
        _print_versions(formatter, "Cached templates", _cached_templates(config))
    else:
        for repo, names in results.items():
            if names is None:
                continue
            formatter.text(f"Available templates in {repo}")
            formatter.text()
            for name in names:
                formatter.text(f"{INDENT}{name}")
            formatter.text()

    _print_mappings(formatter, mappings)
    return 0


def _print_mappings(formatter: OutputFormatter, mappings: Dict[str, object]) -> None:
    if not mappings:
        return
    width = max(len(k) for k in mappings) + 2
    formatter.text("Available mappings")
    formatter.text()
    for key, url in sorted(mappings.items()):
        formatter.text(f"{INDENT}{key.ljust(width)}-> {url}")
    formatter.text()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
