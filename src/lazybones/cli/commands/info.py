"""
Lazybones info command.

SUMMARY: Display information about a template

Queries the configured template repositories in order and prints the
metadata of the first one that hosts the template.
"""
from __future__ import annotations

import argparse
import logging
import sys
from urllib.error import URLError

from lazybones.cli import OutputFormatter, add_json_flag, get_configuration, report_network_failure
from lazybones.core.packages import (
    NoVersionsPublishedError,
    PackageInfo,
    build_package_sources,
)

SUMMARY = "Display information about a template"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("template", metavar="<template>", help="Template name")
    add_json_flag(parser)


def _to_dict(info: PackageInfo) -> dict:
    return {
        "name": info.name,
        "latestVersion": info.latest_version,
        "versions": list(info.versions),
        "owner": info.owner,
        "description": info.description,
        "url": info.url,
    }


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    name = args.template
    logger.debug("Fetching package information for '%s'", name)

    info = None
    try:
        for source in build_package_sources(get_configuration(args)):
            info = source.fetch_package_info(name)
            if info is not None:
                break
    except NoVersionsPublishedError as e:
        formatter.error(e)
        return 1
    except URLError as e:
        report_network_failure(args, e)
        formatter.error(e, "Cannot fetch package info")
        return 1

    if info is None:
        formatter.error(LookupError(name), f"Cannot find a template named '{name}'")
        return 1

    if formatter.json_mode:
        formatter.json_output(_to_dict(info))
        return 0

    formatter.text(f"Name:        {info.name}")
    formatter.text(f"Latest:      {info.latest_version}")
    if info.description.strip():
        formatter.text(f"Description: {info.description}")
    if info.owner.strip():
        formatter.text(f"Owner:       {info.owner}")
    formatter.text(f"Versions:    {', '.join(info.versions)}")
    if info.url:
        formatter.text()
        formatter.text(f"More information at {info.url}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
