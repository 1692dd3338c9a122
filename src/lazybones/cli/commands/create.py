"""
Lazybones create command.

SUMMARY: Create a new project from a template

Resolves the template (mapping, URL or name and version), makes sure its
archive is in the cache, unpacks it into the target directory and runs the
template's post-install step.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional
from urllib.error import URLError

from lazybones.cli import (
    OutputFormatter,
    add_params_arg,
    get_configuration,
    is_current_directory,
    parse_params,
    report_network_failure,
)
from lazybones.core.archive import unzip
from lazybones.core.config import Configuration
from lazybones.core.exceptions import PostInstallScriptError
from lazybones.core.install import InstallationScriptExecutor
from lazybones.core.packages import (
    NoVersionsPublishedError,
    PackageDownloader,
    PackageLocationBuilder,
    PackageNotFoundError,
    TemplateArg,
    build_package_sources,
)
from lazybones.core.scm import GitAdapter

SUMMARY = "Create a new project from a template"

logger = logging.getLogger(__name__)

MAPPINGS_ROOT = "templates.mappings"
README_PREFIX = "README"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("template", metavar="<template>", help="Template name, mapping or URL")
    parser.add_argument(
        "version_and_dir",
        nargs="+",
        metavar="[<version>] <dir>",
        help="Optional template version followed by the target directory ('.' for the current one)",
    )
    add_params_arg(parser)
    parser.add_argument(
        "--with-git",
        action="store_true",
        help="Create a git repository in the new project and commit its files",
    )


def resolve_template(config: Configuration, arg: str) -> TemplateArg:
    """Replace ``arg`` by its mapped URL when one is configured, then parse it."""
    mappings = config.get_sub_settings(MAPPINGS_ROOT)
    mapped = mappings.get(arg)
    if mapped is not None:
        logger.debug("Template %s is mapped to %s", arg, mapped)
        return TemplateArg.parse(str(mapped))
    return TemplateArg.parse(arg)


def log_readme(project_dir: Path) -> None:
    readmes = sorted(p for p in project_dir.iterdir() if p.is_file() and p.name.startswith(README_PREFIX))
    if not readmes:
        logger.info("This project has no README")
        return
    logger.info("")
    logger.info(readmes[0].read_text(encoding="utf-8", errors="replace"))


def create_project(
    config: Configuration,
    template: TemplateArg,
    version: Optional[str],
    target_dir: Path,
    *,
    variables: Optional[Dict[str, str]] = None,
    with_git: bool = False,
    executor: Optional[InstallationScriptExecutor] = None,
) -> Path:
    """Unpack ``template`` into ``target_dir`` and run its post-install step.

    Returns:
        The project directory.

    Raises:
        PackageNotFoundError: If the template or version cannot be found.
        NoVersionsPublishedError: If the template has no published version.
        urllib.error.URLError: For network failures.
        PostInstallScriptError: If the post-install step fails.
    """
    builder = PackageLocationBuilder(Path(config.get_setting("cache.dir")))
    location = builder.build_package_location(
        template.template_name, version, build_package_sources(config)
    )
    archive = PackageDownloader().download_package(location, template.template_name, version)

    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    unzip(archive, target_dir)

    if executor is None:
        executor = InstallationScriptExecutor(scm_adapter=GitAdapter(config) if with_git else None)
    executor.run_post_install_script_with_args(
        variables or {}, template.qualifiers, target_dir
    )
    return target_dir


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()

    if len(args.version_and_dir) > 2:
        formatter.error(ValueError("too many arguments"), "Usage: lazybones create <template> [<version>] <dir>")
        return 1
    version: Optional[str] = args.version_and_dir[0] if len(args.version_and_dir) == 2 else None
    target_dir = Path(args.version_and_dir[-1])

    try:
        variables = parse_params(args.params)
    except ValueError as e:
        formatter.error(e)
        return 1

    config = get_configuration(args)
    template = resolve_template(config, args.template)
    in_current_dir = is_current_directory(target_dir)
    target_label = "current directory" if in_current_dir else f"'{target_dir}'"

    logger.info(
        "Creating project from template %s %s in %s",
        template.template_name,
        version or "(latest)",
        target_label,
    )

    try:
        create_project(
            config,
            template,
            version,
            target_dir,
            variables=variables,
            with_git=args.with_git,
        )
    except PackageNotFoundError as e:
        formatter.error(e, f"{e}. Project has not been created.")
        return 1
    except NoVersionsPublishedError as e:
        formatter.error(e, f"{e}. Project has not been created.")
        return 1
    except PostInstallScriptError as e:
        formatter.error(e, f"Post install script caused an exception, project might be corrupt: {e}")
        logger.warning("The unpacked template will remain in place to help you diagnose the problem")
        return 1
    except URLError as e:
        report_network_failure(args, e)
        formatter.error(
            e,
            "Cannot create a new project when the template isn't locally cached "
            "or no version is specified",
        )
        return 1

    log_readme(target_dir)
    logger.info("")
    logger.info("Project created in %s!", "current directory" if in_current_dir else target_dir)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
