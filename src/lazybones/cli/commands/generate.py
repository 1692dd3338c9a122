"""
Lazybones generate command.

SUMMARY: Generate files in the current project from a sub-template

Sub-templates are packaged into the ``.lazybones`` directory of a project
created from a template. ``generate`` unpacks one of them next to the
archive and runs its post-install step against the project directory. It is
up to that step to create the files in the project.
"""
from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Dict, Optional

from lazybones.cli import (
    OutputFormatter,
    add_params_arg,
    parse_params,
    print_stacktrace,
    stacktrace_enabled,
)
from lazybones.core.archive import unzip
from lazybones.core.exceptions import PostInstallScriptError
from lazybones.core.install import (
    LAZYBONES_DIR_NAME,
    UNPACKED_SUFFIX,
    InstallationScriptExecutor,
    find_subtemplate_archive,
)
from lazybones.core.packages import PackageNotFoundError, TemplateArg

SUMMARY = "Generate files in the current project from a sub-template"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "template",
        metavar="<template>",
        help="Sub-template name, optionally followed by ::qualifiers",
    )
    add_params_arg(parser)


def generate_from_subtemplate(
    project_dir: Path,
    template: TemplateArg,
    *,
    variables: Optional[Dict[str, str]] = None,
    executor: Optional[InstallationScriptExecutor] = None,
) -> None:
    """Unpack sub-template ``template`` and run its post-install step.

    The sub-template is unpacked into ``.lazybones/<name>-unpacked``, which is
    removed again once the post-install step succeeds.

    Raises:
        PackageNotFoundError: If the project has no such sub-template.
        PostInstallScriptError: If the post-install step fails. The unpacked
            sub-template is left in place.
    """
    project_dir = Path(project_dir)
    lazybones_dir = project_dir / LAZYBONES_DIR_NAME
    archive = find_subtemplate_archive(lazybones_dir, template.template_name)

    out_dir = lazybones_dir / f"{template.template_name}{UNPACKED_SUFFIX}"
    out_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("Unpacking %s into %s", archive.name, out_dir)
    unzip(archive, out_dir)

    if executor is None:
        executor = InstallationScriptExecutor()
    executor.run_post_install_script_with_args(
        variables or {}, template.qualifiers, project_dir, template_dir=out_dir
    )
    shutil.rmtree(out_dir)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()

    project_dir = Path.cwd()
    if not (project_dir / LAZYBONES_DIR_NAME).is_dir():
        formatter.error(
            FileNotFoundError(LAZYBONES_DIR_NAME),
            "You cannot use `generate` here: this is not a Lazybones-created project",
        )
        return 1

    try:
        variables = parse_params(args.params)
    except ValueError as e:
        formatter.error(e)
        return 1

    template = TemplateArg.parse(args.template)
    try:
        generate_from_subtemplate(project_dir, template, variables=variables)
    except PackageNotFoundError as e:
        formatter.error(e)
        return 1
    except PostInstallScriptError as e:
        formatter.error(e, f"Post install script caused an exception, project might be corrupt: {e}")
        if stacktrace_enabled(args):
            print_stacktrace(e)
        return 1

    logger.info("Generated files from sub-template %s", template)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
