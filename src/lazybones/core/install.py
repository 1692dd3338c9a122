"""Post-install step for freshly unpacked templates.

A template may ship a ``lazybones.groovy`` script that customises the
unpacked project. The script language is not implemented here: callers plug
in a ``script_runner`` that receives a ``ScriptContext`` and returns the
parameters to store for sub-templates.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from lazybones import __version__
from lazybones.core.exceptions import PostInstallScriptError
from lazybones.core.packages.exceptions import PackageNotFoundError
from lazybones.core.scm import INITIAL_COMMIT_MESSAGE, ScmAdapter
from lazybones.core.utils.io import read_json, write_json_atomic

logger = logging.getLogger(__name__)

INSTALL_SCRIPT_NAME = "lazybones.groovy"
LAZYBONES_DIR_NAME = ".lazybones"
STORED_PARAMS_FILENAME = "stored-params.json"
PARENT_PARAMS_KEY = "parentParams"
SUBTEMPLATE_PATTERN = re.compile(r"^(.*)-template-(.*)\.zip$")
UNPACKED_SUFFIX = "-unpacked"


@dataclass(frozen=True)
class ScriptContext:
    """Everything a post-install script runner gets to see."""

    script_file: Path
    variables: Mapping[str, Any]
    qualifiers: Tuple[str, ...]
    project_dir: Path
    template_dir: Path
    scm_exclusions_file: Optional[Path] = None
    extra: Mapping[str, Any] = field(default_factory=dict)


ScriptRunner = Callable[[ScriptContext], Optional[Mapping[str, Any]]]


class InstallationScriptExecutor:
    """Runs the post-install script of a template and initialises source control.

    Args:
        scm_adapter: When given, a repository is created in the project
            directory and every file is committed.
        script_runner: Executes ``lazybones.groovy``. Without one, templates
            that ship a script are installed as-is and a warning is logged.
    """

    def __init__(
        self,
        scm_adapter: Optional[ScmAdapter] = None,
        script_runner: Optional[ScriptRunner] = None,
    ) -> None:
        self.scm_adapter = scm_adapter
        self.script_runner = script_runner

    def run_post_install_script_with_args(
        self,
        variables: Mapping[str, Any],
        qualifiers: Sequence[str],
        target_dir: Path,
        template_dir: Optional[Path] = None,
    ) -> Optional[Mapping[str, Any]]:
        """Run the post-install script (if any), then set up source control.

        The script sees the user's variables plus ``parentParams`` (stored by
        a parent template) and ``lazybonesVersion``, ``lazybonesMajorVersion``
        and ``lazybonesMinorVersion``.

        Returns:
            The parameters returned by the script runner, or None when no
            script was run.

        Raises:
            PostInstallScriptError: Wrapping any failure.
        """
        target_dir = Path(target_dir)
        template_dir = Path(template_dir) if template_dir is not None else target_dir
        try:
            script_variables: Dict[str, Any] = dict(variables)
            script_variables.update(self.load_parent_params(template_dir))
            script_variables.update(version_script_variables())
            result = self.run_post_install_script(
                qualifiers, target_dir, template_dir, script_variables
            )
            self._init_scm_repo(target_dir.resolve())
            return result
        except PostInstallScriptError:
            raise
        except Exception as exc:
            raise PostInstallScriptError(exc) from exc

    def run_post_install_script(
        self,
        qualifiers: Sequence[str],
        target_dir: Path,
        template_dir: Path,
        variables: Mapping[str, Any],
    ) -> Optional[Mapping[str, Any]]:
        """Run ``lazybones.groovy`` if the template has one, then delete it."""
        script_file = Path(template_dir) / INSTALL_SCRIPT_NAME
        if not script_file.exists():
            return None

        if self.script_runner is None:
            logger.warning(
                "The template contains a post-install script (%s) but no script runner "
                "is available; it has not been run",
                INSTALL_SCRIPT_NAME,
            )
            return None

        context = ScriptContext(
            script_file=script_file,
            variables=dict(variables),
            qualifiers=tuple(qualifiers),
            project_dir=Path(target_dir),
            template_dir=Path(template_dir),
            scm_exclusions_file=(
                Path(target_dir) / self.scm_adapter.exclusions_filename
                if self.scm_adapter is not None
                else None
            ),
        )
        logger.debug("Running post-install script %s", script_file)
        parent_params = self.script_runner(context) or {}
        script_file.unlink()

        self.persist_parent_params(template_dir, parent_params)
        return parent_params

    def persist_parent_params(self, template_dir: Path, params: Mapping[str, Any]) -> Path:
        """Store ``params`` for sub-templates in ``<template_dir>/.lazybones``."""
        params_file = Path(template_dir) / LAZYBONES_DIR_NAME / STORED_PARAMS_FILENAME
        write_json_atomic(params_file, {str(k): str(v) for k, v in params.items()})
        return params_file

    def load_parent_params(self, template_dir: Path) -> Dict[str, Any]:
        """Load parameters stored by a parent template.

        Sub-templates are unpacked into ``.lazybones/<name>``, so the stored
        parameters of the parent sit in the parent directory of
        ``template_dir``.
        """
        params_file = Path(template_dir).parent / STORED_PARAMS_FILENAME
        params = read_json(params_file, default={})
        return {PARENT_PARAMS_KEY: dict(params) if isinstance(params, dict) else {}}

    def _init_scm_repo(self, location: Path) -> None:
        if self.scm_adapter is None:
            return
        self.scm_adapter.initialize_repository(location)
        self.scm_adapter.commit_initial_files(location, INITIAL_COMMIT_MESSAGE)


def find_subtemplate_archive(lazybones_dir: Path, name: str) -> Path:
    """Return the packaged sub-template ``<name>-template-<version>.zip``.

    Raises:
        PackageNotFoundError: If the project ships no such sub-template.
    """
    candidates = sorted(
        path
        for path in Path(lazybones_dir).glob("*.zip")
        if (match := SUBTEMPLATE_PATTERN.match(path.name)) and match.group(1) == name
    )
    if not candidates:
        raise PackageNotFoundError(name, message=f"Cannot find a subtemplate named '{name}'")
    return candidates[0]


def version_script_variables(version: str = __version__) -> Dict[str, Any]:
    """Split the application version into the variables templates can use."""
    parts = re.split(r"[.\-]", version)
    if len(parts) < 2 or not all(parts[:2]):
        raise ValueError(f"Malformed application version: {version!r}")
    return {
        "lazybonesVersion": version,
        "lazybonesMajorVersion": int(parts[0]),
        "lazybonesMinorVersion": int(parts[1]),
    }


__all__ = [
    "INSTALL_SCRIPT_NAME",
    "LAZYBONES_DIR_NAME",
    "SUBTEMPLATE_PATTERN",
    "UNPACKED_SUFFIX",
    "ScriptContext",
    "ScriptRunner",
    "InstallationScriptExecutor",
    "find_subtemplate_archive",
    "version_script_variables",
]
