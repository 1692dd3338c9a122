"""Source control adapters used to put a freshly created project under version control."""
from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from lazybones.core.exceptions import ScmError

if TYPE_CHECKING:
    from lazybones.core.config import Configuration

logger = logging.getLogger(__name__)

DEFAULT_GIT_NAME = "Unknown"
DEFAULT_GIT_EMAIL = "unknown@nowhere.net"
INITIAL_COMMIT_MESSAGE = "Initial commit"


class ScmAdapter(ABC):
    """An adapter onto a distributed source control system."""

    @property
    @abstractmethod
    def exclusions_filename(self) -> str:
        """Name of the file holding exclusions, e.g. ``.gitignore``."""

    @abstractmethod
    def initialize_repository(self, location: Path) -> None:
        """Create a new local repository in ``location``."""

    @abstractmethod
    def commit_initial_files(self, location: Path, message: str) -> None:
        """Add and commit every file in ``location``, honouring the exclusions file."""


class GitAdapter(ScmAdapter):
    """Drives the ``git`` executable, which must be on the PATH.

    The commit author comes from the user's global git config, falling back
    to the ``git.name`` and ``git.email`` settings.
    """

    def __init__(
        self,
        config: Optional["Configuration"] = None,
        *,
        user_name: Optional[str] = None,
        user_email: Optional[str] = None,
    ) -> None:
        self.user_name = user_name or self._global_setting("user.name") or _setting(
            config, "git.name", DEFAULT_GIT_NAME
        )
        self.user_email = user_email or self._global_setting("user.email") or _setting(
            config, "git.email", DEFAULT_GIT_EMAIL
        )

    @property
    def exclusions_filename(self) -> str:
        return ".gitignore"

    def initialize_repository(self, location: Path) -> None:
        self._run_git(["init"], Path(location))

    def commit_initial_files(self, location: Path, message: str = INITIAL_COMMIT_MESSAGE) -> None:
        cwd = Path(location)
        self._run_git(["add", "."], cwd)
        self._run_git(["config", "user.name", self.user_name], cwd)
        self._run_git(["config", "user.email", self.user_email], cwd)
        self._run_git(["commit", "-m", message], cwd)

    def _global_setting(self, key: str) -> Optional[str]:
        try:
            result = subprocess.run(
                ["git", "config", "--global", "--get", key],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.debug("Could not read git setting %s: %s", key, exc)
            return None
        value = result.stdout.strip()
        return value or None

    def _run_git(self, args: List[str], cwd: Path) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Raises:
            ScmError: If git is missing or the command fails.
        """
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise ScmError("git executable not found", context={"args": args}) from e
        except subprocess.CalledProcessError as e:
            raise ScmError(
                f"Git command failed: git {' '.join(args)}\n{e.stderr or e.stdout or e}",
                context={"args": args, "returncode": e.returncode},
            ) from e
        logger.debug("git %s: %s", " ".join(args), result.stdout.strip())
        return result


def _setting(config: Optional["Configuration"], name: str, default: str) -> str:
    if config is None:
        return default
    value = config.get_setting(name)
    return str(value) if value else default


__all__ = ["ScmAdapter", "GitAdapter", "INITIAL_COMMIT_MESSAGE"]
