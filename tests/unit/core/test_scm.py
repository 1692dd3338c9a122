"""Tests for the git adapter."""
from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest


class TestGitAdapter:
    def test_author_falls_back_to_settings(self, make_config, monkeypatch: pytest.MonkeyPatch) -> None:
        from lazybones.core.scm import GitAdapter

        monkeypatch.setattr(GitAdapter, "_global_setting", lambda self, key: None)
        config = make_config(base={"git": {"name": "Config Name", "email": "cfg@example.org"}})
        adapter = GitAdapter(config)
        assert adapter.user_name == "Config Name"
        assert adapter.user_email == "cfg@example.org"

    def test_author_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from lazybones.core.scm import GitAdapter

        monkeypatch.setattr(GitAdapter, "_global_setting", lambda self, key: None)
        adapter = GitAdapter()
        assert (adapter.user_name, adapter.user_email) == ("Unknown", "unknown@nowhere.net")
        assert adapter.exclusions_filename == ".gitignore"

    def test_failed_command_raises_scm_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from lazybones.core.exceptions import ScmError
        from lazybones.core.scm import GitAdapter

        def _fail(*args, **kwargs):
            raise subprocess.CalledProcessError(128, args[0], output="", stderr="fatal: bad")

        adapter = GitAdapter(user_name="a", user_email="b@c")
        monkeypatch.setattr(subprocess, "run", _fail)
        with pytest.raises(ScmError, match="fatal: bad"):
            adapter.initialize_repository(tmp_path)

    @pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
    def test_init_and_commit(self, tmp_path: Path) -> None:
        from lazybones.core.scm import GitAdapter

        (tmp_path / "file.txt").write_text("x", encoding="utf-8")
        adapter = GitAdapter(user_name="Tester", user_email="tester@example.org")
        adapter.initialize_repository(tmp_path)
        adapter.commit_initial_files(tmp_path, "Initial commit")

        log = subprocess.run(
            ["git", "log", "--format=%an %s"], cwd=tmp_path, capture_output=True, text=True, check=True
        )
        assert log.stdout.strip() == "Tester Initial commit"
