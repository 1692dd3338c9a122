import sys
from pathlib import Path
from typing import Optional

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'lazybones' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from lazybones.core.stdlib_logging import reset_cli_logging_for_tests  # noqa: E402
from helpers.fakes import FakePackageSource, build_zip  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging():
    """Every test starts without the CLI stream handler."""
    reset_cli_logging_for_tests()
    yield
    reset_cli_logging_for_tests()


@pytest.fixture(autouse=True)
def lazybones_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real ``~/.lazybones`` directory and user environment."""
    import os

    for key in list(os.environ):
        if key.startswith("LAZYBONES_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    (home / ".lazybones").mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("LAZYBONES_CONFIG_FILE", str(home / ".lazybones" / "config.yaml"))
    monkeypatch.setenv("LAZYBONES_cache__dir", str(home / ".lazybones" / "templates"))
    return home / ".lazybones"


@pytest.fixture
def make_config(tmp_path: Path):
    """Factory building a ``Configuration`` from explicit layers.

    Uses the default schema unless one is given; nothing is read from disk.
    """
    from lazybones.core.config import Configuration, ConfigLayers, DEFAULT_SCHEMA

    def _make(
        base: Optional[dict] = None,
        managed: Optional[dict] = None,
        override: Optional[dict] = None,
        schema=DEFAULT_SCHEMA,
    ):
        return Configuration(
            ConfigLayers(base=base or {}, managed=managed or {}, override=override or {}),
            tmp_path / "managed-config.json",
            schema=schema,
        )

    return _make


@pytest.fixture
def fake_source():
    return FakePackageSource


@pytest.fixture
def zip_builder():
    return build_zip
