"""Root test configuration for the allowlist registry.

The default registry is process-wide and built once; every test starts and
ends with it dropped so tests never observe each other's allowlists.
"""

from pathlib import Path

import pytest

from allowlists.constants import ALLOWLIST_PATH_PREFIX


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Drop the process-wide registry before and after each test."""
    from allowlists.registry import _reset_registry

    _reset_registry()
    yield
    _reset_registry()


@pytest.fixture
def allowlist_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from tmp_path with an empty allowlist directory.

    Bazel runfiles env vars are cleared so only the working-directory tier
    can supply files unless a test opts in.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RUNFILES_DIR", raising=False)
    monkeypatch.delenv("TEST_SRCDIR", raising=False)
    directory = tmp_path / ALLOWLIST_PATH_PREFIX
    directory.mkdir(parents=True)
    return directory
