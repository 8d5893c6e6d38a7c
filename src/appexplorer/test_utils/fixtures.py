"""
Shared pytest fixtures, registered through `pytest_plugins` in the test
suite's conftest.

Imports of appexplorer itself stay inside the fixtures so that loading the
plugin does not pull in tree-sitter or the message catalogues.
"""

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from .bus import SpyBus
    from .workspace import WorkspaceFactory

GITHUB_REMOTE = "https://github.com/acme/app.git"


@pytest.fixture
def workspace_factory(tmp_path: Path) -> "WorkspaceFactory":
    """A throwaway project tree rooted at `tmp_path`, written on `build()`."""
    from .workspace import WorkspaceFactory

    return WorkspaceFactory(tmp_path)


@pytest.fixture
def github_checkout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> "WorkspaceFactory":
    """
    A git repository with a GitHub `origin`, used as the working directory.

    Callers add sources, then `build()` and `commit()` so reports carry a
    real revision. Skipped when no `git` executable is available.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    from .workspace import WorkspaceFactory

    factory = WorkspaceFactory(tmp_path).init_git(remote=GITHUB_REMOTE)
    monkeypatch.chdir(tmp_path)
    return factory


@pytest.fixture
def spy_bus() -> "SpyBus":
    """Records bus traffic once patched in with `spy_bus.patch(monkeypatch)`."""
    from .bus import SpyBus

    return SpyBus()
