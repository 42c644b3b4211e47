"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from kdcontext.adapters.mock import MockAdapter
from kdcontext.adapters.registry import AdapterRegistry
from kdcontext.adapters.shell.filesystem import FilesystemAdapter
from kdcontext.core.config.loader import load_layout
from kdcontext.core.models.layout import Layout


@pytest.fixture
def scaffold_root(tmp_path: Path) -> Path:
    """An empty directory to scaffold into."""
    root = tmp_path / "kernel-dev-context"
    root.mkdir()
    return root


@pytest.fixture
def layout() -> Layout:
    """The packaged layout."""
    return load_layout()


@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git from the user's config and give it a commit identity."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Author")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "author@example.com")


@pytest.fixture
def mock_git() -> MockAdapter:
    return MockAdapter(adapter_name="git")


@pytest.fixture
def fs_registry(mock_git: MockAdapter) -> AdapterRegistry:
    """Real filesystem, mocked git."""
    registry = AdapterRegistry()
    registry.register(FilesystemAdapter())
    registry.register(mock_git)
    return registry
