"""Pytest configuration and fixtures."""

import sys
from pathlib import Path as FsPath

import pytest

# Add src to path (for 'sandpath.*' imports without installing)
repo_root = FsPath(__file__).parent.parent
sys.path.insert(0, str(repo_root / "src"))

from sandpath.base import runtime  # noqa: E402
from sandpath.base.filestore import LocalFileStore, MemoryFileStore  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_providers(monkeypatch):
    """Default FileStore must not leak between tests."""
    monkeypatch.setenv("SANDPATH_USE_PLUGIN", "0")
    monkeypatch.delenv("SANDPATH_DEBUG", raising=False)
    runtime.set_filestore(None)
    yield
    runtime.set_filestore(None)


@pytest.fixture
def mem_store():
    """Empty in-memory store with the sandbox rooted at /sandbox."""
    return MemoryFileStore()


@pytest.fixture
def local_store(tmp_path):
    """Local store whose sandbox directories live under tmp_path/sandbox."""
    return LocalFileStore(sandbox=str(tmp_path / "sandbox"))
