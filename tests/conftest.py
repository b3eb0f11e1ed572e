"""Pytest fixtures for fakefile tests.

The ``fake_tree`` / ``fake_fs`` fixtures come from ``fakefile.pytest_plugin``
through its entry point; the fixtures here build on them.
"""

from __future__ import annotations

import pytest

from fakefile.filesystem import FakeFileSystem
from fakefile.tree import VirtualTree

# =============================================================================
# Environment isolation - configuration must not leak in from the shell
# =============================================================================

_FAKEFILE_ENV_VARS = (
    "FAKEFILE_TRUNCATE_ON_OPEN",
    "FAKEFILE_DEFAULT_PERMISSIONS",
    "FAKEFILE_CWD",
    "FAKEFILE_MAX_SYMLINK_DEPTH",
    "FAKEFILE_LOG_LEVEL",
    "FAKEFILE_CONFIG",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every FAKEFILE_* variable for the duration of a test.

    Setting each variable first makes teardown remove values loaded from .env files.
    """
    for name in _FAKEFILE_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def populated_tree(fake_tree: VirtualTree) -> VirtualTree:
    """A small tree with a file, a nested directory and two symlinks."""
    fake_tree.add_file("/etc/hosts", "127.0.0.1 localhost\n")
    fake_tree.add_file("/home/ada/notes.txt", "z\n")
    fake_tree.add_directory("/var/log")
    fake_tree.add_symlink("/hosts", "/etc/hosts")
    fake_tree.add_symlink("/home/ada/latest", "notes.txt")
    return fake_tree


@pytest.fixture
def populated_fs(populated_tree: VirtualTree, fake_fs: FakeFileSystem) -> FakeFileSystem:
    """A facade over ``populated_tree``."""
    assert fake_fs.tree is populated_tree
    return fake_fs
