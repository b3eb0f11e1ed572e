"""Pytest fixtures giving each test a fresh virtual tree.

Registered through the ``pytest11`` entry point, so installing fakefile makes
the fixtures available everywhere:

    def test_writes_report(fake_fs):
        with fake_fs.open("/out/report.txt", "w") as handle:
            handle.write("ok")
        assert fake_fs.read("/out/report.txt") == "ok"
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from .config import FakeFsConfig, load_config
from .filesystem import FakeFileSystem
from .observability.logging import set_log_level
from .tree import VirtualTree


@pytest.fixture(scope="session")
def fakefile_config() -> FakeFsConfig:
    """Configuration shared by the fakefile fixtures for the whole session.

    A .env file is read for FAKEFILE_* values but never exported into ``os.environ``.
    """
    config = load_config(export_dotenv=False)
    set_log_level(config.log_level)
    return config


@pytest.fixture
def fake_tree(fakefile_config: FakeFsConfig) -> Iterator[VirtualTree]:
    """Provide an empty tree that is discarded when the test finishes."""
    tree = VirtualTree(
        cwd=fakefile_config.cwd,
        max_symlink_depth=fakefile_config.max_symlink_depth,
    )
    yield tree
    tree.clear()


@pytest.fixture
def fake_fs(fake_tree: VirtualTree, fakefile_config: FakeFsConfig) -> FakeFileSystem:
    """Provide a file-API facade over ``fake_tree``."""
    return FakeFileSystem(fake_tree, config=fakefile_config)
