"""In-memory file handles for code under test."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ClosedStreamError,
    FakeFileNotFoundError,
    FakeFsError,
    InvalidModeError,
    NodeTypeMismatchError,
    NotWritableError,
    SymlinkLoopError,
)
from .filesystem import FakeFileSystem
from .handle import FakeFile
from .modes import AccessMode
from .nodes import DirectoryNode, FileNode, SymlinkNode
from .tree import VirtualTree

_PACKAGE_NAME = "fakefile"


def _resolve_version() -> str:
    try:
        return version(_PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _resolve_version()

__all__ = [
    "AccessMode",
    "ClosedStreamError",
    "DirectoryNode",
    "FakeFile",
    "FakeFileNotFoundError",
    "FakeFileSystem",
    "FakeFsError",
    "FileNode",
    "InvalidModeError",
    "NodeTypeMismatchError",
    "NotWritableError",
    "SymlinkLoopError",
    "SymlinkNode",
    "VirtualTree",
]
