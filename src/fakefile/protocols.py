"""Protocol definitions for dependency injection.

These protocols define the seams fake file handles depend on, so a handle can
run against any store that resolves paths to nodes.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .nodes import Node


@runtime_checkable
class TreeStore(Protocol):
    """Abstract store mapping slash-separated paths to nodes."""

    @property
    def lock(self) -> AbstractContextManager[object]:
        """Lock guarding node mutation."""
        ...

    def find(self, path: str, *, follow_symlinks: bool = True) -> Node | None:
        """Return the node at ``path``, or None if nothing resolves."""
        ...

    def key_of(self, path: str, *, follow_symlinks: bool = True) -> str | None:
        """Return the canonical key ``path`` resolves to, or None."""
        ...

    def node_at(self, key: str) -> Node | None:
        """Return the node stored under a canonical key."""
        ...

    def add(self, path: str, node: Node) -> Node:
        """Insert ``node`` at ``path`` and return it."""
        ...

    def readlink(self, path: str) -> str:
        """Return the raw target of the symlink at ``path``."""
        ...


@runtime_checkable
class TextSource(Protocol):
    """Abstract reader for text files on real storage (config loading)."""

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...
