"""Node variants held by the virtual tree."""

from __future__ import annotations

from dataclasses import dataclass, field


def _empty_children() -> set[str]:
    return set()


@dataclass(slots=True)
class FileNode:
    """Regular file with mutable text content."""

    content: str = ""


@dataclass(slots=True)
class DirectoryNode:
    """Directory holding the names of its direct children."""

    children: set[str] = field(default_factory=_empty_children)


@dataclass(frozen=True, slots=True)
class SymlinkNode:
    """Symbolic link carrying its raw, unresolved target."""

    target: str


type Node = FileNode | DirectoryNode | SymlinkNode


def node_kind(node: Node | None) -> str:
    """Return a short label for a node variant (``"missing"`` for ``None``)."""
    match node:
        case FileNode():
            return "file"
        case DirectoryNode():
            return "directory"
        case SymlinkNode():
            return "symlink"
        case None:
            return "missing"
