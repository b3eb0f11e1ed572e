"""In-memory tree store backing fake file handles.

Usage example:
    from fakefile.tree import VirtualTree

    tree = VirtualTree()
    tree.add_file("/etc/hosts", "127.0.0.1 localhost\\n")
    tree.add_symlink("/hosts", "/etc/hosts")
    assert tree.key_of("/hosts") == "/etc/hosts"
"""

from __future__ import annotations

import posixpath
import threading

from .exceptions import FakeFileNotFoundError, NodeTypeMismatchError, SymlinkLoopError
from .nodes import DirectoryNode, FileNode, Node, SymlinkNode, node_kind
from .observability.logging import get_logger

ROOT = "/"
DEFAULT_MAX_SYMLINK_DEPTH = 20

logger = get_logger("fakefile.tree")


def normalize_path(path: str, *, cwd: str = ROOT) -> str:
    """Return the canonical absolute form of ``path`` relative to ``cwd``."""
    normalized = posixpath.normpath(posixpath.join(cwd, path))
    # POSIX keeps a leading "//"; keys never do.
    if normalized.startswith("//"):
        normalized = ROOT + normalized.lstrip("/")
    return normalized


class VirtualTree:
    """Arena of nodes keyed by normalised absolute path.

    Directories record the names of their children; symlinks are resolved on
    lookup in every path component, and in the last one unless the caller asks
    not to follow it.
    """

    def __init__(
        self,
        *,
        cwd: str = ROOT,
        max_symlink_depth: int = DEFAULT_MAX_SYMLINK_DEPTH,
    ) -> None:
        self.cwd = normalize_path(cwd)
        self.max_symlink_depth = max_symlink_depth
        self._nodes: dict[str, Node] = {ROOT: DirectoryNode()}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def normalize(self, path: str) -> str:
        return normalize_path(path, cwd=self.cwd)

    def find(self, path: str, *, follow_symlinks: bool = True) -> Node | None:
        """Return the node ``path`` resolves to, or None."""
        key = self.key_of(path, follow_symlinks=follow_symlinks)
        if key is None:
            return None
        return self._nodes.get(key)

    def key_of(self, path: str, *, follow_symlinks: bool = True) -> str | None:
        """Return the canonical key ``path`` resolves to, or None."""
        with self._lock:
            return self._resolve(self.normalize(path), follow_symlinks, 0, path)

    def node_at(self, key: str) -> Node | None:
        return self._nodes.get(key)

    def add(self, path: str, node: Node) -> Node:
        """Insert ``node`` at ``path``, creating missing parent directories.

        Whatever already sat at the final path component is replaced.

        Raises:
            NodeTypeMismatchError: A parent component is not a directory.
        """
        with self._lock:
            key = self.normalize(path)
            if key == ROOT:
                if not isinstance(node, DirectoryNode):
                    raise NodeTypeMismatchError("directory", node_kind(node), ROOT)
                self._nodes[ROOT] = node
                return node
            parent_key = self._ensure_directory(posixpath.dirname(key), path)
            name = posixpath.basename(key)
            node_key = posixpath.join(parent_key, name)
            if isinstance(self._nodes.get(node_key), DirectoryNode):
                self._drop_descendants(node_key)
            self._nodes[node_key] = node
            self._directory(parent_key).children.add(name)
            logger.debug("Added %s at %s", node_kind(node), node_key)
            return node

    def add_file(self, path: str, content: str = "") -> FileNode:
        node = FileNode(content=content)
        self.add(path, node)
        return node

    def add_directory(self, path: str) -> DirectoryNode:
        """Create a directory and its parents; an existing directory is returned as-is."""
        with self._lock:
            key = self._ensure_directory(self.normalize(path), path)
            return self._directory(key)

    def add_symlink(self, path: str, target: str) -> SymlinkNode:
        node = SymlinkNode(target=target)
        self.add(path, node)
        return node

    def remove(self, path: str) -> None:
        """Remove the node at ``path`` (and everything below it) without following it."""
        with self._lock:
            key = self.key_of(path, follow_symlinks=False)
            if key is None:
                raise FakeFileNotFoundError(path)
            if key == ROOT:
                self.clear()
                return
            self._drop_descendants(key)
            del self._nodes[key]
            self._directory(posixpath.dirname(key)).children.discard(posixpath.basename(key))
            logger.debug("Removed %s", key)

    def readlink(self, path: str) -> str:
        """Return the raw target of the symlink at ``path``."""
        node = self.find(path, follow_symlinks=False)
        match node:
            case SymlinkNode(target=target):
                return target
            case None:
                raise FakeFileNotFoundError(path)
            case _:
                raise NodeTypeMismatchError("symlink", node_kind(node), path)

    def clear(self) -> None:
        """Discard every node, leaving an empty root directory."""
        with self._lock:
            self._nodes = {ROOT: DirectoryNode()}
            logger.debug("Cleared tree")

    def _resolve(self, key: str, follow_last: bool, depth: int, origin: str) -> str | None:
        current = ROOT
        parts = [part for part in key.split("/") if part]
        for index, part in enumerate(parts):
            candidate = posixpath.join(current, part)
            node = self._nodes.get(candidate)
            if node is None:
                return None
            is_last = index == len(parts) - 1
            if isinstance(node, SymlinkNode) and (follow_last or not is_last):
                if depth >= self.max_symlink_depth:
                    raise SymlinkLoopError(origin, self.max_symlink_depth)
                target = normalize_path(node.target, cwd=current)
                resolved = self._resolve(target, True, depth + 1, origin)
                if resolved is None:
                    return None
                candidate = resolved
            current = candidate
        return current

    def _ensure_directory(self, key: str, origin: str) -> str:
        current = ROOT
        for part in [part for part in key.split("/") if part]:
            candidate = posixpath.join(current, part)
            node = self._nodes.get(candidate)
            match node:
                case None:
                    self._nodes[candidate] = DirectoryNode()
                    self._directory(current).children.add(part)
                    logger.debug("Added directory at %s", candidate)
                case SymlinkNode():
                    resolved = self._resolve(candidate, True, 0, origin)
                    if resolved is None:
                        raise FakeFileNotFoundError(candidate)
                    if not isinstance(self._nodes[resolved], DirectoryNode):
                        raise NodeTypeMismatchError(
                            "directory", node_kind(self._nodes[resolved]), candidate
                        )
                    candidate = resolved
                case FileNode():
                    raise NodeTypeMismatchError("directory", "file", candidate)
                case DirectoryNode():
                    pass
            current = candidate
        return current

    def _drop_descendants(self, key: str) -> None:
        prefix = f"{key}/"
        for existing in [k for k in self._nodes if k.startswith(prefix)]:
            del self._nodes[existing]

    def _directory(self, key: str) -> DirectoryNode:
        node = self._nodes[key]
        if not isinstance(node, DirectoryNode):
            raise NodeTypeMismatchError("directory", node_kind(node), key)
        return node
