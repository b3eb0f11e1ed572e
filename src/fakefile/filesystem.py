"""File-API facade over a virtual tree.

Usage example:
    from fakefile.filesystem import FakeFileSystem

    fs = FakeFileSystem()
    with fs.open("/tmp/a.txt", "w") as handle:
        handle.puts("alpha", "beta")

    assert fs.exists("/tmp/a.txt")
    assert fs.readlines("/tmp/a.txt") == ["alpha", "beta"]
    assert fs.size("/tmp/a.txt") == 11
"""

from __future__ import annotations

import posixpath

from .config import FakeFsConfig
from .exceptions import FakeFileNotFoundError, SymlinkLoopError
from .handle import FakeFile
from .modes import AccessMode
from .nodes import DirectoryNode, FileNode, Node, SymlinkNode
from .protocols import TreeStore
from .tree import VirtualTree

PATH_SEPARATOR = "/"


class FakeFileSystem:
    """Stateless probes and whole-file helpers bound to one tree store.

    All state lives in the tree; the facade only carries configuration.
    """

    def __init__(
        self,
        tree: TreeStore | None = None,
        *,
        config: FakeFsConfig | None = None,
    ) -> None:
        self.config = config or FakeFsConfig()
        if tree is None:
            tree = VirtualTree(
                cwd=self.config.cwd,
                max_symlink_depth=self.config.max_symlink_depth,
            )
        self.tree: TreeStore = tree

    def open(
        self,
        path: str,
        mode: str | AccessMode = AccessMode.READ_ONLY,
        perm: int | None = None,
    ) -> FakeFile:
        """Open a handle on ``path``; use it as a context manager to close it reliably."""
        return FakeFile(
            path,
            mode,
            self.config.default_permissions if perm is None else perm,
            tree=self.tree,
            truncate_on_open=self.config.truncate_on_open,
        )

    def exists(self, path: str) -> bool:
        return self._probe(path) is not None

    def is_dir(self, path: str | FakeFile) -> bool:
        return isinstance(self._probe(path), DirectoryNode)

    def is_file(self, path: str | FakeFile) -> bool:
        return isinstance(self._probe(path), FileNode)

    def is_symlink(self, path: str | FakeFile) -> bool:
        target = path.path if isinstance(path, FakeFile) else path
        return isinstance(self._probe(target, follow_symlinks=False), SymlinkNode)

    def readlink(self, path: str) -> str:
        """Return the canonical path of the node the symlink at ``path`` points to.

        Raises:
            NodeTypeMismatchError: ``path`` is not a symlink.
            FakeFileNotFoundError: ``path`` is missing or its target dangles.
        """
        self.tree.readlink(path)
        key = self.tree.key_of(path)
        if key is None:
            raise FakeFileNotFoundError(path)
        return key

    def read(self, path: str) -> str:
        if self.tree.find(path) is None:
            raise FakeFileNotFoundError(path)
        with self.open(path) as handle:
            return handle.read()

    def readlines(self, path: str) -> list[str]:
        """Split the file on newlines, dropping trailing empty lines.

        ``"a\\nb\\n"`` and ``"a\\nb\\n\\n"`` both give ``["a", "b"]``; an empty
        file gives ``[]``.
        """
        lines = self.read(path).split("\n")
        while lines and lines[-1] == "":
            lines.pop()
        return lines

    def size(self, path: str) -> int:
        return len(self.read(path))

    @staticmethod
    def join(*parts: str) -> str:
        return PATH_SEPARATOR.join(parts)

    @staticmethod
    def extname(path: str) -> str:
        return posixpath.splitext(path)[1]

    @staticmethod
    def basename(path: str, suffix: str | None = None) -> str:
        name = posixpath.basename(path)
        if suffix == ".*":
            return posixpath.splitext(name)[0]
        if suffix and name.endswith(suffix) and name != suffix:
            return name[: -len(suffix)]
        return name

    @staticmethod
    def dirname(path: str) -> str:
        return posixpath.dirname(path)

    @staticmethod
    def expand_path(path: str, base: str | None = None) -> str:
        expanded = posixpath.expanduser(path)
        if base is not None:
            expanded = posixpath.join(posixpath.expanduser(base), expanded)
        return posixpath.abspath(expanded)

    def _probe(self, path: str | FakeFile, *, follow_symlinks: bool = True) -> Node | None:
        if isinstance(path, FakeFile):
            return path.bound_node
        try:
            return self.tree.find(path, follow_symlinks=follow_symlinks)
        except SymlinkLoopError:
            return None
