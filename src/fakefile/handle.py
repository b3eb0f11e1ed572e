"""Virtual file handle over a tree store.

Usage example:
    from fakefile.handle import FakeFile
    from fakefile.tree import VirtualTree

    tree = VirtualTree()
    with FakeFile("/tmp/notes.txt", "a", tree=tree) as handle:
        handle.write("first\\n")
        handle.puts("second", "third")
        assert handle.read() == "first\\nsecond\\nthird\\n"
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import TracebackType
from typing import Self

from .exceptions import (
    ClosedStreamError,
    FakeFileNotFoundError,
    NodeTypeMismatchError,
    NotWritableError,
)
from .modes import AccessMode
from .nodes import FileNode, Node, node_kind
from .observability.logging import get_logger
from .protocols import TreeStore

DEFAULT_PERMISSIONS = 0o644

logger = get_logger("fakefile.handle")


class FakeFile:
    """A single open session on a path in a tree store.

    The handle keeps the canonical key of its node rather than the node itself
    and looks it up on every call. Content is only ever read whole and written
    by appending; there is no cursor.
    """

    def __init__(
        self,
        path: str,
        mode: str | AccessMode = AccessMode.READ_ONLY,
        perm: int = DEFAULT_PERMISSIONS,
        *,
        tree: TreeStore,
        truncate_on_open: bool = True,
    ) -> None:
        self._mode = AccessMode.parse(mode)
        self._path = path
        self._tree = tree
        self._closed = False
        # Accepted for compatibility with real open(); never enforced.
        self.permissions = perm

        with tree.lock:
            self._key = tree.key_of(path)
            if self._mode.creates:
                if self._key is None:
                    self._create_missing_file()
                elif self._mode.truncates and truncate_on_open:
                    self._truncate()
            elif self._key is None:
                raise FakeFileNotFoundError(path)
        logger.debug("Opened %s in mode %s", path, self._mode.value)

    @property
    def path(self) -> str:
        return self._path

    @property
    def name(self) -> str:
        return self._path

    @property
    def mode(self) -> AccessMode:
        return self._mode

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def bound_node(self) -> Node | None:
        """The node currently stored under this handle's key, if any."""
        if self._key is None:
            return None
        return self._tree.node_at(self._key)

    def exists(self) -> bool:
        return self.bound_node is not None

    def readable(self) -> bool:
        return self._mode.readable

    def writable(self) -> bool:
        return self._mode.writable

    def read(self) -> str:
        """Return the whole content of the bound file.

        Raises:
            ClosedStreamError: The handle has been closed.
            NodeTypeMismatchError: The path resolves to a directory or symlink.
            FakeFileNotFoundError: The node was removed from the tree after open.
        """
        self._check_open()
        with self._tree.lock:
            return self._bound_file().content

    def write(self, content: str) -> int:
        """Append ``content`` to the bound file and return its length.

        A file removed from the tree since open is created again.
        """
        self._check_open()
        if not self._mode.writable:
            raise NotWritableError(self._path)
        if not isinstance(content, str):
            raise TypeError(f"write() argument must be str, not {type(content).__name__}")
        with self._tree.lock:
            if self.bound_node is None:
                self._create_missing_file()
            node = self._bound_file()
            node.content += content
        return len(content)

    append = write
    print = write

    def __lshift__(self, content: str) -> Self:
        """Write ``content`` and return the handle, so ``handle << "a" << "b"`` chains."""
        self.write(content)
        return self

    def puts(self, *items: object) -> None:
        """Write each item followed by a newline, flattening nested lists and tuples."""
        for item in _flatten(items):
            self.write(f"{item}\n")

    def writelines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> Self:
        self._check_open()
        return self

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.debug("Closed %s", self._path)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<FakeFile path={self._path!r} mode={self._mode.value!r} closed={self._closed}>"

    def _check_open(self) -> None:
        if self._closed:
            raise ClosedStreamError(self._path)

    def _bound_file(self) -> FileNode:
        node = self.bound_node
        match node:
            case FileNode():
                return node
            case None:
                raise FakeFileNotFoundError(self._path)
            case _:
                raise NodeTypeMismatchError("file", node_kind(node), self._path)

    def _create_missing_file(self) -> None:
        self._tree.add(self._path, FileNode())
        self._key = self._tree.key_of(self._path)
        logger.debug("Created empty file at %s", self._key)

    def _truncate(self) -> None:
        node = self.bound_node
        if isinstance(node, FileNode):
            node.content = ""


def _flatten(items: Iterable[object]) -> Iterator[object]:
    for item in items:
        if isinstance(item, list | tuple):
            yield from _flatten(item)
        else:
            yield item
