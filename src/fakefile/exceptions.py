"""Custom exceptions for fakefile.

Each error also derives from the builtin a real file API would raise, so code
under test that catches ``FileNotFoundError`` or ``ValueError`` keeps working
against the in-memory tree.
"""

from __future__ import annotations

import errno
import io


class FakeFsError(Exception):
    """Base exception for all fakefile errors."""

    pass


class InvalidModeError(FakeFsError, ValueError):
    """Raised when an access mode is not one of the six recognised symbols."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(f"illegal access mode {mode!r}")


class FakeFileNotFoundError(FakeFsError, FileNotFoundError):
    """Raised when a path does not resolve to any node."""

    def __init__(self, path: str) -> None:
        super().__init__(errno.ENOENT, "No such file or directory", path)


class ClosedStreamError(FakeFsError, ValueError):
    """Raised when I/O is attempted through a closed handle."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"I/O operation on closed file: {path}")


class NotWritableError(FakeFsError, io.UnsupportedOperation):
    """Raised when writing through a handle opened read-only."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"not open for writing: {path}")


class NodeTypeMismatchError(FakeFsError, TypeError):
    """Raised when an operation meets a node of the wrong kind.

    Reading a directory as file content, or calling ``readlink`` on something
    that is not a symlink, both end here.
    """

    def __init__(self, expected: str, actual: str, path: str) -> None:
        self.expected = expected
        self.actual = actual
        self.path = path
        super().__init__(f"Expected {expected} at {path}, found {actual}")


class SymlinkLoopError(FakeFsError, OSError):
    """Raised when symlink resolution exceeds the configured depth."""

    def __init__(self, path: str, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(errno.ELOOP, f"Too many levels of symbolic links (>{max_depth})", path)


class ConfigFileNotFoundError(FakeFsError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(FakeFsError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(FakeFsError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} is invalid: {detail}")
