"""Access modes accepted by fake file handles.

Usage example:
    from fakefile.modes import AccessMode

    mode = AccessMode.parse("a+")
    assert mode.creates and mode.appends
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

from .exceptions import InvalidModeError


@dataclass(frozen=True)
class ModeFlags:
    """Capabilities granted by an access mode."""

    readable: bool
    writable: bool
    creates: bool
    truncates: bool
    appends: bool


class AccessMode(StrEnum):
    """The closed set of six open modes."""

    READ_ONLY = "r"
    READ_WRITE = "r+"
    WRITE_ONLY = "w"
    READ_WRITE_TRUNCATE = "w+"
    APPEND_WRITE_ONLY = "a"
    APPEND_READ_WRITE = "a+"

    @classmethod
    def parse(cls, value: str | AccessMode) -> Self:
        """Return the mode for ``value`` or raise ``InvalidModeError``."""
        if not isinstance(value, str):
            raise InvalidModeError(value)
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidModeError(value) from exc

    @property
    def flags(self) -> ModeFlags:
        return _MODE_FLAGS[self]

    @property
    def readable(self) -> bool:
        return self.flags.readable

    @property
    def writable(self) -> bool:
        return self.flags.writable

    @property
    def creates(self) -> bool:
        """True for modes that materialise a missing file on open."""
        return self.flags.creates

    @property
    def truncates(self) -> bool:
        return self.flags.truncates

    @property
    def appends(self) -> bool:
        return self.flags.appends


# mode: (readable, writable, creates, truncates, appends)
_MODE_FLAGS: dict[AccessMode, ModeFlags] = {
    AccessMode.READ_ONLY: ModeFlags(True, False, False, False, False),
    AccessMode.READ_WRITE: ModeFlags(True, True, False, False, False),
    AccessMode.WRITE_ONLY: ModeFlags(False, True, True, True, False),
    AccessMode.READ_WRITE_TRUNCATE: ModeFlags(True, True, True, True, False),
    AccessMode.APPEND_WRITE_ONLY: ModeFlags(False, True, True, False, True),
    AccessMode.APPEND_READ_WRITE: ModeFlags(True, True, True, False, True),
}

CREATING_MODES: frozenset[AccessMode] = frozenset(mode for mode in AccessMode if mode.creates)
