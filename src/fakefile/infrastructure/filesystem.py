"""Real-disk text source used to load config files.

Usage example:
    from pathlib import Path

    from fakefile.config_file import load_config_file
    from fakefile.infrastructure.filesystem import LocalTextSource

    file_config = load_config_file(path=Path("fakefile.toml"), source=LocalTextSource())
"""

from __future__ import annotations

from pathlib import Path
from typing import override

from ..protocols import TextSource


class LocalTextSource(TextSource):
    """Local filesystem implementation."""

    @override
    def exists(self, path: Path) -> bool:
        return path.is_file()

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
