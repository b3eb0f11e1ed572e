"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .config import FakeFsConfig
from .infrastructure import LocalTextSource


def build_cli_dependencies(*, config: FakeFsConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Resolved configuration (unused by the local source).
    """
    _ = config
    return CliDependencies(source=LocalTextSource())


app = create_app(build_cli_dependencies)
