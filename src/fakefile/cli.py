"""CLI for fakefile.

Commands:
- modes: Show the six access modes and what each one permits
- config: Show resolved configuration (env, .env and an optional TOML file)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .config import FakeFsConfig
from .config_file import load_config_file
from .exceptions import FakeFsError
from .modes import AccessMode
from .observability.logging import set_log_level
from .protocols import TextSource


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: FakeFsConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    source: TextSource


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: FakeFsConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the fakefile entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"fakefile {__version__}")
        raise typer.Exit()


def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[dim]no[/dim]"


def _modes_table() -> Table:
    table = Table(title="Access modes")
    for column in ("Mode", "Name", "Readable", "Writable", "Creates", "Truncates", "Appends"):
        table.add_column(column)
    for mode in AccessMode:
        table.add_row(
            mode.value,
            mode.name.lower().replace("_", "-"),
            _yes_no(mode.readable),
            _yes_no(mode.writable),
            _yes_no(mode.creates),
            _yes_no(mode.truncates),
            _yes_no(mode.appends),
        )
    return table


def _format_value(name: str, value: object) -> str:
    if name == "default_permissions" and isinstance(value, int):
        return f"{value:#o}"
    return str(value)


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="fakefile: in-memory file handles for tests",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the installed fakefile version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = FakeFsConfig.from_env()
        set_log_level(config.log_level)
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def modes() -> None:
        """Show the recognised access modes."""
        rprint(_modes_table())

    @app.command()
    def config(
        ctx: typer.Context,
        config_file: Annotated[
            Path | None,
            typer.Option(
                "--file",
                "-f",
                help="TOML config file merged over environment values",
            ),
        ] = None,
    ) -> None:
        """Show the resolved configuration."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        resolved = state.config
        path = config_file or (Path(resolved.config_path) if resolved.config_path else None)
        if path is not None:
            try:
                resolved = resolved.with_file_overrides(
                    load_config_file(path=path, source=deps.source)
                )
            except FakeFsError as exc:
                rprint(f"[red]✗ {exc}[/red]")
                raise typer.Exit(code=1) from exc
            rprint(f"[green]✓ Loaded:[/green] {path}")
        for field in fields(resolved):
            rprint(f"  {field.name}: {_format_value(field.name, getattr(resolved, field.name))}")

    return app
