"""Tests for CLI wiring and config display."""

import re
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from fakefile import cli
from fakefile.cli import CliDependencies
from fakefile.config import FakeFsConfig
from tests.fakes import InMemoryTextSource

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


def _use_config(monkeypatch: pytest.MonkeyPatch, config: FakeFsConfig) -> None:
    def fake_from_env(cls: type[FakeFsConfig], dotenv_path: str | None = None) -> FakeFsConfig:
        _ = (cls, dotenv_path)
        return config

    monkeypatch.setattr(cli.FakeFsConfig, "from_env", classmethod(fake_from_env))


def _build_app(source: InMemoryTextSource | None = None) -> typer.Typer:
    shared = source or InMemoryTextSource()

    def build_cli_dependencies(*, config: FakeFsConfig) -> CliDependencies:
        _ = config
        return CliDependencies(source=shared)

    return cli.create_app(build_cli_dependencies)


def test_cli_version_option_prints_package_version(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig())
    monkeypatch.setattr(cli, "__version__", "9.9.9", raising=False)

    result = runner.invoke(_build_app(), ["--version"])

    assert result.exit_code == 0
    assert "fakefile 9.9.9" in _strip_ansi(result.output)


def test_cli_modes_lists_every_access_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig())

    result = runner.invoke(_build_app(), ["modes"])

    assert result.exit_code == 0
    output = _strip_ansi(result.output)
    assert "Access modes" in output
    for symbol in ("r+", "w+", "a+"):
        assert symbol in output


def test_cli_config_shows_env_values(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig(cwd="/env", default_permissions=0o600))

    result = runner.invoke(_build_app(), ["config"])

    assert result.exit_code == 0
    output = _strip_ansi(result.output)
    assert "cwd: /env" in output
    assert "default_permissions: 0o600" in output
    assert "Loaded" not in output


def test_cli_config_merges_config_file(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig(cwd="/env"))
    source = InMemoryTextSource()
    source.write_text(
        'schema_version = 1\n[fakefile]\ncwd = "/file"\nmax_symlink_depth = 4\n',
        Path("fakefile.toml"),
    )

    result = runner.invoke(_build_app(source), ["config", "--file", "fakefile.toml"])

    assert result.exit_code == 0
    output = _strip_ansi(result.output)
    assert "Loaded: fakefile.toml" in output
    assert "cwd: /file" in output
    assert "max_symlink_depth: 4" in output


def test_cli_config_uses_config_path_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig(config_path="from-env.toml"))
    source = InMemoryTextSource()
    source.write_text(
        "schema_version = 1\n[fakefile]\ntruncate_on_open = false\n",
        Path("from-env.toml"),
    )

    result = runner.invoke(_build_app(source), ["config"])

    assert result.exit_code == 0
    assert "truncate_on_open: False" in _strip_ansi(result.output)


def test_cli_config_missing_file_exits_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig())

    result = runner.invoke(_build_app(), ["config", "-f", "missing.toml"])

    assert result.exit_code == 1
    assert "Config file not found: missing.toml" in _strip_ansi(result.output)


def test_cli_config_invalid_file_exits_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, FakeFsConfig())
    source = InMemoryTextSource()
    source.write_text("schema_version = 2\n[fakefile]\n", Path("bad.toml"))

    result = runner.invoke(_build_app(source), ["config", "-f", "bad.toml"])

    assert result.exit_code == 1
    assert "schema_version" in _strip_ansi(result.output)
