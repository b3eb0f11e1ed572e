"""Centralised, injectable configuration for fakefile."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Self

from dotenv import dotenv_values, load_dotenv

from .config_file import FakeFsConfigFile, load_config_file
from .handle import DEFAULT_PERMISSIONS
from .infrastructure import LocalTextSource
from .protocols import TextSource
from .tree import DEFAULT_MAX_SYMLINK_DEPTH, ROOT


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class BooleanEnvVarError(ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


class PermissionBitsEnvVarError(ValueError):
    """Raised when an environment variable must be octal permission bits."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be octal permission bits between 0000 and 7777.")


class LogLevelEnvVarError(ValueError):
    """Raised when an environment variable must name a logging level."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a logging level name such as DEBUG or WARNING.")


@dataclass(frozen=True)
class FakeFsConfig:
    """Immutable configuration for fake filesystems and handles.

    Load from environment with `FakeFsConfig.from_env()` or construct directly for testing.
    """

    # Handles
    truncate_on_open: bool = True
    default_permissions: int = DEFAULT_PERMISSIONS

    # Tree
    cwd: str = ROOT
    max_symlink_depth: int = DEFAULT_MAX_SYMLINK_DEPTH

    # Observability
    log_level: str = "WARNING"

    # Optional TOML file merged over env values
    config_path: str | None = None

    @classmethod
    def from_env(cls, dotenv_path: str | None = None, *, export_dotenv: bool = True) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.
            export_dotenv: Load .env values into ``os.environ``. When False they are only
                read as fallbacks and the process environment is left untouched.

        Returns:
            FakeFsConfig instance populated from environment.
        """
        dotenv_fallbacks: dict[str, str] = {}
        if export_dotenv:
            load_dotenv(dotenv_path)
        else:
            dotenv_fallbacks = {
                key: value
                for key, value in dotenv_values(dotenv_path).items()
                if value is not None
            }

        def getenv(key: str, default: str = "") -> str:
            return os.getenv(key, dotenv_fallbacks.get(key, default))

        return cls(
            truncate_on_open=_parse_optional_bool(
                getenv("FAKEFILE_TRUNCATE_ON_OPEN", ""),
                env_name="FAKEFILE_TRUNCATE_ON_OPEN",
            )
            is not False,
            default_permissions=_parse_permission_bits(
                getenv("FAKEFILE_DEFAULT_PERMISSIONS", ""),
                env_name="FAKEFILE_DEFAULT_PERMISSIONS",
            ),
            cwd=getenv("FAKEFILE_CWD", ROOT).strip() or ROOT,
            max_symlink_depth=_parse_optional_positive_int(
                getenv("FAKEFILE_MAX_SYMLINK_DEPTH", ""),
                env_name="FAKEFILE_MAX_SYMLINK_DEPTH",
            )
            or DEFAULT_MAX_SYMLINK_DEPTH,
            log_level=_parse_log_level(
                getenv("FAKEFILE_LOG_LEVEL", ""),
                env_name="FAKEFILE_LOG_LEVEL",
            ),
            config_path=getenv("FAKEFILE_CONFIG", "").strip() or None,
        )

    def with_overrides(
        self,
        *,
        truncate_on_open: bool | None = None,
        default_permissions: int | None = None,
        cwd: str | None = None,
        max_symlink_depth: int | None = None,
        log_level: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options and fixtures)."""
        return replace(
            self,
            truncate_on_open=self.truncate_on_open
            if truncate_on_open is None
            else truncate_on_open,
            default_permissions=self.default_permissions
            if default_permissions is None
            else default_permissions,
            cwd=self.cwd if cwd is None else cwd.strip(),
            max_symlink_depth=self.max_symlink_depth
            if max_symlink_depth is None
            else max_symlink_depth,
            log_level=self.log_level if log_level is None else log_level.strip().upper(),
        )

    def with_file_overrides(self, file_config: FakeFsConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            truncate_on_open=self.truncate_on_open
            if file_config.truncate_on_open is None
            else file_config.truncate_on_open,
            default_permissions=self.default_permissions
            if file_config.default_permissions is None
            else file_config.default_permissions,
            cwd=self.cwd if file_config.cwd is None else file_config.cwd,
            max_symlink_depth=self.max_symlink_depth
            if file_config.max_symlink_depth is None
            else file_config.max_symlink_depth,
            log_level=self.log_level if file_config.log_level is None else file_config.log_level,
        )


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)


def _parse_permission_bits(value: str, *, env_name: str) -> int:
    """Parse octal permission bits such as ``0644`` or ``0o600``."""
    text = value.strip().lower()
    if not text:
        return DEFAULT_PERMISSIONS
    text = text.removeprefix("0o")
    try:
        parsed = int(text, 8)
    except ValueError as exc:
        raise PermissionBitsEnvVarError(env_name) from exc
    if parsed < 0 or parsed > 0o7777:
        raise PermissionBitsEnvVarError(env_name)
    return parsed


def _parse_log_level(value: str, *, env_name: str) -> str:
    """Parse a logging level name, defaulting to WARNING."""
    text = value.strip().upper()
    if not text:
        return "WARNING"
    if text not in logging.getLevelNamesMapping():
        raise LogLevelEnvVarError(env_name)
    return text


def load_config(
    dotenv_path: str | None = None,
    *,
    source: TextSource | None = None,
    export_dotenv: bool = True,
) -> FakeFsConfig:
    """Build configuration from the environment, merging ``FAKEFILE_CONFIG`` when set."""
    config = FakeFsConfig.from_env(dotenv_path, export_dotenv=export_dotenv)
    if config.config_path:
        file_config = load_config_file(
            path=Path(config.config_path),
            source=source or LocalTextSource(),
        )
        config = config.with_file_overrides(file_config)
    return config
