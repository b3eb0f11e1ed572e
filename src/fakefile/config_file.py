"""Typed parsing and validation for fakefile config files.

A config file looks like::

    schema_version = 1

    [fakefile]
    truncate_on_open = false
    default_permissions = 0o600
    cwd = "/home/tester"
    max_symlink_depth = 8
    log_level = "debug"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import TextSource

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class FakeFsConfigFile:
    """Validated config values loaded from a TOML file."""

    truncate_on_open: bool | None = None
    default_permissions: int | None = None
    cwd: str | None = None
    max_symlink_depth: int | None = None
    log_level: str | None = None


class _FakeFsSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    truncate_on_open: bool | None = None
    default_permissions: int | None = None
    cwd: str | None = None
    max_symlink_depth: int | None = None
    log_level: str | None = None

    @field_validator("default_permissions")
    @classmethod
    def _validate_permission_bits(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0 or value > 0o7777:
            raise ValueError
        return value

    @field_validator("cwd")
    @classmethod
    def _validate_cwd(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text.startswith("/"):
            raise ValueError
        return text

    @field_validator("max_symlink_depth")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError
        return level


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    fakefile: _FakeFsSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_config_file(*, path: Path, source: TextSource) -> FakeFsConfigFile:
    """Load and validate a fakefile TOML config file."""
    if not source.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = source.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.fakefile
    return FakeFsConfigFile(
        truncate_on_open=section.truncate_on_open,
        default_permissions=section.default_permissions,
        cwd=section.cwd,
        max_symlink_depth=section.max_symlink_depth,
        log_level=section.log_level,
    )
