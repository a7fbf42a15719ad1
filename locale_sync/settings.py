"""
Run configuration.

Exactly one persistence mode is active per run, selected by the `type`
field: a directory of per-locale JSON files, or JSON payloads held in
memory. Config files on disk omit `type` and default to the file system.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from locale_sync.errors import ConfigurationError
from locale_sync.locales import KNOWN_LOCALES


class ConfigType(str, Enum):
    FILE_SYSTEM = "file_system"
    IN_MEMORY = "in_memory"


class _BaseConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_locales: list[str] = Field(..., min_length=1)
    source_locale: str

    @field_validator("target_locales")
    @classmethod
    def check_targets(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for tag in value:
            _known(tag)
            if tag in seen:
                raise ValueError(f"duplicate target locale: {tag!r}")
            seen.add(tag)
        return value

    @field_validator("source_locale")
    @classmethod
    def check_source_locale(cls, value: str) -> str:
        return _known(value)


def _known(tag: str) -> str:
    if tag not in KNOWN_LOCALES:
        raise ValueError(f"unknown locale tag: {tag!r}")
    return tag


class FileSystemConfig(_BaseConfig):
    type: Literal["file_system"] = "file_system"
    source_path: str = Field(..., min_length=1)
    locales_path: str = Field(..., min_length=1)
    excluded_files: list[str] = Field(default_factory=list)


class InMemoryConfig(_BaseConfig):
    type: Literal["in_memory"] = "in_memory"
    source: str = Field(..., min_length=1)
    previous_output: Optional[str] = None


Config = Annotated[Union[FileSystemConfig, InMemoryConfig], Field(discriminator="type")]

_config_adapter: TypeAdapter = TypeAdapter(Config)


def parse_config(data: dict) -> FileSystemConfig | InMemoryConfig:
    """Validate a config mapping; a missing `type` means file_system."""
    if not isinstance(data, dict):
        raise ConfigurationError("Invalid configuration: expected a JSON object")
    payload = {"type": ConfigType.FILE_SYSTEM.value, **data}
    try:
        return _config_adapter.validate_python(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration:\n{exc}") from exc


def load_config(path: str | Path) -> FileSystemConfig | InMemoryConfig:
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {exc}") from exc
    return parse_config(data)
