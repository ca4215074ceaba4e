"""Configuration models and loading logic."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_SETTINGS_FILE = Path(".wscheck.yaml")
SETTINGS_FILE_ENV = "WSCHECK_SETTINGS_FILE"
PROJECT_ROOT_MARKERS: tuple[str, ...] = (".wscheck.yaml", ".hg", ".git")

BASE_EXTENSIONS: tuple[str, ...] = (".java", ".c", ".h", ".cpp", ".hpp")
EXTRA_EXTENSIONS: tuple[str, ...] = (
    ".cc",
    ".jsl",
    ".fxml",
    ".css",
    ".m",
    ".mm",
    ".frag",
    ".vert",
    ".hlsl",
    ".gradle",
    ".groovy",
)


class ExtensionsConfig(BaseModel):
    """File suffixes whose contents are checked."""

    base: list[str] = Field(default_factory=lambda: list(BASE_EXTENSIONS), min_length=1)
    extra: list[str] = Field(default_factory=lambda: list(EXTRA_EXTENSIONS))

    @field_validator("base", "extra")
    @classmethod
    def _require_leading_dot(cls, value: list[str]) -> list[str]:
        for suffix in value:
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ValueError(f"extension {suffix!r} must look like '.ext'")
        return value


class VcsConfig(BaseModel):
    """Version-control collaborator settings."""

    backend: Literal["hg", "git"] = "hg"
    executable: str | None = None


class LoggingConfig(BaseModel):
    """Diagnostic logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_file: Path | None = None

    def level_number(self) -> int:
        return logging.getLevelName(self.level)


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    extensions: ExtensionsConfig = Field(default_factory=ExtensionsConfig)
    vcs: VcsConfig = Field(default_factory=VcsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="WSCHECK_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by walking upward to a settings file or VCS directory."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in PROJECT_ROOT_MARKERS):
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides."""

    AppSettings._yaml_file_override = config_file
    try:
        return AppSettings()
    finally:
        AppSettings._yaml_file_override = None
