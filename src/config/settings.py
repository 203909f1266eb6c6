# src/config/settings.py - v2
"""Typed configuration loaded via pydantic-settings.

Sources, highest priority first: keyword overrides, environment variables,
.env file, the optional md_serve.toml settings file, field defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

DEFAULT_CONFIG_FILE = "md_serve.toml"


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        toml_file=DEFAULT_CONFIG_FILE,
        extra="ignore",
    )

    # === Server ===
    listening_host: str = "localhost"
    listening_port: int = 3000
    document_root: Path = Path(".")

    # === Cache ===
    html_cache_path: Path = Path("./html_cache")
    markup_extension: str = "md"
    artifact_extension: str = "html"

    # === Renderer ===
    renderer_backend: str = "pandoc"
    renderer_executable: str = "pandoc"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # --- Validators ---

    @field_validator("markup_extension", "artifact_extension")
    @classmethod
    def strip_leading_dot(cls, v: str) -> str:
        """Extensions are stored without the leading dot."""
        return v.strip().lstrip(".")

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if not 0 <= self.listening_port <= 65535:
            errors.append(
                f"LISTENING_PORT must be in 0..65535, got {self.listening_port}"
            )
        if not self.markup_extension:
            errors.append("MARKUP_EXTENSION must not be empty")
        if not self.artifact_extension:
            errors.append("ARTIFACT_EXTENSION must not be empty")
        if self.markup_extension == self.artifact_extension:
            errors.append("MARKUP_EXTENSION and ARTIFACT_EXTENSION must differ")
        if not self.renderer_executable.strip():
            errors.append("RENDERER_EXECUTABLE must not be empty")
        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(config_file: Path | str | None = None, **overrides: object) -> Settings:
    """Load settings with an optional alternative settings file.

    Args:
        config_file: TOML settings file to read instead of md_serve.toml.
            A missing file is not an error; defaults apply.
        **overrides: Field-level overrides (CLI flags, tests).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    if config_file is None:
        return Settings(**overrides)  # type: ignore[arg-type]

    class _FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=Path(config_file))

    return _FileSettings(**overrides)  # type: ignore[arg-type]
