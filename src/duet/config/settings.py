"""Pydantic settings models for Duet configuration."""

from __future__ import annotations

from typing import Optional, Tuple, Type

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from duet.config.constants import (
    CORRECTION_SIMILARITY_THRESHOLD,
    SIMILAR_RESULTS_LIMIT,
)


class RetrievalSettings(BaseSettings):
    """Memory retrieval configuration."""

    enabled: bool = Field(
        default=True,
        description="Retrieve memories for messages that trigger retrieval",
    )

    model_config = SettingsConfigDict(env_prefix="DUET_RETRIEVAL_")


class CorrectionSettings(BaseSettings):
    """Correction handling configuration."""

    similarity_threshold: float = Field(
        default=CORRECTION_SIMILARITY_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Minimum similarity for a memory to be a correction target",
    )

    model_config = SettingsConfigDict(env_prefix="DUET_CORRECTION_")


class StorageSettings(BaseSettings):
    """Local memory store configuration."""

    memories_file: Optional[str] = Field(
        default=None,
        description="JSON file backing the local memory store (None = in-memory only)",
    )
    similar_results: int = Field(
        default=SIMILAR_RESULTS_LIMIT,
        ge=1,
        le=50,
        description="Maximum candidates returned by a similarity lookup",
    )

    model_config = SettingsConfigDict(env_prefix="DUET_STORAGE_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    output_file: Optional[str] = Field(
        default=None,
        description="Optional log file path",
    )
    format: str = Field(
        default="text",
        description="Log file format (text or json)",
    )

    model_config = SettingsConfigDict(env_prefix="DUET_LOGGING_")


class Settings(BaseSettings):
    """Root configuration for Duet."""

    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    correction: CorrectionSettings = Field(default_factory=CorrectionSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        toml_file="configs/duet.toml",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Configure settings sources with TOML support.

        Priority (highest to lowest):
        1. Init settings (constructor arguments)
        2. Environment variables
        3. TOML config file
        4. Default values
        """
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
