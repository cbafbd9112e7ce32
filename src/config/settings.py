"""Engine settings using Pydantic Settings.

Every setting can be given in the environment with the TAXFORMS_ prefix,
for example TAXFORMS_TAX_YEAR=2025 or TAXFORMS_MEMOIZE_LINES=true.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Settings for building returns."""

    model_config = SettingsConfigDict(
        env_prefix="TAXFORMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tax_year: int = Field(default=2025, description="Tax year to build returns for")
    config_dir: Optional[Path] = Field(
        default=None,
        description="Directory of tax parameter YAML files (defaults to the packaged set)",
    )
    memoize_lines: bool = Field(
        default=False,
        description="Cache parameterless line computations per form instance",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON formatted logs")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("config_dir")
    @classmethod
    def validate_config_dir(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.is_dir():
            raise ValueError(f"config_dir {v} is not a directory")
        return v


@lru_cache
def get_settings() -> EngineSettings:
    """
    Get cached engine settings instance.

    Returns:
        EngineSettings: Cached settings loaded from environment.
    """
    settings = EngineSettings()
    logger.debug("Engine settings: %s", settings.model_dump())
    return settings
