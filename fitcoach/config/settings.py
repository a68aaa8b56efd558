"""
Decoder settings for fitcoach.

Configuration is loaded from environment variables (and a local .env file)
with fallbacks to sensible defaults for development.
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Also pick up a .env from the current working directory
load_dotenv()

LOG_FORMATS = ("console", "json")


class DecoderSettings(BaseSettings):
    """FIT decoding and analysis configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Decoding
    strict_crc: bool = Field(
        default=False,
        alias="FIT_STRICT_CRC",
        description="Raise on CRC mismatch instead of logging a warning",
    )
    max_file_size_mb: int = Field(
        default=50, ge=1, alias="FIT_MAX_FILE_SIZE_MB", description="Maximum FIT file size in MB"
    )

    # Downstream helpers
    analysis_max_laps: int = Field(
        default=10, ge=1, alias="FIT_ANALYSIS_MAX_LAPS", description="Laps included in the analysis excerpt"
    )
    chart_max_points: int = Field(
        default=200, ge=1, alias="FIT_CHART_MAX_POINTS", description="Target sample count for chart series"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Optional[str] = Field(default=None, alias="LOG_FORMAT")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.lower()
        if v not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def resolved_log_format(self) -> str:
        """Console output in development, JSON everywhere else unless set explicitly."""
        if self.log_format:
            return self.log_format
        return "console" if self.environment.lower() == "development" else "json"


@lru_cache()
def get_settings() -> DecoderSettings:
    """Get cached decoder settings."""
    return DecoderSettings()
