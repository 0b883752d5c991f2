"""
Configuration management using Pydantic Settings.

Settings are loaded from environment variables (prefixed ``VERBATIM_``)
or a .env file in the working directory. The column-split constants are
calibrated for one document family; corpora with different typography
should override them.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables.

    Settings are loaded from:
    1. Environment variables (``VERBATIM_LEFT_COL_WIDTH`` etc.)
    2. .env file in the project root (if present)
    """

    model_config = SettingsConfigDict(
        env_prefix="VERBATIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Column reflow calibration
    left_col_width: int = Field(
        default=8,
        ge=1,
        description="Number of leading gap slots in which a left-column fragment may start",
    )
    overflow_threshold: int = Field(
        default=65,
        ge=1,
        description="Maximum length of the right-column text before fragments move left",
    )

    # Boilerplate detection
    header_anchor: str = Field(
        default=r"^\s*President\s*:",
        description="Regex matching the last line of the first-page header",
    )
    footer_fingerprint: str = Field(
        default="This record contains the text of speeches",
        description="Fixed sentence fragment that starts the first-page footer",
    )

    # Speaker detection
    unqualified_speakers: list[str] = Field(
        default_factory=lambda: ["The Secretary-General"],
        description="Speaker labels recognised without a parenthesized qualifier",
    )

    # Batch processing
    workers: int = Field(default=4, ge=1, description="Worker processes for batch mode")
    document_timeout: float | None = Field(
        default=60.0,
        description="Seconds to wait for a single document in batch mode",
    )

    log_level: str = Field(default="INFO", description="Root logging level for the CLI")


def get_settings(**overrides) -> Settings:
    """Return a fresh Settings instance with ``None`` overrides ignored."""
    update = {k: v for k, v in overrides.items() if v is not None}
    return Settings(**update)


# Global settings instance
settings = Settings()
