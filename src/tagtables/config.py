"""
TagTables Configuration Module.

Handles table conventions, storage host selection and application settings.
Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TableSettings(BaseSettings):
    """Tagged-table layout conventions."""

    model_config = SettingsConfigDict(env_prefix="TABLES_")

    tag_row_index: int = Field(default=0, ge=0, description="Grid row holding the column tags")
    tag_column_index: int = Field(default=0, ge=0, description="Grid column holding the row tags")
    header_tag: str = Field(default="header", description="Row tag marking the last label row")
    selection_tag: str = Field(default="isactive", description="Column tag of selection checkboxes")
    strict_tags: bool = Field(
        default=False,
        description="If true, building tag maps fails on the first duplicate tag instead of last-write-wins.",
    )


class HostSettings(BaseSettings):
    """Storage host configuration."""

    model_config = SettingsConfigDict(env_prefix="HOST_")

    backend: Literal["memory", "csv"] = "memory"
    data_dir: Path = Field(default=Path("data"), description="Root directory of the csv backend")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # Nested settings
    tables: TableSettings = Field(default_factory=TableSettings)
    host: HostSettings = Field(default_factory=HostSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
