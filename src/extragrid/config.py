"""Configuration using pydantic-settings.

Settings come from ``EXTRAGRID_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Editor and logging settings.

    Environment variables:
    - EXTRAGRID_LOG_LEVEL: Minimum level for ``configure_logging`` (default WARNING)
    - EXTRAGRID_LOG_JSON: Emit one JSON object per log line
    - EXTRAGRID_SHOW_COORDS: Default for ``reset(..., show_coords=None)``
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTRAGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "WARNING"
    log_json: bool = False

    # Debug aid: fill each cell with its own "r1,c1" on reset
    show_coords: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class ResetOptions(BaseModel):
    """Options accepted by ``GridEditor.reset``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    header_rows: int = Field(0, ge=0, alias="headerRows")
    header_cols: int = Field(0, ge=0, alias="headerCols")
    show_coords: bool | None = Field(None, alias="showCoords")
