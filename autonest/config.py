"""Configuration management for AutoNest."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTONEST_",
        extra="ignore",
    )

    # Packing defaults
    spacing: float = Field(default=10.0, description="Gap reserved around each placed item")
    allow_rotation: bool = Field(default=False, description="Allow a single 90 degree rotation fallback")
    target_width: float = Field(default=1000.0, description="Initial region width")
    target_height: float = Field(default=1000.0, description="Initial region height")

    # Expansion policy
    expansion_margin: float = Field(default=100.0, description="Margin added to the placement bounds on expansion")
    max_attempts: int = Field(default=64, description="Maximum packing attempts per nest call")
    max_dimension: float = Field(default=1_000_000.0, description="Upper bound for region width and height")
    expand_when_empty: bool = Field(default=False, description="Grow the region even when nothing fits")

    # Logging
    log_level: str = Field(default="INFO", description="Log level for the CLI")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Optional[Settings]) -> None:
    """Override global settings. Passing None resets to environment defaults."""
    global _settings
    _settings = settings
