"""Configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library defaults loaded from ``PARAMSPACE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARAMSPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Grid enumeration
    default_resolution: int = Field(
        default=5, ge=1, description="Grid points per numeric parameter when none is given"
    )

    # Random sampling
    seed: int | None = Field(default=None, description="Seed used when a sampler gets none")

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
