"""Application settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path.home() / ".fitness-tracker"


class Settings(BaseSettings):
    """Settings read from ``FITNESS_TRACKER_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="FITNESS_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_base_url: str = "http://localhost:8000/api"
    request_timeout: float = 10.0
    data_dir: Path = DEFAULT_DATA_DIR
    token_storage: Literal["sqlite", "memory"] = "sqlite"
    log_level: str = "WARNING"
    log_json: bool = False

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
