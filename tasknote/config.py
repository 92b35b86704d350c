"""Configuration settings for tasknote."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


def _default_data_dir() -> Path:
    return Path.home() / ".tasknote"


class Settings(BaseSettings):
    """Settings loaded from TASKNOTE_* environment variables."""

    # Storage
    data_dir: Path = Field(default_factory=_default_data_dir)
    db_filename: str = "tasknote.db"

    # Logging
    log_level: str = "INFO"

    # Id generation: collision retries before giving up (<= 0 means unbounded)
    id_max_retries: int = 1000

    # Host: fixed clock and fixed 6-byte node instead of the live host
    offline_host: bool = False
    # Caller identity text; defaults to user@hostname
    caller_id: Optional[str] = None

    class Config:
        env_prefix = "TASKNOTE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    @property
    def max_retries(self) -> Optional[int]:
        return self.id_max_retries if self.id_max_retries > 0 else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
