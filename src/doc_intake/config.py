"""Application configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    uploads_dir: Path = Path("uploads")
    logs_dir: Path = Path("logs")
    log_level: str = "INFO"
    enable_analytics: bool = False
    api_key: Optional[str] = None
    dash_host: str = "127.0.0.1"
    dash_port: int = 8050
    dash_debug: bool = False


@lru_cache(1)
def get_settings() -> Settings:
    settings = Settings()
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    settings.logs_dir.mkdir(parents=True, exist_ok=True)
    return settings
