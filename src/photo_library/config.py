"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_file: Path = Path("data/users.json")
    log_level: str = "INFO"
    seed_stock_user: bool = True
    stock_username: str = "stock"
    stock_album_name: str = "stock"
    stock_photos: str | None = None
    timezone: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="PHOTO_LIBRARY_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_stock_photos(raw: str | None) -> list[str]:
    """Parse the comma-separated list of stock photo paths."""
    if raw is None:
        return []
    paths = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in paths:
            paths.append(value)
    return paths
