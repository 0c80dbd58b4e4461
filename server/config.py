"""Server configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # HTTP
    host: str = "0.0.0.0"
    port: int = 5000

    # Snapshot storage
    data_file: Path = Path("bookmarks.json")
    seed_on_empty: bool = True

    # Logging
    log_level: str = "INFO"
