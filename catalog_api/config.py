# catalog_api/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from CATALOG_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CATALOG_", case_sensitive=False,
    )

    # Auth
    api_key: str = "my-secret-key"

    # Handlers await this before answering; 0 turns it off
    simulated_latency_ms: int = 10

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
