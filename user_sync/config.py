from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_PACKAGE_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PACKAGE_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "User Sync"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Remote resources
    primary_base_url: str = "http://localhost:5000/users"
    read_only_base_url: str = "https://jsonplaceholder.typicode.com/users"
    request_timeout: float | None = None     # None = wait for the server

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_sync: str = "INFO"             # orchestrator, form, resource clients

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
