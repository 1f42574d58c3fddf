"""Environment-driven settings."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


class Settings(BaseModel):
    """Runtime configuration for repository sources and logging."""
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    github_timeout: float = Field(default=30.0, gt=0)
    recent_commit_count: int = Field(default=10, ge=0, le=100)
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Load settings from the environment (and a ``.env`` file if present)."""
    load_dotenv()

    values = {
        "github_token": os.getenv("GITHUB_TOKEN") or None,
        "github_api_url": os.getenv("GITHUB_API_URL"),
        "github_timeout": os.getenv("GITHUB_TIMEOUT"),
        "recent_commit_count": os.getenv("RECENT_COMMIT_COUNT"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    try:
        return Settings(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ValueError(msg) from e
