"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `CHATRENDER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


RenderFormat = Literal["rich", "html", "text", "json"]


class Settings(BaseSettings):
    """chatrender settings.

    All fields are environment-configurable. Prefix is `CHATRENDER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHATRENDER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    app_env: Literal["dev", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    # RAG backend
    api_base_url: str = Field(default="http://localhost:8000")
    api_timeout_s: float = Field(default=60.0, ge=1.0, le=600.0)
    api_max_retries: int = Field(default=2, ge=0, le=10)
    api_retry_backoff_s: float = Field(default=0.5, ge=0.0, le=30.0)
    api_retry_max_backoff_s: float = Field(default=8.0, ge=0.0, le=120.0)
    search_top_k: int = Field(default=5, ge=1, le=50)

    # Rendering
    render_format: RenderFormat = Field(default="rich")
    source_excerpt_chars: int = Field(default=200, ge=1, le=5000)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("CHATRENDER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
