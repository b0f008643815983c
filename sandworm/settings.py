"""
Runtime configuration for the Dune client.

Values come from environment variables; ``.env`` files in the working
directory are loaded first without overriding variables already set.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from .execution import DEFAULT_POLL_INTERVAL_SECONDS
from .transport import BASE_URL, DEFAULT_TIMEOUT_SECONDS


class Settings(BaseModel):
    api_key: str = Field(default="")
    base_url: str = Field(default=BASE_URL)
    request_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS)
    poll_interval_seconds: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS)
    log_level: str = Field(default="info")

    @model_validator(mode="after")
    def _validate_timing(self) -> "Settings":
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")
        if not self.base_url.strip():
            raise ValueError("base_url must not be empty")
        return self


def load_settings(env_file: Optional[Path] = None) -> Settings:
    load_dotenv(env_file or Path.cwd() / ".env", override=False)
    return Settings(
        api_key=os.getenv("DUNE_API_KEY", ""),
        base_url=os.getenv("DUNE_BASE_URL", BASE_URL),
        request_timeout_seconds=float(
            os.getenv("DUNE_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        ),
        poll_interval_seconds=float(
            os.getenv("DUNE_POLL_INTERVAL_SECONDS", str(DEFAULT_POLL_INTERVAL_SECONDS))
        ),
        log_level=os.getenv("LOG_LEVEL", "info"),
    )
