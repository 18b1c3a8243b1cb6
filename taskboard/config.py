"""Configuration management using pydantic-settings."""
from __future__ import annotations

from typing import Optional

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Storage / export
    storage_path: str = ".taskboard/storage.json"
    export_dir: str = "."
    tasks_path: str = "tasks.json"

    # Notification settings
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None

    # System settings
    timezone: str = "UTC"
    log_level: str = "INFO"
    max_retries: int = 3

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def tzinfo(self):
        return pytz.timezone(self.timezone)

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls()
