"""
Environment configuration for the calendar tools.

Every field maps to the environment variable of the same name (case-insensitive).
A fresh OAuthSettings() re-reads the environment; nothing is cached.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KEYS_FILENAME = "gcp-oauth.keys.json"


def blank_to_none(value: Any) -> Any:
    """Empty or whitespace-only strings count as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class OAuthSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    # Installed-app keys file used when the environment is incomplete
    google_oauth_keys_file: Optional[Path] = None

    gcal_log_level: str = "INFO"

    @field_validator(
        "client_id",
        "client_secret",
        "redirect_uri",
        "access_token",
        "refresh_token",
        "google_oauth_keys_file",
        mode="before",
    )
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        return blank_to_none(value)


def get_keys_file_path(settings: Optional[OAuthSettings] = None) -> Path:
    """Keys file from GOOGLE_OAUTH_KEYS_FILE, else gcp-oauth.keys.json in the working directory."""
    settings = settings or OAuthSettings()
    if settings.google_oauth_keys_file:
        return settings.google_oauth_keys_file.expanduser()
    return Path.cwd() / KEYS_FILENAME
