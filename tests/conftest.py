"""Shared fixtures: isolated environment, keys files and a fake Calendar service."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from loguru import logger

import gcal_client
from auth_gcal import OAuth2Client

ENV_VARS = (
    "CLIENT_ID",
    "CLIENT_SECRET",
    "REDIRECT_URI",
    "ACCESS_TOKEN",
    "REFRESH_TOKEN",
    "GOOGLE_OAUTH_KEYS_FILE",
    "GCAL_LOG_LEVEL",
)

KEYS: Dict[str, Any] = {
    "installed": {
        "client_id": "file-client-id.apps.googleusercontent.com",
        "client_secret": "file-secret",
        "redirect_uris": ["http://localhost:3500/oauth2callback", "http://localhost"],
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
    }
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Unset credential env vars and run each test from an empty directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def keys_file(tmp_path: Path) -> Path:
    path = tmp_path / "gcp-oauth.keys.json"
    path.write_text(json.dumps(KEYS), encoding="utf-8")
    return path


@pytest.fixture
def env_credentials(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    values = {
        "CLIENT_ID": "env-client-id",
        "CLIENT_SECRET": "env-secret",
        "REDIRECT_URI": "http://localhost:9999/callback",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


@pytest.fixture
def oauth2_client() -> OAuth2Client:
    client = OAuth2Client("client-123", "secret-456", "http://localhost:3500/oauth2callback")
    client.set_credentials("access-abc", "refresh-def")
    return client


@pytest.fixture
def calendar_service(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Fake Calendar service returned by gcal_client.get_calendar_client."""
    service = MagicMock(name="calendar_service")
    service.events.return_value.list.return_value.execute.return_value = {"items": []}
    service.calendarList.return_value.list.return_value.execute.return_value = {"items": []}
    monkeypatch.setattr(gcal_client, "get_calendar_client", lambda client: service)
    return service
