"""
Google OAuth2 client bootstrap for the calendar tool handlers.

Credentials come from explicit options or the CLIENT_ID / CLIENT_SECRET / REDIRECT_URI /
ACCESS_TOKEN / REFRESH_TOKEN environment variables. When any of the first three is missing
the installed-app keys file (gcp-oauth.keys.json) is read instead.

Run `gcal-auth` (or this file directly) for the one-time consent flow; it writes token.json
next to the keys file.
"""

from __future__ import annotations

import asyncio
import json
import webbrowser
from pathlib import Path
from typing import Any, Dict, List, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow, InstalledAppFlow
from loguru import logger
from pydantic import BaseModel, Field

from gcal_errors import CredentialInitializationError, CredentialLoadError
from gcal_logging import configure_logging
from gcal_settings import OAuthSettings, blank_to_none, get_keys_file_path

SCOPES = ["https://www.googleapis.com/auth/calendar"]
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
TOKEN_FILENAME = "token.json"


class InstalledKeys(BaseModel):
    client_id: str = ""
    client_secret: str = ""
    redirect_uris: List[str] = Field(default_factory=list)


class KeysFile(BaseModel):
    installed: InstalledKeys


class OAuth2Client:
    """Client id/secret/redirect URI plus the mutable token state used to authorize requests."""

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.credentials = self._build_credentials()

    def _build_credentials(
        self, access_token: Optional[str] = None, refresh_token: Optional[str] = None
    ) -> Credentials:
        return Credentials(
            token=access_token,
            refresh_token=refresh_token,
            token_uri=GOOGLE_TOKEN_URI,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )

    def set_credentials(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        self.credentials = self._build_credentials(access_token, refresh_token)

    @property
    def client_config(self) -> Dict[str, Any]:
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uris": [self.redirect_uri],
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
            }
        }

    def authorization_url(self, scopes: Optional[List[str]] = None) -> str:
        """Consent URL asking for offline access, so Google hands out a refresh token."""
        flow = Flow.from_client_config(
            self.client_config, scopes=scopes or SCOPES, redirect_uri=self.redirect_uri
        )
        url, _ = flow.authorization_url(access_type="offline", prompt="consent")
        return url

    def __repr__(self) -> str:
        return f"OAuth2Client(client_id={self.client_id!r}, redirect_uri={self.redirect_uri!r})"


async def _read_keys_file(path: Path) -> InstalledKeys:
    logger.debug("Reading OAuth keys file {}", path)
    content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    return KeysFile.model_validate(json.loads(content)).installed


async def initialize_oauth2_client(
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    redirect_uri: Optional[str] = None,
    access_token: Optional[str] = None,
    refresh_token: Optional[str] = None,
    keys_file: Optional[Path] = None,
) -> OAuth2Client:
    """
    Build an OAuth2Client. Explicit arguments win over environment variables.
    If client id, secret and redirect URI are not all known, fall back to the keys file;
    tokens are only attached in the first case.
    """
    try:
        settings = OAuthSettings()
        client_id = blank_to_none(client_id) or settings.client_id
        client_secret = blank_to_none(client_secret) or settings.client_secret
        redirect_uri = blank_to_none(redirect_uri) or settings.redirect_uri
        access_token = blank_to_none(access_token) or settings.access_token
        refresh_token = blank_to_none(refresh_token) or settings.refresh_token

        if client_id and client_secret and redirect_uri:
            oauth2_client = OAuth2Client(client_id, client_secret, redirect_uri)
            if access_token:
                oauth2_client.set_credentials(access_token, refresh_token)
            logger.debug(
                "OAuth client initialized from options/environment (access token: {}, refresh token: {})",
                bool(access_token),
                bool(access_token and refresh_token),
            )
            return oauth2_client

        keys = await _read_keys_file(keys_file or get_keys_file_path(settings))
        if not keys.client_id or not keys.client_secret:
            raise ValueError("keys file is missing installed.client_id or installed.client_secret")
        if not keys.redirect_uris:
            raise ValueError("keys file has no installed.redirect_uris")

        # The first redirect URI is the default for the base client
        logger.debug("OAuth client initialized from keys file")
        return OAuth2Client(keys.client_id, keys.client_secret, keys.redirect_uris[0])
    except Exception as exc:
        raise CredentialInitializationError(str(exc)) from exc


async def load_credentials(keys_file: Optional[Path] = None) -> Dict[str, str]:
    """Client id and secret only: CLIENT_ID/CLIENT_SECRET if both set, else the keys file."""
    try:
        settings = OAuthSettings()
        if settings.client_id and settings.client_secret:
            return {"client_id": settings.client_id, "client_secret": settings.client_secret}

        keys = await _read_keys_file(keys_file or get_keys_file_path(settings))
        if not keys.client_id or not keys.client_secret:
            raise ValueError("Client ID or Client Secret missing in keys file.")
    except Exception as exc:
        raise CredentialLoadError(str(exc)) from exc
    return {"client_id": keys.client_id, "client_secret": keys.client_secret}


def run_consent_flow(keys_file: Path, scopes: Optional[List[str]] = None) -> Credentials:
    flow = InstalledAppFlow.from_client_secrets_file(str(keys_file), scopes or SCOPES)
    try:
        # Prefer local server with browser if available
        return flow.run_local_server(port=0)
    except (webbrowser.Error, OSError) as exc:
        logger.warning("Local server flow unavailable ({}), falling back to console", exc)

    # Copy/paste console flow; the code arrives as ?code= on the (unreachable) redirect URI
    flow.redirect_uri = flow.client_config["redirect_uris"][0]
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    print("Open this URL, approve access, and paste the 'code' value from the redirected address:")
    print(auth_url)
    code = input("Code: ").strip()
    flow.fetch_token(code=code)
    return flow.credentials


def main() -> None:
    configure_logging()
    keys_file = get_keys_file_path()
    creds = run_consent_flow(keys_file)
    token_path = keys_file.with_name(TOKEN_FILENAME)
    token_path.write_text(creds.to_json(), encoding="utf-8")
    print("Auth OK. Token cached at", token_path)
    print("Export its 'token' as ACCESS_TOKEN and 'refresh_token' as REFRESH_TOKEN to skip the keys file.")


if __name__ == "__main__":
    main()
