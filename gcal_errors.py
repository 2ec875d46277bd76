"""Exceptions and API error tagging for the calendar tools."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

INVALID_GRANT = "invalid_grant"
REAUTH_COMMAND = "gcal-auth"


class GcalToolsError(Exception):
    """Base exception for all calendar tool errors."""

    pass


class CredentialError(GcalToolsError):
    """Base exception for credential resolution errors."""

    pass


class CredentialInitializationError(CredentialError):
    """Raised when the OAuth2 client cannot be built from options, env or keys file."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Error initializing OAuth client: {reason}")


class CredentialLoadError(CredentialError):
    """Raised when client id/secret cannot be loaded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Error loading credentials: {reason}")


class AuthenticationExpiredError(GcalToolsError):
    """Raised when Google rejects the grant; the user has to re-authenticate."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or "Google API Error: Authentication token is invalid or expired. "
            f"Please re-run the authentication process (e.g., `{REAUTH_COMMAND}`)."
        )


class ApiErrorKind(str, Enum):
    INVALID_GRANT = "invalid_grant"
    OTHER = "other"


def _code_from_payload(payload: Any) -> Optional[str]:
    if isinstance(payload, Mapping):
        code = payload.get("error")
    else:
        code = getattr(payload, "error", None)
    return code if isinstance(code, str) else None


def _error_code(error: BaseException) -> Optional[str]:
    if isinstance(error, RefreshError):
        # google-auth raises RefreshError("invalid_grant: ...", response_data)
        for arg in error.args[1:]:
            code = _code_from_payload(arg)
            if code:
                return code
        message = str(error.args[0]) if error.args else ""
        return message.split(":", 1)[0].strip() or None

    if isinstance(error, HttpError):
        try:
            body = json.loads(error.content)
        except (TypeError, ValueError):
            return None
        return _code_from_payload(body)

    response = getattr(error, "response", None)
    if isinstance(response, Mapping):
        data = response.get("data")
    else:
        data = getattr(response, "data", None)
    if data is None:
        return None
    return _code_from_payload(data)


def api_error_kind(error: BaseException) -> ApiErrorKind:
    """Tag an exception raised by a Google API call."""
    if _error_code(error) == INVALID_GRANT:
        return ApiErrorKind.INVALID_GRANT
    return ApiErrorKind.OTHER
