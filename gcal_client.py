"""
Lightweight Google Calendar client helper.
Services are bound to an OAuth2Client from auth_gcal; calls here block, run them off the event loop.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from googleapiclient.discovery import build

from auth_gcal import OAuth2Client

CALENDAR_API = "calendar"
CALENDAR_API_VERSION = "v3"


def get_calendar_client(oauth2_client: OAuth2Client) -> Any:
    # Uses the discovery document bundled with googleapiclient; nothing is fetched here
    return build(
        CALENDAR_API,
        CALENDAR_API_VERSION,
        credentials=oauth2_client.credentials,
        cache_discovery=False,
    )


def list_calendars(service: Any) -> List[Dict[str, Any]]:
    resp = service.calendarList().list().execute()
    return resp.get("items", [])


def list_events(
    service: Any,
    calendar_id: str = "primary",
    time_min: Optional[dt.datetime] = None,
    time_max: Optional[dt.datetime] = None,
    max_results: int = 50,
) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {
        "calendarId": calendar_id,
        "maxResults": max_results,
        "singleEvents": True,
        "orderBy": "startTime",
    }
    if time_min:
        params["timeMin"] = time_min.isoformat()
    if time_max:
        params["timeMax"] = time_max.isoformat()
    resp = service.events().list(**params).execute()
    return resp.get("items", [])
