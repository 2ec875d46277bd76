"""Read-only calendar tools."""

from __future__ import annotations

import asyncio
import datetime as dt
import textwrap
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

import gcal_client
from auth_gcal import OAuth2Client

from .base import BaseToolHandler, ToolResult


class ListEventsArgs(BaseModel):
    calendar_id: str = "primary"
    time_min: Optional[dt.datetime] = None
    time_max: Optional[dt.datetime] = None
    max_results: int = Field(default=50, ge=1, le=2500)


def format_calendar(cal: Dict[str, Any]) -> str:
    line = f"- {cal.get('summary') or '(no name)'} ({cal.get('id')})"
    if cal.get("primary"):
        line += " [primary]"
    return line


def format_event(ev: Dict[str, Any]) -> str:
    start = ev.get("start", {}).get("dateTime") or ev.get("start", {}).get("date")
    endt = ev.get("end", {}).get("dateTime") or ev.get("end", {}).get("date")
    summary = ev.get("summary") or "(no title)"
    desc = ev.get("description") or ""
    ext = ev.get("extendedProperties", {}).get("private") if ev.get("extendedProperties") else None

    lines = [f"- {summary}", f"  start: {start}  end: {endt}"]
    if desc:
        wrapped = textwrap.wrap(desc, width=100)
        lines.append(f"  desc: {wrapped[0]}")
        lines.extend(f"        {line}" for line in wrapped[1:])
    if ext:
        lines.append(f"  meta: {ext}")
    return "\n".join(lines)


class ListCalendarsHandler(BaseToolHandler):
    async def run_tool(self, args: Dict[str, Any], oauth2_client: OAuth2Client) -> ToolResult:
        service = await asyncio.to_thread(self.get_calendar_client, oauth2_client)
        try:
            calendars = await asyncio.to_thread(gcal_client.list_calendars, service)
        except Exception as exc:
            self.classify_api_error(exc)
        if not calendars:
            return ToolResult.from_text("No calendars found.")
        return ToolResult.from_text("\n".join(format_calendar(cal) for cal in calendars))


class ListEventsHandler(BaseToolHandler):
    async def run_tool(self, args: Dict[str, Any], oauth2_client: OAuth2Client) -> ToolResult:
        params = ListEventsArgs.model_validate(args)
        service = await asyncio.to_thread(self.get_calendar_client, oauth2_client)
        try:
            events: List[Dict[str, Any]] = await asyncio.to_thread(
                gcal_client.list_events,
                service,
                calendar_id=params.calendar_id,
                time_min=params.time_min,
                time_max=params.time_max,
                max_results=params.max_results,
            )
        except Exception as exc:
            self.classify_api_error(exc)
        if not events:
            return ToolResult.from_text(f"No events found in {params.calendar_id}.")
        return ToolResult.from_text("\n".join(format_event(ev) for ev in events))
