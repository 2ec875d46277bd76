"""
List upcoming events with descriptions and extended properties.

Credentials come from the environment or gcp-oauth.keys.json (see auth_gcal.py).
By default pulls the primary calendar from now for the next 7 days.
Usage: `python list_events.py --days 3 --calendar primary --calendar team@group.calendar.google.com`
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import sys
from typing import List

from auth_gcal import initialize_oauth2_client
from gcal_errors import GcalToolsError
from gcal_logging import configure_logging
from handlers.calendars import ListEventsHandler


async def run(calendar_ids: List[str], days: int) -> None:
    oauth2_client = await initialize_oauth2_client()
    handler = ListEventsHandler()

    now = dt.datetime.now(dt.timezone.utc)
    end = now + dt.timedelta(days=days)
    print(f"Window: {now.isoformat()} to {end.isoformat()}")
    for cal_id in calendar_ids:
        result = await handler.run_tool(
            {"calendar_id": cal_id, "time_min": now, "time_max": end, "max_results": 200},
            oauth2_client,
        )
        print(f"\n=== {cal_id} ===")
        print(result.text)


def main() -> None:
    parser = argparse.ArgumentParser(description="List calendar events with notes")
    parser.add_argument("--days", type=int, default=7, help="How many days ahead to pull (default: 7)")
    parser.add_argument(
        "--calendar",
        action="append",
        dest="calendars",
        help="Calendar id to read; repeat for several (default: primary)",
    )
    args = parser.parse_args()

    configure_logging()
    try:
        asyncio.run(run(args.calendars or ["primary"], args.days))
    except GcalToolsError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
