"""Tests for the list_events command."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock

import pytest

import list_events
from auth_gcal import OAuth2Client
from gcal_errors import CredentialInitializationError


@pytest.mark.asyncio
async def test_run_prints_each_calendar(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    calendar_service: MagicMock,
    oauth2_client: OAuth2Client,
) -> None:
    async def fake_initialize() -> OAuth2Client:
        return oauth2_client

    monkeypatch.setattr(list_events, "initialize_oauth2_client", fake_initialize)
    calendar_service.events.return_value.list.return_value.execute.return_value = {
        "items": [{"summary": "Standup", "start": {"date": "2025-03-03"}, "end": {"date": "2025-03-04"}}]
    }

    await list_events.run(["primary", "team"], days=3)

    out = capsys.readouterr().out
    assert out.startswith("Window: ")
    assert "=== primary ===" in out
    assert "=== team ===" in out
    assert out.count("- Standup") == 2
    calls = calendar_service.events.return_value.list.call_args_list
    assert [c.kwargs["calendarId"] for c in calls] == ["primary", "team"]
    assert all(c.kwargs["maxResults"] == 200 for c in calls)


def test_main_reports_credential_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    async def failing_initialize() -> OAuth2Client:
        raise CredentialInitializationError("no keys")

    monkeypatch.setattr(list_events, "initialize_oauth2_client", failing_initialize)
    monkeypatch.setattr(sys, "argv", ["list_events.py", "--days", "1"])

    with pytest.raises(SystemExit) as exc_info:
        list_events.main()

    assert exc_info.value.code == 1
    assert "Error initializing OAuth client: no keys" in capsys.readouterr().err
