"""
Integration tests for Calendar API adapter.

Run with: pytest tests/integration/test_calendar_adapter.py -v -m integration

The write test creates, renames and deletes one event a year from now.
"""

from datetime import datetime, timedelta

import pytest

from adapters.calendar import build_event_body, list_events, insert_event, patch_event, delete_event
from models import EventSummary


@pytest.mark.integration
def test_list_events_have_structure() -> None:
    for event in list_events(days_ahead=7):
        assert isinstance(event, EventSummary)
        assert event.id
        assert event.start


@pytest.mark.integration
def test_create_update_delete_round_trip() -> None:
    start = (datetime.now() + timedelta(days=365)).replace(microsecond=0)
    body = build_event_body(
        summary="google-mcp integration test",
        start=start.isoformat(),
        end=(start + timedelta(minutes=30)).isoformat(),
        time_zone="UTC",
    )

    created = insert_event(body)
    try:
        assert created.html_link
        updated = patch_event(created.id, build_event_body(summary="google-mcp integration test (renamed)"))
        assert updated.summary == "google-mcp integration test (renamed)"
    finally:
        delete_event(created.id)
