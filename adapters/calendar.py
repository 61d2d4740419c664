"""
Calendar adapter — Google Calendar API v3 wrapper.

Upcoming-event listing plus insert/patch/delete of single events.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from models import EventSummary, EventRef
from retry import with_retry
from logging_config import log_api_call, log_api_result
from adapters.services import get_calendar_service
from oauth_config import CALENDAR_MAX_RESULTS, MAX_DESCRIPTION_CHARS


def _event_time(data: dict[str, Any] | None) -> str | None:
    """Start/end can be date (all-day) or dateTime (timed)."""
    if not data:
        return None
    return data.get("dateTime") or data.get("date")


def _parse_event(data: dict[str, Any]) -> EventSummary:
    """Parse a calendar event from Calendar API response."""
    description = data.get("description")
    return EventSummary(
        id=data.get("id", ""),
        summary=data.get("summary"),
        start=_event_time(data.get("start")),
        end=_event_time(data.get("end")),
        location=data.get("location") or None,
        description=description[:MAX_DESCRIPTION_CHARS] if description else None,
    )


def _time_field(value: str, time_zone: str | None) -> dict[str, str]:
    field = {"dateTime": value}
    if time_zone:
        field["timeZone"] = time_zone
    return field


def build_event_body(
    summary: str | None = None,
    start: str | None = None,
    end: str | None = None,
    description: str | None = None,
    location: str | None = None,
    time_zone: str | None = None,
) -> dict[str, Any]:
    """
    Build an event resource from the fields that were provided.

    None means "not provided" and the key is left out, so the same body
    serves insert (all set) and patch (only changed fields).
    """
    body: dict[str, Any] = {}
    if summary is not None:
        body["summary"] = summary
    if start is not None:
        body["start"] = _time_field(start, time_zone)
    if end is not None:
        body["end"] = _time_field(end, time_zone)
    if description is not None:
        body["description"] = description
    if location is not None:
        body["location"] = location
    return body


@with_retry(max_attempts=3, delay_ms=1000)
def list_events(
    days_ahead: int = 7,
    query: str | None = None,
    calendar_id: str = "primary",
    now: datetime | None = None,
) -> list[EventSummary]:
    """
    List events from now until days_ahead days from now.

    Args:
        days_ahead: Size of the window in days.
        query: Free-text search within events (omitted when empty).
        calendar_id: Calendar to read.
        now: Window start (defaults to current UTC time).

    Returns:
        Events sorted by start time, recurring events expanded.
    """
    service = get_calendar_service()
    now = now or datetime.now(timezone.utc)

    kwargs: dict[str, Any] = {
        "calendarId": calendar_id,
        "timeMin": now.isoformat(),
        "timeMax": (now + timedelta(days=days_ahead)).isoformat(),
        "singleEvents": True,
        "orderBy": "startTime",
        "maxResults": CALENDAR_MAX_RESULTS,
    }
    if query:
        kwargs["q"] = query

    log_api_call("calendar", "events.list", **kwargs)
    response = service.events().list(**kwargs).execute()

    events = [_parse_event(item) for item in response.get("items") or []]
    log_api_result("calendar", "events.list", len(events))
    return events


# Not idempotent: convert errors, never retry
@with_retry(max_attempts=1)
def insert_event(event: dict[str, Any], calendar_id: str = "primary") -> EventRef:
    """Create an event. Returns id, summary and the Calendar web link."""
    service = get_calendar_service()

    log_api_call("calendar", "events.insert", calendarId=calendar_id)
    created = service.events().insert(calendarId=calendar_id, body=event).execute()

    return EventRef(
        id=created.get("id", ""),
        summary=created.get("summary"),
        html_link=created.get("htmlLink"),
    )


@with_retry(max_attempts=3, delay_ms=1000)
def patch_event(event_id: str, patch: dict[str, Any], calendar_id: str = "primary") -> EventRef:
    """Change only the fields present in patch."""
    service = get_calendar_service()

    log_api_call("calendar", "events.patch", calendarId=calendar_id, eventId=event_id)
    updated = (
        service.events()
        .patch(calendarId=calendar_id, eventId=event_id, body=patch)
        .execute()
    )

    return EventRef(id=updated.get("id", event_id), summary=updated.get("summary"))


@with_retry(max_attempts=3, delay_ms=1000)
def delete_event(event_id: str, calendar_id: str = "primary") -> None:
    """Delete an event."""
    service = get_calendar_service()

    log_api_call("calendar", "events.delete", calendarId=calendar_id, eventId=event_id)
    service.events().delete(calendarId=calendar_id, eventId=event_id).execute()
    log_api_result("calendar", "events.delete")
