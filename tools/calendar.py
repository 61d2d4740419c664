"""
Calendar tools — list, create, update, delete events.
"""

import logging

from adapters.calendar import (
    build_event_body,
    list_events,
    insert_event,
    patch_event,
    delete_event,
)
from tools.common import to_json

logger = logging.getLogger(__name__)

NO_EVENTS = "No upcoming events."


def do_calendar_list(
    days_ahead: int = 7,
    query: str | None = None,
    calendar_id: str = "primary",
) -> str:
    """Upcoming events in the next days_ahead days, by start time."""
    events = list_events(days_ahead=days_ahead, query=query, calendar_id=calendar_id)
    if not events:
        return NO_EVENTS
    return to_json([e.to_dict() for e in events])


def do_calendar_create(
    summary: str,
    start: str,
    end: str,
    description: str | None = None,
    location: str | None = None,
    time_zone: str | None = None,
    calendar_id: str = "primary",
) -> str:
    """Create a timed event. start/end are ISO 8601 datetimes."""
    event = build_event_body(
        summary=summary,
        start=start,
        end=end,
        description=description,
        location=location,
        time_zone=time_zone,
    )
    created = insert_event(event, calendar_id=calendar_id)
    logger.info(f"Created event {created.id} in {calendar_id}")
    return to_json(created.to_dict(), pretty=False)


def do_calendar_update(
    event_id: str,
    summary: str | None = None,
    start: str | None = None,
    end: str | None = None,
    description: str | None = None,
    location: str | None = None,
    time_zone: str | None = None,
    calendar_id: str = "primary",
) -> str:
    """Patch an event. Only fields that are passed are changed."""
    patch = build_event_body(
        summary=summary,
        start=start,
        end=end,
        description=description,
        location=location,
        time_zone=time_zone,
    )
    updated = patch_event(event_id, patch, calendar_id=calendar_id)
    return to_json(updated.to_dict(), pretty=False)


def do_calendar_delete(event_id: str, calendar_id: str = "primary") -> str:
    delete_event(event_id, calendar_id=calendar_id)
    logger.info(f"Deleted event {event_id} from {calendar_id}")
    return f"Event {event_id} deleted."
