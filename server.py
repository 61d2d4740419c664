#!/usr/bin/env python3
"""
Google Workspace MCP Server

Gmail, Calendar, Drive and Sheets as MCP tools over stdio.

Modes:
    python server.py          # start MCP stdio server
    python server.py auth     # run OAuth flow, save tokens, exit

Credentials come from GOOGLE_CREDS_DIR:
    oauth-keys.json  — Google Cloud OAuth client credentials
    tokens.json      — refresh/access tokens from the OAuth flow

Architecture:
- extractors/: Pure functions (no MCP, no API calls)
- adapters/: Thin Google API wrappers
- tools/: Tool implementations (result shaping)
- server.py: Thin MCP wrappers (this file)
"""

import logging
import os
import signal
import sys
from typing import Annotated, Any, Callable, Literal

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from adapters.services import missing_credential_files
from logging_config import configure_logging
from models import WorkspaceError
from oauth_config import LOG_LEVEL
from resources.tools import get_tool_registry
from tools import (
    do_gmail_search, do_gmail_read, do_gmail_send,
    do_calendar_list, do_calendar_create, do_calendar_update, do_calendar_delete,
    do_drive_search, do_drive_read,
    do_sheets_read, do_sheets_write,
)

logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("google")


def _run(func: Callable[..., str], *args: Any, **kwargs: Any) -> str:
    """
    Call a tool implementation, turning WorkspaceError into an MCP error result.

    FastMCP reports a raised ToolError as an isError result whose text
    carries the message, so the caller sees the API's own error text.
    """
    try:
        return func(*args, **kwargs)
    except WorkspaceError as e:
        logger.warning(f"{func.__name__} failed ({e.kind.value}): {e.message}")
        raise ToolError(e.message) from e


# ============================================================================
# GMAIL
# ============================================================================

@mcp.tool()
def gmail_search(
    query: Annotated[str, Field(description="Gmail search query")],
    max_results: Annotated[int, Field(ge=1, le=50, description="Max results to return")] = 10,
) -> str:
    """
    Search Gmail messages. Uses Gmail search syntax (e.g., "from:alice@example.com is:unread", "subject:invoice after:2026/01/01").

    Returns a JSON list of {id, subject, from, date, snippet}, in Gmail's
    order, or "No messages found."
    """
    return _run(do_gmail_search, query, max_results)


@mcp.tool()
def gmail_read(
    message_id: Annotated[str, Field(description="Gmail message ID")],
) -> str:
    """
    Read the full content of a Gmail message by its ID (from gmail_search results).

    Returns JSON {id, threadId, subject, from, to, date, body}. Plain-text
    body preferred over HTML; body is cut at 50,000 characters.
    """
    return _run(do_gmail_read, message_id)


@mcp.tool()
def gmail_send(
    to: Annotated[str, Field(description="Recipient email address")],
    subject: Annotated[str, Field(description="Email subject")],
    body: Annotated[str, Field(description="Email body (plain text)")],
    reply_to_id: Annotated[
        str | None, Field(description="Message ID to reply to (for threading)")
    ] = None,
) -> str:
    """
    Send an email. Optionally reply to an existing thread.

    Replies get In-Reply-To/References headers and land in the original
    thread. Returns JSON {message_id, thread_id}.
    """
    return _run(do_gmail_send, to, subject, body, reply_to_id)


# ============================================================================
# CALENDAR
# ============================================================================

CalendarId = Annotated[str, Field(description="Calendar ID")]
TimeZone = Annotated[
    str | None,
    Field(description='IANA time zone for start/end without an offset (e.g., "Europe/London")'),
]


@mcp.tool()
def calendar_list(
    days_ahead: Annotated[int, Field(ge=1, le=90, description="Number of days ahead to fetch")] = 7,
    query: Annotated[str | None, Field(description="Text search within events")] = None,
    calendar_id: CalendarId = "primary",
) -> str:
    """
    List upcoming calendar events.

    Returns a JSON list of {id, summary, start, end, location, description}
    (description cut at 200 characters), or "No upcoming events."
    """
    return _run(do_calendar_list, days_ahead, query, calendar_id)


@mcp.tool()
def calendar_create(
    summary: Annotated[str, Field(description="Event title")],
    start: Annotated[str, Field(description='Start datetime ISO 8601 (e.g., "2026-02-22T10:00:00")')],
    end: Annotated[str, Field(description="End datetime ISO 8601")],
    description: Annotated[str | None, Field(description="Event description")] = None,
    location: Annotated[str | None, Field(description="Event location")] = None,
    time_zone: TimeZone = None,
    calendar_id: CalendarId = "primary",
) -> str:
    """
    Create a calendar event.

    Returns JSON {id, summary, htmlLink}.
    """
    return _run(
        do_calendar_create, summary, start, end,
        description=description, location=location,
        time_zone=time_zone, calendar_id=calendar_id,
    )


@mcp.tool()
def calendar_update(
    event_id: Annotated[str, Field(description="Event ID from calendar_list")],
    summary: Annotated[str | None, Field(description="New title")] = None,
    start: Annotated[str | None, Field(description="New start datetime ISO 8601")] = None,
    end: Annotated[str | None, Field(description="New end datetime ISO 8601")] = None,
    description: Annotated[str | None, Field(description="New description")] = None,
    location: Annotated[str | None, Field(description="New location")] = None,
    time_zone: TimeZone = None,
    calendar_id: CalendarId = "primary",
) -> str:
    """
    Update an existing calendar event. Only provided fields are changed.

    Returns JSON {id, summary}.
    """
    return _run(
        do_calendar_update, event_id,
        summary=summary, start=start, end=end,
        description=description, location=location,
        time_zone=time_zone, calendar_id=calendar_id,
    )


@mcp.tool()
def calendar_delete(
    event_id: Annotated[str, Field(description="Event ID from calendar_list")],
    calendar_id: CalendarId = "primary",
) -> str:
    """Delete a calendar event."""
    return _run(do_calendar_delete, event_id, calendar_id)


# ============================================================================
# DRIVE
# ============================================================================

@mcp.tool()
def drive_search(
    query: Annotated[str, Field(description="Drive search query")],
    max_results: Annotated[int, Field(ge=1, le=50, description="Max results")] = 10,
) -> str:
    """
    Search Google Drive files. Uses Drive query syntax (e.g., "name contains 'budget'", "mimeType='application/vnd.google-apps.document'", "fullText contains 'quarterly'").

    Returns a JSON list of {id, name, mimeType, modifiedTime, webViewLink},
    most recently modified first, or "No files found."
    """
    return _run(do_drive_search, query, max_results)


@mcp.tool()
def drive_read(
    file_id: Annotated[str, Field(description="Drive file ID from drive_search (or a Drive/Docs URL)")],
) -> str:
    """
    Read the content of a Google Drive file. Google Docs/Sheets/Slides are exported as plain text. Other text files are downloaded directly.

    Sheets export as CSV (first sheet). Binary files return a placeholder;
    content over 50,000 characters is truncated with a marker.
    Returns JSON {name, mimeType, content}.
    """
    return _run(do_drive_read, file_id)


# ============================================================================
# SHEETS
# ============================================================================

@mcp.tool()
def sheets_read(
    spreadsheet_id: Annotated[str, Field(description="Spreadsheet ID (from drive_search or the URL)")],
    range: Annotated[str, Field(description='A1 notation range (e.g., "Sheet1!A1:D10", "A1:Z100")')],
) -> str:
    """
    Read cell values from a Google Sheets spreadsheet.

    Returns JSON {range, values} where values is a list of rows.
    """
    return _run(do_sheets_read, spreadsheet_id, range)


@mcp.tool()
def sheets_write(
    spreadsheet_id: Annotated[str, Field(description="Spreadsheet ID")],
    range: Annotated[str, Field(description='A1 notation range to write to (e.g., "Sheet1!A1")')],
    values: Annotated[list[list[str]], Field(description="2D array of values (rows of columns)")],
    value_input_option: Annotated[
        Literal["RAW", "USER_ENTERED"],
        Field(description="RAW=literal strings, USER_ENTERED=parse formulas and dates"),
    ] = "USER_ENTERED",
) -> str:
    """
    Write cell values to a Google Sheets spreadsheet.

    Returns JSON {updatedRange, updatedCells, updatedRows, updatedColumns}.
    """
    return _run(do_sheets_write, spreadsheet_id, range, values, value_input_option)


# ============================================================================
# RESOURCES: self-documenting MCP capabilities
# ============================================================================

@mcp.resource("google://docs/overview")
def docs_overview() -> str:
    """Overview of the Google Workspace MCP server."""
    return """# google

Gmail, Calendar, Drive and Sheets as MCP tools.

## Tools

| Tool | Purpose | Writes? |
|------|---------|---------|
| `gmail_search` | Find messages with Gmail search syntax | No |
| `gmail_read` | Full message by ID | No |
| `gmail_send` | Send plain text, optionally as a threaded reply | Yes |
| `calendar_list` | Upcoming events (1-90 days ahead) | No |
| `calendar_create` | New event | Yes |
| `calendar_update` | Change only the fields you pass | Yes |
| `calendar_delete` | Delete an event | Yes |
| `drive_search` | Find files with Drive query syntax | No |
| `drive_read` | File content as text (Docs, Sheets as CSV, Slides, text files) | No |
| `sheets_read` | Cell values from an A1 range | No |
| `sheets_write` | Write rows to an A1 range | Yes |

## Workflow

1. **Search** (`gmail_search`, `drive_search`) to get IDs
2. **Read** by ID (`gmail_read`, `drive_read`, `sheets_read`)
3. **Act** (`gmail_send` with `reply_to_id`, `calendar_*`, `sheets_write`)

## Errors

Failures come back as error results carrying the Google API's message
(e.g. 404 for an unknown ID, 403 for a file not shared with you).

## Resources

- `google://docs/overview` — This overview
- `google://tools/{name}` — Per-tool documentation
"""


# Register tool functions for google://tools/* resource generation
# Must be done after all @mcp.tool() decorators have run
_tool_registry = get_tool_registry()
_tool_registry.register_from_mcp(mcp)


@mcp.resource("google://tools/{tool_name}")
def tool_resource(tool_name: str) -> str:
    """Auto-generated documentation for a specific tool from its docstring."""
    try:
        resource = _tool_registry.get_resource(f"google://tools/{tool_name}")
        return resource["text"]
    except KeyError:
        return f"# {tool_name}()\n\nTool not found."


# ============================================================================
# SERVER ENTRY POINT
# ============================================================================

def _shutdown_handler(signum: int, frame: object) -> None:
    """Handle termination signals by exiting immediately.

    os._exit() is required because sys.exit() raises SystemExit,
    which asyncio's event loop catches and ignores. The server
    would survive SIGTERM until stdin closes.
    """
    os._exit(0)


def main() -> None:
    if sys.argv[1:2] == ["auth"]:
        from auth import main as auth_main
        auth_main(sys.argv[2:])
        return

    missing = missing_credential_files()
    if missing:
        print(f'Missing {missing[0]}: run "google-mcp auth" first', file=sys.stderr)
        sys.exit(1)

    configure_logging(LOG_LEVEL)
    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)
    mcp.run()


if __name__ == "__main__":
    main()
