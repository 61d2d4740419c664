"""
Type definitions for google-mcp.

Dataclasses defining the contracts between layers:
- Adapters produce these structures from API responses
- Tools serialize them to JSON text for the MCP response

Each result type has to_dict() producing the exact JSON shape the tool
returns. Optional fields that are unset are omitted, not serialized as null.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorKind(Enum):
    """Categories of errors for consistent handling."""
    AUTH_EXPIRED = "auth_expired"        # Token revoked or refresh failed
    AUTH_REQUIRED = "auth_required"      # Credential files missing
    NOT_FOUND = "not_found"              # Resource doesn't exist
    PERMISSION_DENIED = "permission_denied"  # No access to resource
    RATE_LIMITED = "rate_limited"        # Hit API quota
    NETWORK_ERROR = "network_error"      # Connection failed or 5xx
    INVALID_INPUT = "invalid_input"      # Bad parameters
    UNKNOWN = "unknown"                  # Unexpected error


class WorkspaceError(Exception):
    """
    Structured error for consistent handling across layers.

    Adapters raise these on API failures (via @with_retry).
    server.py turns them into error-flagged MCP results.

    The message is the underlying error text, unmodified.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for CLI/debug output."""
        return {
            "error": True,
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# ============================================================================
# GMAIL TYPES
# ============================================================================

@dataclass
class MessageSummary:
    """One row of gmail_search output (metadata fetch, no body)."""
    id: str
    subject: str = ""
    from_address: str = ""
    date: str = ""
    snippet: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "subject": self.subject,
            "from": self.from_address,
            "date": self.date,
            "snippet": self.snippet,
        })


@dataclass
class MessageDetail:
    """A full message as returned by gmail_read."""
    id: str
    thread_id: str
    subject: str = ""
    from_address: str = ""
    to: str = ""
    date: str = ""
    body: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "threadId": self.thread_id,
            "subject": self.subject,
            "from": self.from_address,
            "to": self.to,
            "date": self.date,
            "body": self.body,
        }


@dataclass
class ReplyContext:
    """Threading headers taken from the message being replied to."""
    in_reply_to: str = ""
    references: str = ""
    thread_id: str | None = None


@dataclass
class SentMessage:
    """Receipt from users.messages.send."""
    message_id: str
    thread_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "message_id": self.message_id,
            "thread_id": self.thread_id,
        })


# ============================================================================
# CALENDAR TYPES
# ============================================================================

@dataclass
class EventSummary:
    """One row of calendar_list output."""
    id: str
    summary: str | None = None
    start: str | None = None
    end: str | None = None
    location: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "summary": self.summary,
            "start": self.start,
            "end": self.end,
            "location": self.location,
            "description": self.description,
        })


@dataclass
class EventRef:
    """Acknowledgement for a created or updated event."""
    id: str
    summary: str | None = None
    html_link: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "summary": self.summary,
            "htmlLink": self.html_link,
        })


# ============================================================================
# DRIVE TYPES
# ============================================================================

@dataclass
class FileContent:
    """Readable content of a Drive file (exported, downloaded, or a placeholder)."""
    name: str
    mime_type: str
    content: str
    truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "mimeType": self.mime_type,
            "content": self.content,
        }


# ============================================================================
# SHEETS TYPES
# ============================================================================

# Cell values from Sheets API are strings, numbers, booleans, or None
CellValue = str | int | float | bool | None


@dataclass
class SheetValues:
    """Values read from an A1 range."""
    range: str
    values: list[list[CellValue]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range, "values": self.values}


@dataclass
class SheetUpdate:
    """Receipt from spreadsheets.values.update."""
    updated_range: str | None = None
    updated_cells: int | None = None
    updated_rows: int | None = None
    updated_columns: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "updatedRange": self.updated_range,
            "updatedCells": self.updated_cells,
            "updatedRows": self.updated_rows,
            "updatedColumns": self.updated_columns,
        })
