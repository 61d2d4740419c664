"""
Shared helpers for tool modules.

JSON rendering of results and ID resolution that raises WorkspaceError.
"""

import json
from typing import Any

from models import WorkspaceError, ErrorKind
from validation import extract_drive_file_id


def to_json(data: Any, pretty: bool = True) -> str:
    """
    Render a tool result as JSON text.

    Listings and reads are indented for readability; write receipts are
    compact one-liners. Non-ASCII is kept as-is.
    """
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def resolve_file_id(value: str) -> str:
    """Accept a bare Drive ID or any Drive/Docs/Sheets URL."""
    try:
        return extract_drive_file_id(value)
    except ValueError as e:
        raise WorkspaceError(ErrorKind.INVALID_INPUT, str(e)) from None
