"""
Tools — MCP tool implementations.

Each product has its own module with the implementation logic.
server.py provides thin @mcp.tool() wrappers that call into these.

Every function returns the text of the tool result and raises
WorkspaceError on failure.
"""

from .gmail import do_gmail_search, do_gmail_read, do_gmail_send
from .calendar import do_calendar_list, do_calendar_create, do_calendar_update, do_calendar_delete
from .drive import do_drive_search, do_drive_read
from .sheets import do_sheets_read, do_sheets_write

# Single source of truth for tool names (server registers exactly these).
TOOL_NAMES = frozenset({
    "gmail_search", "gmail_read", "gmail_send",
    "calendar_list", "calendar_create", "calendar_update", "calendar_delete",
    "drive_search", "drive_read",
    "sheets_read", "sheets_write",
})

__all__ = [
    "do_gmail_search", "do_gmail_read", "do_gmail_send",
    "do_calendar_list", "do_calendar_create", "do_calendar_update", "do_calendar_delete",
    "do_drive_search", "do_drive_read",
    "do_sheets_read", "do_sheets_write",
    "TOOL_NAMES",
]
