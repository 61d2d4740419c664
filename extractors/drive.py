"""
Drive Extractor — content routing and truncation for drive_read.

Decides how a file's content can be read (export, download, or not at all)
from its MIME type, and bounds the text returned to the caller.
"""

from typing import Literal

# Google-native types → export format
EXPORT_MIME_TYPES: dict[str, str] = {
    "application/vnd.google-apps.document": "text/plain",
    "application/vnd.google-apps.spreadsheet": "text/csv",
    "application/vnd.google-apps.presentation": "text/plain",
}

BINARY_PLACEHOLDER = "[Binary file — cannot display. Use webViewLink to open in browser.]"

ReadStrategy = Literal["export", "download", "binary"]


def read_strategy(mime_type: str) -> ReadStrategy:
    """Pick how to read a file of this MIME type."""
    if mime_type in EXPORT_MIME_TYPES:
        return "export"
    if mime_type.startswith("text/") or mime_type == "application/json":
        return "download"
    return "binary"


def truncate_content(content: str, limit: int) -> tuple[str, bool]:
    """
    Cut content at limit characters, appending a visible marker.

    Returns:
        (content, truncated)
    """
    if len(content) <= limit:
        return content, False
    return content[:limit] + f"\n\n[Content truncated at {limit:,} characters]", True
