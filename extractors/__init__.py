"""
Extractors — Pure functions for content extraction.

No MCP awareness, no Google API calls. Just transform input → output.
Easily testable with fixtures.
"""

from .gmail import (
    get_header,
    decode_body_data,
    extract_body,
    reply_context_from_headers,
    reply_subject,
    build_raw_message,
)
from .drive import (
    EXPORT_MIME_TYPES,
    BINARY_PLACEHOLDER,
    read_strategy,
    truncate_content,
)

__all__ = [
    "get_header",
    "decode_body_data",
    "extract_body",
    "reply_context_from_headers",
    "reply_subject",
    "build_raw_message",
    "EXPORT_MIME_TYPES",
    "BINARY_PLACEHOLDER",
    "read_strategy",
    "truncate_content",
]
