"""
Gmail Extractor — Pure functions over Gmail API message payloads.

Header lookup, body decoding, and outgoing RFC 2822 message assembly.
No API calls, no MCP awareness.
"""

import base64
from email.message import EmailMessage
from typing import Any

from models import ReplyContext


# =============================================================================
# HEADERS
# =============================================================================


def get_header(headers: list[dict[str, Any]], name: str) -> str:
    """
    Return the first header value matching name (case-insensitive).

    Missing header → empty string, never None.
    """
    wanted = name.lower()
    for header in headers:
        if (header.get("name") or "").lower() == wanted:
            return header.get("value") or ""
    return ""


# =============================================================================
# BODY
# =============================================================================


def decode_body_data(data: str) -> str:
    """Decode a base64url body from the Gmail API into text."""
    # The API normally pads, but be lenient with unpadded data
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def _find_part_data(payload: dict[str, Any], mime_type: str) -> str | None:
    """Depth-first search for the first part of mime_type that carries data."""
    for part in payload.get("parts") or []:
        if part.get("mimeType") == mime_type:
            data = (part.get("body") or {}).get("data")
            if data:
                return data
        if part.get("parts"):
            nested = _find_part_data(part, mime_type)
            if nested:
                return nested
    return None


def extract_body(payload: dict[str, Any] | None) -> str:
    """
    Extract the readable body of a message payload.

    Preference order:
    1. The payload's own body (single-part messages)
    2. First text/plain part (nested multiparts included)
    3. First text/html part
    4. Empty string
    """
    if not payload:
        return ""

    data = (payload.get("body") or {}).get("data")
    if data:
        return decode_body_data(data)

    for mime_type in ("text/plain", "text/html"):
        data = _find_part_data(payload, mime_type)
        if data:
            return decode_body_data(data)

    return ""


# =============================================================================
# OUTGOING MESSAGES
# =============================================================================


def reply_context_from_headers(
    headers: list[dict[str, Any]],
    thread_id: str | None,
) -> ReplyContext:
    """Build threading headers for a reply from the original's headers."""
    message_id = get_header(headers, "Message-ID")
    references = f"{get_header(headers, 'References')} {message_id}".strip()
    return ReplyContext(
        in_reply_to=message_id,
        references=references,
        thread_id=thread_id or None,
    )


def reply_subject(subject: str) -> str:
    """Prefix 'Re: ' unless the subject already carries it."""
    if subject[:3].lower() == "re:":
        return subject
    return f"Re: {subject}"


def build_raw_message(
    to: str,
    subject: str,
    body: str,
    reply: ReplyContext | None = None,
) -> str:
    """
    Assemble a plain-text message and encode it for users.messages.send.

    Returns:
        base64url-encoded RFC 2822 message (the API's `raw` field)
    """
    message = EmailMessage()
    message["To"] = to
    message["Subject"] = reply_subject(subject) if reply else subject
    if reply and reply.in_reply_to:
        message["In-Reply-To"] = reply.in_reply_to
        message["References"] = reply.references
    message.set_content(body, charset="utf-8")

    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")
