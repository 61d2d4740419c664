"""
Gmail tools — search, read, send.

Each returns the text of the MCP result. Errors propagate as WorkspaceError.
"""

import logging

from adapters.gmail import search_messages, fetch_message, fetch_reply_context, send_message
from tools.common import to_json

logger = logging.getLogger(__name__)

NO_MESSAGES = "No messages found."


def do_gmail_search(query: str, max_results: int = 10) -> str:
    """
    Search messages; one summary per hit, in Gmail's listing order.

    Args:
        query: Gmail search syntax
        max_results: 1..50 (bounds enforced by the tool schema)
    """
    summaries = search_messages(query, max_results)
    if not summaries:
        return NO_MESSAGES
    return to_json([s.to_dict() for s in summaries])


def do_gmail_read(message_id: str) -> str:
    """Full message with decoded body (cut at 50,000 characters)."""
    return to_json(fetch_message(message_id).to_dict())


def do_gmail_send(
    to: str,
    subject: str,
    body: str,
    reply_to_id: str | None = None,
) -> str:
    """
    Send a plain-text email.

    With reply_to_id, the original's Message-ID and References become the
    new message's threading headers and the reply lands in the same thread.
    """
    reply = fetch_reply_context(reply_to_id) if reply_to_id else None
    sent = send_message(to, subject, body, reply)
    logger.info(f"Sent message {sent.message_id} (thread {sent.thread_id})")
    return to_json(sent.to_dict(), pretty=False)
