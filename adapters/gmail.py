"""
Gmail adapter — Gmail API wrapper.

Search (list + batched metadata fetch), full message read, and send.
"""

from typing import Any

from googleapiclient.errors import HttpError

from models import MessageSummary, MessageDetail, ReplyContext, SentMessage
from retry import with_retry
from logging_config import log_api_call, log_api_result
from adapters.services import get_gmail_service
from extractors.gmail import (
    get_header,
    extract_body,
    reply_context_from_headers,
    build_raw_message,
)
from oauth_config import MAX_CONTENT_CHARS


# Headers fetched for search results
SUMMARY_HEADERS = ["Subject", "From", "Date"]

# Headers needed to thread a reply
REPLY_HEADERS = ["Message-ID", "References"]


def _summary_from_message(message_id: str, msg: dict[str, Any]) -> MessageSummary:
    """Build a search row from a metadata-format message."""
    headers = (msg.get("payload") or {}).get("headers") or []
    return MessageSummary(
        id=message_id,
        subject=get_header(headers, "Subject"),
        from_address=get_header(headers, "From"),
        date=get_header(headers, "Date"),
        snippet=msg.get("snippet"),
    )


@with_retry(max_attempts=3, delay_ms=1000)
def search_messages(query: str, max_results: int = 10) -> list[MessageSummary]:
    """
    Search for messages matching query.

    Uses messages().list() to find IDs, then batch-fetches metadata for
    subject, from, date. Batch callbacks can arrive in any order; each
    response is slotted back by its listing index.

    Args:
        query: Gmail search query (e.g., "from:alice@example.com is:unread")
        max_results: Maximum number of messages

    Returns:
        One MessageSummary per listed message, in listing order

    Raises:
        WorkspaceError: On API failure, including any failed detail fetch
    """
    service = get_gmail_service()

    log_api_call("gmail", "messages.list", q=query, maxResults=max_results)
    list_response = (
        service.users()
        .messages()
        .list(userId="me", q=query, maxResults=max_results)
        .execute()
    )

    listed = list_response.get("messages") or []
    log_api_result("gmail", "messages.list", len(listed))
    if not listed:
        return []

    results: list[MessageSummary | None] = [None] * len(listed)
    failures: list[Exception] = []

    def handle_message_response(request_id: str, response: dict[str, Any], exception: HttpError | None) -> None:
        if exception is not None:
            failures.append(exception)
            return
        index = int(request_id)
        results[index] = _summary_from_message(listed[index]["id"], response)

    batch = service.new_batch_http_request()
    for index, item in enumerate(listed):
        batch.add(
            service.users()
            .messages()
            .get(
                userId="me",
                id=item["id"],
                format="metadata",
                metadataHeaders=SUMMARY_HEADERS,
            ),
            callback=handle_message_response,
            request_id=str(index),
        )

    batch.execute()

    if failures:
        raise failures[0]

    log_api_result("gmail", "messages.get[batch]", len(listed))
    return [summary for summary in results if summary is not None]


@with_retry(max_attempts=3, delay_ms=1000)
def fetch_message(message_id: str) -> MessageDetail:
    """
    Fetch a single message with its decoded body.

    Args:
        message_id: The message ID (from search results)

    Returns:
        MessageDetail, body cut at MAX_CONTENT_CHARS

    Raises:
        WorkspaceError: On API failure
    """
    service = get_gmail_service()

    log_api_call("gmail", "messages.get", id=message_id, format="full")
    msg = (
        service.users()
        .messages()
        .get(userId="me", id=message_id, format="full")
        .execute()
    )

    payload = msg.get("payload") or {}
    headers = payload.get("headers") or []

    return MessageDetail(
        id=msg.get("id", message_id),
        thread_id=msg.get("threadId", ""),
        subject=get_header(headers, "Subject"),
        from_address=get_header(headers, "From"),
        to=get_header(headers, "To"),
        date=get_header(headers, "Date"),
        body=extract_body(payload)[:MAX_CONTENT_CHARS],
    )


@with_retry(max_attempts=3, delay_ms=1000)
def fetch_reply_context(message_id: str) -> ReplyContext:
    """Fetch the threading headers of the message being replied to."""
    service = get_gmail_service()

    log_api_call("gmail", "messages.get", id=message_id, format="metadata")
    msg = (
        service.users()
        .messages()
        .get(
            userId="me",
            id=message_id,
            format="metadata",
            metadataHeaders=REPLY_HEADERS,
        )
        .execute()
    )

    headers = (msg.get("payload") or {}).get("headers") or []
    return reply_context_from_headers(headers, msg.get("threadId"))


# Not idempotent: convert errors, never retry
@with_retry(max_attempts=1)
def send_message(
    to: str,
    subject: str,
    body: str,
    reply: ReplyContext | None = None,
) -> SentMessage:
    """
    Send a plain-text email, threaded into reply.thread_id when given.

    Args:
        to: Recipient address(es)
        subject: Subject (gets a Re: prefix when replying)
        body: Plain-text body
        reply: Threading context from fetch_reply_context()

    Returns:
        SentMessage with the new message and thread IDs

    Raises:
        WorkspaceError: On API failure
    """
    service = get_gmail_service()

    request_body: dict[str, Any] = {
        "raw": build_raw_message(to, subject, body, reply),
    }
    if reply and reply.thread_id:
        request_body["threadId"] = reply.thread_id

    log_api_call("gmail", "messages.send", to=to, threadId=request_body.get("threadId"))
    sent = (
        service.users()
        .messages()
        .send(userId="me", body=request_body)
        .execute()
    )
    log_api_result("gmail", "messages.send")

    return SentMessage(
        message_id=sent.get("id", ""),
        thread_id=sent.get("threadId"),
    )
