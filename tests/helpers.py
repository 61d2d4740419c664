"""
Shared test helpers for google-mcp.

Centralizes mock wiring patterns that repeat across test files.
"""

from __future__ import annotations

import base64
from typing import Any, Callable
from unittest.mock import MagicMock, seal


def mock_api_chain(
    mock_service: MagicMock,
    chain: str,
    response: Any = None,
    *,
    side_effect: Any = None,
) -> MagicMock:
    """Set up a mock Google API response for a chained call.

    Navigates the MagicMock attribute chain and sets return_value (or side_effect)
    on the final method. Returns the final mock method for adding assertions.

    Args:
        mock_service: The mocked service object (from @patch)
        chain: Dot-separated chain. Each part except the last is treated as
               a callable method (traversed via .return_value).
               Examples: "files.get.execute", "users.messages.list.execute",
                         "spreadsheets.values.update.execute"
        response: The return value for the final method
        side_effect: Alternative to response — sets side_effect instead

    Returns:
        The final mock method (for adding assertions like assert_called_once_with)

    Examples:
        mock_api_chain(service, "files.get.execute", {"name": "f1"})
        # equivalent to: service.files().get().execute.return_value = {"name": "f1"}

        mock_api_chain(service, "events.delete.execute", side_effect=make_http_error(404))
    """
    parts = chain.split(".")
    obj = mock_service
    for part in parts[:-1]:
        obj = getattr(obj, part).return_value
    final = getattr(obj, parts[-1])
    if side_effect is not None:
        final.side_effect = side_effect
    elif response is not None:
        final.return_value = response
    return final


def seal_service(mock_service: MagicMock) -> None:
    """Seal a mock service after all mock_api_chain() calls.

    Prevents MagicMock from silently creating new attributes when
    production code renames an API method: with the seal, calling
    files().export() on a mock only wired for files().get() raises
    AttributeError instead of returning a fresh MagicMock.

    Must be called AFTER all mock_api_chain() calls for this service.
    """
    seal(mock_service)


def b64url(text: str) -> str:
    """Encode text the way the Gmail API encodes body data."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


def gmail_headers(**headers: str) -> list[dict[str, str]]:
    """Gmail payload headers from keyword args (underscores become hyphens)."""
    return [{"name": name.replace("_", "-"), "value": value} for name, value in headers.items()]


# ============================================================================
# Gmail batch requests
# ============================================================================


class FakeBatch:
    """Stand-in for googleapiclient's BatchHttpRequest.

    Records add() calls and, on execute(), answers them in REVERSE order,
    the way a real batch is free to. Each queued request is the kwargs dict
    passed to messages().get() (see wire_gmail_batch), so responses are
    looked up by message ID.

    responses maps message ID → metadata message dict, or an Exception to
    deliver through the callback's exception argument.
    """

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.requests: list[tuple[dict[str, Any], Callable[..., None], str | None]] = []
        self.executed = False

    def add(
        self,
        request: dict[str, Any],
        callback: Callable[..., None],
        request_id: str | None = None,
    ) -> None:
        self.requests.append((request, callback, request_id))

    def execute(self) -> None:
        self.executed = True
        for request, callback, request_id in reversed(self.requests):
            response = self.responses[request["id"]]
            if isinstance(response, Exception):
                callback(request_id, None, response)
            else:
                callback(request_id, response, None)


def wire_gmail_batch(
    mock_service: MagicMock,
    listed_ids: list[str],
    responses: dict[str, Any],
) -> FakeBatch:
    """Wire messages.list + a FakeBatch for the detail fetches.

    Usage:
        batch = wire_gmail_batch(service, ["m1", "m2"], {
            "m1": {"snippet": "...", "payload": {"headers": [...]}},
            "m2": make_http_error(404, "Not found"),
        })
    """
    mock_api_chain(
        mock_service,
        "users.messages.list.execute",
        {"messages": [{"id": m, "threadId": f"t-{m}"} for m in listed_ids]},
    )
    mock_service.users.return_value.messages.return_value.get.side_effect = (
        lambda **kwargs: kwargs
    )
    batch = FakeBatch(responses)
    mock_service.new_batch_http_request.return_value = batch
    return batch
