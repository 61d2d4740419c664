"""
Tests for retry decorator and helper functions.

Tests cover:
- _get_http_status: HTTP status extraction from various exception types
- _should_retry: Determining if an exception should trigger retry
- _convert_to_workspace_error: Converting exceptions to WorkspaceError
- with_retry decorator: backoff, attempt limits, error conversion
"""

import logging

import pytest
from unittest.mock import Mock, patch, call

from google.auth.exceptions import RefreshError

from retry import (
    _get_http_status,
    _should_retry,
    _convert_to_workspace_error,
    with_retry,
    RETRYABLE_STATUS_CODES,
)
from models import WorkspaceError, ErrorKind
from tests.mock_utils import make_http_error


class TestGetHttpStatus:
    """Tests for _get_http_status function."""

    def test_googleapiclient_http_error(self) -> None:
        assert _get_http_status(make_http_error(404, "Not found")) == 404

    def test_requests_style_exception(self) -> None:
        exc = Exception("Request failed")
        exc.status_code = 500
        assert _get_http_status(exc) == 500

    def test_no_status_returns_none(self) -> None:
        assert _get_http_status(Exception("Generic error")) is None

    def test_non_int_status_ignored(self) -> None:
        exc = Exception("Error")
        exc.resp = Mock()
        exc.resp.status = "not_a_number"
        assert _get_http_status(exc) is None


class TestShouldRetry:
    """Tests for _should_retry function."""

    def test_connection_error_is_retryable(self) -> None:
        assert _should_retry(ConnectionError("Connection refused"))

    def test_timeout_error_is_retryable(self) -> None:
        assert _should_retry(TimeoutError("Request timed out"))

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_transient_statuses_are_retryable(self, status: int) -> None:
        assert _should_retry(make_http_error(status))

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_client_errors_are_not_retryable(self, status: int) -> None:
        assert not _should_retry(make_http_error(status))

    def test_generic_exception_is_not_retryable(self) -> None:
        assert not _should_retry(ValueError("Invalid input"))

    def test_all_retryable_status_codes_covered(self) -> None:
        assert RETRYABLE_STATUS_CODES == {429, 500, 502, 503, 504}


class TestConvertToWorkspaceError:
    """Tests for _convert_to_workspace_error function."""

    def test_workspace_error_passes_through(self) -> None:
        original = WorkspaceError(ErrorKind.NOT_FOUND, "gone")
        assert _convert_to_workspace_error(original) is original

    @pytest.mark.parametrize("status,kind", [
        (401, ErrorKind.AUTH_EXPIRED),
        (403, ErrorKind.PERMISSION_DENIED),
        (404, ErrorKind.NOT_FOUND),
        (429, ErrorKind.RATE_LIMITED),
        (503, ErrorKind.NETWORK_ERROR),
    ])
    def test_http_status_mapping(self, status: int, kind: ErrorKind) -> None:
        err = _convert_to_workspace_error(make_http_error(status, "API said no"))
        assert err.kind == kind

    def test_message_is_original_error_text(self) -> None:
        exc = make_http_error(404, "Requested entity was not found.")
        err = _convert_to_workspace_error(exc)
        assert err.message == str(exc)
        assert "Requested entity was not found." in err.message

    def test_refresh_error_is_auth_expired(self) -> None:
        err = _convert_to_workspace_error(RefreshError("invalid_grant: Token has been expired or revoked."))
        assert err.kind == ErrorKind.AUTH_EXPIRED
        assert "invalid_grant" in err.message

    def test_connection_error_is_network_error(self) -> None:
        err = _convert_to_workspace_error(ConnectionError("Connection reset"))
        assert err.kind == ErrorKind.NETWORK_ERROR
        assert err.retryable

    def test_unknown_exception(self) -> None:
        err = _convert_to_workspace_error(ValueError("weird"))
        assert err.kind == ErrorKind.UNKNOWN
        assert err.message == "weird"
        assert not err.retryable


class TestWithRetry:
    """Tests for the with_retry decorator."""

    def test_success_first_try(self) -> None:
        calls = []

        @with_retry(max_attempts=3)
        def ok() -> str:
            calls.append(1)
            return "done"

        assert ok() == "done"
        assert len(calls) == 1

    @patch("retry.time.sleep")
    def test_retries_transient_then_succeeds(self, mock_sleep: Mock) -> None:
        attempts = iter([make_http_error(503, "Backend Error"), ConnectionError("reset"), "ok"])

        @with_retry(max_attempts=3, delay_ms=100, backoff_multiplier=2.0)
        def flaky() -> str:
            result = next(attempts)
            if isinstance(result, Exception):
                raise result
            return result

        assert flaky() == "ok"
        # Exponential backoff: 100ms, then 200ms
        assert mock_sleep.call_args_list == [call(0.1), call(0.2)]

    @patch("retry.time.sleep")
    def test_gives_up_after_max_attempts(self, mock_sleep: Mock) -> None:
        calls = []

        @with_retry(max_attempts=3, delay_ms=10)
        def always_429() -> None:
            calls.append(1)
            raise make_http_error(429, "Rate Limit Exceeded")

        with pytest.raises(WorkspaceError) as exc_info:
            always_429()

        assert len(calls) == 3
        assert mock_sleep.call_count == 2
        assert exc_info.value.kind == ErrorKind.RATE_LIMITED
        assert "Rate Limit Exceeded" in exc_info.value.message

    @patch("retry.time.sleep")
    def test_non_retryable_fails_immediately(self, mock_sleep: Mock) -> None:
        calls = []

        @with_retry(max_attempts=3)
        def forbidden() -> None:
            calls.append(1)
            raise make_http_error(403, "The caller does not have permission")

        with pytest.raises(WorkspaceError) as exc_info:
            forbidden()

        assert len(calls) == 1
        mock_sleep.assert_not_called()
        assert exc_info.value.kind == ErrorKind.PERMISSION_DENIED

    @patch("retry.time.sleep")
    def test_single_attempt_converts_but_never_retries(self, mock_sleep: Mock) -> None:
        """max_attempts=1 is how non-idempotent writes opt out of retry."""
        calls = []

        @with_retry(max_attempts=1)
        def send() -> None:
            calls.append(1)
            raise make_http_error(500, "Internal error")

        with pytest.raises(WorkspaceError) as exc_info:
            send()

        assert len(calls) == 1
        mock_sleep.assert_not_called()
        assert exc_info.value.kind == ErrorKind.NETWORK_ERROR

    def test_convert_errors_false_reraises_original(self) -> None:
        @with_retry(max_attempts=1, convert_errors=False)
        def boom() -> None:
            raise ValueError("raw")

        with pytest.raises(ValueError, match="raw"):
            boom()

    def test_preserves_function_metadata(self) -> None:
        @with_retry()
        def documented() -> None:
            """Docstring survives."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring survives."

    def test_final_failure_logs_error_kind(self, caplog) -> None:
        @with_retry(max_attempts=3)
        def missing() -> None:
            raise make_http_error(404, "File not found")

        with caplog.at_level(logging.ERROR, logger="google_mcp"):
            with pytest.raises(WorkspaceError) as exc_info:
                missing()

        assert exc_info.value.details == {"status": 404}
        assert "API: missing failed [not_found] (HTTP 404) after 1 attempt(s)" in caplog.text
        assert "File not found" in caplog.text

    def test_workspace_error_passes_through_unchanged(self) -> None:
        original = WorkspaceError(ErrorKind.INVALID_INPUT, "bad id")

        @with_retry()
        def invalid() -> None:
            raise original

        with pytest.raises(WorkspaceError) as exc_info:
            invalid()

        assert exc_info.value is original
