"""
Retry decorator with exponential backoff.

Used by adapters to handle transient API failures and to convert every
failure into a WorkspaceError carrying the original error text.
"""

import time
from functools import wraps
from typing import TypeVar, Callable, ParamSpec

from google.auth.exceptions import RefreshError

from logging_config import logger, log_api_error, log_retry
from models import WorkspaceError, ErrorKind

T = TypeVar("T")
P = ParamSpec("P")


# Exceptions that should trigger retry
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
)

# HTTP status codes that should trigger retry
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({
    429,  # Rate limited
    500,  # Internal server error
    502,  # Bad gateway
    503,  # Service unavailable
    504,  # Gateway timeout
})


def _get_http_status(exception: Exception) -> int | None:
    """
    Extract HTTP status code from exception if available.

    Works with googleapiclient.errors.HttpError and similar.
    """
    # Check for resp.status attribute (googleapiclient.errors.HttpError)
    if hasattr(exception, "resp") and hasattr(exception.resp, "status"):
        status = exception.resp.status
        if isinstance(status, int):
            return status

    # Check for status_code attribute (requests-style)
    if hasattr(exception, "status_code"):
        status = exception.status_code
        if isinstance(status, int):
            return status

    return None


def _should_retry(exception: Exception) -> bool:
    """Determine if an exception is retryable."""
    if isinstance(exception, RETRYABLE_EXCEPTIONS):
        return True

    status = _get_http_status(exception)
    if status is not None and status in RETRYABLE_STATUS_CODES:
        return True

    return False


def _convert_to_workspace_error(exception: Exception) -> WorkspaceError:
    """Convert an exception to a WorkspaceError if not already one."""
    if isinstance(exception, WorkspaceError):
        return exception

    # Refresh token revoked or expired; only re-running auth fixes this
    if isinstance(exception, RefreshError):
        return WorkspaceError(ErrorKind.AUTH_EXPIRED, str(exception))

    # Check HTTP status first (more reliable than string matching)
    status = _get_http_status(exception)
    if status is not None:
        details = {"status": status}
        if status == 401:
            return WorkspaceError(ErrorKind.AUTH_EXPIRED, str(exception), details)
        elif status == 403:
            return WorkspaceError(ErrorKind.PERMISSION_DENIED, str(exception), details)
        elif status == 404:
            return WorkspaceError(ErrorKind.NOT_FOUND, str(exception), details)
        elif status == 429:
            return WorkspaceError(ErrorKind.RATE_LIMITED, str(exception), details, retryable=True)
        elif status >= 500:
            return WorkspaceError(ErrorKind.NETWORK_ERROR, str(exception), details, retryable=True)
        return WorkspaceError(ErrorKind.UNKNOWN, str(exception), details)

    if isinstance(exception, (ConnectionError, TimeoutError)):
        return WorkspaceError(ErrorKind.NETWORK_ERROR, str(exception), retryable=True)

    return WorkspaceError(ErrorKind.UNKNOWN, str(exception))


def with_retry(
    max_attempts: int = 3,
    delay_ms: int = 1000,
    backoff_multiplier: float = 2.0,
    convert_errors: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Retry decorator with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts. Use 1 for non-idempotent
            calls (send, insert): errors are still converted, never retried.
        delay_ms: Initial delay in milliseconds
        backoff_multiplier: Multiplier for exponential backoff
        convert_errors: Convert exceptions to WorkspaceError on final failure

    Returns:
        Decorated function with retry logic

    Example:
        @with_retry(max_attempts=3, delay_ms=1000)
        def get_file(file_id: str):
            return service.files().get(fileId=file_id).execute()
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not _should_retry(e) or attempt == max_attempts - 1:
                        if not convert_errors:
                            logger.error(
                                f"{func.__name__} failed after {attempt + 1} attempts: {e}"
                            )
                            raise
                        error = _convert_to_workspace_error(e)
                        log_api_error(func.__name__, error, attempt + 1)
                        if error is e:
                            raise
                        raise error from e

                    wait_ms = int(delay_ms * (backoff_multiplier ** attempt))
                    log_retry(attempt + 1, max_attempts, wait_ms, str(e))
                    time.sleep(wait_ms / 1000)

            raise AssertionError("unreachable: max_attempts must be >= 1")

        return wrapper

    return decorator
