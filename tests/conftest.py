"""
Shared pytest fixtures for google-mcp tests.

Adapter mocking infrastructure: mock services plus fixtures that patch
each adapter's service getter, so adapters run without hitting Google.
"""

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from adapters.services import clear_service_cache

# Re-export make_http_error for convenience (actual implementation in mock_utils.py)
from tests.mock_utils import make_http_error  # noqa: F401


@pytest.fixture(autouse=True)
def _fresh_service_cache() -> Generator[None, None, None]:
    """No test sees a service or credentials cached by another."""
    clear_service_cache()
    yield
    clear_service_cache()


@pytest.fixture(autouse=True)
def _no_retry_sleep() -> Generator[MagicMock, None, None]:
    """Retries back off instantly in tests."""
    with patch("retry.time.sleep") as mock_sleep:
        yield mock_sleep


# ============================================================================
# Mock services
# ============================================================================

@pytest.fixture
def mock_gmail_service() -> MagicMock:
    """Create a mock Gmail service."""
    return MagicMock()


@pytest.fixture
def mock_calendar_service() -> MagicMock:
    """Create a mock Google Calendar service."""
    return MagicMock()


@pytest.fixture
def mock_drive_service() -> MagicMock:
    """
    Create a mock Google Drive service.

    Use with patch to replace real service:

        def test_something(mock_drive_service):
            mock_drive_service.files().get().execute.return_value = {"name": "x"}
            with patch("adapters.drive.get_drive_service", return_value=mock_drive_service):
                result = get_file_metadata("123")
    """
    return MagicMock()


@pytest.fixture
def mock_sheets_service() -> MagicMock:
    """Create a mock Google Sheets service."""
    return MagicMock()


# ============================================================================
# Patched services
# ============================================================================

@pytest.fixture
def patch_gmail_service(mock_gmail_service: MagicMock) -> Generator[MagicMock, None, None]:
    """Fixture that patches get_gmail_service and yields the mock."""
    with patch("adapters.gmail.get_gmail_service", return_value=mock_gmail_service):
        yield mock_gmail_service


@pytest.fixture
def patch_calendar_service(mock_calendar_service: MagicMock) -> Generator[MagicMock, None, None]:
    """Fixture that patches get_calendar_service and yields the mock."""
    with patch("adapters.calendar.get_calendar_service", return_value=mock_calendar_service):
        yield mock_calendar_service


@pytest.fixture
def patch_drive_service(mock_drive_service: MagicMock) -> Generator[MagicMock, None, None]:
    """
    Fixture that patches get_drive_service and yields the mock.

    Example:
        def test_something(patch_drive_service):
            patch_drive_service.files().get().execute.return_value = {"name": "x"}
            result = get_file_metadata("123")  # Uses mocked service
    """
    with patch("adapters.drive.get_drive_service", return_value=mock_drive_service):
        yield mock_drive_service


@pytest.fixture
def patch_sheets_service(mock_sheets_service: MagicMock) -> Generator[MagicMock, None, None]:
    """Fixture that patches get_sheets_service and yields the mock."""
    with patch("adapters.sheets.get_sheets_service", return_value=mock_sheets_service):
        yield mock_sheets_service


# ============================================================================
# Credential files
# ============================================================================

@pytest.fixture
def creds_dir(tmp_path, monkeypatch):
    """
    Point the credential paths at an empty tmp directory.

    Returns the directory; tests write oauth-keys.json / tokens.json into it.
    """
    keys_file = tmp_path / "oauth-keys.json"
    tokens_file = tmp_path / "tokens.json"
    for module in ("oauth_config", "adapters.services", "auth"):
        monkeypatch.setattr(f"{module}.KEYS_FILE", keys_file)
        monkeypatch.setattr(f"{module}.TOKENS_FILE", tokens_file)
    monkeypatch.setattr("auth.CREDS_DIR", tmp_path)
    return tmp_path
