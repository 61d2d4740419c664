"""
Integration test setup.

These tests call real Google APIs with the credentials in GOOGLE_CREDS_DIR.
Run with: pytest -m integration
"""

import json
from pathlib import Path

import pytest

from adapters.services import missing_credential_files

IDS_FILE = Path(__file__).parent.parent.parent / "fixtures" / "integration_ids.json"


@pytest.fixture(autouse=True)
def _require_credentials() -> None:
    missing = missing_credential_files()
    if missing:
        pytest.skip(f"Missing {missing[0]}: run \"google-mcp auth\" first")


@pytest.fixture
def integration_ids() -> dict[str, str]:
    """Load integration test IDs from config file."""
    if not IDS_FILE.exists():
        pytest.skip(
            f"Integration IDs not configured. Create {IDS_FILE} with test_spreadsheet_id"
        )
    with open(IDS_FILE) as f:
        return json.load(f)
