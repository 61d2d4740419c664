"""
Google API service initialization.

Shared by all adapters. Loads oauth-keys.json + tokens.json, builds service
objects. Uses lru_cache so each product gets one long-lived client.

All services use a 60-second timeout to prevent indefinite hangs
when Google APIs are slow or network connections stall.
"""

import json
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any

import google_auth_httplib2
import httplib2

__all__ = [
    "load_client_config",
    "load_credentials",
    "missing_credential_files",
    "get_gmail_service",
    "get_calendar_service",
    "get_drive_service",
    "get_sheets_service",
    "clear_service_cache",
]

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build, Resource

from oauth_config import KEYS_FILE, TOKENS_FILE, SCOPES, API_TIMEOUT
from models import WorkspaceError, ErrorKind

# Token endpoint used when the tokens file doesn't carry its own
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def missing_credential_files() -> list[Path]:
    """Credential files that don't exist yet (empty when ready to serve)."""
    return [path for path in (KEYS_FILE, TOKENS_FILE) if not path.exists()]


def load_client_config(keys_path: Path) -> dict[str, Any]:
    """
    Read the OAuth client section from oauth-keys.json.

    Google Cloud Console downloads either an "installed" (desktop) or a
    "web" client; both carry client_id and client_secret.
    """
    keys = json.loads(keys_path.read_text())
    client = keys.get("installed") or keys.get("web")
    if not client or "client_id" not in client:
        raise WorkspaceError(
            ErrorKind.AUTH_REQUIRED,
            f"{keys_path} has no 'installed' or 'web' client section",
        )
    return client


def _parse_expiry(tokens: dict[str, Any]) -> datetime | None:
    """Expiry from either token format, as naive UTC (what google-auth expects)."""
    if tokens.get("expiry"):
        expiry = datetime.fromisoformat(tokens["expiry"].replace("Z", "+00:00"))
    elif tokens.get("expiry_date"):
        # googleapis (Node) format: epoch milliseconds
        expiry = datetime.fromtimestamp(int(tokens["expiry_date"]) / 1000, tz=timezone.utc)
    else:
        return None
    if expiry.tzinfo is not None:
        expiry = expiry.astimezone(timezone.utc).replace(tzinfo=None)
    return expiry


def load_credentials(
    keys_path: Path | None = None,
    tokens_path: Path | None = None,
) -> Credentials:
    """
    Build OAuth credentials from the client keys and the saved tokens.

    Accepts tokens written by google-auth (`token`) or by the googleapis
    Node client (`access_token`, `expiry_date`). Expired access tokens are
    refreshed by the transport on first use.
    """
    keys_path = keys_path or KEYS_FILE
    tokens_path = tokens_path or TOKENS_FILE
    for path in (keys_path, tokens_path):
        if not path.exists():
            raise WorkspaceError(
                ErrorKind.AUTH_REQUIRED,
                f"{path} not found. Run: google-mcp auth",
            )

    client = load_client_config(keys_path)
    tokens = json.loads(tokens_path.read_text())

    scopes = tokens.get("scopes")
    if scopes is None and tokens.get("scope"):
        scopes = tokens["scope"].split()

    return Credentials(
        token=tokens.get("token") or tokens.get("access_token"),
        refresh_token=tokens.get("refresh_token"),
        token_uri=tokens.get("token_uri") or client.get("token_uri", DEFAULT_TOKEN_URI),
        client_id=client["client_id"],
        client_secret=client.get("client_secret"),
        scopes=scopes or SCOPES,
        expiry=_parse_expiry(tokens),
    )


def _get_authorized_http(creds: Credentials) -> google_auth_httplib2.AuthorizedHttp:
    """Create authorized HTTP client with timeout."""
    http = httplib2.Http(timeout=API_TIMEOUT)
    return google_auth_httplib2.AuthorizedHttp(creds, http=http)


@lru_cache(maxsize=1)
def _get_credentials() -> Credentials:
    """Credentials shared by every service (one token refresh for all)."""
    return load_credentials()


@lru_cache(maxsize=1)
def get_gmail_service() -> Resource:
    """Get authenticated Gmail API v1 service (cached, thread-safe)."""
    return build("gmail", "v1", http=_get_authorized_http(_get_credentials()))


@lru_cache(maxsize=1)
def get_calendar_service() -> Resource:
    """Get authenticated Google Calendar API v3 service (cached, thread-safe)."""
    return build("calendar", "v3", http=_get_authorized_http(_get_credentials()))


@lru_cache(maxsize=1)
def get_drive_service() -> Resource:
    """Get authenticated Google Drive API v3 service (cached, thread-safe)."""
    return build("drive", "v3", http=_get_authorized_http(_get_credentials()))


@lru_cache(maxsize=1)
def get_sheets_service() -> Resource:
    """Get authenticated Google Sheets API v4 service (cached, thread-safe)."""
    return build("sheets", "v4", http=_get_authorized_http(_get_credentials()))


def clear_service_cache() -> None:
    """Clear cached services. Useful for testing or after re-auth."""
    _get_credentials.cache_clear()
    get_gmail_service.cache_clear()
    get_calendar_service.cache_clear()
    get_drive_service.cache_clear()
    get_sheets_service.cache_clear()
