#!/usr/bin/env python3
"""
OAuth Authentication for google-mcp.

Reads the OAuth client from oauth-keys.json, runs the authorization-code
flow, and writes tokens.json next to it.

Usage:
    python -m auth                       # Auto mode (opens browser)
    python -m auth --manual              # Manual mode (copy-paste URL)
    python -m auth --code 'http://localhost:3000/oauth2callback?code=...'
    python server.py auth                # Same, via the server entry point

Prerequisites:
    - oauth-keys.json in GOOGLE_CREDS_DIR (from GCP Console, Desktop or Web client)
"""

import argparse
import json
import os
import sys
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from google_auth_oauthlib.flow import InstalledAppFlow

from oauth_config import (
    CREDS_DIR,
    KEYS_FILE,
    TOKENS_FILE,
    SCOPES,
    OAUTH_PORT,
    OAUTH_CALLBACK_PATH,
)

# Both needed to get a refresh token on every consent
AUTH_PARAMS = {"access_type": "offline", "prompt": "consent"}

REDIRECT_URI = f"http://localhost:{OAUTH_PORT}{OAUTH_CALLBACK_PATH}"


def _is_interactive() -> bool:
    """Check if we're running in an interactive terminal."""
    return sys.stdin.isatty() and bool(
        os.environ.get("DISPLAY", os.environ.get("WAYLAND_DISPLAY", ""))
    )


def extract_code(value: str) -> str:
    """Accept a bare authorization code or the full redirect URL."""
    value = value.strip()
    if value.startswith(("http://", "https://")):
        codes = parse_qs(urlparse(value).query).get("code")
        if not codes:
            raise ValueError(f"No 'code' parameter in redirect URL: {value}")
        return codes[0]
    return value


def _client_type(keys_file: Path) -> str:
    """'web' or 'installed', whichever section oauth-keys.json carries."""
    config = json.loads(keys_file.read_text())
    return "web" if "web" in config else "installed"


def build_flow(manual: bool) -> InstalledAppFlow:
    """
    Create the OAuth flow from oauth-keys.json.

    Manual codes may come from a consent URL printed by an earlier run
    (--code), where no PKCE verifier survives. Manual flows therefore
    neither send a code_challenge nor expect a code_verifier.
    """
    flow = InstalledAppFlow.from_client_secrets_file(
        str(KEYS_FILE),
        scopes=SCOPES,
        autogenerate_code_verifier=not manual,
    )
    if manual:
        flow.redirect_uri = REDIRECT_URI
    return flow


def _manual_flow(flow: InstalledAppFlow, code: str | None):
    """Print the consent URL, take the code from --code or stdin, exchange it."""
    if code is None:
        auth_url, _ = flow.authorization_url(**AUTH_PARAMS)
        print("Open this URL in a browser and approve access:")
        print()
        print(f"  {auth_url}")
        print()
        print("The browser then fails to load a localhost page. That's expected:")
        code = input("Paste the full URL from the address bar (or just the code): ")
    flow.fetch_token(code=extract_code(code))
    return flow.credentials


def save_tokens(token_json: str) -> None:
    """Write tokens.json, readable by the owner only from the moment it exists."""
    CREDS_DIR.mkdir(parents=True, exist_ok=True)
    fd = os.open(TOKENS_FILE, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(token_json)
    # O_CREAT leaves the mode of an existing file alone
    os.chmod(TOKENS_FILE, 0o600)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="google-mcp auth",
        description="OAuth authentication for google-mcp",
    )
    parser.add_argument(
        '--manual',
        action='store_true',
        help='Manual mode: copy-paste OAuth flow (for remote/SSH sessions)'
    )
    parser.add_argument(
        '--code',
        type=str,
        help='Authorization code or redirect URL (non-interactive)'
    )

    args = parser.parse_args(argv)

    if not KEYS_FILE.exists():
        print(f"Error: {KEYS_FILE} not found", file=sys.stderr)
        print("Download OAuth client credentials from GCP Console and save them there.", file=sys.stderr)
        sys.exit(1)

    manual = args.manual or bool(args.code)

    try:
        # The local server only answers on "/", which a web client's
        # registered redirect URI does not name
        if not manual and _client_type(KEYS_FILE) == "web":
            print(f"Web OAuth client: using manual mode with redirect {REDIRECT_URI}")
            manual = True

        # Default to manual mode if no display available
        if not manual and not _is_interactive():
            print("No display detected — using manual mode.")
            manual = True

        flow = build_flow(manual)
        if manual:
            creds = _manual_flow(flow, args.code)
        else:
            creds = flow.run_local_server(port=OAUTH_PORT, **AUTH_PARAMS)
    except KeyboardInterrupt:
        print("\n\nAuthentication cancelled", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nAuthentication failed: {e}", file=sys.stderr)
        sys.exit(1)

    save_tokens(creds.to_json())
    print()
    print(f"Authentication complete. {TOKENS_FILE} created.")


if __name__ == '__main__':
    main()
