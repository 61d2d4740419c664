"""
OAuth Configuration - Single Source of Truth

All OAuth and API parameters defined here. Do not duplicate elsewhere.
"""

import os
from pathlib import Path

# Credentials directory: oauth-keys.json (client) + tokens.json (user tokens)
CREDS_DIR = Path(
    os.environ.get("GOOGLE_CREDS_DIR", Path.home() / ".config" / "google-mcp")
).expanduser()

# Google Cloud OAuth client credentials (supplied once by the user)
KEYS_FILE = CREDS_DIR / 'oauth-keys.json'

# User's OAuth tokens, written by `python -m auth`
TOKENS_FILE = CREDS_DIR / 'tokens.json'

SCOPES = [
    # Search, read, send (send needs modify, readonly is not enough)
    'https://www.googleapis.com/auth/gmail.modify',

    # List, create, update, delete events
    'https://www.googleapis.com/auth/calendar',

    # Search + read/export only
    'https://www.googleapis.com/auth/drive.readonly',

    # Read and write cell ranges
    'https://www.googleapis.com/auth/spreadsheets',
]

# OAuth server port (localhost callback receiver)
OAUTH_PORT = int(os.environ.get("GOOGLE_MCP_OAUTH_PORT", 3000))

# Redirect path for manual (copy-paste) mode
OAUTH_CALLBACK_PATH = '/oauth2callback'

# Default timeout for all Google API calls (seconds)
API_TIMEOUT = 60

# Long text (message bodies, file content) is cut at this many characters
MAX_CONTENT_CHARS = 50_000

# Event descriptions in listings are cut at this many characters
MAX_DESCRIPTION_CHARS = 200

# Events returned by one calendar_list call
CALENDAR_MAX_RESULTS = 50

LOG_LEVEL = os.environ.get("GOOGLE_MCP_LOG_LEVEL", "INFO")
