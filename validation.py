"""
Input validation and ID conversion utilities.

Handles:
- Google Drive / Docs / Sheets URL → file ID extraction

Raise ValueError; the tool layer turns that into an invalid_input error.
"""

import re

# =============================================================================
# PATTERNS
# =============================================================================

# Google Drive URL patterns
GOOGLE_DRIVE_ID_PATTERN = re.compile(r'/(?:d|folders)/([a-zA-Z0-9_-]+)')
GOOGLE_DRIVE_QUERY_PATTERN = re.compile(r'[?&]id=([a-zA-Z0-9_-]+)')
GOOGLE_FILE_ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')


# =============================================================================
# DRIVE ID EXTRACTION
# =============================================================================

def extract_drive_file_id(input_value: str) -> str:
    """
    Extract Google Drive file ID from URL or validate bare ID.

    Accepts:
    - Full URL: https://docs.google.com/document/d/1abc.../edit
    - Full URL: https://docs.google.com/spreadsheets/d/1abc.../edit#gid=0
    - Full URL: https://drive.google.com/open?id=1abc...
    - Bare ID: 1abc...

    Returns:
        Extracted file ID

    Raises:
        ValueError: If input doesn't contain a valid Google file ID
    """
    if not input_value:
        raise ValueError("File ID or URL is required")

    input_value = input_value.strip()

    if input_value.startswith(('http://', 'https://')):
        # /d/{id} is by far the most common shape
        match = GOOGLE_DRIVE_ID_PATTERN.search(input_value)
        if match:
            return match.group(1)

        match = GOOGLE_DRIVE_QUERY_PATTERN.search(input_value)
        if match:
            return match.group(1)

        raise ValueError(
            f"Could not extract file ID from URL: {input_value}\n"
            "Expected format: https://docs.google.com/document/d/{id}/... or "
            "https://drive.google.com/open?id={id}"
        )

    if not GOOGLE_FILE_ID_PATTERN.match(input_value):
        raise ValueError(
            f"Invalid file ID format: {input_value}\n"
            "File IDs contain only letters, numbers, hyphens, and underscores"
        )

    return input_value
