"""
Drive adapter — Google Drive API wrapper.

Provides search, file metadata, export and download. drive_read routes
between these by MIME type (see extractors/drive.py).
"""

from typing import Any

from retry import with_retry
from logging_config import log_api_call, log_api_result
from adapters.services import get_drive_service


# Fields for search results
SEARCH_RESULT_FIELDS = "files(id,name,mimeType,modifiedTime,webViewLink)"

# Fields needed to route a read
READ_METADATA_FIELDS = "name,mimeType"


def _decode(content: bytes | str) -> str:
    """Media endpoints return bytes; decode leniently."""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


@with_retry(max_attempts=3, delay_ms=1000)
def search_files(query: str, max_results: int = 10) -> list[dict[str, Any]]:
    """
    Search Drive using Drive query syntax.

    Args:
        query: e.g. "name contains 'budget'" or "fullText contains 'quarterly'"
        max_results: Page size (single page only)

    Returns:
        File resources as returned by the API, most recently modified first
    """
    service = get_drive_service()

    log_api_call("drive", "files.list", q=query, pageSize=max_results)
    response = (
        service.files()
        .list(
            q=query,
            pageSize=max_results,
            fields=SEARCH_RESULT_FIELDS,
            orderBy="modifiedTime desc",
        )
        .execute()
    )

    files = response.get("files") or []
    log_api_result("drive", "files.list", len(files))
    return files


@with_retry(max_attempts=3, delay_ms=1000)
def get_file_metadata(file_id: str) -> dict[str, Any]:
    """
    Get the name and MIME type of a file for routing decisions.

    Raises:
        WorkspaceError: NOT_FOUND if the file doesn't exist or isn't shared
    """
    service = get_drive_service()

    log_api_call("drive", "files.get", fileId=file_id)
    return (
        service.files()
        .get(fileId=file_id, fields=READ_METADATA_FIELDS)
        .execute()
    )


@with_retry(max_attempts=3, delay_ms=1000)
def export_file(file_id: str, mime_type: str) -> str:
    """Export a Google-native file (Doc, Sheet, Slides) as text."""
    service = get_drive_service()

    log_api_call("drive", "files.export", fileId=file_id, mimeType=mime_type)
    content = service.files().export(fileId=file_id, mimeType=mime_type).execute()
    return _decode(content)


@with_retry(max_attempts=3, delay_ms=1000)
def download_file(file_id: str) -> str:
    """Download a stored file's bytes as text (text/* and JSON only)."""
    service = get_drive_service()

    log_api_call("drive", "files.get_media", fileId=file_id)
    content = service.files().get_media(fileId=file_id).execute()
    return _decode(content)
