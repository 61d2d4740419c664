"""
Drive tools — search and read.

drive_read routes by MIME type: Google-native files are exported as text,
plain-text files are downloaded, everything else gets a placeholder.
"""

from adapters.drive import search_files, get_file_metadata, export_file, download_file
from extractors.drive import EXPORT_MIME_TYPES, BINARY_PLACEHOLDER, read_strategy, truncate_content
from models import FileContent
from oauth_config import MAX_CONTENT_CHARS
from tools.common import to_json, resolve_file_id

NO_FILES = "No files found."


def do_drive_search(query: str, max_results: int = 10) -> str:
    """Files matching a Drive query, most recently modified first."""
    files = search_files(query, max_results)
    if not files:
        return NO_FILES
    return to_json(files)


def read_file_content(file_id: str) -> FileContent:
    """
    Resolve file_id (ID or URL) and read it as text.

    Returns:
        FileContent; binary files carry BINARY_PLACEHOLDER as content
    """
    file_id = resolve_file_id(file_id)
    meta = get_file_metadata(file_id)
    name = meta.get("name") or "unknown"
    mime_type = meta.get("mimeType") or ""

    strategy = read_strategy(mime_type)
    if strategy == "binary":
        return FileContent(name=name, mime_type=mime_type, content=BINARY_PLACEHOLDER)

    if strategy == "export":
        raw = export_file(file_id, EXPORT_MIME_TYPES[mime_type])
    else:
        raw = download_file(file_id)

    content, truncated = truncate_content(raw, MAX_CONTENT_CHARS)
    return FileContent(name=name, mime_type=mime_type, content=content, truncated=truncated)


def do_drive_read(file_id: str) -> str:
    file_content = read_file_content(file_id)
    # Placeholder results are short acknowledgements, not documents
    pretty = file_content.content != BINARY_PLACEHOLDER
    return to_json(file_content.to_dict(), pretty=pretty)
