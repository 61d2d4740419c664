#!/usr/bin/env python3
"""
CLI interface for google-mcp.

Usage:
    google-mcp-cli gmail-search "from:alice is:unread"
    google-mcp-cli gmail-read <message_id>
    google-mcp-cli calendar-list --days-ahead 14
    google-mcp-cli drive-search "name contains 'budget'"
    google-mcp-cli drive-read <file_id_or_url>
    google-mcp-cli sheets-read <spreadsheet_id> "Sheet1!A1:D10"

The read-side MCP tools from the command line, for agents without MCP.
Output is exactly the text the MCP tool would return.
"""

import argparse
import sys

from logging_config import configure_logging
from models import WorkspaceError
from oauth_config import LOG_LEVEL
from tools import (
    do_gmail_search,
    do_gmail_read,
    do_calendar_list,
    do_drive_search,
    do_drive_read,
    do_sheets_read,
)


def cmd_gmail_search(args: argparse.Namespace) -> str:
    return do_gmail_search(args.query, args.max_results)


def cmd_gmail_read(args: argparse.Namespace) -> str:
    return do_gmail_read(args.message_id)


def cmd_calendar_list(args: argparse.Namespace) -> str:
    return do_calendar_list(args.days_ahead, args.query, args.calendar_id)


def cmd_drive_search(args: argparse.Namespace) -> str:
    return do_drive_search(args.query, args.max_results)


def cmd_drive_read(args: argparse.Namespace) -> str:
    return do_drive_read(args.file_id)


def cmd_sheets_read(args: argparse.Namespace) -> str:
    return do_sheets_read(args.spreadsheet_id, args.range)


def _bounded_int(low: int, high: int):
    """argparse type accepting integers in [low, high]."""
    def parse(value: str) -> int:
        number = int(value)
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}")
        return number
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="google-mcp-cli",
        description="Gmail, Calendar, Drive and Sheets from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    google-mcp-cli gmail-search "subject:invoice after:2026/01/01" --max-results 5
    google-mcp-cli calendar-list --query standup
    google-mcp-cli drive-read "https://docs.google.com/document/d/1abc.../edit"
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("gmail-search", help="Search Gmail messages")
    p.add_argument("query", help="Gmail search query")
    p.add_argument("--max-results", type=_bounded_int(1, 50), default=10,
                   help="Max results, 1-50 (default: 10)")
    p.set_defaults(func=cmd_gmail_search)

    p = subparsers.add_parser("gmail-read", help="Read a Gmail message")
    p.add_argument("message_id", help="Gmail message ID")
    p.set_defaults(func=cmd_gmail_read)

    p = subparsers.add_parser("calendar-list", help="List upcoming events")
    p.add_argument("--days-ahead", type=_bounded_int(1, 90), default=7,
                   help="Days ahead, 1-90 (default: 7)")
    p.add_argument("--query", help="Text search within events")
    p.add_argument("--calendar-id", default="primary",
                   help="Calendar ID (default: primary)")
    p.set_defaults(func=cmd_calendar_list)

    p = subparsers.add_parser("drive-search", help="Search Drive files")
    p.add_argument("query", help="Drive search query")
    p.add_argument("--max-results", type=_bounded_int(1, 50), default=10,
                   help="Max results, 1-50 (default: 10)")
    p.set_defaults(func=cmd_drive_search)

    p = subparsers.add_parser("drive-read", help="Read a Drive file as text")
    p.add_argument("file_id", help="Drive file ID or URL")
    p.set_defaults(func=cmd_drive_read)

    p = subparsers.add_parser("sheets-read", help="Read spreadsheet cells")
    p.add_argument("spreadsheet_id", help="Spreadsheet ID or URL")
    p.add_argument("range", help='A1 notation range (e.g., "Sheet1!A1:D10")')
    p.set_defaults(func=cmd_sheets_read)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(LOG_LEVEL)
    try:
        print(args.func(args))
    except WorkspaceError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
