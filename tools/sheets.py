"""
Sheets tools — read and write A1 ranges.
"""

from adapters.sheets import read_values, write_values, ValueInputOption
from tools.common import to_json, resolve_file_id


def do_sheets_read(spreadsheet_id: str, range: str) -> str:
    """Cell values in range; values is [] for an empty range."""
    result = read_values(resolve_file_id(spreadsheet_id), range)
    return to_json(result.to_dict())


def do_sheets_write(
    spreadsheet_id: str,
    range: str,
    values: list[list[str]],
    value_input_option: ValueInputOption = "USER_ENTERED",
) -> str:
    """Write rows of values starting at range."""
    update = write_values(resolve_file_id(spreadsheet_id), range, values, value_input_option)
    return to_json(update.to_dict(), pretty=False)
