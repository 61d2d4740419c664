"""
Sheets adapter — Google Sheets API wrapper.

Reads and writes cell values in A1-notation ranges.
"""

from typing import Any, Literal

from models import SheetValues, SheetUpdate, CellValue
from retry import with_retry
from logging_config import log_api_call, log_api_result
from adapters.services import get_sheets_service


ValueInputOption = Literal["RAW", "USER_ENTERED"]


def _parse_cell_value(value: Any) -> CellValue:
    """Convert API cell value to our CellValue type."""
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return value
    # API sometimes returns other types, convert to string
    return str(value)


@with_retry(max_attempts=3, delay_ms=1000)
def read_values(spreadsheet_id: str, range_a1: str) -> SheetValues:
    """
    Read cell values from a range.

    Args:
        spreadsheet_id: The spreadsheet ID
        range_a1: A1 notation, e.g. "Sheet1!A1:D10"

    Returns:
        SheetValues with the range the API resolved and rows of cells
        (empty list when the range holds no data)
    """
    service = get_sheets_service()

    log_api_call("sheets", "values.get", spreadsheetId=spreadsheet_id, range=range_a1)
    response = (
        service.spreadsheets()
        .values()
        .get(spreadsheetId=spreadsheet_id, range=range_a1)
        .execute()
    )

    rows = [[_parse_cell_value(v) for v in row] for row in response.get("values") or []]
    log_api_result("sheets", "values.get", len(rows))

    return SheetValues(range=response.get("range", range_a1), values=rows)


# values.update is idempotent
@with_retry(max_attempts=3, delay_ms=1000)
def write_values(
    spreadsheet_id: str,
    range_a1: str,
    values: list[list[str]],
    value_input_option: ValueInputOption = "USER_ENTERED",
) -> SheetUpdate:
    """
    Write rows of values starting at range_a1.

    Args:
        value_input_option: RAW stores strings literally; USER_ENTERED
            parses formulas, numbers and dates as if typed in the UI.
    """
    service = get_sheets_service()

    log_api_call(
        "sheets", "values.update",
        spreadsheetId=spreadsheet_id, range=range_a1,
        valueInputOption=value_input_option, rows=len(values),
    )
    response = (
        service.spreadsheets()
        .values()
        .update(
            spreadsheetId=spreadsheet_id,
            range=range_a1,
            valueInputOption=value_input_option,
            body={"values": values},
        )
        .execute()
    )

    return SheetUpdate(
        updated_range=response.get("updatedRange"),
        updated_cells=response.get("updatedCells"),
        updated_rows=response.get("updatedRows"),
        updated_columns=response.get("updatedColumns"),
    )
