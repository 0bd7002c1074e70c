"""Spreadsheet codec: xlsx bytes to header list and records, and back."""

import io
from typing import Iterable, List, Optional, Tuple

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from record_store.exceptions import ParseError, ValidationError
from record_store.models.record import Record
from utils.logging import logger

SHEET_NAME = "Sheet1"
FORMULA_PREFIX = "="


def _cell(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def _column_order(records: Iterable[Record]) -> List[str]:
    """Field names in first-seen order across all records."""
    columns: List[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    return columns


def decode(data: bytes) -> Tuple[List[str], List[Record]]:
    """Parse the first sheet of an xlsx document.

    Row 0 is the header; every following row is zipped positionally against it.
    Missing cells become empty strings and every value is returned as a string.

    Raises:
        ParseError: If the bytes are not a readable workbook or the sheet has no rows
    """
    try:
        df = pd.read_excel(
            io.BytesIO(data),
            sheet_name=0,
            header=None,
            dtype=str,
            keep_default_na=False,
            engine="openpyxl",
        )
    except Exception as e:
        raise ParseError(f"Failed to read spreadsheet: {str(e)}") from e

    if df.empty:
        raise ParseError("The sheet is empty or has invalid data.")

    rows = [[_cell(value) for value in row] for row in df.itertuples(index=False, name=None)]

    headers = list(rows[0])
    # Blank trailing header cells are padding, not columns
    while headers and headers[-1] == "":
        headers.pop()

    records = []
    for row in rows[1:]:
        records.append({key: (row[index] if index < len(row) else "") for index, key in enumerate(headers)})

    logger.debug(f"Decoded sheet with {len(headers)} columns and {len(records)} records")
    return headers, records


def _check_storable(columns: List[str], rows: List[list]) -> None:
    """Reject control characters that the xlsx XML cannot hold."""
    for key in columns:
        if isinstance(key, str) and ILLEGAL_CHARACTERS_RE.search(key):
            raise ValidationError(f"Field name {key!r} contains characters that cannot be stored in a spreadsheet")
    for row in rows:
        for key, value in zip(columns, row):
            if isinstance(value, str) and ILLEGAL_CHARACTERS_RE.search(value):
                raise ValidationError(f"Field '{key}' contains characters that cannot be stored in a spreadsheet")


def _keep_as_text(worksheet) -> None:
    """Store values starting with '=' as text; openpyxl would otherwise write them as formulas."""
    for row in worksheet.iter_rows():
        for cell in row:
            if isinstance(cell.value, str) and cell.value.startswith(FORMULA_PREFIX):
                cell.data_type = "s"


def encode(records: List[Record], headers: Optional[List[str]] = None) -> bytes:
    """Serialize records to a single-sheet xlsx document.

    Columns follow ``headers`` when given, otherwise the records' keys in first-seen order.
    Every value is written as a literal, so formula-looking strings read back unchanged.

    Raises:
        ValidationError: If a field name or value contains an XML-illegal control character
    """
    columns = list(headers) if headers is not None else _column_order(records)
    rows = [[record.get(key, "") for key in columns] for record in records]
    _check_storable(columns, rows)
    df = pd.DataFrame(rows, columns=columns, dtype=object)

    xlsx_buffer = io.BytesIO()
    with pd.ExcelWriter(xlsx_buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        _keep_as_text(writer.sheets[SHEET_NAME])

    content = xlsx_buffer.getvalue()
    logger.debug(f"Encoded {len(records)} records into {len(content)} bytes")
    return content
