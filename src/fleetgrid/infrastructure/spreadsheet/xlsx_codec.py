"""Workbook codec built on openpyxl.

Converts between an uploaded workbook buffer and a plain 2-D grid of cell
values. Only the first worksheet is read.
"""

from io import BytesIO
from typing import Any, Sequence
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from fleetgrid.core.logging import get_logger
from fleetgrid.domain.exceptions import ValidationError

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
INVALID_WORKBOOK = "Invalid Excel file"

# Read-only workbooks parse sheet XML lazily, so malformed XML (a SyntaxError
# subclass) surfaces while iterating rows rather than on open.
_READ_ERRORS = (
    BadZipFile,
    InvalidFileException,
    KeyError,
    OSError,
    ValueError,
    TypeError,
    SyntaxError,
)


def decode_first_sheet(content: bytes) -> list[list[Any]]:
    """Read every row of the first worksheet as a list of raw cell values.

    Raises:
        ValidationError: If the buffer is not a readable workbook.
    """
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except _READ_ERRORS as e:
        logger.info("Workbook could not be opened", error=str(e))
        raise ValidationError(INVALID_WORKBOOK) from e

    try:
        if not workbook.sheetnames:
            return []
        sheet = workbook[workbook.sheetnames[0]]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    except _READ_ERRORS as e:
        logger.info("Workbook could not be read", error=str(e))
        raise ValidationError(INVALID_WORKBOOK) from e
    finally:
        workbook.close()


def encode_grid(grid: Sequence[Sequence[Any]], sheet_name: str = "Sheet1") -> bytes:
    """Write ``grid`` to a single-sheet workbook and return its bytes.

    Empty strings are written as empty text cells, so blank rows keep their
    place and are read back.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    for row in grid:
        sheet.append(list(row))

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
