"""Spreadsheet codec: workbook bytes to and from 2-D grids."""

from fleetgrid.infrastructure.spreadsheet.xlsx_codec import (
    XLSX_MEDIA_TYPE,
    decode_first_sheet,
    encode_grid,
)

__all__ = [
    "XLSX_MEDIA_TYPE",
    "decode_first_sheet",
    "encode_grid",
]
