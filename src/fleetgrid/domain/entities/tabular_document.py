"""Tabular document entity.

A tabular document is an owned, spreadsheet-like table: an ordered list of
header labels plus a list of rows, each row a mapping from header label to a
string value. Headers are mutable at runtime, so rows carry no fixed schema.

All structural mutations live here as plain methods. Each returns whether the
document actually changed, so callers can skip persisting no-ops.
"""

import copy
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Sequence

from fleetgrid.domain.exceptions import ValidationError

Row = dict[str, str]

DOWNLOAD_EXTENSION = ".xlsx"
COPY_SUFFIX = " (Copy)"
UNTITLED_NAME = "Untitled Spreadsheet"

_UPLOAD_EXTENSION_RE = re.compile(r"\.(xlsx|xls)$", re.IGNORECASE)
_UNSAFE_FILENAME_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def stringify_cell(value: Any) -> str:
    """Normalize a raw spreadsheet cell to the string stored in a row.

    Numbers, dates and booleans from the source file are flattened to text so
    every cell is edited the same way afterwards.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def clean_name(value: Any) -> str:
    """Trim a display name, rejecting blanks."""
    name = str(value).strip() if value is not None else ""
    if not name:
        raise ValidationError("Name cannot be empty")
    return name


def clean_headers(value: Any) -> list[str]:
    """Validate a replacement header list.

    Headers must be a list of strings; entries are trimmed and blank entries
    dropped.
    """
    if not isinstance(value, list):
        raise ValidationError("Headers must be an array")
    if not all(isinstance(header, str) for header in value):
        raise ValidationError("Headers must be strings")
    return [header.strip() for header in value if header.strip()]


def clean_rows(value: Any) -> list[Row]:
    """Validate a replacement row list, coercing every value to a string."""
    if not isinstance(value, list):
        raise ValidationError("Rows must be an array")
    rows: list[Row] = []
    for row in value:
        if not isinstance(row, dict):
            raise ValidationError("Rows must be an array of objects")
        rows.append({str(key): stringify_cell(cell) for key, cell in row.items()})
    return rows


def name_from_filename(filename: str) -> str:
    """Derive a document name from an uploaded file name."""
    name = _UPLOAD_EXTENSION_RE.sub("", filename).strip()
    return name or UNTITLED_NAME


@dataclass
class TabularDocument:
    """A spreadsheet-like document.

    Attributes:
        name: Display name (trimmed, non-empty).
        headers: Ordered header labels.
        rows: Row records keyed by header label.
        id: Document ID once persisted.
        owner_id: ID of the owning account.
    """

    name: str
    headers: list[str]
    rows: list[Row] = field(default_factory=list)
    id: str | None = None
    owner_id: str | None = None

    def __post_init__(self) -> None:
        self.name = clean_name(self.name)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def download_filename(self) -> str:
        """File name suggested for downloads, restricted to ``[A-Za-z0-9._-]``."""
        return _UNSAFE_FILENAME_CHARS_RE.sub("_", f"{self.name}{DOWNLOAD_EXTENSION}")

    # Construction

    @classmethod
    def from_headers(
        cls, name: str, headers: Sequence[Any], owner_id: str | None = None
    ) -> "TabularDocument":
        """Create an empty document from a free-form header list.

        Non-string and blank headers are discarded.

        Raises:
            ValidationError: If no usable header remains.
        """
        cleaned = [h.strip() for h in headers if isinstance(h, str) and h.strip()]
        if not cleaned:
            raise ValidationError("At least one header required")
        return cls(name=name, headers=cleaned, rows=[], owner_id=owner_id)

    @classmethod
    def from_grid(
        cls, grid: Sequence[Sequence[Any]], name: str, owner_id: str | None = None
    ) -> "TabularDocument":
        """Build a document from a decoded sheet.

        Fully empty rows before the header row are skipped. The first
        non-empty row supplies the headers; each header keeps the column it
        came from, so a blank header cell does not shift the values of the
        columns after it. Every row after the header is kept, blank or not.

        Raises:
            ValidationError: If the sheet has no rows or no usable headers.
        """
        start = next(
            (
                index
                for index, row in enumerate(grid)
                if any(stringify_cell(cell) != "" for cell in row)
            ),
            None,
        )
        if start is None:
            raise ValidationError("Excel file is empty")

        header_row, *data_rows = [list(row) for row in grid[start:]]
        columns = [
            (index, label)
            for index, label in (
                (i, stringify_cell(cell).strip()) for i, cell in enumerate(header_row)
            )
            if label
        ]
        if not columns:
            raise ValidationError("No valid headers found")

        rows = [
            {
                label: stringify_cell(row[index]) if index < len(row) else ""
                for index, label in columns
            }
            for row in data_rows
        ]
        return cls(
            name=name,
            headers=[label for _, label in columns],
            rows=rows,
            owner_id=owner_id,
        )

    def duplicate(self, owner_id: str | None = None) -> "TabularDocument":
        """Return an unsaved, structurally independent copy."""
        return TabularDocument(
            name=f"{self.name}{COPY_SUFFIX}",
            headers=list(self.headers),
            rows=copy.deepcopy(self.rows),
            owner_id=owner_id if owner_id is not None else self.owner_id,
        )

    # Export

    def to_grid(self) -> list[list[str]]:
        """Header row followed by one row per record, missing cells as ''."""
        grid = [list(self.headers)]
        for row in self.rows:
            grid.append([row.get(header) or "" for header in self.headers])
        return grid

    # Mutations

    def rename_header(self, old: str, new: str) -> bool:
        """Rename a header and move every row's value to the new key.

        A blank new label or an unknown old label leaves the document as is.
        """
        new = new.strip() if isinstance(new, str) else ""
        if not new or old not in self.headers:
            return False
        if old == new:
            return False

        position = self.headers.index(old)
        self.headers[position] = new
        for row in self.rows:
            if old in row:
                row[new] = row.pop(old)
        return True

    def add_row(self) -> bool:
        self.rows.append({header: "" for header in self.headers})
        return True

    def delete_row(self, index: int) -> bool:
        """Delete a row by position; out-of-range indexes are ignored."""
        if index < 0 or index >= len(self.rows):
            return False
        del self.rows[index]
        return True

    def add_column(self) -> str:
        """Append an auto-named column, back-filled with empty values.

        Returns:
            The new header label.
        """
        label = f"Column {len(self.headers) + 1}"
        self.headers.append(label)
        for row in self.rows:
            row[label] = ""
        return label

    def delete_column(self, label: str) -> bool:
        """Remove a column and its values.

        The last remaining column is never removed.
        """
        if len(self.headers) <= 1 or label not in self.headers:
            return False
        self.headers.remove(label)
        for row in self.rows:
            row.pop(label, None)
        return True

    def edit_cell(self, row_index: int, header: str, value: Any) -> bool:
        """Set a single cell.

        Raises:
            ValidationError: If the row or header does not exist.
        """
        if row_index < 0 or row_index >= len(self.rows):
            raise ValidationError("Row index out of range")
        if header not in self.headers:
            raise ValidationError("Unknown header")
        text = stringify_cell(value)
        if self.rows[row_index].get(header) == text:
            return False
        self.rows[row_index][header] = text
        return True
