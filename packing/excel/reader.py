from __future__ import annotations

import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..services.collaborators import CollaboratorError

"""Workbook-backed row source.

The packing sheet is read raw (no header conversion) so that positions
match spreadsheet columns exactly: row 0 is the header row, column 0 is A.
Cells come back as text the way a hosted sheet returns formatted values:
empty cells are "", trailing empty cells and trailing empty rows are trimmed.
"""

__all__ = [
    "ExcelRowSource",
    "read_sheet_rows",
]

_READ_ERRORS = (OSError, ValueError, KeyError, zipfile.BadZipFile, InvalidFileException)


def _cell_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        # Excel の整数は float で返るため "10.0" -> "10"
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (datetime, date)):
        if pd.isna(value):  # NaT
            return ""
        return str(value)
    return str(value)


def _trim(cells: list[str]) -> list[str]:
    end = len(cells)
    while end > 0 and cells[end - 1] == "":
        end -= 1
    return cells[:end]


def read_sheet_rows(path: Path, sheet_name: str) -> list[list[str]]:
    """Read one sheet as a ragged list of text rows (header row first).

    Raises:
        CollaboratorError: workbook missing / unreadable or sheet not found
    """
    try:
        with pd.ExcelFile(path) as xls:
            if sheet_name not in xls.sheet_names:
                raise CollaboratorError(f"sheet '{sheet_name}' not found in {path.name}")
            df = xls.parse(sheet_name, header=None, keep_default_na=False, na_values=[])
    except CollaboratorError:
        raise
    except _READ_ERRORS as e:
        raise CollaboratorError(f"failed to read workbook {path}: {e}") from e

    rows = [_trim([_cell_to_text(v) for v in raw]) for raw in df.itertuples(index=False, name=None)]
    while rows and not rows[-1]:
        rows.pop()
    return rows


class ExcelRowSource:
    """RowSource implementation over a local .xlsx workbook."""

    def __init__(self, path: Path, sheet_name: str) -> None:
        self.path = Path(path)
        self.sheet_name = sheet_name

    def read_rows(self) -> list[list[str]]:
        return read_sheet_rows(self.path, self.sheet_name)
