from __future__ import annotations

import logging
import zipfile
from collections.abc import Sequence
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..models.cell_write import CellWrite, WriteResult

"""Workbook-backed cell writer.

All writes of a batch are applied to the in-memory workbook and saved once,
so a batch either lands completely or not at all. Styles and other sheets
are preserved by openpyxl.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ExcelCellWriter",
]


class ExcelCellWriter:
    """CellWriter implementation over a local .xlsx workbook."""

    def __init__(self, path: Path, sheet_name: str) -> None:
        self.path = Path(path)
        self.sheet_name = sheet_name

    def write_cells(self, writes: Sequence[CellWrite]) -> WriteResult:
        addresses = [w.address for w in writes]
        if not writes:
            return WriteResult(success=True)
        try:
            wb = load_workbook(self.path)
        except (OSError, zipfile.BadZipFile, InvalidFileException) as e:
            return WriteResult(
                success=False, failed=addresses, message=f"failed to open workbook {self.path}: {e}"
            )
        try:
            if self.sheet_name not in wb.sheetnames:
                return WriteResult(
                    success=False,
                    failed=addresses,
                    message=f"sheet '{self.sheet_name}' not found in {self.path.name}",
                )
            ws = wb[self.sheet_name]
            for w in writes:
                ws[w.address].value = w.value
            try:
                wb.save(self.path)
            except OSError as e:
                return WriteResult(
                    success=False, failed=addresses, message=f"failed to save workbook: {e}"
                )
        finally:
            wb.close()
        logger.debug(f"write: {self.sheet_name}!{','.join(addresses)}")
        return WriteResult(success=True, written=addresses)
