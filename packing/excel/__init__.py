"""Local workbook collaborators (read rows / write cells) for the packing sheet."""

from .reader import ExcelRowSource, read_sheet_rows
from .writer import ExcelCellWriter

__all__ = [
    "ExcelRowSource",
    "ExcelCellWriter",
    "read_sheet_rows",
]
