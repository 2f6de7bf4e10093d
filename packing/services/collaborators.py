from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..models.cell_write import CellWrite, WriteResult

"""Interfaces to the storage backend holding the packing sheet.

The core reads rows and writes cells only through these two protocols.
Retry / timeout policy belongs to the implementations, not to the core.
"""

__all__ = [
    "RowSource",
    "CellWriter",
    "CollaboratorError",
]


class CollaboratorError(Exception):
    """Read or write collaborator failure (I/O, auth, quota ...).

    ``written`` holds the addresses already applied when a batch write
    failed part way, so the caller is never left guessing.
    """

    def __init__(self, message: str, written: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.written = list(written)


class RowSource(Protocol):
    def read_rows(self) -> list[list[str]]:
        """Return the full block of cell values, header row at position 0.

        An empty sheet returns ``[]``.
        """
        ...


class CellWriter(Protocol):
    def write_cells(self, writes: Sequence[CellWrite]) -> WriteResult:
        """Apply a batch of single-cell writes, reporting what was applied."""
        ...
