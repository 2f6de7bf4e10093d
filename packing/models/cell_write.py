from __future__ import annotations

from dataclasses import dataclass, field

"""Update payload and cell write models.

An update request is projected onto a fixed set of single-cell writes which
the write collaborator applies as one batch.
"""

__all__ = [
    "UpdatePayload",
    "CellWrite",
    "WriteResult",
]


@dataclass(frozen=True)
class UpdatePayload:
    location: str  # 保管場所 (必須)
    quantity: str  # 保管数量 (必須、入力値のまま)
    user: str | None = None  # 省略時は既定ユーザー


@dataclass(frozen=True)
class CellWrite:
    field_name: str  # logical field name
    column: str  # column letter (e.g. "CF")
    row: int  # 1-based sheet row
    value: str

    @property
    def address(self) -> str:
        """A1 notation (e.g. ``CF5``)."""
        return f"{self.column}{self.row}"

    def range_name(self, sheet_name: str) -> str:
        return f"{sheet_name}!{self.address}"


@dataclass(frozen=True)
class WriteResult:
    """Outcome reported by a write collaborator.

    ``written`` lists the addresses that were applied, so a partial failure
    is reported explicitly instead of being left for the caller to discover.
    """
    success: bool
    written: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    message: str | None = None
