from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..sheets.columns import index_to_letter, is_column_letter, letter_to_index

"""ColumnLayout domain model.

A layout maps logical field names to 0-based column indices for one schema
version of the packing sheet. The sheet has been extended over time (rows of
83-88 cells are observed side by side), so the layout is passed into
extraction explicitly instead of being baked into offsets.
"""

__all__ = [
    "TIMESTAMP",
    "MANUFACTURE_DATE",
    "SEASONING_TYPE",
    "FISH_TYPE",
    "ORIGIN",
    "QUANTITY",
    "MANUFACTURE_PRODUCT",
    "PACKING_STATUS",
    "PACKING_LOCATION",
    "PACKING_QUANTITY",
    "PACKING_DATE",
    "PACKING_USER",
    "LOGICAL_FIELDS",
    "PACKING_WRITE_FIELDS",
    "DEFAULT_COLUMN_LETTERS",
    "LayoutError",
    "ColumnLayout",
]

TIMESTAMP = "timestamp"
MANUFACTURE_DATE = "manufacture_date"
SEASONING_TYPE = "seasoning_type"  # 味付け種類
FISH_TYPE = "fish_type"  # 魚種
ORIGIN = "origin"  # 産地
QUANTITY = "quantity"  # 数量
MANUFACTURE_PRODUCT = "manufacture_product"  # 製造商品
PACKING_STATUS = "packing_status"  # 梱包ステータス
PACKING_LOCATION = "packing_location"  # 保管場所
PACKING_QUANTITY = "packing_quantity"  # 保管数量
PACKING_DATE = "packing_date"  # 梱包日時
PACKING_USER = "packing_user"  # 梱包担当者

LOGICAL_FIELDS: tuple[str, ...] = (
    TIMESTAMP,
    MANUFACTURE_DATE,
    SEASONING_TYPE,
    FISH_TYPE,
    ORIGIN,
    QUANTITY,
    MANUFACTURE_PRODUCT,
    PACKING_STATUS,
    PACKING_LOCATION,
    PACKING_QUANTITY,
    PACKING_DATE,
    PACKING_USER,
)

# 更新時に書き込む列 (この順序で書き込み計画を生成する)
PACKING_WRITE_FIELDS: tuple[str, ...] = (
    PACKING_STATUS,
    PACKING_LOCATION,
    PACKING_QUANTITY,
    PACKING_DATE,
    PACKING_USER,
)

DEFAULT_COLUMN_LETTERS: Mapping[str, str] = MappingProxyType({
    TIMESTAMP: "A",
    MANUFACTURE_DATE: "B",
    SEASONING_TYPE: "G",
    ORIGIN: "H",
    QUANTITY: "I",
    FISH_TYPE: "J",
    MANUFACTURE_PRODUCT: "AW",
    PACKING_STATUS: "CF",
    PACKING_LOCATION: "CG",
    PACKING_QUANTITY: "CH",
    PACKING_DATE: "CI",
    PACKING_USER: "CJ",
})


class LayoutError(ValueError):
    """Raised when a column layout is malformed (unknown field, bad or duplicate address)."""


@dataclass(frozen=True)
class ColumnLayout:
    """Immutable logical field -> 0-based column index mapping.

    Fields that are not part of the layout read as empty cells.
    """
    columns: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.columns) - set(LOGICAL_FIELDS)
        if unknown:
            raise LayoutError(f"unknown layout fields: {sorted(unknown)}")
        seen: dict[int, str] = {}
        for name, idx in self.columns.items():
            if isinstance(idx, bool) or not isinstance(idx, int) or idx < 0:
                raise LayoutError(f"invalid column index for '{name}': {idx!r}")
            if idx in seen:
                raise LayoutError(
                    f"duplicate column address {index_to_letter(idx + 1)} "
                    f"for '{seen[idx]}' and '{name}'"
                )
            seen[idx] = name
        # 生成後の変更を防ぐため読み取り専用ビューに差し替える
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    @classmethod
    def from_indices(cls, mapping: Mapping[str, int]) -> ColumnLayout:
        return cls(columns=dict(mapping))

    @classmethod
    def from_letters(cls, mapping: Mapping[str, str]) -> ColumnLayout:
        """Build a layout from spreadsheet column letters (e.g. ``{"packing_status": "CF"}``)."""
        indices: dict[str, int] = {}
        for name, letter in mapping.items():
            if not is_column_letter(letter):
                raise LayoutError(f"invalid column letter for '{name}': {letter!r}")
            indices[name] = letter_to_index(letter) - 1
        return cls(columns=indices)

    @classmethod
    def default(cls) -> ColumnLayout:
        return cls.from_letters(DEFAULT_COLUMN_LETTERS)

    @classmethod
    def from_header(cls, header_row: Sequence[Any], labels: Mapping[str, str]) -> ColumnLayout:
        """Resolve each field by its header label text in the sheet's first row.

        Parameters
        ----------
        header_row: 1行目 (ヘッダ) のセル値
        labels: logical field -> header label (e.g. ``{"packing_status": "梱包ステータス"}``)
        """
        positions: dict[str, int] = {}
        for idx, cell in enumerate(header_row):
            text = "" if cell is None else str(cell).strip()
            # 同名ヘッダは先頭を採用
            if text and text not in positions:
                positions[text] = idx
        missing = [name for name, label in labels.items() if label not in positions]
        if missing:
            raise LayoutError(f"header labels not found for fields: {missing}")
        return cls(columns={name: positions[label] for name, label in labels.items()})

    def __contains__(self, name: object) -> bool:
        return name in self.columns

    def index_of(self, name: str) -> int | None:
        return self.columns.get(name)

    def letter_of(self, name: str) -> str:
        idx = self.columns.get(name)
        if idx is None:
            raise LayoutError(f"layout has no column for '{name}'")
        return index_to_letter(idx + 1)

    def cell(self, row: Sequence[Any], name: str) -> Any:
        """Positional lookup; indices beyond the row's length read as ""."""
        idx = self.columns.get(name)
        if idx is None or idx >= len(row):
            return ""
        value = row[idx]
        return "" if value is None else value
