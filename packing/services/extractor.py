from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Any

from ..models.column_layout import (
    FISH_TYPE,
    MANUFACTURE_DATE,
    MANUFACTURE_PRODUCT,
    ORIGIN,
    PACKING_DATE,
    PACKING_LOCATION,
    PACKING_QUANTITY,
    PACKING_STATUS,
    PACKING_USER,
    QUANTITY,
    SEASONING_TYPE,
    TIMESTAMP,
    ColumnLayout,
)
from ..models.packing_record import PackingInfo, PackingRecord, PackingStatus
from ..sheets.coercion import cell_text, coerce_quantity, normalize_date, parse_calendar_day

"""Row -> PackingRecord extraction.

Steps per row:
1. Skip rows whose timestamp cell is empty (not a batch entry)
2. Positional lookup through the ColumnLayout (short rows read as "")
3. quantity -> int (fallback 0)
4. timestamp / manufacture_date -> YYYY/MM/DD (unparseable kept as-is)
5. status from the status cell vs. the completion marker

Extraction never raises for cell contents: one malformed cell must not
abort the whole table.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_COMPLETION_MARKER",
    "ExtractionResult",
    "extract_record",
    "extract_records",
]

DEFAULT_COMPLETION_MARKER = PackingStatus.COMPLETED.value


@dataclass(frozen=True)
class ExtractionResult:
    records: list[PackingRecord] = field(default_factory=list)
    skipped_rows: int = 0  # タイムスタンプ空・製造日基準外でスキップした行数


def _text(row: Sequence[Any], layout: ColumnLayout, name: str) -> str:
    return cell_text(layout.cell(row, name))


def extract_record(
    row: Sequence[Any],
    position: int,
    layout: ColumnLayout,
    *,
    completion_marker: str = DEFAULT_COMPLETION_MARKER,
    tz: tzinfo | None = None,
) -> PackingRecord | None:
    """Map one raw row to a PackingRecord, or None when the row is skipped.

    Parameters
    ----------
    row: 生の行データ (セル値のシーケンス)
    position: 取得データ内の位置 (ヘッダ行=0)。row_index は position + 1
    layout: 論理フィールド -> 列インデックス
    completion_marker: ステータス列がこの文字列と一致すれば完了
    tz: 日付正規化に用いるタイムゾーン
    """
    raw_timestamp = _text(row, layout, TIMESTAMP)
    if not raw_timestamp.strip():
        return None

    is_completed = _text(row, layout, PACKING_STATUS) == completion_marker
    return PackingRecord(
        row_index=position + 1,
        timestamp=normalize_date(raw_timestamp, tz),
        manufacture_date=normalize_date(layout.cell(row, MANUFACTURE_DATE), tz),
        seasoning_type=_text(row, layout, SEASONING_TYPE),
        fish_type=_text(row, layout, FISH_TYPE),
        origin=_text(row, layout, ORIGIN),
        quantity=coerce_quantity(layout.cell(row, QUANTITY)),
        manufacture_product=_text(row, layout, MANUFACTURE_PRODUCT),
        status=PackingStatus.COMPLETED if is_completed else PackingStatus.PENDING,
        packing_info=PackingInfo(
            location=_text(row, layout, PACKING_LOCATION),
            quantity=_text(row, layout, PACKING_QUANTITY),
            date=_text(row, layout, PACKING_DATE),
            user=_text(row, layout, PACKING_USER),
        ),
    )


def _before_cutoff(record: PackingRecord, cutoff: date | None, tz: tzinfo | None) -> bool:
    if cutoff is None:
        return False
    day = parse_calendar_day(record.manufacture_date, tz)
    # 製造日が解析できない行は除外しない
    return day is not None and day < cutoff


def extract_records(
    rows: Sequence[Sequence[Any]],
    layout: ColumnLayout,
    *,
    completion_marker: str = DEFAULT_COMPLETION_MARKER,
    tz: tzinfo | None = None,
    manufacture_date_from: date | None = None,
) -> ExtractionResult:
    """Extract every data row (position >= 1) of a sheet block.

    The header row at position 0 is never extracted. An empty block gives an
    empty result.
    """
    records: list[PackingRecord] = []
    skipped = 0
    for position in range(1, len(rows)):
        record = extract_record(
            rows[position], position, layout, completion_marker=completion_marker, tz=tz
        )
        if record is None or _before_cutoff(record, manufacture_date_from, tz):
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.debug(f"extract: skipped {skipped} of {max(len(rows) - 1, 0)} rows")
    return ExtractionResult(records=records, skipped_rows=skipped)
