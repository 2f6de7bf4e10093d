from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from datetime import tzinfo

from ..models.filter_criteria import FilterCriteria
from ..models.packing_record import PackingRecord, PackingStatus
from ..sheets.coercion import parse_calendar_day
from .extractor import DEFAULT_COMPLETION_MARKER

"""Ad-hoc multi-field filtering of packing records.

Supplied criteria combine by AND; an omitted criterion always matches.
"""

__all__ = [
    "DEFAULT_TEXT_FIELDS",
    "filter_records",
    "paginate",
]

# product 条件の照合対象 (いずれかに部分一致すれば可)
DEFAULT_TEXT_FIELDS: tuple[str, ...] = ("seasoning_type", "manufacture_product")

Predicate = Callable[[PackingRecord], bool]


def _date_predicate(value: str, tz: tzinfo | None) -> Predicate:
    target = parse_calendar_day(value, tz)
    if target is None:
        # 解析不能な日付条件はどの行にも一致しない
        return lambda record: False
    return lambda record: parse_calendar_day(record.manufacture_date, tz) == target


def _text_predicate(value: str, text_fields: Sequence[str]) -> Predicate:
    needle = value.casefold()

    def match(record: PackingRecord) -> bool:
        return any(needle in str(getattr(record, name, "")).casefold() for name in text_fields)

    return match


def _status_predicate(value: str, completion_marker: str) -> Predicate:
    # 設定された完了マーカー (例: 済) も完了として扱う
    if value.strip() == completion_marker:
        wanted: PackingStatus | None = PackingStatus.COMPLETED
    else:
        wanted = PackingStatus.lookup(value)
    if wanted is None:
        return lambda record: False
    return lambda record: record.status is wanted


def _quantity_predicate(minimum: int | None, maximum: int | None) -> Predicate:
    low = minimum if minimum is not None else 0
    high = maximum if maximum is not None else math.inf
    return lambda record: low <= record.quantity <= high


def filter_records(
    records: Sequence[PackingRecord],
    criteria: FilterCriteria,
    *,
    tz: tzinfo | None = None,
    text_fields: Sequence[str] = DEFAULT_TEXT_FIELDS,
    completion_marker: str = DEFAULT_COMPLETION_MARKER,
) -> list[PackingRecord]:
    """Return the records matching every supplied criterion (order preserved).

    - date: manufacture_date falls on the same calendar day
    - product: case-folded substring of any of ``text_fields``
    - status: exact status (label "完了"/"未処理", member name or ``completion_marker``)
    - quantity_min / quantity_max: inclusive range, open ends [0, +inf)
    """
    predicates: list[Predicate] = []
    if criteria.date:
        predicates.append(_date_predicate(criteria.date, tz))
    if criteria.product:
        predicates.append(_text_predicate(criteria.product, text_fields))
    if criteria.status:
        predicates.append(_status_predicate(criteria.status, completion_marker))
    if criteria.quantity_min is not None or criteria.quantity_max is not None:
        predicates.append(_quantity_predicate(criteria.quantity_min, criteria.quantity_max))

    if not predicates:
        return list(records)
    return [r for r in records if all(p(r) for p in predicates)]


def paginate(
    records: Sequence[PackingRecord], limit: int | None = None, offset: int | None = None
) -> list[PackingRecord]:
    """Slice a result page. Missing / negative offset -> 0, missing limit -> all."""
    start = max(offset or 0, 0)
    if limit is None or limit < 0:
        return list(records[start:])
    return list(records[start:start + limit])
