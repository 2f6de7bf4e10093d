from __future__ import annotations

import re
import warnings
from datetime import date, datetime, tzinfo
from typing import Any

import pandas as pd

"""Cell value coercion with documented fallbacks.

A malformed cell never aborts extraction of the whole table. Each function
below resolves a bad value locally:

- ``coerce_quantity``: unparseable / negative -> 0
- ``parse_datetime`` / ``parse_calendar_day``: unparseable -> None
- ``normalize_date``: empty -> "", unparseable -> raw string unchanged

Date strings are parsed with pandas so that the formats a spreadsheet export
produces ("2025/08/08", "2025-08-08 10:00:00", "2025-08-09T00:00:00Z") are all
accepted.
"""

__all__ = [
    "DISPLAY_DATE_FORMAT",
    "cell_text",
    "coerce_quantity",
    "parse_datetime",
    "parse_calendar_day",
    "normalize_date",
]

DISPLAY_DATE_FORMAT = "%Y/%m/%d"

# parseInt 互換: 先頭の符号付き整数部分のみ採用 ("10個" -> 10)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# pandas が現在時刻として解釈する相対指定。セル値としては日付扱いしない
_RELATIVE_DATE_TOKENS = frozenset({"now", "today"})


def cell_text(value: Any) -> str:
    """Return a cell value as text; None / NaN become ""."""
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    return str(value)


def coerce_quantity(raw: Any) -> int:
    """Parse a quantity cell. Fallback: 0."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(raw, 0)
    if isinstance(raw, float):
        if pd.isna(raw):
            return 0
        return max(int(raw), 0)
    m = _LEADING_INT_RE.match(cell_text(raw))
    if m is None:
        return 0
    return max(int(m.group(1)), 0)


def parse_datetime(raw: Any, tz: tzinfo | None = None) -> datetime | None:
    """Parse a date-like cell value. Fallback: None.

    Timezone-aware values are converted to ``tz`` when it is given; naive
    values are taken as already being local wall-clock time.
    """
    if isinstance(raw, datetime):
        ts: Any = pd.Timestamp(raw)
    elif isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    else:
        text = cell_text(raw).strip()
        if not text or text.casefold() in _RELATIVE_DATE_TOKENS:
            return None
        try:
            with warnings.catch_warnings():
                # 形式推定不可の UserWarning は抑止 (失敗は例外で検知する)
                warnings.simplefilter("ignore", UserWarning)
                ts = pd.to_datetime(text)
        except (ValueError, TypeError, OverflowError):
            return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None and tz is not None:
        ts = ts.tz_convert(tz)
    return ts.to_pydatetime()


def parse_calendar_day(raw: Any, tz: tzinfo | None = None) -> date | None:
    parsed = parse_datetime(raw, tz)
    return parsed.date() if parsed is not None else None


def normalize_date(raw: Any, tz: tzinfo | None = None) -> str:
    """Normalize a date cell to ``YYYY/MM/DD``.

    Empty input gives "", an unparseable value is passed through as its raw
    text so the operator still sees what was entered.
    """
    text = cell_text(raw)
    if not text.strip():
        return ""
    day = parse_calendar_day(raw, tz)
    if day is None:
        return text
    return day.strftime(DISPLAY_DATE_FORMAT)
