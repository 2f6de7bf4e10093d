from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, tzinfo

from ..models.packing_record import PackingRecord, PackingStatus
from ..models.packing_stats import PackingStats
from ..sheets.coercion import parse_calendar_day

"""Status roll-up and SUMMARY line rendering for packing records."""

__all__ = [
    "aggregate",
    "format_stats",
    "render_stats_line",
]


def aggregate(
    records: Iterable[PackingRecord], now: datetime, tz: tzinfo | None = None
) -> PackingStats:
    """Roll records up into PackingStats in a single pass.

    Args:
        records: Records to count
        now: Reference time deciding what "today" is (injected for determinism)
        tz: Zone in which calendar days are compared. Aware ``now`` values are
            converted to it; naive values are used as-is

    A completed record whose packing date cannot be parsed is simply not
    counted as completed today.
    """
    reference = now.astimezone(tz) if tz is not None and now.tzinfo is not None else now
    today = reference.date()

    total = pending = completed = today_completed = 0
    for record in records:
        total += 1
        if record.status is PackingStatus.COMPLETED:
            completed += 1
            if parse_calendar_day(record.packing_info.date, tz) == today:
                today_completed += 1
        else:
            pending += 1
    return PackingStats(
        total=total,
        pending=pending,
        completed=completed,
        today_completed=today_completed,
    )


def format_stats(stats: PackingStats) -> str:
    """Stats as ``key=value`` pairs; the SUMMARY label is added by the log formatter."""
    return (
        f"total={stats.total} "
        f"pending={stats.pending} "
        f"completed={stats.completed} "
        f"today_completed={stats.today_completed}"
    )


def render_stats_line(stats: PackingStats) -> str:
    """Render the full SUMMARY line for a stats object.

    >>> render_stats_line(PackingStats(total=3, pending=1, completed=2, today_completed=1))
    'SUMMARY total=3 pending=1 completed=2 today_completed=1'
    """
    return f"SUMMARY {format_stats(stats)}"
