from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from packing.models.column_layout import ColumnLayout
from packing.models.packing_record import PackingInfo, PackingRecord, PackingStatus
from packing.models.packing_stats import PackingStats
from packing.services.extractor import extract_records
from packing.services.stats import aggregate, format_stats, render_stats_line

TOKYO = ZoneInfo("Asia/Tokyo")


def _record(row: int, status: PackingStatus, packed_at: str = "") -> PackingRecord:
    return PackingRecord(
        row_index=row,
        timestamp="2025/08/08",
        manufacture_date="2025/08/01",
        seasoning_type="醤油",
        fish_type="鮭",
        origin="北海道",
        quantity=1,
        manufacture_product="",
        status=status,
        packing_info=PackingInfo(date=packed_at),
    )


def test_aggregate_empty():
    assert aggregate([], datetime(2025, 8, 9)) == PackingStats()


def test_aggregate_partitions_by_status():
    records = [
        _record(2, PackingStatus.COMPLETED, "2025-08-09T09:00:00"),
        _record(3, PackingStatus.PENDING),
        _record(4, PackingStatus.COMPLETED, "2025-08-08T09:00:00"),
        _record(5, PackingStatus.COMPLETED, "壊れた日付"),
    ]
    stats = aggregate(records, datetime(2025, 8, 9, 12, 0))
    assert stats.total == len(records)
    assert stats.pending + stats.completed == stats.total
    assert stats == PackingStats(total=4, pending=1, completed=3, today_completed=1)


def test_pending_with_today_date_is_not_counted():
    stats = aggregate([_record(2, PackingStatus.PENDING, "2025-08-09")], datetime(2025, 8, 9))
    assert stats.today_completed == 0


def test_today_is_decided_in_configured_zone():
    # 2025-08-08T16:00Z = 東京 8/9 01:00 (UTC では 8/8)
    records = [_record(2, PackingStatus.COMPLETED, "2025-08-08T16:00:00Z")]
    now = datetime(2025, 8, 9, 10, 0, tzinfo=TOKYO)
    assert aggregate(records, now, TOKYO).today_completed == 1
    assert aggregate(records, now.astimezone(timezone.utc), timezone.utc).today_completed == 0


def test_end_to_end_example_counts_today(packing_sheet_rows):
    result = extract_records(packing_sheet_rows, ColumnLayout.default(), tz=TOKYO)
    stats = aggregate(result.records, datetime(2025, 8, 9, 15, 0, tzinfo=TOKYO), TOKYO)
    assert stats == PackingStats(total=3, pending=1, completed=2, today_completed=1)


def test_render_stats_line():
    line = render_stats_line(PackingStats(total=5, pending=2, completed=3, today_completed=0))
    assert line == "SUMMARY total=5 pending=2 completed=3 today_completed=0"


def test_relative_date_word_is_not_counted_as_today():
    records = [_record(2, PackingStatus.COMPLETED, "now"), _record(3, PackingStatus.COMPLETED, "today")]
    stats = aggregate(records, datetime.now(TOKYO), TOKYO)
    assert stats.completed == 2
    assert stats.today_completed == 0


def test_format_stats_is_line_without_label():
    stats = PackingStats(total=5, pending=2, completed=3, today_completed=0)
    assert format_stats(stats) == "total=5 pending=2 completed=3 today_completed=0"
    assert render_stats_line(stats) == f"SUMMARY {format_stats(stats)}"
