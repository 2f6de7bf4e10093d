from __future__ import annotations

from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from packing.config.loader import load_config
from packing.excel.reader import ExcelRowSource
from packing.excel.writer import ExcelCellWriter
from packing.models.cell_write import UpdatePayload
from packing.models.filter_criteria import FilterCriteria
from packing.models.packing_record import PackingStatus
from packing.services.packing_service import PackingService

"""Integration: workbook -> records -> search -> update -> re-read."""

NOW = datetime(2025, 8, 9, 15, 0, tzinfo=ZoneInfo("Asia/Tokyo"))


@pytest.fixture()
def service(write_config: Path, temp_workdir: Path, make_workbook, packing_sheet_rows) -> PackingService:
    cfg = load_config(write_config)
    make_workbook(cfg.workbook, {cfg.sheet_name: packing_sheet_rows, "集計": [["別シート"]]})
    return PackingService(
        cfg,
        ExcelRowSource(cfg.workbook, cfg.sheet_name),
        ExcelCellWriter(cfg.workbook, cfg.sheet_name),
        clock=lambda: NOW,
    )


def test_full_packing_flow(service: PackingService):
    before = service.extract_all()
    assert before.stats.total == 3
    assert before.stats.today_completed == 1
    pending = service.search(FilterCriteria(status="未処理"))
    assert [r.row_index for r in pending.records] == [3]

    target = pending.records[0]
    service.apply_update(target.row_index, UpdatePayload(location="パレット①", quantity="5"))

    after = service.extract_all()
    updated = next(r for r in after.records if r.row_index == target.row_index)
    assert updated.status is PackingStatus.COMPLETED
    assert updated.packing_info.location == "パレット①"
    assert updated.packing_info.quantity == "5"
    assert updated.packing_info.user == "system"
    assert after.stats.completed == 3
    assert after.stats.pending == 0
    assert after.stats.today_completed == 2
    # 他の行は変化しない
    assert [r for r in after.records if r.row_index != target.row_index] == [
        r for r in before.records if r.row_index != target.row_index
    ]


def test_reapplying_update_keeps_same_state(service: PackingService):
    payload = UpdatePayload(location="パレット②", quantity="2", user="田中")
    service.apply_update(2, payload)
    first = service.extract_all().records
    service.apply_update(2, payload)
    assert service.extract_all().records == first
