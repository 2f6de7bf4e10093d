from __future__ import annotations
from pathlib import Path

from openpyxl import load_workbook

from packing.excel.writer import ExcelCellWriter
from packing.models.cell_write import CellWrite


def _writes(row: int) -> list[CellWrite]:
    return [
        CellWrite(field_name="packing_status", column="CF", row=row, value="完了"),
        CellWrite(field_name="packing_location", column="CG", row=row, value="パレット①"),
    ]


def test_write_cells_applies_batch(tmp_path: Path, make_workbook):
    book = make_workbook(tmp_path / "b.xlsx", {"S": [["ts"], ["2025/08/08"]], "Keep": [["k"]]})
    result = ExcelCellWriter(book, "S").write_cells(_writes(2))
    assert result.success
    assert result.written == ["CF2", "CG2"]
    wb = load_workbook(book)
    assert wb["S"]["CF2"].value == "完了"
    assert wb["S"]["CG2"].value == "パレット①"
    assert wb["Keep"]["A1"].value == "k"


def test_write_cells_missing_sheet_reports_failure(tmp_path: Path, make_workbook):
    book = make_workbook(tmp_path / "b.xlsx", {"S": [["ts"]]})
    result = ExcelCellWriter(book, "修正用シート").write_cells(_writes(2))
    assert not result.success
    assert result.written == []
    assert result.failed == ["CF2", "CG2"]
    assert "not found" in result.message


def test_write_cells_missing_workbook_reports_failure(tmp_path: Path):
    result = ExcelCellWriter(tmp_path / "nope.xlsx", "S").write_cells(_writes(2))
    assert not result.success
    assert "failed to open workbook" in result.message


def test_write_cells_empty_batch(tmp_path: Path):
    assert ExcelCellWriter(tmp_path / "nope.xlsx", "S").write_cells([]).success
