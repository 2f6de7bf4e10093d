# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from packing.logging.init import reset_logging
from packing.sheets.columns import letter_to_index

HEADER = ["タイムスタンプ", "製造日", "C", "D", "E", "F", "味付け種類", "産地", "数量", "魚種"]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    # load_dotenv が os.environ へ書き込むため、既存値の有無にかかわらず復元対象に登録する
    monkeypatch.setenv("PACKING_CONFIG", "")
    monkeypatch.delenv("PACKING_CONFIG")


@pytest.fixture()
def sample_config_yaml() -> str:
    return """workbook: ./data/packing.xlsx
sheet_name: 修正用シート
timezone: Asia/Tokyo
completion_marker: 完了
default_user: system
storage_locations:
  - パレット①
  - パレット②
columns:
  packing_status: CF
  packing_location: CG
  packing_quantity: CH
  packing_date: CI
  packing_user: CJ
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "packing.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_row() -> Callable[..., list[str]]:
    """Build a raw row from column letters: make_row(A="2025/08/08", CF="完了")."""
    def _make(**cells: str) -> list[str]:
        width = max((letter_to_index(c) for c in cells), default=0)
        row = [""] * width
        for letter, value in cells.items():
            row[letter_to_index(letter) - 1] = value
        return row
    return _make


@pytest.fixture()
def make_workbook() -> Callable[[Path, dict[str, list[list[object]]]], Path]:
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet_name, rows in sheets.items():
                df = pd.DataFrame(rows)
                df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def packing_sheet_rows(make_row) -> list[list[str]]:
    """Header + four batches (one without timestamp) in the default layout."""
    return [
        HEADER,
        make_row(A="2025/08/08 9:00:00", B="2025/08/01", G="醤油", H="北海道", I="10", J="鮭",
                 AW="鮭の醤油漬け", CF="完了", CG="パレット①", CH="10",
                 CI="2025-08-09T10:00:00+09:00", CJ="田中"),
        make_row(A="2025/08/08 9:05:00", B="2025/08/02", G="味噌", H="青森", I="5", J="鯖",
                 AW="鯖の味噌漬け"),
        make_row(B="2025/08/02", G="塩", I="3"),
        make_row(A="2025/08/09 8:00:00", B="2025/08/02", G="塩麹", H="宮城", I="abc", J="鰆",
                 AW="鰆の塩麹漬け", CF="完了", CG="パレット②", CH="二箱",
                 CI="2025-08-08T10:00:00+09:00", CJ="佐藤"),
    ]
