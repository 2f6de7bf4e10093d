from __future__ import annotations

import re

from packing.models.packing_stats import PackingStats
from packing.services.stats import render_stats_line

"""SUMMARY 行フォーマット契約テスト (統計行)."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+total=([0-9]+)\s+pending=([0-9]+)\s+completed=([0-9]+)\s+today_completed=([0-9]+)$"
)


def test_summary_pattern_example_line():
    assert SUMMARY_PATTERN.match("SUMMARY total=4 pending=1 completed=3 today_completed=2")


def test_rendered_line_matches_contract():
    line = render_stats_line(PackingStats(total=10, pending=4, completed=6, today_completed=2))
    m = SUMMARY_PATTERN.match(line)
    assert m
    total, pending, completed, today = (int(g) for g in m.groups())
    assert pending + completed == total
    assert today <= completed
