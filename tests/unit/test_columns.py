from __future__ import annotations

import pytest

from packing.sheets.columns import index_to_letter, is_column_letter, letter_to_index


@pytest.mark.parametrize(
    "letter, number",
    [("A", 1), ("Z", 26), ("AA", 27), ("AZ", 52), ("AW", 49), ("CF", 84), ("CJ", 88)],
)
def test_letter_to_index(letter: str, number: int):
    assert letter_to_index(letter) == number


@pytest.mark.parametrize("number", [1, 26, 27, 52, 84, 88, 702, 703])
def test_index_to_letter_inverts_letter_to_index(number: int):
    assert letter_to_index(index_to_letter(number)) == number


def test_index_to_letter_rejects_zero():
    with pytest.raises(ValueError):
        index_to_letter(0)


def test_status_column_offset_matches_zero_based_row_position():
    # CF 列は 0 始まり配列の 83 番目
    assert letter_to_index("CF") - 1 == 83


@pytest.mark.parametrize("text, ok", [("CF", True), ("A", True), ("cf", False), ("C1", False), ("", False), (None, False)])
def test_is_column_letter(text, ok: bool):
    assert is_column_letter(text) is ok
