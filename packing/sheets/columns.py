from __future__ import annotations

import re

"""Spreadsheet column letter <-> column number conversion.

列文字 (A, B, ..., Z, AA, ...) は 1 始まりの列番号に対応する。
配列オフセットが必要な呼び出し側は 1 を引くこと。

Input validation happens once at the configuration boundary via
``is_column_letter``; the conversions themselves assume well-formed input.
"""

__all__ = [
    "letter_to_index",
    "index_to_letter",
    "is_column_letter",
]

_LETTER_RE = re.compile(r"^[A-Z]+$")


def letter_to_index(letter: str) -> int:
    """Convert a column letter to its 1-based column number.

    >>> letter_to_index("A"), letter_to_index("Z"), letter_to_index("AA"), letter_to_index("CF")
    (1, 26, 27, 84)
    """
    column = 0
    for ch in letter:
        column = column * 26 + (ord(ch) - ord("A") + 1)
    return column


def index_to_letter(number: int) -> str:
    """Convert a 1-based column number back to its column letter.

    >>> index_to_letter(1), index_to_letter(27), index_to_letter(88)
    ('A', 'AA', 'CJ')
    """
    if number < 1:
        raise ValueError(f"column number must be >= 1: {number}")
    letters = []
    while number > 0:
        number, rem = divmod(number - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def is_column_letter(text: object) -> bool:
    return isinstance(text, str) and bool(_LETTER_RE.match(text))
