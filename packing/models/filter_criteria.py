from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""FilterCriteria model for packing record search.

Each criterion is independently optional. ``None`` and ``""`` both mean
"not supplied"; the request boundary may hand over either.
"""

__all__ = [
    "FilterCriteria",
]


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _optional_text(value: Any) -> str | None:
    return None if _blank(value) else str(value).strip()


def _optional_int(value: Any) -> int | None:
    """Numeric query value; unparseable is treated as not supplied."""
    if _blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class FilterCriteria:
    date: str | None = None  # 製造日 (暦日一致)
    product: str | None = None  # 味付け種類 / 製造商品 の部分一致
    status: str | None = None  # 未処理 | 完了
    quantity_min: int | None = None
    quantity_max: int | None = None
    # 検索結果のページング
    limit: int | None = None
    offset: int | None = None

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> FilterCriteria:
        """Build criteria from request-style parameters.

        Accepts both snake_case and the camelCase names used by the web
        front end (``quantityMin`` / ``quantityMax``).
        """
        def pick(*names: str) -> Any:
            for name in names:
                value = query.get(name)
                if not _blank(value):
                    return value
            return None

        return cls(
            date=_optional_text(pick("date")),
            product=_optional_text(pick("product")),
            status=_optional_text(pick("status")),
            quantity_min=_optional_int(pick("quantity_min", "quantityMin")),
            quantity_max=_optional_int(pick("quantity_max", "quantityMax")),
            limit=_optional_int(pick("limit")),
            offset=_optional_int(pick("offset")),
        )
