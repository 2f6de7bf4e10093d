from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

"""PackingRecord domain model and PackingStatus enum.

One PackingRecord represents one manufactured batch (one sheet row). Records
are rebuilt from the sheet on every request and never cached.
"""

__all__ = [
    "PackingStatus",
    "PackingInfo",
    "PackingRecord",
]


class PackingStatus(Enum):
    """Completion status of a batch.

    Derived from the status cell on every extraction; never stored separately.

    - PENDING: 未処理
    - COMPLETED: 完了
    """
    PENDING = "未処理"
    COMPLETED = "完了"

    @classmethod
    def lookup(cls, value: Any) -> PackingStatus | None:
        """Resolve a label ("完了") or member name ("COMPLETED"). Unknown -> None."""
        if isinstance(value, PackingStatus):
            return value
        text = str(value).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        return None


@dataclass(frozen=True)
class PackingInfo:
    """Packing columns as entered by the operator (all text, "" when absent)."""
    location: str = ""
    quantity: str = ""  # 入力値そのまま (数値 quantity とは表記が異なる場合あり)
    date: str = ""
    user: str = ""


@dataclass(frozen=True)
class PackingRecord:
    row_index: int  # シート上の行番号 (ヘッダ=1行目、データは2行目から)
    timestamp: str  # YYYY/MM/DD
    manufacture_date: str  # YYYY/MM/DD (解析不能なら入力値のまま)
    seasoning_type: str
    fish_type: str
    origin: str
    quantity: int
    manufacture_product: str
    status: PackingStatus
    packing_info: PackingInfo = field(default_factory=PackingInfo)

    @property
    def is_completed(self) -> bool:
        return self.status is PackingStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data
