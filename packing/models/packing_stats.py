from __future__ import annotations

from dataclasses import asdict, dataclass

"""PackingStats aggregate model.

Recomputed from scratch on every extraction / filter pass.
"""

__all__ = [
    "PackingStats",
]


@dataclass(frozen=True)
class PackingStats:
    total: int = 0
    pending: int = 0
    completed: int = 0
    today_completed: int = 0  # 本日梱包完了分

    def to_dict(self) -> dict[str, int]:
        return asdict(self)
