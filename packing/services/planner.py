from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from ..models.cell_write import CellWrite, UpdatePayload
from ..models.column_layout import (
    PACKING_DATE,
    PACKING_LOCATION,
    PACKING_QUANTITY,
    PACKING_STATUS,
    PACKING_USER,
    ColumnLayout,
)
from .extractor import DEFAULT_COMPLETION_MARKER

"""Update projection: packing payload -> concrete cell writes.

The plan always holds the same five writes in a fixed order (status,
location, quantity, write time, user), whether the row was pending or
already completed, so re-applying a payload is idempotent. Validation
happens before anything is planned; nothing here talks to the sheet.
"""

__all__ = [
    "DEFAULT_USER",
    "ValidationError",
    "plan_update",
]

DEFAULT_USER = "system"


class ValidationError(Exception):
    """Raised when an update request lacks or has invalid mandatory fields."""


def _required_text(value: object, label: str) -> str:
    text = "" if value is None else str(value)
    if not text.strip():
        raise ValidationError(f"{label} is required")
    return text


def plan_update(
    row_index: int,
    payload: UpdatePayload,
    layout: ColumnLayout,
    *,
    now: datetime,
    completion_marker: str = DEFAULT_COMPLETION_MARKER,
    default_user: str = DEFAULT_USER,
    allowed_locations: Collection[str] | None = None,
) -> list[CellWrite]:
    """Plan the cell writes marking ``row_index`` as packed.

    Args:
        row_index: 1-based sheet row (as carried by PackingRecord.row_index)
        payload: location / quantity (mandatory) and optional user
        layout: Column layout providing the packing column letters
        now: Write timestamp stamped into the packing date cell
        completion_marker: Text written into the status cell
        default_user: Used when the payload carries no user
        allowed_locations: When non-empty, location must be one of these

    Raises:
        ValidationError: row_index is not a positive integer, or location /
            quantity is empty, or location is not an allowed one
    """
    if isinstance(row_index, bool) or not isinstance(row_index, int) or row_index < 1:
        raise ValidationError(f"row_index must be a positive integer: {row_index!r}")
    location = _required_text(payload.location, "location")
    quantity = _required_text(payload.quantity, "quantity")
    if allowed_locations and location not in allowed_locations:
        raise ValidationError(f"unknown storage location: {location!r}")
    user = payload.user if payload.user and payload.user.strip() else default_user

    values = {
        PACKING_STATUS: completion_marker,
        PACKING_LOCATION: location,
        PACKING_QUANTITY: quantity,
        PACKING_DATE: now.isoformat(),
        PACKING_USER: user,
    }
    return [
        CellWrite(field_name=name, column=layout.letter_of(name), row=row_index, value=value)
        for name, value in values.items()
    ]
