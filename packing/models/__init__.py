"""Domain models for the packing workflow.

Records, stats and update plans are transient: they are rebuilt from the
sheet on every request, the sheet itself being the single source of truth.
"""

from .cell_write import CellWrite, UpdatePayload, WriteResult
from .column_layout import DEFAULT_COLUMN_LETTERS, ColumnLayout, LayoutError
from .error_record import ErrorRecord
from .filter_criteria import FilterCriteria
from .packing_record import PackingInfo, PackingRecord, PackingStatus
from .packing_stats import PackingStats

__all__ = [
    # Layout
    "ColumnLayout",
    "DEFAULT_COLUMN_LETTERS",
    "LayoutError",
    # Records
    "PackingInfo",
    "PackingRecord",
    "PackingStatus",
    "PackingStats",
    # Search / update
    "FilterCriteria",
    "UpdatePayload",
    "CellWrite",
    "WriteResult",
    # Logging
    "ErrorRecord",
]
