from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..config.loader import PackingConfig
from ..logging.error_log import ErrorLogBuffer
from ..models.cell_write import CellWrite, UpdatePayload
from ..models.column_layout import ColumnLayout, LayoutError
from ..models.error_record import ErrorRecord
from ..models.filter_criteria import FilterCriteria
from ..models.packing_record import PackingRecord
from ..models.packing_stats import PackingStats
from .collaborators import CellWriter, CollaboratorError, RowSource
from .extractor import extract_records
from .filters import filter_records, paginate
from .planner import ValidationError, plan_update
from .stats import aggregate

"""Service orchestration for the packing workflow.

Exposes the three operations consumed by the request layer:

- extract_all(): every record of the sheet with its stats
- search(criteria): filtered records with recomputed stats
- apply_update(row_index, payload): validate, plan and write the packing cells

The service holds no state between calls; every call re-reads the sheet.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "PackingResult",
    "PackingService",
]


@dataclass(frozen=True)
class PackingResult:
    records: list[PackingRecord] = field(default_factory=list)
    stats: PackingStats = field(default_factory=PackingStats)
    skipped_rows: int = 0


class PackingService:
    """Ties the pure transforms to the read / write collaborators.

    Args:
        config: Process-wide configuration (layout, marker, timezone ...)
        row_source: Reads the sheet block (header row first)
        cell_writer: Applies a batch of cell writes
        clock: Returns "now"; defaults to the current time in the configured zone
        error_log: Optional buffer receiving failed updates
    """

    def __init__(
        self,
        config: PackingConfig,
        row_source: RowSource,
        cell_writer: CellWriter,
        *,
        clock: Callable[[], datetime] | None = None,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.config = config
        self.row_source = row_source
        self.cell_writer = cell_writer
        self._tz = config.tz
        self._clock = clock or (lambda: datetime.now(self._tz))
        self.error_log = error_log

    def _layout(self, rows: Sequence[Sequence[Any]]) -> ColumnLayout:
        """Configured layout with ``header_labels`` fields resolved from the header row.

        Raises:
            CollaboratorError: a configured label is missing from the header, or
                the resolved positions collide with configured columns
        """
        labels = self.config.header_labels
        if not labels or not rows:
            return self.config.layout
        try:
            resolved = ColumnLayout.from_header(rows[0], labels)
            return ColumnLayout.from_indices({**self.config.layout.columns, **resolved.columns})
        except LayoutError as e:
            raise CollaboratorError(f"sheet header does not match header_labels: {e}") from e

    def _extract(self) -> tuple[list[PackingRecord], int]:
        rows = self.row_source.read_rows()
        result = extract_records(
            rows,
            self._layout(rows),
            completion_marker=self.config.completion_marker,
            tz=self._tz,
            manufacture_date_from=self.config.manufacture_date_from,
        )
        return result.records, result.skipped_rows

    def extract_all(self) -> PackingResult:
        """Read the sheet and return every valid record with stats.

        Raises:
            CollaboratorError: the sheet could not be read, or its header does not
                match the configured header_labels
        """
        records, skipped = self._extract()
        stats = aggregate(records, self._clock(), self._tz)
        logger.debug(f"extract_all: records={len(records)} skipped={skipped}")
        return PackingResult(records=records, stats=stats, skipped_rows=skipped)

    def search(self, criteria: FilterCriteria) -> PackingResult:
        """Filter the sheet's records. Stats cover all matches, before paging."""
        records, skipped = self._extract()
        matched = filter_records(
            records,
            criteria,
            tz=self._tz,
            text_fields=self.config.text_fields,
            completion_marker=self.config.completion_marker,
        )
        stats = aggregate(matched, self._clock(), self._tz)
        page = paginate(matched, criteria.limit, criteria.offset)
        logger.debug(f"search: matched={len(matched)} of {len(records)} page={len(page)}")
        return PackingResult(records=page, stats=stats, skipped_rows=skipped)

    def plan(self, row_index: int, payload: UpdatePayload) -> list[CellWrite]:
        layout = self.config.layout
        if self.config.header_labels:
            # 書き込み先の列もヘッダから解決する
            layout = self._layout(self.row_source.read_rows())
        return plan_update(
            row_index,
            payload,
            layout,
            now=self._clock(),
            completion_marker=self.config.completion_marker,
            default_user=self.config.default_user,
            allowed_locations=self.config.storage_locations,
        )

    def apply_update(self, row_index: int, payload: UpdatePayload) -> list[CellWrite]:
        """Mark a row as packed.

        Raises:
            ValidationError: invalid request; nothing was written
            CollaboratorError: the write collaborator reported a failure
        """
        try:
            writes = self.plan(row_index, payload)
        except ValidationError as e:
            self._record_error(row_index, "VALIDATION_ERROR", str(e))
            raise

        result = self.cell_writer.write_cells(writes)
        if not result.success:
            message = result.message or "write failed"
            self._record_error(row_index, "WRITE_FAILED", message)
            raise CollaboratorError(message, written=result.written)

        logger.info(
            f"update: row={row_index} location={payload.location} "
            f"quantity={payload.quantity} cells={len(writes)}"
        )
        return writes

    def _record_error(self, row_index: object, error_type: str, message: str) -> None:
        row = row_index if isinstance(row_index, int) and not isinstance(row_index, bool) else -1
        if self.error_log is not None:
            self.error_log.append(
                ErrorRecord.create(self.config.sheet_name, row, error_type, message)
            )
