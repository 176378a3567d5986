"""
In-memory record source and store.

Used for dry runs, where the enriched rows are kept in memory instead of
being written to PostgreSQL, and in tests.
"""

from collections.abc import Iterable
from typing import Any

from src.core.enrichment import record_voyage_id
from src.core.models import BatchResult, BatchStatus, CostCenterEntry, EnrichedRecord, RawRecord
from src.observability.logger import get_logger

from .base import CostCenterSource, EnrichedRecordStore, RecordSource

logger = get_logger(__name__)


class InMemoryVoyageEventStore(RecordSource, EnrichedRecordStore):
    """
    Holds raw records and the enriched rows written for them.

    Args:
        records: Raw records to serve
        fail_batches: Batch numbers whose update_many reports a rollback
    """

    def __init__(self, records: Iterable[RawRecord] = (), fail_batches: Iterable[int] = ()):
        self._records: dict[str, RawRecord] = {r.record_id: r for r in records}
        self.rows: dict[str, dict[str, Any]] = {}
        self.fail_batches = set(fail_batches)
        self.update_calls = 0

    def add(self, record: RawRecord) -> None:
        """Add or replace a raw record; its enriched row is discarded."""
        self._records[record.record_id] = record
        self.rows.pop(record.record_id, None)

    def fetch_records(self, force: bool = False) -> list[RawRecord]:
        """Unprocessed records plus the already-enriched rest of their voyages."""
        if force:
            return list(self._records.values())
        pending_voyages = {
            record_voyage_id(r) for r in self._records.values() if r.record_id not in self.rows
        }
        return [
            r
            for r in self._records.values()
            if r.record_id not in self.rows
            or (record_voyage_id(r) is not None and record_voyage_id(r) in pending_voyages)
        ]

    def update_many(self, records: list[EnrichedRecord], batch_number: int) -> BatchResult:
        self.update_calls += 1

        if batch_number in self.fail_batches:
            logger.error(
                "Batch rolled back",
                extra={"batch_number": batch_number, "record_count": len(records)},
            )
            return BatchResult(
                batch_number=batch_number,
                status=BatchStatus.ROLLED_BACK,
                record_count=len(records),
                error=f"injected failure for batch {batch_number}",
            )

        # Build every row before storing any so a bad record leaves nothing behind
        staged = {record.record_id: record.to_update_row() for record in records}
        self.rows.update(staged)

        return BatchResult(
            batch_number=batch_number,
            status=BatchStatus.COMMITTED,
            record_count=len(records),
            updated_count=len(staged),
        )


class InMemoryCostCenterSource(CostCenterSource):
    """Serves a fixed list of reference entries."""

    def __init__(self, entries: Iterable[CostCenterEntry] = ()):
        self.entries = list(entries)

    def load_entries(self) -> list[CostCenterEntry]:
        return list(self.entries)
