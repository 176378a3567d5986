"""
Storage interfaces used by the enrichment pipeline.

The pipeline only talks to these; PostgreSQL and in-memory implementations
live beside them.
"""

from abc import ABC, abstractmethod

from src.core.models import BatchResult, CostCenterEntry, EnrichedRecord, RawRecord


class RecordSource(ABC):
    """Supplies raw voyage-event records to enrich."""

    @abstractmethod
    def fetch_records(self, force: bool = False) -> list[RawRecord]:
        """
        Read records to enrich.

        Args:
            force: Return every record instead of only unprocessed ones

        Returns:
            Raw records in storage order
        """
        pass


class EnrichedRecordStore(ABC):
    """Writes enriched fields back onto the rows records came from."""

    @abstractmethod
    def update_many(self, records: list[EnrichedRecord], batch_number: int) -> BatchResult:
        """
        Persist one batch atomically.

        Either every record of the batch is written or none is. Failures are
        reported through the returned BatchResult rather than raised.

        Args:
            records: Enriched records of the batch
            batch_number: 1-based batch position in the run

        Returns:
            BatchResult describing the outcome
        """
        pass


class CostCenterSource(ABC):
    """Supplies the LC reference table."""

    @abstractmethod
    def load_entries(self) -> list[CostCenterEntry]:
        """
        Load every reference entry.

        Raises:
            ReferenceTableUnavailable: If the table cannot be read
        """
        pass
