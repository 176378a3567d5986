"""
PostgreSQL access to the voyage_events table.

Raw columns are read into RawRecord; enriched columns are written back with
one UPDATE per row, one transaction per batch. Rows are never inserted or
deleted here.
"""

import psycopg
from psycopg.types.json import Jsonb

from src.core.models import BatchResult, BatchStatus, EnrichedRecord, RawRecord
from src.observability.logger import get_logger

from .base import EnrichedRecordStore, RecordSource
from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

RAW_COLUMNS = """
    id, location, event, parent_event, remarks, port_type, cost_dedicated_to,
    vessel, voyage_number, hours, event_date, from_time, to_time,
    uploaded_daily_rate, uploaded_cost_total
"""

SELECT_ALL = f"""
    SELECT {RAW_COLUMNS}
    FROM voyage_events
    ORDER BY vessel, voyage_number, event_date, from_time, id
"""

# Pending rows plus every row sharing a voyage with one, so that voyage
# attributes are always computed over the whole voyage.
SELECT_PENDING = f"""
    SELECT {RAW_COLUMNS}
    FROM voyage_events e
    WHERE e.enriched_at IS NULL
       OR EXISTS (
            SELECT 1
            FROM voyage_events p
            WHERE p.enriched_at IS NULL
              AND p.vessel = e.vessel
              AND p.voyage_number = e.voyage_number
              AND date_trunc('month', COALESCE(p.event_date, p.from_time::date))
                = date_trunc('month', COALESCE(e.event_date, e.from_time::date))
       )
    ORDER BY vessel, voyage_number, event_date, from_time, id
"""

UPDATE_ENRICHED = """
    UPDATE voyage_events SET
        department = %(department)s,
        final_hours = %(final_hours)s,
        lc_number = %(lc_number)s,
        lc_percentage = %(lc_percentage)s,
        mapped_location = %(mapped_location)s,
        standardized_location = %(standardized_location)s,
        mapping_status = %(mapping_status)s,
        data_integrity = %(data_integrity)s,
        allocations = %(allocations)s,
        unique_voyage_id = %(unique_voyage_id)s,
        standardized_voyage_id = %(standardized_voyage_id)s,
        voyage_pattern = %(voyage_pattern)s,
        voyage_purpose = %(voyage_purpose)s,
        is_standard_pattern = %(is_standard_pattern)s,
        stop_count = %(stop_count)s,
        location_list = %(location_list)s,
        origin_port = %(origin_port)s,
        main_destination = %(main_destination)s,
        duration_hours = %(duration_hours)s,
        activity_category = %(activity_category)s,
        company = %(company)s,
        vessel_type = %(vessel_type)s,
        vessel_daily_rate = %(vessel_daily_rate)s,
        vessel_cost_total = %(vessel_cost_total)s,
        data_quality_score = %(data_quality_score)s,
        data_quality_issues = %(data_quality_issues)s,
        enriched_at = NOW()
    WHERE id = %(id)s
"""


def row_to_record(row: dict) -> RawRecord:
    """Map a voyage_events row to a RawRecord."""
    return RawRecord(
        record_id=str(row["id"]),
        location=row.get("location"),
        event_text=row.get("event"),
        parent_event_text=row.get("parent_event"),
        remarks_text=row.get("remarks"),
        port_type=row.get("port_type"),
        cost_center_field=row.get("cost_dedicated_to"),
        vessel_name=row.get("vessel"),
        voyage_number=row.get("voyage_number"),
        effort_hours=_to_float(row.get("hours")),
        event_date=row.get("event_date"),
        from_time=row.get("from_time"),
        to_time=row.get("to_time"),
        vessel_daily_rate=_to_float(row.get("uploaded_daily_rate")),
        vessel_cost_total=_to_float(row.get("uploaded_cost_total")),
    )


def _to_float(value) -> float | None:
    # NUMERIC columns come back as Decimal
    return float(value) if value is not None else None


class VoyageEventStore(RecordSource, EnrichedRecordStore):
    """
    Reads raw voyage events and writes enriched fields back.
    """

    def __init__(self, pool: DatabaseConnectionPool):
        """
        Initialize the store.

        Args:
            pool: Open database connection pool
        """
        self.pool = pool

    def fetch_records(self, force: bool = False) -> list[RawRecord]:
        """
        Read records to enrich.

        Without force, only rows never enriched are selected, together with
        the other rows of their voyages.

        Args:
            force: Select every row

        Returns:
            RawRecords ordered by vessel, voyage and date
        """
        rows = self.pool.execute_query(SELECT_ALL if force else SELECT_PENDING)
        logger.info(
            "Fetched voyage events",
            extra={"row_count": len(rows), "force": force},
        )
        return [row_to_record(row) for row in rows]

    def update_many(self, records: list[EnrichedRecord], batch_number: int) -> BatchResult:
        """
        Write one batch back in a single transaction.

        Args:
            records: Enriched records of the batch
            batch_number: 1-based batch position in the run

        Returns:
            BatchResult, rolled_back with the error message when the
            transaction failed
        """
        if not records:
            return BatchResult(batch_number=batch_number, status=BatchStatus.COMMITTED)

        params = [self._update_params(record) for record in records]

        try:
            with self.pool.transaction() as conn:
                with conn.cursor() as cur:
                    cur.executemany(UPDATE_ENRICHED, params)
        except psycopg.Error as e:
            logger.error(
                "Batch rolled back",
                extra={
                    "batch_number": batch_number,
                    "record_count": len(records),
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return BatchResult(
                batch_number=batch_number,
                status=BatchStatus.ROLLED_BACK,
                record_count=len(records),
                error=str(e),
            )

        return BatchResult(
            batch_number=batch_number,
            status=BatchStatus.COMMITTED,
            record_count=len(records),
            updated_count=len(records),
        )

    def _update_params(self, record: EnrichedRecord) -> dict:
        row = record.to_update_row()
        row["allocations"] = Jsonb(row["allocations"])
        if row["location_list"] is not None:
            row["location_list"] = Jsonb(row["location_list"])
        return row
