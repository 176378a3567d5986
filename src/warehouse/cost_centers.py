"""
PostgreSQL access to the cost_allocations reference table.
"""

import psycopg

from src.core.models import CostCenterEntry
from src.core.reference import ReferenceTableUnavailable
from src.observability.logger import get_logger

from .base import CostCenterSource
from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

# Latest row per LC number
SELECT_ENTRIES = """
    SELECT DISTINCT ON (lc_number)
        lc_number, department, rig_reference, facility_type
    FROM cost_allocations
    WHERE btrim(coalesce(lc_number, '')) <> ''
      AND btrim(coalesce(department, '')) <> ''
    ORDER BY lc_number, updated_at DESC, id DESC
"""


class CostCenterRepository(CostCenterSource):
    """
    Loads LC reference entries from cost_allocations.
    """

    def __init__(self, pool: DatabaseConnectionPool):
        self.pool = pool

    def load_entries(self) -> list[CostCenterEntry]:
        """
        Load every reference entry.

        Returns:
            List of CostCenterEntry, one per LC number

        Raises:
            ReferenceTableUnavailable: If the table cannot be queried
        """
        try:
            rows = self.pool.execute_query(SELECT_ENTRIES)
        except (psycopg.Error, RuntimeError) as e:
            raise ReferenceTableUnavailable(f"Cannot load cost_allocations: {e}") from e

        entries = [
            CostCenterEntry(
                cost_center_id=row["lc_number"],
                department=row["department"],
                rig_reference=row.get("rig_reference"),
                facility_type=row.get("facility_type"),
            )
            for row in rows
        ]

        if not entries:
            logger.warning("cost_allocations is empty; every record will be location-inferred")

        return entries
