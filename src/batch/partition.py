"""
Voyage-aware batch partitioning.
"""

from collections.abc import Iterable

from src.core.enrichment import record_voyage_id
from src.core.models import RawRecord


def voyage_units(records: Iterable[RawRecord]) -> list[list[RawRecord]]:
    """
    Split records into units that must share a batch.

    Records of one voyage form one unit, placed where the voyage is first
    seen. Records without a voyage key are units of one.
    """
    units: list[list[RawRecord]] = []
    by_voyage: dict[str, list[RawRecord]] = {}

    for record in records:
        voyage_id = record_voyage_id(record)
        if voyage_id is None:
            units.append([record])
        elif voyage_id in by_voyage:
            by_voyage[voyage_id].append(record)
        else:
            unit = [record]
            by_voyage[voyage_id] = unit
            units.append(unit)

    return units


def partition_batches(records: Iterable[RawRecord], batch_size: int) -> list[list[RawRecord]]:
    """
    Pack records into batches of at most batch_size without splitting a voyage.

    A voyage with more events than batch_size becomes a batch of its own.

    Args:
        records: Records in fetch order
        batch_size: Target maximum records per batch

    Returns:
        Non-empty batches in processing order

    Raises:
        ValueError: If batch_size is less than 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    batches: list[list[RawRecord]] = []
    current: list[RawRecord] = []

    for unit in voyage_units(records):
        if current and len(current) + len(unit) > batch_size:
            batches.append(current)
            current = []
        current.extend(unit)
        if len(current) >= batch_size:
            batches.append(current)
            current = []

    if current:
        batches.append(current)

    return batches
