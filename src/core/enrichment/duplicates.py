"""
Duplicate voyage-event detection.

Two events are duplicates when they share vessel, voyage number, event
date, event and location. The first occurrence is kept; later ones are
reported so operators can clean them up.
"""

from collections.abc import Iterable

from src.core.models import RawRecord


def _norm(value) -> str:
    return str(value).strip().lower() if value is not None else ""


def natural_key(record: RawRecord) -> tuple[str, ...]:
    return (
        _norm(record.vessel_name),
        _norm(record.voyage_number),
        _norm(record.effective_date),
        _norm(record.event_text),
        _norm(record.location),
    )


def find_duplicates(records: Iterable[RawRecord]) -> list[str]:
    """
    Ids of records repeating an earlier record's natural key.

    Args:
        records: Raw records in source order

    Returns:
        Record ids of the later occurrences
    """
    seen: set[tuple[str, ...]] = set()
    duplicates = []
    for record in records:
        key = natural_key(record)
        if key in seen:
            duplicates.append(record.record_id)
        else:
            seen.add(key)
    return duplicates
