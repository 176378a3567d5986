"""
Voyage grouping.

Events are grouped by a deterministic key built from vessel, voyage number
and the year/month of the event. Each group yields an ordered stop list and
the route pattern, purpose and duration derived from it. Grouping needs
every event of a voyage in memory at once.
"""

import re
from collections.abc import Iterable
from datetime import datetime, time

from src.core.models import RawRecord, VoyageGroup, VoyagePattern, VoyagePurpose
from src.core.reference import ReferenceResolver

WHITESPACE = re.compile(r"\s+")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def unique_voyage_id(
    vessel: str | None,
    voyage_number: str | None,
    year: int | None,
    month: int | None,
) -> str | None:
    """
    Voyage key in the form YYYY_MM_Vessel_Name_Voyage.

    Returns:
        The key, or None when any part is missing
    """
    vessel, voyage_number = _clean(vessel), _clean(voyage_number)
    if not vessel or not voyage_number or not year or not month:
        return None
    return f"{year}_{month:02d}_{WHITESPACE.sub('_', vessel)}_{voyage_number}"


def standardized_voyage_id(
    vessel: str | None,
    voyage_number: str | None,
    year: int | None,
    month: int | None,
) -> str | None:
    """
    Display voyage id in the form YYYY-MM-Vessel-Name-VVV.

    Returns:
        The id, or None when any part is missing
    """
    vessel, voyage_number = _clean(vessel), _clean(voyage_number)
    if not vessel or not voyage_number or not year or not month:
        return None
    return f"{year}-{month:02d}-{WHITESPACE.sub('-', vessel)}-{voyage_number.zfill(3)}"


def record_voyage_id(record: RawRecord) -> str | None:
    """Voyage key of a record, None when vessel, voyage or date is missing."""
    event_date = record.effective_date
    if event_date is None:
        return None
    return unique_voyage_id(record.vessel_name, record.voyage_number, event_date.year, event_date.month)


def _event_time(record: RawRecord) -> datetime | None:
    if record.from_time is not None:
        return record.from_time.replace(tzinfo=None)
    if record.event_date is not None:
        return datetime.combine(record.event_date, time.min)
    return None


class VoyageGrouper:
    """
    Builds VoyageGroups from a batch of raw records.
    """

    def __init__(self, resolver: ReferenceResolver):
        self.resolver = resolver

    def group(self, records: Iterable[RawRecord]) -> dict[str, VoyageGroup]:
        """
        Group records by voyage key.

        Records without a key (missing vessel, voyage number or date) are
        left out.

        Args:
            records: Raw records; all events of a voyage must be present

        Returns:
            unique_voyage_id -> VoyageGroup, in first-seen order
        """
        members: dict[str, list[tuple[int, RawRecord]]] = {}
        for position, record in enumerate(records):
            voyage_id = record_voyage_id(record)
            if voyage_id is not None:
                members.setdefault(voyage_id, []).append((position, record))

        return {
            voyage_id: self.build_group(voyage_id, [r for _, r in sorted(items, key=self._sort_key)])
            for voyage_id, items in members.items()
        }

    @staticmethod
    def _sort_key(item: tuple[int, RawRecord]) -> tuple:
        position, record = item
        event_time = _event_time(record)
        return (event_time is None, event_time or datetime.min, position)

    def build_group(self, voyage_id: str, records: list[RawRecord]) -> VoyageGroup:
        """
        Aggregate the time-ordered events of one voyage.

        Args:
            voyage_id: Voyage key shared by all records
            records: Member records ordered by event time

        Returns:
            VoyageGroup
        """
        first = records[0]
        event_date = first.effective_date
        vessel = _clean(first.vessel_name)
        voyage_number = _clean(first.voyage_number)

        stops = self.stop_list(records)
        pattern = self.classify_pattern(stops)

        return VoyageGroup(
            unique_voyage_id=voyage_id,
            standardized_voyage_id=standardized_voyage_id(
                vessel, voyage_number, event_date.year, event_date.month
            ),
            vessel_name=vessel,
            voyage_number=voyage_number,
            year=event_date.year,
            month=event_date.month,
            stop_list=stops,
            stop_count=len(stops),
            total_duration_hours=round(sum(r.final_hours for r in records), 2),
            pattern=pattern,
            is_standard_pattern=self.is_standard_pattern(stops, pattern),
            purpose=self.classify_purpose(stops),
            origin_port=stops[0] if stops else None,
            main_destination=stops[-1] if stops else None,
            record_ids=[r.record_id for r in records],
        )

    def stop_list(self, records: Iterable[RawRecord]) -> list[str]:
        """
        Standardized stops in visit order, consecutive repeats collapsed.
        """
        stops: list[str] = []
        for record in records:
            for stop in self.resolver.parse_location_list(record.location):
                if not stops or stops[-1] != stop:
                    stops.append(stop)
        return stops

    def classify_pattern(self, stops: list[str]) -> VoyagePattern:
        """
        Route shape of a stop list.

        Args:
            stops: Standardized stops

        Returns:
            VoyagePattern
        """
        if len(stops) < 2:
            return VoyagePattern.UNKNOWN
        if stops[0] == stops[-1] and len(stops) > 2:
            return VoyagePattern.ROUND_TRIP
        if len(stops) == 2 and self.resolver.is_primary_base(stops[0]):
            return VoyagePattern.OUTBOUND
        if len(stops) == 2 and self.resolver.is_primary_base(stops[-1]):
            return VoyagePattern.RETURN
        if not any(self.resolver.is_logistics_base(stop) for stop in stops):
            return VoyagePattern.OFFSHORE_TRANSFER
        return VoyagePattern.OTHER

    def is_standard_pattern(self, stops: list[str], pattern: VoyagePattern) -> bool:
        """Only two-stop Outbound/Return and three-stop RoundTrip from the primary base are standard."""
        if pattern in (VoyagePattern.OUTBOUND, VoyagePattern.RETURN):
            return len(stops) == 2
        if pattern == VoyagePattern.ROUND_TRIP:
            return len(stops) == 3 and self.resolver.is_primary_base(stops[0])
        return False

    def classify_purpose(self, stops: list[str]) -> VoyagePurpose:
        """
        Voyage purpose from the facility types of its stops.
        """
        facility_types = {self.resolver.facility_type(stop) for stop in stops}
        has_production = "Production" in facility_types
        has_drilling = "Drilling" in facility_types

        if has_production and has_drilling:
            return VoyagePurpose.MIXED
        if has_production:
            return VoyagePurpose.PRODUCTION
        if has_drilling:
            return VoyagePurpose.DRILLING
        return VoyagePurpose.OTHER
