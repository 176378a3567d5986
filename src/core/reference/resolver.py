"""
Cost-center lookup and location standardization.

The resolver is built once per run from the cost-center reference table and
passed to every component that needs it. It is read-only after construction.
"""

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from src.core.models import CostCenterEntry
from src.core.rules import EnrichmentSettings

ROUTE_SEPARATOR = re.compile(r"\s*(?:->|→|>)\s*")


class ReferenceTableUnavailable(RuntimeError):
    """Raised when the cost-center reference table cannot be loaded."""


class ReferenceResolver:
    """
    Read-only view over the LC reference table and location aliases.

    Resolution misses are not errors: lookup() returns None and
    standardize_location() returns its input unchanged.
    """

    def __init__(
        self,
        entries: Mapping[str, CostCenterEntry],
        location_aliases: Mapping[str, str],
        facilities: Mapping[str, str],
        logistics_bases: Iterable[str],
        primary_base: str,
    ):
        """
        Initialize the resolver.

        Args:
            entries: LC number -> CostCenterEntry
            location_aliases: Lower-cased alias -> canonical location
            facilities: Canonical location -> facility type
            logistics_bases: Canonical names of logistics bases
            primary_base: Base anchoring Outbound/Return voyages
        """
        self._entries = MappingProxyType(dict(entries))
        self._aliases = MappingProxyType({k.strip().lower(): v for k, v in location_aliases.items()})
        self._facilities = MappingProxyType(dict(facilities))
        self.logistics_bases = frozenset(logistics_bases)
        self.primary_base = primary_base

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[CostCenterEntry],
        settings: EnrichmentSettings | None = None,
    ) -> "ReferenceResolver":
        """
        Build a resolver from reference-table rows and enrichment settings.

        Later rows win when an LC number repeats. Each entry's rig reference
        is registered as a facility of the entry's facility type unless the
        settings already classify that location.

        Args:
            entries: CostCenterEntry rows
            settings: Enrichment settings (defaults when None)

        Returns:
            ReferenceResolver
        """
        settings = settings or EnrichmentSettings()

        table: dict[str, CostCenterEntry] = {}
        for entry in entries:
            table[entry.cost_center_id] = entry

        aliases = settings.location_aliases
        facilities = dict(settings.facilities)
        for entry in table.values():
            if entry.rig_reference and entry.facility_type:
                name = aliases.get(entry.rig_reference.strip().lower(), entry.rig_reference)
                facilities.setdefault(name, entry.facility_type)

        return cls(
            entries=table,
            location_aliases=aliases,
            facilities=facilities,
            logistics_bases=settings.logistics_bases,
            primary_base=settings.primary_base,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cost_center_id: object) -> bool:
        return isinstance(cost_center_id, str) and cost_center_id.strip() in self._entries

    def lookup(self, cost_center_id: str | None) -> CostCenterEntry | None:
        """
        Resolve an LC number.

        Args:
            cost_center_id: LC number (surrounding whitespace ignored)

        Returns:
            CostCenterEntry, or None when the LC is unknown
        """
        if cost_center_id is None:
            return None
        return self._entries.get(cost_center_id.strip())

    def standardize_location(self, raw_location: str | None) -> str | None:
        """
        Map a location alias to its canonical name.

        Args:
            raw_location: Free-text location

        Returns:
            Canonical name on an exact (case-insensitive, trimmed) alias
            match, otherwise the input unchanged
        """
        if raw_location is None:
            return None
        return self._aliases.get(raw_location.strip().lower(), raw_location)

    def parse_location_list(self, raw_location: str | None) -> list[str]:
        """
        Split a route string ("Fourchon -> Mad Dog") into standardized stops.

        Args:
            raw_location: Free-text location, possibly a route

        Returns:
            Standardized stop names; empty when the location is missing
        """
        if not raw_location:
            return []
        parts = ROUTE_SEPARATOR.split(raw_location)
        return [self.standardize_location(p.strip()) for p in parts if p.strip()]

    def facility_type(self, location: str | None) -> str | None:
        """Facility type of a standardized location, None when unclassified."""
        if location is None:
            return None
        return self._facilities.get(location)

    def is_logistics_base(self, location: str | None) -> bool:
        return location in self.logistics_bases

    def is_primary_base(self, location: str | None) -> bool:
        return location == self.primary_base
