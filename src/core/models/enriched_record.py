"""
EnrichedRecord model representing a voyage event after enrichment.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from .allocation import Allocation
from .raw_record import RawRecord
from .voyage_group import VoyageGroup


class QualityScore(BaseModel):
    """
    Data-quality score of one enriched record.

    Attributes:
        score: 0-100, 100 meaning no issue was found
        issues: Triggered penalties, in the order they were checked
    """

    score: int = Field(..., ge=0, le=100)
    issues: list[str] = Field(default_factory=list)

    @property
    def issues_text(self) -> str | None:
        return ", ".join(self.issues) or None


class EnrichedRecord(BaseModel):
    """
    A RawRecord plus the metadata the pipeline derives for it.

    Enriched fields are written back onto the storage row the raw record
    came from; the raw columns are never overwritten.

    Attributes:
        raw: The source record
        allocations: All cost-center shares (sum to 100 percent)
        department: Department of the primary allocation
        standardized_location: Alias-resolved location
        final_hours: Hours worked on the event
        unique_voyage_id: Voyage key, None when vessel/voyage/date is missing
        standardized_voyage_id: Display voyage id
        voyage: Voyage the record belongs to
        quality: Data-quality score and issues
        mapping_status: "LC Mapped" or "Location Inferred"
        data_integrity: "Valid" or "Inferred"
        activity_category: "Productive" or "Non-Productive"
        company: Vessel operator inferred from the vessel name
        vessel_type: Vessel class inferred from the vessel name
        vessel_daily_rate: Uploaded or derived daily rate
        vessel_cost_total: Uploaded or derived cost for the event
    """

    raw: RawRecord
    allocations: list[Allocation] = Field(..., min_length=1)
    department: str
    standardized_location: str | None = None
    final_hours: float = 0.0
    unique_voyage_id: str | None = None
    standardized_voyage_id: str | None = None
    voyage: VoyageGroup | None = None
    quality: QualityScore
    mapping_status: str = "Location Inferred"
    data_integrity: str = "Inferred"
    activity_category: str | None = None
    company: str | None = None
    vessel_type: str | None = None
    vessel_daily_rate: float | None = None
    vessel_cost_total: float | None = None

    @model_validator(mode="after")
    def check_allocation_total(self):
        """Validate that allocation percentages sum to 100."""
        total = sum(a.percentage for a in self.allocations)
        if abs(total - 100.0) > 0.01:
            raise ValueError(f"allocation percentages sum to {total}, expected 100")
        return self

    @property
    def record_id(self) -> str:
        return self.raw.record_id

    @property
    def primary_allocation(self) -> Allocation:
        """First allocation, used where a row must carry a single department."""
        return self.allocations[0]

    def to_update_row(self) -> dict[str, Any]:
        """
        Flatten the enriched fields into the column values written back.

        Returns:
            Dictionary keyed by voyage_events column name
        """
        primary = self.primary_allocation
        voyage = self.voyage
        return {
            "id": self.record_id,
            "department": self.department,
            "final_hours": self.final_hours,
            "lc_number": primary.cost_center_id,
            "lc_percentage": primary.percentage,
            "mapped_location": primary.mapped_location,
            "standardized_location": self.standardized_location,
            "mapping_status": self.mapping_status,
            "data_integrity": self.data_integrity,
            "allocations": [a.model_dump() for a in self.allocations],
            "unique_voyage_id": self.unique_voyage_id,
            "standardized_voyage_id": self.standardized_voyage_id,
            "voyage_pattern": voyage.pattern.value if voyage else None,
            "voyage_purpose": voyage.purpose.value if voyage else None,
            "is_standard_pattern": voyage.is_standard_pattern if voyage else None,
            "stop_count": voyage.stop_count if voyage else None,
            "location_list": voyage.stop_list if voyage else None,
            "origin_port": voyage.origin_port if voyage else None,
            "main_destination": voyage.main_destination if voyage else None,
            "duration_hours": voyage.total_duration_hours if voyage else None,
            "activity_category": self.activity_category,
            "company": self.company,
            "vessel_type": self.vessel_type,
            "vessel_daily_rate": self.vessel_daily_rate,
            "vessel_cost_total": self.vessel_cost_total,
            "data_quality_score": self.quality.score,
            "data_quality_issues": self.quality.issues_text,
        }
