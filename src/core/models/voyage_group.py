"""
VoyageGroup model representing the events of one vessel voyage in one month.
"""

from enum import Enum

from pydantic import BaseModel, Field


class VoyagePattern(str, Enum):
    """Shape of a voyage's route."""

    OUTBOUND = "Outbound"
    RETURN = "Return"
    ROUND_TRIP = "RoundTrip"
    OFFSHORE_TRANSFER = "OffshoreTransfer"
    UNKNOWN = "Unknown"
    OTHER = "Other"


class VoyagePurpose(str, Enum):
    """Operational purpose inferred from the facilities visited."""

    PRODUCTION = "Production"
    DRILLING = "Drilling"
    MIXED = "Mixed"
    OTHER = "Other"


class VoyageGroup(BaseModel):
    """
    Aggregate attributes of all events sharing one voyage key.

    Attributes:
        unique_voyage_id: Deterministic id built from vessel, voyage, year, month
        standardized_voyage_id: Display id with zero-padded voyage number
        vessel_name: Vessel of the voyage
        voyage_number: Voyage number as uploaded
        year: Year of the voyage events
        month: Month of the voyage events (1-12)
        stop_list: Standardized stops in first-seen order
        stop_count: Number of stops
        total_duration_hours: Sum of member final hours
        pattern: Route shape
        is_standard_pattern: Whether the route has one of the canonical shapes
        purpose: Production / Drilling / Mixed / Other
        origin_port: First stop
        main_destination: Last stop
        record_ids: Member record ids in event-time order
    """

    unique_voyage_id: str
    standardized_voyage_id: str
    vessel_name: str
    voyage_number: str
    year: int
    month: int = Field(..., ge=1, le=12)
    stop_list: list[str] = Field(default_factory=list)
    stop_count: int = 0
    total_duration_hours: float = 0.0
    pattern: VoyagePattern = VoyagePattern.UNKNOWN
    is_standard_pattern: bool = False
    purpose: VoyagePurpose = VoyagePurpose.OTHER
    origin_port: str | None = None
    main_destination: str | None = None
    record_ids: list[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "unique_voyage_id": "2025_03_HOS_ACHIEVER_12",
                "standardized_voyage_id": "2025-03-HOS-ACHIEVER-012",
                "vessel_name": "HOS ACHIEVER",
                "voyage_number": "12",
                "year": 2025,
                "month": 3,
                "stop_list": ["Fourchon", "Thunder Horse", "Fourchon"],
                "stop_count": 3,
                "total_duration_hours": 41.5,
                "pattern": "RoundTrip",
                "is_standard_pattern": True,
                "purpose": "Production",
            }
        }
