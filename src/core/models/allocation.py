"""
Allocation model representing one cost-center share of a voyage event.
"""

from pydantic import BaseModel, Field


class Allocation(BaseModel):
    """
    One percentage share of a record's effort, attributed to a cost center.

    The Allocations derived from one RawRecord always sum to 100 percent.

    Attributes:
        cost_center_id: LC number, or None when the record carried none
        department: Department attributed to this share
        percentage: Share of the record's effort (0-100)
        mapped_location: Rig reference of the LC, else the standardized location
        is_reference_matched: Whether the LC resolved in the reference table
        allocated_hours: Record hours multiplied by this share
    """

    cost_center_id: str | None = None
    department: str
    percentage: float = Field(..., ge=0.0, le=100.0)
    mapped_location: str | None = None
    is_reference_matched: bool = False
    allocated_hours: float = 0.0

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "cost_center_id": "10027",
                "department": "Logistics",
                "percentage": 50.0,
                "mapped_location": "Fourchon",
                "is_reference_matched": True,
                "allocated_hours": 3.25,
            }
        }
