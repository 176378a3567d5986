"""
CostCenterEntry model representing one row of the LC reference table.
"""

from pydantic import BaseModel, Field, field_validator


class CostCenterEntry(BaseModel):
    """
    Reference-table row resolving an LC number to a department and facility.

    Attributes:
        cost_center_id: LC number (lookup key)
        department: Department the LC is budgeted under
        rig_reference: Display name of the rig/facility the LC belongs to
        facility_type: Facility type ("Production", "Drilling", "Logistics", ...)
    """

    cost_center_id: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    rig_reference: str | None = None
    facility_type: str | None = None

    @field_validator("cost_center_id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        return str(v).strip() if v is not None else v

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "cost_center_id": "9999",
                "department": "Production",
                "rig_reference": "Thunder Horse",
                "facility_type": "Production",
            }
        }
