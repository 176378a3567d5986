"""
RawRecord model representing one uploaded voyage-event row (ephemeral).
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator


class RawRecord(BaseModel):
    """
    An uploaded voyage-event row after column-name normalization.

    RawRecord is read from storage at batch start and discarded once the
    batch commits or rolls back. It is never mutated by the pipeline.

    Attributes:
        record_id: Storage key of the row the record was read from
        location: Free-text location (may contain a route like "A -> B")
        event_text: Event description
        parent_event_text: Parent event description
        remarks_text: Free-text remarks
        port_type: Optional port hint from the upload ("rig", "base", ...)
        cost_center_field: Free text holding zero or more LC numbers
        vessel_name: Vessel name
        voyage_number: Voyage number as uploaded
        effort_hours: Reported hours (may be missing or zero)
        event_date: Event date
        from_time: Event start timestamp
        to_time: Event end timestamp
        vessel_daily_rate: Uploaded daily rate, when the sheet carries one
        vessel_cost_total: Uploaded cost total, when the sheet carries one
    """

    record_id: str = Field(..., min_length=1)
    location: str | None = None
    event_text: str | None = None
    parent_event_text: str | None = None
    remarks_text: str | None = None
    port_type: str | None = None
    cost_center_field: str | None = None
    vessel_name: str | None = None
    voyage_number: str | None = None
    effort_hours: float | None = None
    event_date: date | None = None
    from_time: datetime | None = None
    to_time: datetime | None = None
    vessel_daily_rate: float | None = None
    vessel_cost_total: float | None = None

    @field_validator(
        "location",
        "event_text",
        "parent_event_text",
        "remarks_text",
        "port_type",
        "cost_center_field",
        "vessel_name",
        "voyage_number",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        """Treat whitespace-only cells as missing."""
        if v is None:
            return None
        v = str(v)
        return v if v.strip() else None

    @field_validator("event_date", mode="before")
    @classmethod
    def datetime_to_date(cls, v):
        if isinstance(v, datetime):
            return v.date()
        return v

    @property
    def effective_date(self) -> date | None:
        """Event date, falling back to the start timestamp."""
        if self.event_date is not None:
            return self.event_date
        if self.from_time is not None:
            return self.from_time.date()
        return None

    @property
    def final_hours(self) -> float:
        """
        Hours worked on the event, rounded to 2 decimals.

        Uses the reported hours, or the from/to span when hours are
        missing or zero. Returns 0.0 when neither is available.
        """
        hours = self.effort_hours or 0.0
        if not hours and self.from_time and self.to_time:
            hours = (self.to_time - self.from_time).total_seconds() / 3600
        return round(hours, 2)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "record_id": "8b7d4f0e-6a55-4f4b-9d59-1b3c0f7c2a11",
                "location": "Port Fourchon",
                "event_text": "Loading",
                "parent_event_text": "Cargo Ops",
                "remarks_text": "Supply run",
                "port_type": "base",
                "cost_center_field": "7777, 8888",
                "vessel_name": "HOS ACHIEVER",
                "voyage_number": "12",
                "effort_hours": 6.5,
                "event_date": "2025-03-14",
            }
        }
