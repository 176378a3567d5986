"""
Unit tests for Pydantic data models.

Tests validation, derived properties and flattening of each model.
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from src.core.models import (
    Allocation,
    BatchResult,
    BatchStatus,
    CostCenterEntry,
    EnrichedRecord,
    QualityScore,
    RawRecord,
    RunSummary,
)


@pytest.mark.unit
class TestRawRecord:
    """Tests for RawRecord model"""

    def test_blank_text_fields_become_none(self):
        """Whitespace-only cells are treated as missing"""
        record = RawRecord(record_id="r1", location="   ", vessel_name="", cost_center_field=" \t")
        assert record.location is None
        assert record.vessel_name is None
        assert record.cost_center_field is None

    def test_numeric_voyage_number_kept_as_text(self):
        record = RawRecord(record_id="r1", voyage_number=12)
        assert record.voyage_number == "12"

    def test_empty_record_id_rejected(self):
        with pytest.raises(ValidationError):
            RawRecord(record_id="")

    def test_record_is_immutable(self):
        record = RawRecord(record_id="r1", location="Fourchon")
        with pytest.raises(ValidationError):
            record.location = "Venice"

    def test_event_date_accepts_datetime(self):
        record = RawRecord(record_id="r1", event_date=datetime(2025, 3, 14, 8, 30))
        assert record.event_date == date(2025, 3, 14)

    def test_effective_date_falls_back_to_from_time(self):
        record = RawRecord(record_id="r1", from_time=datetime(2025, 4, 2, 6, 0))
        assert record.effective_date == date(2025, 4, 2)

    def test_effective_date_none_without_dates(self):
        assert RawRecord(record_id="r1").effective_date is None

    def test_final_hours_prefers_reported_hours(self):
        record = RawRecord(
            record_id="r1",
            effort_hours=4.5,
            from_time=datetime(2025, 3, 14, 0, 0),
            to_time=datetime(2025, 3, 14, 10, 0),
        )
        assert record.final_hours == 4.5

    def test_final_hours_from_time_span(self):
        """Zero hours fall back to the from/to span"""
        record = RawRecord(
            record_id="r1",
            effort_hours=0,
            from_time=datetime(2025, 3, 14, 6, 0),
            to_time=datetime(2025, 3, 14, 8, 20),
        )
        assert record.final_hours == 2.33

    def test_final_hours_zero_without_data(self):
        assert RawRecord(record_id="r1").final_hours == 0.0


@pytest.mark.unit
class TestCostCenterEntry:
    """Tests for CostCenterEntry model"""

    def test_id_is_stripped(self):
        entry = CostCenterEntry(cost_center_id=" 9999 ", department="Production")
        assert entry.cost_center_id == "9999"

    def test_numeric_id_converted(self):
        entry = CostCenterEntry(cost_center_id=10027, department="Logistics")
        assert entry.cost_center_id == "10027"

    def test_department_required(self):
        with pytest.raises(ValidationError):
            CostCenterEntry(cost_center_id="9999", department="")


@pytest.mark.unit
class TestAllocation:
    """Tests for Allocation model"""

    def test_percentage_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            Allocation(department="Production", percentage=-0.01)

    def test_zero_percentage_allowed(self):
        assert Allocation(department="Production", percentage=0).percentage == 0.0

    def test_percentage_capped_at_100(self):
        with pytest.raises(ValidationError):
            Allocation(department="Production", percentage=100.5)


def _enriched(allocations, **overrides) -> EnrichedRecord:
    fields = {
        "raw": RawRecord(record_id="r1", location="Fourchon", event_date=date(2025, 3, 14)),
        "allocations": allocations,
        "department": allocations[0].department,
        "quality": QualityScore(score=85, issues=["Missing vessel name"]),
    }
    fields.update(overrides)
    return EnrichedRecord(**fields)


@pytest.mark.unit
class TestEnrichedRecord:
    """Tests for EnrichedRecord model"""

    def test_allocations_must_sum_to_100(self):
        allocations = [
            Allocation(department="Production", percentage=60),
            Allocation(department="Logistics", percentage=30),
        ]
        with pytest.raises(ValidationError, match="sum to"):
            _enriched(allocations)

    def test_at_least_one_allocation_required(self):
        with pytest.raises(ValidationError):
            EnrichedRecord(
                raw=RawRecord(record_id="r1"),
                allocations=[],
                department="Operations",
                quality=QualityScore(score=100),
            )

    def test_primary_allocation_is_first(self):
        allocations = [
            Allocation(cost_center_id="9999", department="Production", percentage=50),
            Allocation(cost_center_id="10027", department="Logistics", percentage=50),
        ]
        record = _enriched(allocations)
        assert record.primary_allocation.cost_center_id == "9999"
        assert record.record_id == "r1"

    def test_update_row_flattens_fields(self):
        allocations = [
            Allocation(
                cost_center_id="9999",
                department="Production",
                percentage=100,
                mapped_location="Thunder Horse",
                is_reference_matched=True,
            )
        ]
        row = _enriched(allocations, mapping_status="LC Mapped", data_integrity="Valid").to_update_row()

        assert row["id"] == "r1"
        assert row["lc_number"] == "9999"
        assert row["lc_percentage"] == 100
        assert row["mapped_location"] == "Thunder Horse"
        assert row["mapping_status"] == "LC Mapped"
        assert row["data_quality_score"] == 85
        assert row["data_quality_issues"] == "Missing vessel name"
        assert row["allocations"][0]["cost_center_id"] == "9999"
        assert row["voyage_pattern"] is None
        assert "location" not in row

    def test_issues_text_none_when_clean(self):
        assert QualityScore(score=100).issues_text is None


@pytest.mark.unit
class TestRunSummary:
    """Tests for RunSummary and BatchResult"""

    def test_batch_counts(self):
        summary = RunSummary(
            batch_results=[
                BatchResult(batch_number=1, status=BatchStatus.COMMITTED, record_count=3, updated_count=3),
                BatchResult(batch_number=2, status=BatchStatus.ROLLED_BACK, record_count=2, error="boom"),
                BatchResult(batch_number=3, status=BatchStatus.COMMITTED, record_count=1, updated_count=1),
            ]
        )
        assert summary.batches_committed == 2
        assert summary.batches_failed == 1

    def test_batch_number_starts_at_one(self):
        with pytest.raises(ValidationError):
            BatchResult(batch_number=0, status=BatchStatus.COMMITTED)

    def test_summary_serializes_to_json(self):
        summary = RunSummary(total_scanned=4, department_counts={"Production": 4})
        assert '"total_scanned":4' in summary.model_dump_json()
