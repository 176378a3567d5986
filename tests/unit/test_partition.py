"""
Unit tests for voyage-aware batch partitioning.
"""

from datetime import date

import pytest

from src.batch import partition_batches
from src.batch.partition import voyage_units


@pytest.mark.unit
class TestPartitionBatches:
    """Tests for partition_batches"""

    def test_units_group_voyages(self, make_record):
        records = [
            make_record(voyage_number="1"),
            make_record(voyage_number="2"),
            make_record(voyage_number="1"),
            make_record(vessel_name=None),
        ]
        units = voyage_units(records)
        assert [[r.record_id for r in u] for u in units] == [
            [records[0].record_id, records[2].record_id],
            [records[1].record_id],
            [records[3].record_id],
        ]

    def test_batches_respect_size(self, make_record):
        records = [make_record(voyage_number=str(i)) for i in range(7)]
        batches = partition_batches(records, 3)
        assert [len(b) for b in batches] == [3, 3, 1]

    def test_voyage_never_split(self, make_record):
        records = [
            make_record(voyage_number="1"),
            make_record(voyage_number="2"),
            make_record(voyage_number="2"),
            make_record(voyage_number="2"),
        ]
        batches = partition_batches(records, 2)
        assert [len(b) for b in batches] == [1, 3]
        assert {r.voyage_number for r in batches[1]} == {"2"}

    def test_oversized_voyage_is_own_batch(self, make_record):
        records = [make_record(voyage_number="9") for _ in range(5)] + [make_record(voyage_number="10")]
        batches = partition_batches(records, 2)
        assert [len(b) for b in batches] == [5, 1]

    def test_same_voyage_number_different_month(self, make_record):
        records = [
            make_record(voyage_number="1", event_date=date(2025, 3, 30)),
            make_record(voyage_number="1", event_date=date(2025, 4, 2)),
        ]
        assert [len(b) for b in partition_batches(records, 1)] == [1, 1]

    def test_every_record_in_exactly_one_batch(self, make_record):
        records = [make_record(voyage_number=str(i % 4)) for i in range(25)]
        batches = partition_batches(records, 4)
        ids = [r.record_id for batch in batches for r in batch]
        assert sorted(ids) == sorted(r.record_id for r in records)

    def test_empty_input(self):
        assert partition_batches([], 10) == []

    def test_invalid_batch_size(self, make_record):
        with pytest.raises(ValueError):
            partition_batches([make_record()], 0)
