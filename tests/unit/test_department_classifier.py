"""
Unit tests for department classification.
"""

import pytest

from src.core.enrichment import DepartmentClassifier
from src.core.models import CostCenterEntry
from src.core.rules import DEFAULT_DEPARTMENT, EnrichmentSettings, KeywordGroup


@pytest.fixture(scope="module")
def classifier() -> DepartmentClassifier:
    return DepartmentClassifier()


@pytest.mark.unit
class TestDepartmentClassifier:
    """Tests for DepartmentClassifier"""

    def test_reference_entry_wins(self, classifier, make_record):
        record = make_record(location="Stena IceMAX drilling rig")
        entry = CostCenterEntry(cost_center_id="9999", department="Production")
        assert classifier.classify(record, entry) == "Production"

    def test_drilling_rig_at_production_facility(self, classifier, make_record):
        """Drilling keywords are checked before production keywords"""
        record = make_record(location="Thunder Horse Drilling Rig", event_text=None, parent_event_text=None)
        assert classifier.classify(record) == "Drilling"
        assert classifier.matching_rule(record).name == "location_drilling"

    def test_location_checked_before_event(self, classifier, make_record):
        record = make_record(location="Mad Dog", event_text="Crew change")
        assert classifier.infer(record) == "Production"

    def test_event_and_parent_event_used(self, classifier, make_record):
        record = make_record(location="GC 640", event_text="Standby", parent_event_text="Crew Transfer")
        rule = classifier.matching_rule(record)
        assert rule.source == "event"
        assert rule.department == "Personnel"

    def test_port_type_hint(self, classifier, make_record):
        record = make_record(location="GC 640", event_text="Transit", parent_event_text=None, port_type="rig")
        assert classifier.matching_rule(record).name == "port_type_drilling"

    def test_remarks_checked_last(self, classifier, make_record):
        record = make_record(
            location="GC 640",
            event_text="Transit",
            parent_event_text=None,
            remarks_text="post-storm inspection",
        )
        assert classifier.infer(record) == "Maintenance"

    def test_no_match_falls_back_to_default(self, classifier, make_record):
        record = make_record(location="GC 640", event_text="Transit", parent_event_text=None)
        assert classifier.matching_rule(record) is None
        assert classifier.classify(record) == DEFAULT_DEPARTMENT

    def test_empty_record_is_classified(self, classifier, make_record):
        record = make_record(location=None, event_text=None, parent_event_text=None)
        assert classifier.classify(record) == DEFAULT_DEPARTMENT

    def test_keywords_are_whole_words(self, classifier, make_record):
        """'origin' must not match the 'rig' keyword"""
        record = make_record(location="Origin Point", event_text="Transit", parent_event_text=None)
        assert classifier.infer(record) == DEFAULT_DEPARTMENT

    def test_configured_groups(self, make_record):
        settings = EnrichmentSettings(
            keyword_groups=[KeywordGroup(department="Completions", keywords=["frac"])]
        )
        classifier = DepartmentClassifier(settings)
        assert classifier.infer(make_record(location="frac spread", event_text=None)) == "Completions"
        assert classifier.infer(make_record(location="Thunder Horse", event_text=None)) == DEFAULT_DEPARTMENT

    def test_classification_is_deterministic(self, classifier, make_record):
        record = make_record(location="Venice", event_text="Backload")
        assert {classifier.classify(record) for _ in range(5)} == {"Logistics"}
