"""
Department classification for voyage events.

A resolved cost-center entry is authoritative. Without one, the record's
free text is matched against the keyword rule table in a fixed order:
location, event/parent event, port type hint, remarks. If nothing matches
the record falls back to the default department.
"""

from src.core.models import CostCenterEntry, RawRecord
from src.core.rules import DEFAULT_DEPARTMENT, ClassificationRule, EnrichmentSettings, build_rule_table


class DepartmentClassifier:
    """
    Assigns one department label to a raw record.

    Classification is a pure function of its inputs and always yields a
    value.
    """

    def __init__(self, settings: EnrichmentSettings | None = None):
        """
        Initialize the classifier.

        Args:
            settings: Enrichment settings providing the keyword groups
        """
        settings = settings or EnrichmentSettings()
        self.rules: list[ClassificationRule] = build_rule_table(settings.keyword_groups)

    def classify(self, record: RawRecord, entry: CostCenterEntry | None = None) -> str:
        """
        Determine the department of a record.

        Args:
            record: The raw record
            entry: Resolved cost-center entry, if any

        Returns:
            Department label
        """
        if entry is not None:
            return entry.department
        return self.infer(record)

    def infer(self, record: RawRecord) -> str:
        """Heuristic classification from free text only."""
        rule = self.matching_rule(record)
        return rule.department if rule else DEFAULT_DEPARTMENT

    def matching_rule(self, record: RawRecord) -> ClassificationRule | None:
        """
        Find the first rule of the table that matches the record.

        Args:
            record: The raw record

        Returns:
            Matching rule, or None when no rule fires
        """
        for rule in self.rules:
            if rule.predicate(record):
                return rule
        return None
