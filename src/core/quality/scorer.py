"""
Data-quality scoring for enriched voyage events.

The scorer starts every record at 100 and runs its checks in a fixed
order, subtracting each fired check's penalty. Issues are reported in
check order and the score never drops below 0.
"""

from typing import Any

from src.core.models import EnrichedRecord, QualityScore, RawRecord
from src.core.rules import QualitySettings

from .base_check import BaseCheck, QualityIssue
from .checks import BandCheck, MaxValueCheck, NegativeValueCheck, RequiredFieldCheck, YearRangeCheck

MAX_SCORE = 100


def build_payload(
    record: RawRecord,
    final_hours: float | None = None,
    vessel_daily_rate: float | None = None,
    vessel_cost_total: float | None = None,
) -> dict[str, Any]:
    """
    Fields inspected by the quality checks.

    Args:
        record: The raw record
        final_hours: Hours after enrichment (defaults to the record's own)
        vessel_daily_rate: Uploaded or derived daily rate
        vessel_cost_total: Uploaded or derived cost total

    Returns:
        Scoring payload
    """
    return {
        "event_date": record.effective_date,
        "vessel_name": record.vessel_name,
        "location": record.location,
        "final_hours": record.final_hours if final_hours is None else final_hours,
        "vessel_cost_total": vessel_cost_total,
        "vessel_daily_rate": vessel_daily_rate,
    }


class DataQualityScorer:
    """
    Computes a 0-100 score and ordered issue list for a record.
    """

    def __init__(self, settings: QualitySettings | None = None):
        """
        Initialize the scorer.

        Args:
            settings: Penalties and bands (defaults when None)
        """
        self.settings = settings or QualitySettings()
        self.checks: list[BaseCheck] = self._build_checks()

    def _build_checks(self) -> list[BaseCheck]:
        """Build check instances in scoring order."""
        s = self.settings
        return [
            RequiredFieldCheck("event_date", s.missing_date_penalty, "Missing event date"),
            RequiredFieldCheck("vessel_name", s.missing_vessel_penalty, "Missing vessel name"),
            RequiredFieldCheck("location", s.missing_location_penalty, "Missing location"),
            MaxValueCheck(
                "final_hours",
                s.excessive_hours_penalty,
                f"Excessive hours (>{s.max_hours:g})",
                {"max": s.max_hours},
            ),
            NegativeValueCheck("vessel_cost_total", s.negative_cost_penalty, "Negative cost value"),
            BandCheck(
                "vessel_daily_rate",
                s.daily_rate_penalty,
                "Suspicious daily rate",
                {"min": s.min_daily_rate, "max": s.max_daily_rate},
            ),
            YearRangeCheck(
                "event_date",
                s.date_range_penalty,
                "Date out of expected range",
                {"min_year": s.min_year, "max_year": s.max_year},
            ),
        ]

    def score(self, payload: dict[str, Any]) -> QualityScore:
        """
        Score a payload built by build_payload().

        Args:
            payload: Scoring payload

        Returns:
            QualityScore
        """
        score = MAX_SCORE
        issues: list[str] = []

        for check in self.checks:
            try:
                check.evaluate(payload.get(check.field_name), payload)
            except QualityIssue as issue:
                score -= check.penalty
                issues.append(issue.message)

        return QualityScore(score=max(0, score), issues=issues)

    def score_record(self, record: EnrichedRecord) -> QualityScore:
        """Score an already enriched record."""
        return self.score(
            build_payload(
                record.raw,
                final_hours=record.final_hours,
                vessel_daily_rate=record.vessel_daily_rate,
                vessel_cost_total=record.vessel_cost_total,
            )
        )

    def needs_review(self, quality: QualityScore) -> bool:
        return quality.score < self.settings.needs_review_threshold
