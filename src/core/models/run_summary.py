"""
Batch and run result models returned by the enrichment pipeline.
"""

from enum import Enum

from pydantic import BaseModel, Field


class BatchStatus(str, Enum):
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class BatchResult(BaseModel):
    """
    Outcome of persisting one batch.

    Attributes:
        batch_number: 1-based batch position in the run
        status: committed or rolled_back
        record_count: Records in the batch
        updated_count: Rows updated (0 when rolled back)
        error: Failure message when rolled back
    """

    batch_number: int = Field(..., ge=1)
    status: BatchStatus
    record_count: int = Field(0, ge=0)
    updated_count: int = Field(0, ge=0)
    error: str | None = None

    @property
    def committed(self) -> bool:
        return self.status == BatchStatus.COMMITTED


class FlaggedRecord(BaseModel):
    """A record whose quality score fell below the review threshold."""

    record_id: str
    score: int
    issues: list[str] = Field(default_factory=list)


class RunSummary(BaseModel):
    """
    Structured summary of one enrichment run.

    Attributes:
        total_scanned: Records read from the source
        total_updated: Records written back in committed batches
        department_counts: Committed records per department
        needs_review_count: Committed records scoring below the threshold
        flagged_records: Those records with their issues
        batch_results: One entry per batch, in processing order
        duplicates_detected: Records sharing another record's natural key
        voyage_count: Distinct voyages in committed batches
        pattern_counts: Committed voyages per pattern
        purpose_counts: Committed voyages per purpose
        duration_seconds: Wall-clock run time
    """

    total_scanned: int = 0
    total_updated: int = 0
    department_counts: dict[str, int] = Field(default_factory=dict)
    needs_review_count: int = 0
    flagged_records: list[FlaggedRecord] = Field(default_factory=list)
    batch_results: list[BatchResult] = Field(default_factory=list)
    duplicates_detected: int = 0
    voyage_count: int = 0
    pattern_counts: dict[str, int] = Field(default_factory=dict)
    purpose_counts: dict[str, int] = Field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def batches_committed(self) -> int:
        return sum(1 for r in self.batch_results if r.committed)

    @property
    def batches_failed(self) -> int:
        return sum(1 for r in self.batch_results if not r.committed)
