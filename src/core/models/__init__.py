"""
Core data models for the voyage enrichment pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .allocation import Allocation
from .cost_center import CostCenterEntry
from .enriched_record import EnrichedRecord, QualityScore
from .raw_record import RawRecord
from .run_summary import BatchResult, BatchStatus, FlaggedRecord, RunSummary
from .voyage_group import VoyageGroup, VoyagePattern, VoyagePurpose

__all__ = [
    "Allocation",
    "BatchResult",
    "BatchStatus",
    "CostCenterEntry",
    "EnrichedRecord",
    "FlaggedRecord",
    "QualityScore",
    "RawRecord",
    "RunSummary",
    "VoyageGroup",
    "VoyagePattern",
    "VoyagePurpose",
]
