"""
Batch enrichment module.
"""

from .partition import partition_batches
from .pipeline import EnrichmentPipeline, run_enrichment

__all__ = [
    "EnrichmentPipeline",
    "partition_batches",
    "run_enrichment",
]
