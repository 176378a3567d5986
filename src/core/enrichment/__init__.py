"""
Record enrichment components: classification, allocation, grouping, profiling.
"""

from .cost_allocation import CostAllocationSplitter, split_percentages, tokenize_cost_centers
from .department_classifier import DepartmentClassifier
from .duplicates import find_duplicates
from .vessel_profile import build_vessel_profile
from .voyage_grouper import VoyageGrouper, record_voyage_id, standardized_voyage_id, unique_voyage_id

__all__ = [
    "CostAllocationSplitter",
    "DepartmentClassifier",
    "VoyageGrouper",
    "build_vessel_profile",
    "find_duplicates",
    "record_voyage_id",
    "split_percentages",
    "standardized_voyage_id",
    "tokenize_cost_centers",
    "unique_voyage_id",
]
