"""
Data-quality checks and scoring.
"""

from .base_check import BaseCheck, QualityIssue
from .checks import BandCheck, MaxValueCheck, NegativeValueCheck, RequiredFieldCheck, YearRangeCheck
from .scorer import DataQualityScorer, build_payload

__all__ = [
    "BaseCheck",
    "QualityIssue",
    "BandCheck",
    "MaxValueCheck",
    "NegativeValueCheck",
    "RequiredFieldCheck",
    "YearRangeCheck",
    "DataQualityScorer",
    "build_payload",
]
