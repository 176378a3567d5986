"""
Cost-center (LC) allocation splitting.

The free-text "cost dedicated to" field may hold several LC numbers
separated by ',', '/' or ';' (all with equal precedence). The record's
effort is split evenly across them; any remainder from rounding to cents
goes to the first allocation so the shares sum to exactly 100.
"""

import re
from decimal import ROUND_DOWN, Decimal

from src.core.models import Allocation, RawRecord
from src.core.reference import ReferenceResolver

from .department_classifier import DepartmentClassifier

COST_CENTER_SEPARATORS = re.compile(r"[,/;]")

HUNDRED = Decimal(100)
CENT = Decimal("0.01")


def tokenize_cost_centers(field: str | None) -> list[str]:
    """
    Split a cost-center field into LC numbers.

    Args:
        field: Raw field text, e.g. "7777, 8888" or "7777/8888;9999"

    Returns:
        Trimmed, non-empty tokens in input order (duplicates kept)
    """
    if not field:
        return []
    return [token.strip() for token in COST_CENTER_SEPARATORS.split(str(field)) if token.strip()]


def split_percentages(count: int) -> list[float]:
    """
    Even percentage shares for `count` allocations.

    Each share is 100/count truncated to cents; the leftover is added to
    the first share.

    Args:
        count: Number of allocations (>= 1)

    Returns:
        Percentages summing to 100

    Raises:
        ValueError: If count is less than 1
    """
    if count < 1:
        raise ValueError(f"Allocation count must be at least 1, got {count}")
    share = (HUNDRED / count).quantize(CENT, rounding=ROUND_DOWN)
    first = HUNDRED - share * (count - 1)
    return [float(first)] + [float(share)] * (count - 1)


class CostAllocationSplitter:
    """
    Turns a record's cost-center field into percentage Allocations.

    Unrecognized LC numbers still produce an Allocation; their department
    comes from the classifier's keyword fallback.
    """

    def __init__(self, resolver: ReferenceResolver, classifier: DepartmentClassifier):
        """
        Initialize the splitter.

        Args:
            resolver: Reference resolver for LC lookup and location aliases
            classifier: Department classifier for the keyword fallback
        """
        self.resolver = resolver
        self.classifier = classifier

    def split(self, record: RawRecord) -> list[Allocation]:
        """
        Allocate a record across the LC numbers in its cost-center field.

        Args:
            record: The raw record

        Returns:
            One or more Allocations whose percentages sum to 100
        """
        location = self.resolver.standardize_location(record.location)
        hours = record.final_hours
        tokens = tokenize_cost_centers(record.cost_center_field)

        if not tokens:
            return [
                Allocation(
                    cost_center_id=None,
                    department=self.classifier.infer(record),
                    percentage=100.0,
                    mapped_location=location,
                    is_reference_matched=False,
                    allocated_hours=hours,
                )
            ]

        allocations = []
        for token, percentage in zip(tokens, split_percentages(len(tokens))):
            entry = self.resolver.lookup(token)
            allocations.append(
                Allocation(
                    cost_center_id=token,
                    department=self.classifier.classify(record, entry),
                    percentage=percentage,
                    mapped_location=(entry.rig_reference or location) if entry else location,
                    is_reference_matched=entry is not None,
                    allocated_hours=round(hours * percentage / 100, 2),
                )
            )
        return allocations
