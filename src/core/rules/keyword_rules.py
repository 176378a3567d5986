"""
Tagged keyword rules for department classification.

Rules are plain (name, source, department, predicate) entries kept in an
ordered table, so rule order and coverage can be inspected and tested
independently of the classifier that walks them.
"""

import re
from collections.abc import Callable, Iterable
from typing import NamedTuple

from src.core.models import RawRecord

DEPARTMENTS = (
    "Drilling",
    "Production",
    "Logistics",
    "Completions",
    "Maintenance",
    "Personnel",
    "Operations",
)

DEFAULT_DEPARTMENT = "Operations"

# Free-text sources in priority order, with the RawRecord fields each one reads.
TEXT_SOURCES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("location", ("location",)),
    ("event", ("event_text", "parent_event_text")),
    ("port_type", ("port_type",)),
    ("remarks", ("remarks_text",)),
)


class ClassificationRule(NamedTuple):
    """One entry of the classification table."""

    name: str
    source: str
    department: str
    predicate: Callable[[RawRecord], bool]


def compile_keywords(keywords: Iterable[str]) -> re.Pattern[str]:
    """
    Compile keywords into one case-insensitive whole-word pattern.

    Longer keywords are tried first so multi-word terms ("morgan city")
    win over their prefixes.

    Args:
        keywords: Keywords or phrases

    Returns:
        Compiled pattern

    Raises:
        ValueError: If no keyword is given
    """
    terms = sorted({k.strip().lower() for k in keywords if k and k.strip()}, key=len, reverse=True)
    if not terms:
        raise ValueError("At least one keyword is required")
    alternation = "|".join(re.escape(t) for t in terms)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def source_text(record: RawRecord, fields: tuple[str, ...]) -> str:
    """Join the given record fields into one lower-cased string."""
    return " ".join(getattr(record, f) or "" for f in fields).strip().lower()


def _keyword_predicate(pattern: re.Pattern[str], fields: tuple[str, ...]) -> Callable[[RawRecord], bool]:
    def predicate(record: RawRecord) -> bool:
        text = source_text(record, fields)
        return bool(text) and pattern.search(text) is not None

    return predicate


def build_rule_table(keyword_groups) -> list[ClassificationRule]:
    """
    Build the ordered rule table: every source, then every keyword group.

    Args:
        keyword_groups: Ordered KeywordGroup settings

    Returns:
        Rules in evaluation order
    """
    compiled = [(group.department, compile_keywords(group.keywords)) for group in keyword_groups]

    rules: list[ClassificationRule] = []
    for source, fields in TEXT_SOURCES:
        for department, pattern in compiled:
            rules.append(
                ClassificationRule(
                    name=f"{source}_{department.lower()}",
                    source=source,
                    department=department,
                    predicate=_keyword_predicate(pattern, fields),
                )
            )
    return rules
