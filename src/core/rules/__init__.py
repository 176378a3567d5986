"""
Enrichment configuration and department classification rules.
"""

from .keyword_rules import DEFAULT_DEPARTMENT, DEPARTMENTS, ClassificationRule, build_rule_table
from .rule_config import (
    ConfigurationError,
    EnrichmentConfigLoader,
    EnrichmentSettings,
    KeywordGroup,
    QualitySettings,
    load_settings,
)

__all__ = [
    "ClassificationRule",
    "ConfigurationError",
    "DEFAULT_DEPARTMENT",
    "DEPARTMENTS",
    "EnrichmentConfigLoader",
    "EnrichmentSettings",
    "KeywordGroup",
    "QualitySettings",
    "build_rule_table",
    "load_settings",
]
