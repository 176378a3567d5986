"""
Unit tests for enrichment configuration loading and the keyword rule table.
"""

from pathlib import Path

import pytest
import yaml

from src.core.rules import (
    DEFAULT_DEPARTMENT,
    DEPARTMENTS,
    ConfigurationError,
    EnrichmentConfigLoader,
    EnrichmentSettings,
    KeywordGroup,
    QualitySettings,
    build_rule_table,
    load_settings,
)
from src.core.rules.keyword_rules import compile_keywords

SHIPPED_CONFIG = Path(__file__).resolve().parents[2] / "config" / "enrichment.yaml"


@pytest.mark.unit
class TestEnrichmentSettings:
    """Tests for built-in settings and their validation"""

    def test_defaults(self):
        settings = EnrichmentSettings()
        assert settings.batch_size == 1000
        assert settings.primary_base == "Fourchon"
        assert settings.quality.needs_review_threshold == 70
        assert [g.department for g in settings.keyword_groups] == [
            "Drilling", "Production", "Logistics", "Completions", "Maintenance", "Personnel",
        ]

    def test_alias_keys_lower_cased(self):
        settings = EnrichmentSettings(location_aliases={"  Port FOURCHON ": "Fourchon"})
        assert settings.location_aliases == {"port fourchon": "Fourchon"}

    def test_primary_base_must_be_logistics_base(self):
        with pytest.raises(ValueError, match="primary_base"):
            EnrichmentSettings(primary_base="Galveston")

    def test_unknown_department_rejected(self):
        with pytest.raises(ValueError, match="Unknown department"):
            KeywordGroup(department="Finance", keywords=["invoice"])

    def test_inverted_rate_band_rejected(self):
        with pytest.raises(ValueError):
            QualitySettings(min_daily_rate=5000, max_daily_rate=1000)

    def test_default_department_is_a_department(self):
        assert DEFAULT_DEPARTMENT in DEPARTMENTS


@pytest.mark.unit
class TestEnrichmentConfigLoader:
    """Tests for EnrichmentConfigLoader"""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            EnrichmentConfigLoader(tmp_path / "missing.yaml")

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "enrichment.yaml"
        path.write_text(yaml.safe_dump({"batch_size": 250, "quality": {"needs_review_threshold": 60}}))

        settings = EnrichmentConfigLoader(path).load_settings()

        assert settings.batch_size == 250
        assert settings.quality.needs_review_threshold == 60
        assert settings.quality.missing_date_penalty == 20
        assert settings.facilities["Thunder Horse"] == "Production"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "enrichment.yaml"
        path.write_text("")
        assert EnrichmentConfigLoader(path).load_settings() == EnrichmentSettings()

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "enrichment.yaml"
        path.write_text("batch_size: [1000\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            EnrichmentConfigLoader(path).load_settings()

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "enrichment.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            EnrichmentConfigLoader(path).load_settings()

    def test_unknown_section_raises(self, tmp_path):
        path = tmp_path / "enrichment.yaml"
        path.write_text("validation_rules: []\n")
        with pytest.raises(ConfigurationError, match="validation_rules"):
            EnrichmentConfigLoader(path).load_settings()

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "enrichment.yaml"
        path.write_text("batch_size: 0\n")
        with pytest.raises(ConfigurationError, match="Invalid enrichment configuration"):
            EnrichmentConfigLoader(path).load_settings()

    def test_shipped_config_matches_defaults(self):
        """config/enrichment.yaml documents the built-in defaults"""
        assert load_settings(SHIPPED_CONFIG) == EnrichmentSettings()

    def test_load_settings_without_path(self):
        assert load_settings() == EnrichmentSettings()


@pytest.mark.unit
class TestRuleTable:
    """Tests for the ordered keyword rule table"""

    def test_rules_ordered_by_source_then_group(self):
        rules = build_rule_table(EnrichmentSettings().keyword_groups)

        assert len(rules) == 4 * 6
        assert [r.name for r in rules[:3]] == ["location_drilling", "location_production", "location_logistics"]
        assert [r.source for r in rules[::6]] == ["location", "event", "port_type", "remarks"]

    def test_keywords_match_whole_words(self):
        pattern = compile_keywords(["rig"])
        assert pattern.search("drilling rig 4")
        assert not pattern.search("origin port")

    def test_multi_word_keywords(self):
        pattern = compile_keywords(["morgan city", "morgan"])
        assert pattern.search("MORGAN CITY dock").group(0).lower() == "morgan city"

    def test_empty_keyword_list_rejected(self):
        with pytest.raises(ValueError):
            compile_keywords(["  "])
