"""
Enrichment configuration management.

Loads location aliases, facility types, keyword groups and quality settings
from YAML and validates them into an EnrichmentSettings model. Every
section has a built-in default, so the pipeline also runs without a file.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .keyword_rules import DEPARTMENTS

DEFAULT_LOCATION_ALIASES: dict[str, str] = {
    "fourchon": "Fourchon",
    "port fourchon": "Fourchon",
    "thunder horse": "Thunder Horse",
    "thunder horse pdq": "Thunder Horse",
    "mad dog": "Mad Dog",
    "mad dog spar": "Mad Dog",
    "mad dog 2": "Mad Dog 2",
    "na kika": "Na Kika",
    "atlantis": "Atlantis",
    "argos": "Argos",
    "stena icemax": "Stena IceMAX",
    "stena ice max": "Stena IceMAX",
    "venice": "Venice",
    "morgan city": "Morgan City",
}

DEFAULT_FACILITIES: dict[str, str] = {
    "Thunder Horse": "Production",
    "Mad Dog": "Production",
    "Mad Dog 2": "Production",
    "Na Kika": "Production",
    "Atlantis": "Production",
    "Argos": "Production",
    "Stena IceMAX": "Drilling",
    "Fourchon": "Logistics",
    "Venice": "Logistics",
    "Morgan City": "Logistics",
}

DEFAULT_KEYWORD_GROUPS: list[dict[str, Any]] = [
    {
        "department": "Drilling",
        "keywords": [
            "drill", "drilling", "driller", "rig", "rigs", "spud", "casing",
            "cement", "cementing", "wireline", "mud", "bha",
        ],
    },
    {
        "department": "Production",
        "keywords": [
            "production", "producing", "thunder horse", "mad dog", "na kika",
            "atlantis", "argos", "platform", "facility", "processing",
            "separation", "export",
        ],
    },
    {
        "department": "Logistics",
        "keywords": [
            "fourchon", "venice", "morgan city", "base", "supply", "cargo",
            "logistics", "backload",
        ],
    },
    {
        "department": "Completions",
        "keywords": ["completion", "completions", "workover", "stimulation", "fracturing", "perforation"],
    },
    {
        "department": "Maintenance",
        "keywords": ["maintenance", "repair", "inspection", "overhaul", "upgrade"],
    },
    {
        "department": "Personnel",
        "keywords": ["crew", "personnel", "training", "evacuation", "medical"],
    },
]


class ConfigurationError(ValueError):
    """Raised when an enrichment configuration file is invalid."""


class KeywordGroup(BaseModel):
    """Keywords that classify free text into one department."""

    department: str
    keywords: list[str] = Field(..., min_length=1)

    @field_validator("department")
    @classmethod
    def check_department(cls, v: str) -> str:
        if v not in DEPARTMENTS:
            raise ValueError(f"Unknown department '{v}'. Must be one of {', '.join(DEPARTMENTS)}")
        return v


class QualitySettings(BaseModel):
    """Penalties and bands used by the data-quality scorer."""

    missing_date_penalty: int = Field(20, ge=0)
    missing_vessel_penalty: int = Field(15, ge=0)
    missing_location_penalty: int = Field(10, ge=0)
    excessive_hours_penalty: int = Field(5, ge=0)
    max_hours: float = Field(24.0, gt=0)
    negative_cost_penalty: int = Field(10, ge=0)
    daily_rate_penalty: int = Field(5, ge=0)
    min_daily_rate: float = 1000.0
    max_daily_rate: float = 100000.0
    date_range_penalty: int = Field(10, ge=0)
    min_year: int = 2020
    max_year: int = 2030
    needs_review_threshold: int = Field(70, ge=0, le=100)

    @model_validator(mode="after")
    def check_bands(self):
        if self.min_daily_rate > self.max_daily_rate:
            raise ValueError("min_daily_rate must not exceed max_daily_rate")
        if self.min_year > self.max_year:
            raise ValueError("min_year must not exceed max_year")
        return self


class EnrichmentSettings(BaseModel):
    """
    Complete enrichment configuration.

    Attributes:
        batch_size: Maximum records persisted per transaction
        location_aliases: Lower-cased alias -> canonical location name
        facilities: Canonical location -> facility type
        logistics_bases: Locations counted as logistics bases
        primary_base: Base that anchors Outbound/Return voyages
        keyword_groups: Ordered department keyword groups
        quality: Quality scorer settings
    """

    batch_size: int = Field(1000, ge=1)
    location_aliases: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_LOCATION_ALIASES))
    facilities: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_FACILITIES))
    logistics_bases: list[str] = Field(default_factory=lambda: ["Fourchon", "Venice", "Morgan City"])
    primary_base: str = "Fourchon"
    keyword_groups: list[KeywordGroup] = Field(
        default_factory=lambda: [KeywordGroup(**g) for g in DEFAULT_KEYWORD_GROUPS]
    )
    quality: QualitySettings = Field(default_factory=QualitySettings)

    @field_validator("location_aliases")
    @classmethod
    def lower_alias_keys(cls, v: dict[str, str]) -> dict[str, str]:
        return {k.strip().lower(): name for k, name in v.items()}

    @model_validator(mode="after")
    def check_primary_base(self):
        if self.primary_base not in self.logistics_bases:
            raise ValueError(f"primary_base '{self.primary_base}' must be listed in logistics_bases")
        return self


class EnrichmentConfigLoader:
    """
    Loads enrichment settings from YAML configuration files.

    Expected YAML format (every section optional):
    ```yaml
    batch_size: 500
    primary_base: Fourchon
    logistics_bases: [Fourchon, Venice, Morgan City]
    location_aliases:
      port fourchon: Fourchon
    facilities:
      Thunder Horse: Production
    keyword_groups:
      - department: Drilling
        keywords: [drill, drilling, rig]
    quality:
      needs_review_threshold: 70
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Enrichment configuration file not found: {config_path}")

    def load_settings(self) -> EnrichmentSettings:
        """
        Load and validate settings from the YAML file.

        Returns:
            EnrichmentSettings with file values over built-in defaults

        Raises:
            ConfigurationError: If YAML is invalid or a section fails validation
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration file must contain a mapping at the top level")

        unknown = set(config) - set(EnrichmentSettings.model_fields)
        if unknown:
            raise ConfigurationError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

        try:
            return EnrichmentSettings(**config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid enrichment configuration: {e}") from e


def load_settings(config_path: str | Path | None = None) -> EnrichmentSettings:
    """
    Load settings from a file, or return the defaults when no path is given.

    Args:
        config_path: Optional YAML path

    Returns:
        EnrichmentSettings
    """
    if config_path is None:
        return EnrichmentSettings()
    return EnrichmentConfigLoader(config_path).load_settings()
