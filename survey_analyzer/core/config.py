"""
Configuration for the Survey Analyzer

This module defines the configuration dataclass used by every scoring and
analysis function. Configuration is:
    1. Loaded from environment variables (with .env support)
    2. Validated at startup to fail fast on misconfiguration
    3. Passed explicitly; functions that receive None use the defaults

Configuration Hierarchy:
    AnalyzerConfiguration (main config)
    ├── Risk Settings (band thresholds, priority threshold, high-pain threshold)
    ├── Conversion Settings (outlook thresholds)
    ├── Diagnosis Settings (categories, keyword table, fallback category)
    └── Runtime Settings (cache capacity, top-symptom limit)

Usage:
    from survey_analyzer.core.config import AnalyzerConfiguration

    # Load from environment (ANALYZER_* variables)
    config = AnalyzerConfiguration.from_environment()

    # Or configure programmatically
    config = AnalyzerConfiguration(priority_threshold=45)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from survey_analyzer.core.constants import (
    DEFAULT_DIAGNOSIS_CATEGORIES,
    DEFAULT_DIAGNOSIS_KEYWORDS,
    DEFAULT_FALLBACK_CATEGORY,
)
from survey_analyzer.core.exceptions import ConfigurationError


ENV_PREFIX = "ANALYZER_"


# =============================================================================
# STAGE 1: DEFAULT VALUES
# =============================================================================


class ConfigDefaults:
    """Default configuration values."""

    # -------------------------------------------------------------------------
    # 1.1 Risk Defaults
    # -------------------------------------------------------------------------
    DEFAULT_RISK_HIGH_THRESHOLD = 50
    DEFAULT_RISK_MODERATE_THRESHOLD = 30
    DEFAULT_PRIORITY_THRESHOLD = 40
    DEFAULT_HIGH_PAIN_THRESHOLD = 7

    # -------------------------------------------------------------------------
    # 1.2 Conversion Defaults
    # -------------------------------------------------------------------------
    DEFAULT_CONVERSION_HIGH_THRESHOLD = 0.7
    DEFAULT_CONVERSION_MEDIUM_THRESHOLD = 0.4

    # -------------------------------------------------------------------------
    # 1.3 Runtime Defaults
    # -------------------------------------------------------------------------
    DEFAULT_CACHE_CAPACITY = 128
    DEFAULT_TOP_SYMPTOM_LIMIT = 5


# =============================================================================
# STAGE 2: CONFIGURATION DATACLASS
# =============================================================================


@dataclass
class AnalyzerConfiguration:
    """
    Configuration for the survey analyzer.

    What it does:
        Holds every tunable threshold and table used by scoring, grouping
        and analysis so hosts can adjust them without code changes.

    When to use:
        - At SurveyAnalyzer construction
        - When calling a scoring/analysis function directly with non-default
          thresholds
        - When creating test fixtures with custom config

    Example:
        >>> config = AnalyzerConfiguration(risk_high_threshold=60)
        >>> config.validate()
        >>> config.risk_moderate_threshold
        30
    """

    # -------------------------------------------------------------------------
    # 2.1 Risk Configuration
    # -------------------------------------------------------------------------
    risk_high_threshold: int = ConfigDefaults.DEFAULT_RISK_HIGH_THRESHOLD
    """Risk index at or above which the band is High."""

    risk_moderate_threshold: int = ConfigDefaults.DEFAULT_RISK_MODERATE_THRESHOLD
    """Risk index at or above which the band is Moderate."""

    priority_threshold: int = ConfigDefaults.DEFAULT_PRIORITY_THRESHOLD
    """Risk index at or above which a survey counts as priority in a cohort."""

    high_pain_threshold: int = ConfigDefaults.DEFAULT_HIGH_PAIN_THRESHOLD
    """Pain intensity (0-10) at or above which pain counts as high."""

    # -------------------------------------------------------------------------
    # 2.2 Conversion Configuration
    # -------------------------------------------------------------------------
    conversion_high_threshold: float = ConfigDefaults.DEFAULT_CONVERSION_HIGH_THRESHOLD
    conversion_medium_threshold: float = ConfigDefaults.DEFAULT_CONVERSION_MEDIUM_THRESHOLD

    # -------------------------------------------------------------------------
    # 2.3 Diagnosis Configuration
    # -------------------------------------------------------------------------
    diagnosis_categories: Tuple[str, ...] = DEFAULT_DIAGNOSIS_CATEGORIES
    """Every diagnosis group, in display order."""

    diagnosis_keywords: Dict[str, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_DIAGNOSIS_KEYWORDS)
    )
    """Category -> keywords searched in prior diagnosis text, in table order."""

    fallback_category: str = DEFAULT_FALLBACK_CATEGORY
    """Group for surveys that no rule classifies."""

    # -------------------------------------------------------------------------
    # 2.4 Runtime Configuration
    # -------------------------------------------------------------------------
    cache_capacity: int = ConfigDefaults.DEFAULT_CACHE_CAPACITY
    top_symptom_limit: int = ConfigDefaults.DEFAULT_TOP_SYMPTOM_LIMIT

    # -------------------------------------------------------------------------
    # 2.5 Validation Methods
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Checks:
            1. Risk thresholds are non-negative and ordered
            2. Conversion thresholds lie in [0, 1] and are ordered
            3. Keyword targets and fallback are configured categories
            4. Runtime sizes are positive

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not (0 <= self.risk_moderate_threshold < self.risk_high_threshold):
            raise ConfigurationError(
                "Moderate risk threshold must be non-negative and below the high threshold",
                context={
                    "moderate": self.risk_moderate_threshold,
                    "high": self.risk_high_threshold,
                },
            )

        if self.priority_threshold < 0:
            raise ConfigurationError(
                "Priority threshold must be non-negative",
                context={"priority_threshold": self.priority_threshold},
            )

        if not (0 <= self.high_pain_threshold <= 10):
            raise ConfigurationError(
                f"High pain threshold must be 0-10, got {self.high_pain_threshold}",
                context={"high_pain_threshold": self.high_pain_threshold},
            )

        if not (
            0.0
            <= self.conversion_medium_threshold
            < self.conversion_high_threshold
            <= 1.0
        ):
            raise ConfigurationError(
                "Conversion thresholds must satisfy 0 <= medium < high <= 1",
                context={
                    "medium": self.conversion_medium_threshold,
                    "high": self.conversion_high_threshold,
                },
            )

        if self.fallback_category not in self.diagnosis_categories:
            raise ConfigurationError(
                "Fallback category is not a configured diagnosis category",
                context={"fallback": self.fallback_category},
            )

        for category in self.diagnosis_keywords:
            if category not in self.diagnosis_categories:
                raise ConfigurationError(
                    "Diagnosis keyword table targets an unknown category",
                    context={"category": category},
                )

        if self.cache_capacity <= 0 or self.top_symptom_limit <= 0:
            raise ConfigurationError(
                "Cache capacity and top-symptom limit must be positive",
                context={
                    "cache_capacity": self.cache_capacity,
                    "top_symptom_limit": self.top_symptom_limit,
                },
            )

    # -------------------------------------------------------------------------
    # 2.6 Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_environment(
        cls, env_file: Optional[str] = None, validate_on_load: bool = True
    ) -> "AnalyzerConfiguration":
        """
        Load configuration from ANALYZER_* environment variables.

        STAGE 1: Load .env file (if specified or found)
        STAGE 2: Read and convert environment variables
        STAGE 3: Validate configuration (optional)

        Recognized variables:
            ANALYZER_RISK_HIGH_THRESHOLD, ANALYZER_RISK_MODERATE_THRESHOLD,
            ANALYZER_PRIORITY_THRESHOLD, ANALYZER_HIGH_PAIN_THRESHOLD,
            ANALYZER_CONVERSION_HIGH_THRESHOLD, ANALYZER_CONVERSION_MEDIUM_THRESHOLD,
            ANALYZER_CACHE_CAPACITY, ANALYZER_TOP_SYMPTOM_LIMIT

        Raises:
            ConfigurationError: If a value is not numeric or fails validation
        """
        # STAGE 1: Load .env file
        if env_file:
            load_dotenv(env_file)
        else:
            location = Path.cwd() / ".env"
            if location.exists():
                load_dotenv(location)

        # STAGE 2: Read environment variables
        config = cls(
            risk_high_threshold=_env_number(
                "RISK_HIGH_THRESHOLD", ConfigDefaults.DEFAULT_RISK_HIGH_THRESHOLD, int
            ),
            risk_moderate_threshold=_env_number(
                "RISK_MODERATE_THRESHOLD",
                ConfigDefaults.DEFAULT_RISK_MODERATE_THRESHOLD,
                int,
            ),
            priority_threshold=_env_number(
                "PRIORITY_THRESHOLD", ConfigDefaults.DEFAULT_PRIORITY_THRESHOLD, int
            ),
            high_pain_threshold=_env_number(
                "HIGH_PAIN_THRESHOLD", ConfigDefaults.DEFAULT_HIGH_PAIN_THRESHOLD, int
            ),
            conversion_high_threshold=_env_number(
                "CONVERSION_HIGH_THRESHOLD",
                ConfigDefaults.DEFAULT_CONVERSION_HIGH_THRESHOLD,
                float,
            ),
            conversion_medium_threshold=_env_number(
                "CONVERSION_MEDIUM_THRESHOLD",
                ConfigDefaults.DEFAULT_CONVERSION_MEDIUM_THRESHOLD,
                float,
            ),
            cache_capacity=_env_number(
                "CACHE_CAPACITY", ConfigDefaults.DEFAULT_CACHE_CAPACITY, int
            ),
            top_symptom_limit=_env_number(
                "TOP_SYMPTOM_LIMIT", ConfigDefaults.DEFAULT_TOP_SYMPTOM_LIMIT, int
            ),
        )

        # STAGE 3: Validate
        if validate_on_load:
            config.validate()

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (for logging/debugging)."""
        return {
            "risk_high_threshold": self.risk_high_threshold,
            "risk_moderate_threshold": self.risk_moderate_threshold,
            "priority_threshold": self.priority_threshold,
            "high_pain_threshold": self.high_pain_threshold,
            "conversion_high_threshold": self.conversion_high_threshold,
            "conversion_medium_threshold": self.conversion_medium_threshold,
            "diagnosis_categories": list(self.diagnosis_categories),
            "fallback_category": self.fallback_category,
            "cache_capacity": self.cache_capacity,
            "top_symptom_limit": self.top_symptom_limit,
        }


def _env_number(name: str, default, cast):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ConfigurationError(
            f"Environment variable {ENV_PREFIX + name} must be numeric",
            context={"value": raw},
        ) from e
