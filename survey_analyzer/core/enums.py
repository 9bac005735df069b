"""
Enumerations for Survey Analysis

Closed enumerations for every coded survey field and every derived
classification. Coded-field enums share a tolerant parser: `from_code()`
accepts the canonical value, the member name, or a legacy questionnaire
alias, and returns UNKNOWN for anything else. Unrecognized codes contribute
nothing to scoring; they never raise.

Enumeration Categories:
    Survey fields     → Symptom, Severity, SymptomDuration, FunctionalLimitation,
                        DesiredTimeframe, SurgeryConcern, InsuranceType
    Derived outputs   → ImpactLevel, PointStrength, PointCategory, RiskBand,
                        ConversionOutlook, Sentiment, SurgeryReadiness
"""

from enum import Enum
from typing import Any, Dict

from loguru import logger

from survey_analyzer.core.constants import (
    CONCERN_ALIASES,
    DURATION_ALIASES,
    INSURANCE_ALIASES,
    LIMITATION_ALIASES,
    SEVERITY_ALIASES,
    SYMPTOM_ALIASES,
    TIMEFRAME_ALIASES,
)


def normalize_code(value: Any) -> str:
    """Lowercase, trim and replace spaces/hyphens with underscores."""
    return str(value).strip().lower().replace("-", "_").replace(" ", "_")


# =============================================================================
# STAGE 1: CODED FIELD BASE
# =============================================================================


class CodedEnum(str, Enum):
    """
    Base for enums parsed from questionnaire answers.

    Subclasses define an UNKNOWN member and may override `_aliases()` to
    accept legacy codes.
    """

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def from_code(cls, value: Any) -> "CodedEnum":
        """
        Parse a raw answer into a member.

        Args:
            value: Raw code (member, canonical value, member name or alias)

        Returns:
            Matching member, or UNKNOWN when the value is not recognized
        """
        if isinstance(value, cls):
            return value
        if value is None or isinstance(value, bool):
            return cls.UNKNOWN

        normalized = normalize_code(value)
        if not normalized:
            return cls.UNKNOWN
        normalized = cls._aliases().get(normalized, normalized)

        for member in cls:
            if member.value == normalized or member.name.lower() == normalized:
                return member

        logger.debug(f"Unrecognized {cls.__name__} code '{value}', treating as unknown")
        return cls.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self.name != "UNKNOWN"


# =============================================================================
# STAGE 2: SURVEY FIELD ENUMERATIONS
# =============================================================================


class Symptom(CodedEnum):
    """Symptom codes offered by the intake questionnaire."""

    ABDOMINAL_PAIN = "abdominal_pain"
    VISIBLE_LUMP = "visible_lump"
    JAUNDICE = "jaundice"
    LIMITED_MOVEMENT = "limited_movement"
    NAUSEA = "nausea"
    POST_MEAL_PAIN = "post_meal_pain"
    HEAVINESS = "heaviness"
    BLOATING = "bloating"
    EXERTION_PAIN = "exertion_pain"
    FEVER = "fever"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return SYMPTOM_ALIASES


class Severity(CodedEnum):
    """Self-reported severity of the current symptoms."""

    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return SEVERITY_ALIASES


class SymptomDuration(CodedEnum):
    """
    How long the main symptom has been present.

    Buckets are ordered; `months_at_least` gives the lower bound of each
    bucket so callers can compare durations without string checks.
    """

    LESS_THAN_1_MONTH = "less_than_1_month"
    ONE_TO_THREE_MONTHS = "1_3_months"
    THREE_TO_SIX_MONTHS = "3_6_months"
    SIX_TO_TWELVE_MONTHS = "6_12_months"
    MORE_THAN_1_YEAR = "more_than_1_year"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return DURATION_ALIASES

    @property
    def months_at_least(self) -> int:
        return {
            "less_than_1_month": 0,
            "1_3_months": 1,
            "3_6_months": 3,
            "6_12_months": 6,
            "more_than_1_year": 12,
        }.get(self.value, 0)


class FunctionalLimitation(CodedEnum):
    """How much the condition limits daily activities."""

    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return LIMITATION_ALIASES


class DesiredTimeframe(CodedEnum):
    """When the patient would like the problem resolved."""

    URGENT = "urgent"
    WITHIN_30_DAYS = "30_days"
    WITHIN_90_DAYS = "90_days"
    NO_RUSH = "no_rush"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return TIMEFRAME_ALIASES


class SurgeryConcern(CodedEnum):
    """Concerns about surgery selected on the questionnaire."""

    TOTAL_COST = "total_cost"
    PAIN_MANAGEMENT = "pain_management"
    COMPLICATIONS = "complications"
    ANESTHESIA = "anesthesia"
    RECOVERY_TIME = "recovery_time"
    MISSING_WORK = "missing_work"
    NO_HOME_SUPPORT = "no_home_support"
    UNSURE_NECESSITY = "unsure_necessity"
    PROCEDURE_FEAR = "procedure_fear"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return CONCERN_ALIASES


class InsuranceType(CodedEnum):
    """Health coverage reported by the patient."""

    NONE = "none"
    IMSS = "imss"
    ISSSTE = "issste"
    PRIVATE = "private"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return INSURANCE_ALIASES

    @property
    def has_coverage(self) -> bool:
        """True for any known coverage other than NONE."""
        return self not in (InsuranceType.NONE, InsuranceType.UNKNOWN)


# =============================================================================
# STAGE 3: DERIVED OUTPUT ENUMERATIONS
# =============================================================================


class ImpactLevel(str, Enum):
    """Impact level of an insight; `rank` orders high before low."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class PointStrength(str, Enum):
    """Strength of a persuasive talking point."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class PointCategory(str, Enum):
    """Category of a persuasive talking point."""

    CLINICAL = "clinical"
    QUALITY = "quality"
    EMOTIONAL = "emotional"
    FINANCIAL = "financial"
    SOCIAL = "social"


class RiskBand(str, Enum):
    """Display classification of a risk index."""

    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class ConversionOutlook(str, Enum):
    """Bucket of a conversion probability (high >= 0.7, medium >= 0.4)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class SurgeryReadiness(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
