"""
Domain Models for Survey Analysis

This module defines the core data structures used throughout the analyzer.
Input models (the patient record and the intake survey) are frozen pydantic
models: raw questionnaire answers are coerced once, at construction, into
closed enumerations and clamped numbers, so the scoring and analysis code
never sees a raw string. Output models are plain dataclasses with `to_dict()`
for JSON rendering.

Model Hierarchy:
    Inputs (pydantic, frozen)
        PatientRecord        → Demographic record of a patient
        IntakeSurvey         → One completed pre-surgical questionnaire
    Outputs (dataclasses)
        RiskFactor / RiskAssessment
        Insight / RecommendationCategory / PersuasivePoint
        SentimentResult / SurgeryCommentAnalysis
        SymptomFrequency
        PatientAnalysis / CohortAnalysis

Usage:
    from survey_analyzer.core.models import IntakeSurvey

    survey = IntakeSurvey(
        survey_id="s-1",
        patient_id="p-1",
        severity="severa",
        pain_intensity="8",
        symptoms=["bulto_visible", "dolor_esfuerzos"],
    )
    survey.severity        # Severity.SEVERE
    survey.pain_intensity  # 8
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from survey_analyzer.core.constants import COMORBIDITY_ALIASES, SURVEY_SCHEMA_VERSION
from survey_analyzer.core.enums import (
    ConversionOutlook,
    DesiredTimeframe,
    FunctionalLimitation,
    ImpactLevel,
    InsuranceType,
    PointCategory,
    PointStrength,
    RiskBand,
    Sentiment,
    Severity,
    SurgeryConcern,
    SurgeryReadiness,
    Symptom,
    SymptomDuration,
    normalize_code,
)
from survey_analyzer.core.exceptions import (
    InvalidInputError,
    MissingPatientError,
    MissingSurveyError,
)


# =============================================================================
# STAGE 1: COERCION HELPERS
# =============================================================================
# Shared by the input models' "before" validators.

_TRUE_ANSWERS = {"true", "yes", "si", "sí", "y", "1"}
_FALSE_ANSWERS = {"false", "no", "n", "0"}
_NO_COMORBIDITY_ANSWERS = {"none", "ninguna", "ninguno", "no"}


def _as_sequence(value: Any) -> List[Any]:
    """Wrap a scalar answer in a list; None becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def parse_optional_bool(value: Any) -> Optional[bool]:
    """Parse yes/no style answers; anything unrecognized is None."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_ANSWERS:
        return True
    if text in _FALSE_ANSWERS:
        return False
    return None


def parse_optional_int(value: Any) -> Optional[int]:
    """Parse a numeric answer; unparseable or non-finite input is None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# =============================================================================
# STAGE 2: PATIENT RECORD
# =============================================================================


class PatientRecord(BaseModel):
    """
    Demographic record of a patient.

    Only the fields the analyzer reads are modelled; the host application
    owns the full record. A negative or non-integer age is rejected.
    """

    model_config = ConfigDict(frozen=True)

    patient_id: str = Field(..., description="Unique identifier of the patient")
    name: str = Field(default="", description="Display name")
    age: int = Field(..., ge=0, description="Age in whole years")
    chronic_conditions: Tuple[str, ...] = Field(
        default=(), description="Chronic conditions recorded on the patient file"
    )
    has_prior_diagnosis: Optional[bool] = None
    diagnosis_detail: Optional[str] = None

    @field_validator("patient_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return str(v).strip() if isinstance(v, (int, str)) and not isinstance(v, bool) else v

    @field_validator("chronic_conditions", mode="before")
    @classmethod
    def _coerce_conditions(cls, v: Any) -> Tuple[str, ...]:
        return tuple(str(item).strip() for item in _as_sequence(v) if str(item).strip())

    @field_validator("has_prior_diagnosis", mode="before")
    @classmethod
    def _coerce_prior(cls, v: Any) -> Optional[bool]:
        return parse_optional_bool(v)

    @field_validator("diagnosis_detail", mode="before")
    @classmethod
    def _coerce_detail(cls, v: Any) -> Optional[str]:
        return _optional_text(v)


# =============================================================================
# STAGE 3: INTAKE SURVEY
# =============================================================================


class IntakeSurvey(BaseModel):
    """
    One completed pre-surgical intake questionnaire.

    What it does:
        Holds the canonical, already-coerced answers of one survey. Every
        coded answer is a closed enum whose UNKNOWN member stands for a
        missing or unrecognized answer; numeric answers are parsed and
        clamped.

    Coercion rules:
        - Coded fields accept canonical values, member names or legacy
          aliases; anything else becomes UNKNOWN
        - Unknown symptoms and concerns are dropped from their collections
        - pain_intensity is clamped to [0, 10]; unparseable input is None
        - Surgery concerns are de-duplicated keeping first-seen order
        - Blank comorbidities and important factors are dropped

    Example:
        >>> survey = IntakeSurvey(duration="mas_1_anio", pain_intensity=12)
        >>> survey.is_chronic, survey.pain_intensity
        (True, 10)
    """

    model_config = ConfigDict(frozen=True)

    # -------------------------------------------------------------------------
    # 3.1 Identity
    # -------------------------------------------------------------------------
    survey_id: str = Field(default="", description="Identifier of the survey")
    patient_id: str = Field(default="", description="Patient the survey belongs to")
    schema_version: int = Field(default=SURVEY_SCHEMA_VERSION)

    # -------------------------------------------------------------------------
    # 3.2 Clinical Answers
    # -------------------------------------------------------------------------
    age: Optional[int] = Field(default=None, description="Age reported on the form")
    symptoms: FrozenSet[Symptom] = frozenset()
    severity: Severity = Severity.UNKNOWN
    pain_intensity: Optional[int] = Field(default=None, description="0-10 pain scale")
    duration: SymptomDuration = SymptomDuration.UNKNOWN
    functional_limitation: FunctionalLimitation = FunctionalLimitation.UNKNOWN
    comorbidities: Tuple[str, ...] = ()
    has_prior_diagnosis: Optional[bool] = None
    diagnosis_detail: Optional[str] = None

    # -------------------------------------------------------------------------
    # 3.3 Preferences and Concerns
    # -------------------------------------------------------------------------
    desired_timeframe: DesiredTimeframe = DesiredTimeframe.UNKNOWN
    surgery_concerns: Tuple[SurgeryConcern, ...] = ()
    insurance: InsuranceType = InsuranceType.UNKNOWN
    important_factors: Tuple[str, ...] = ()
    has_support_person: Optional[bool] = None
    comments: Optional[str] = None

    # -------------------------------------------------------------------------
    # 3.4 Validators
    # -------------------------------------------------------------------------

    @field_validator("survey_id", "patient_id", mode="before")
    @classmethod
    def _coerce_ids(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, v: Any) -> Optional[int]:
        age = parse_optional_int(v)
        return age if age is not None and age >= 0 else None

    @field_validator("pain_intensity", mode="before")
    @classmethod
    def _coerce_pain(cls, v: Any) -> Optional[int]:
        pain = parse_optional_int(v)
        if pain is None:
            return None
        return max(0, min(10, pain))

    @field_validator("symptoms", mode="before")
    @classmethod
    def _coerce_symptoms(cls, v: Any) -> FrozenSet[Symptom]:
        parsed = (Symptom.from_code(item) for item in _as_sequence(v))
        return frozenset(s for s in parsed if s is not Symptom.UNKNOWN)

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, v: Any) -> Severity:
        return Severity.from_code(v)

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> SymptomDuration:
        return SymptomDuration.from_code(v)

    @field_validator("functional_limitation", mode="before")
    @classmethod
    def _coerce_limitation(cls, v: Any) -> FunctionalLimitation:
        return FunctionalLimitation.from_code(v)

    @field_validator("desired_timeframe", mode="before")
    @classmethod
    def _coerce_timeframe(cls, v: Any) -> DesiredTimeframe:
        return DesiredTimeframe.from_code(v)

    @field_validator("insurance", mode="before")
    @classmethod
    def _coerce_insurance(cls, v: Any) -> InsuranceType:
        return InsuranceType.from_code(v)

    @field_validator("surgery_concerns", mode="before")
    @classmethod
    def _coerce_concerns(cls, v: Any) -> Tuple[SurgeryConcern, ...]:
        seen: List[SurgeryConcern] = []
        for item in _as_sequence(v):
            concern = SurgeryConcern.from_code(item)
            if concern is not SurgeryConcern.UNKNOWN and concern not in seen:
                seen.append(concern)
        return tuple(seen)

    @field_validator("comorbidities", mode="before")
    @classmethod
    def _coerce_comorbidities(cls, v: Any) -> Tuple[str, ...]:
        codes: List[str] = []
        for item in _as_sequence(v):
            text = str(item).strip()
            if not text:
                continue
            key = normalize_code(text)
            if key in _NO_COMORBIDITY_ANSWERS:
                continue
            code = COMORBIDITY_ALIASES.get(key, text)
            if code not in codes:
                codes.append(code)
        return tuple(codes)

    @field_validator("important_factors", mode="before")
    @classmethod
    def _coerce_factors(cls, v: Any) -> Tuple[str, ...]:
        return tuple(str(item).strip() for item in _as_sequence(v) if str(item).strip())

    @field_validator("has_prior_diagnosis", "has_support_person", mode="before")
    @classmethod
    def _coerce_flags(cls, v: Any) -> Optional[bool]:
        return parse_optional_bool(v)

    @field_validator("diagnosis_detail", "comments", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    # -------------------------------------------------------------------------
    # 3.5 Derived Properties
    # -------------------------------------------------------------------------

    @property
    def prior_diagnosis_text(self) -> Optional[str]:
        """Prior diagnosis detail, unless the patient explicitly said there was none."""
        if self.has_prior_diagnosis is False:
            return None
        return self.diagnosis_detail

    @property
    def comorbidity_count(self) -> int:
        return len(self.comorbidities)

    @property
    def is_chronic(self) -> bool:
        """True when the main symptom has lasted six months or more."""
        return (
            self.duration is not SymptomDuration.UNKNOWN
            and self.duration.months_at_least >= 6
        )

    def has_high_pain(self, threshold: int = 7) -> bool:
        return self.pain_intensity is not None and self.pain_intensity >= threshold

    def has_concern(self, concern: SurgeryConcern) -> bool:
        return concern in self.surgery_concerns

    @property
    def is_empty(self) -> bool:
        """True when no question on the survey was answered."""
        return (
            self.age is None
            and not self.symptoms
            and self.severity is Severity.UNKNOWN
            and self.pain_intensity is None
            and self.duration is SymptomDuration.UNKNOWN
            and self.functional_limitation is FunctionalLimitation.UNKNOWN
            and not self.comorbidities
            and self.has_prior_diagnosis is None
            and self.diagnosis_detail is None
            and self.desired_timeframe is DesiredTimeframe.UNKNOWN
            and not self.surgery_concerns
            and self.insurance is InsuranceType.UNKNOWN
            and not self.important_factors
            and self.has_support_person is None
            and self.comments is None
        )


# =============================================================================
# STAGE 4: SCORING OUTPUTS
# =============================================================================


@dataclass(frozen=True)
class RiskFactor:
    """One rule that contributed points to a risk index."""

    label: str
    points: int

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "points": self.points}


@dataclass
class RiskAssessment:
    """
    Risk index of one patient with its band and contributing factors.

    Attributes:
        score: Non-negative additive risk index (no upper cap)
        band: Display band derived from the configured thresholds
        factors: Rules that fired, in evaluation order
    """

    score: int
    band: RiskBand
    factors: List[RiskFactor] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "band": self.band.value,
            "factors": [f.to_dict() for f in self.factors],
        }


# =============================================================================
# STAGE 5: ANALYSIS OUTPUTS
# =============================================================================


@dataclass
class Insight:
    """
    An observation about a patient with an optional suggested action.

    Attributes:
        id: Stable identifier of the rule that produced it
        title: Short heading
        description: One or two sentences for the clinician
        impact: How much the observation affects the surgical decision
        actionable: Whether a concrete action is suggested
        recommendation: The suggested action (None when not actionable)
        icon: Icon reference for the presentation layer
    """

    id: str
    title: str
    description: str
    impact: ImpactLevel
    actionable: bool
    recommendation: Optional[str] = None
    icon: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "impact": self.impact.value,
            "actionable": self.actionable,
            "recommendation": self.recommendation,
            "icon": self.icon,
        }


@dataclass
class RecommendationCategory:
    """A titled group of recommended actions."""

    id: str
    title: str
    description: str
    icon: str
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PersuasivePoint:
    """A talking point for the conversation with the patient."""

    id: str
    title: str
    description: str
    icon: str
    category: PointCategory
    strength: PointStrength

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "category": self.category.value,
            "strength": self.strength.value,
        }


@dataclass
class SentimentResult:
    """Keyword-based sentiment of a free-text comment."""

    score: float
    sentiment: Sentiment
    confidence: float
    keywords: List[str] = field(default_factory=list)
    medical_terms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "sentiment": self.sentiment.value,
            "confidence": self.confidence,
            "keywords": list(self.keywords),
            "medical_terms": list(self.medical_terms),
        }


@dataclass
class SurgeryCommentAnalysis:
    """Readiness reading of a patient's comments about surgery."""

    sentiment: SentimentResult
    readiness: SurgeryReadiness
    key_concerns: List[str] = field(default_factory=list)
    positive_factors: List[str] = field(default_factory=list)
    persuasive_approach: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentiment": self.sentiment.to_dict(),
            "readiness": self.readiness.value,
            "key_concerns": list(self.key_concerns),
            "positive_factors": list(self.positive_factors),
            "persuasive_approach": self.persuasive_approach,
        }


@dataclass(frozen=True)
class SymptomFrequency:
    """How many surveys in a cohort report a symptom."""

    symptom: Symptom
    label: str
    count: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symptom": self.symptom.value,
            "label": self.label,
            "count": self.count,
            "percentage": self.percentage,
        }


# =============================================================================
# STAGE 6: AGGREGATED RESULTS
# =============================================================================


@dataclass
class PatientAnalysis:
    """
    Everything the analyzer derives for one patient.

    Produced by SurveyAnalyzer.analyze_patient(); comment_analysis is only
    present when the survey carries free-text comments.
    """

    patient_id: str
    survey_id: str
    risk: RiskAssessment
    conversion_probability: float
    outlook: ConversionOutlook
    benefit_risk_ratio: float
    probable_diagnosis: str
    insights: List[Insight] = field(default_factory=list)
    recommendations: List[RecommendationCategory] = field(default_factory=list)
    persuasive_points: List[PersuasivePoint] = field(default_factory=list)
    persuasive_messages: List[str] = field(default_factory=list)
    comment_analysis: Optional[SurgeryCommentAnalysis] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patient_id": self.patient_id,
            "survey_id": self.survey_id,
            "risk": self.risk.to_dict(),
            "conversion_probability": self.conversion_probability,
            "outlook": self.outlook.value,
            "benefit_risk_ratio": self.benefit_risk_ratio,
            "probable_diagnosis": self.probable_diagnosis,
            "insights": [i.to_dict() for i in self.insights],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "persuasive_points": [p.to_dict() for p in self.persuasive_points],
            "persuasive_messages": list(self.persuasive_messages),
            "comment_analysis": (
                self.comment_analysis.to_dict() if self.comment_analysis else None
            ),
        }


@dataclass
class CohortAnalysis:
    """Population-level results for a set of surveys."""

    total_surveys: int
    group_counts: Dict[str, int] = field(default_factory=dict)
    insights: List[str] = field(default_factory=list)
    priority_survey_ids: List[str] = field(default_factory=list)
    top_symptoms: List[SymptomFrequency] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_surveys": self.total_surveys,
            "group_counts": dict(self.group_counts),
            "insights": list(self.insights),
            "priority_survey_ids": list(self.priority_survey_ids),
            "top_symptoms": [s.to_dict() for s in self.top_symptoms],
        }


# =============================================================================
# STAGE 7: INPUT GUARDS
# =============================================================================
# Scoring and analysis functions call these before reading any field so that
# "no data" fails loudly instead of scoring as zero.


def require_patient(patient: Any, operation: str) -> PatientRecord:
    if patient is None:
        raise MissingPatientError(operation)
    if not isinstance(patient, PatientRecord):
        raise InvalidInputError(
            "Expected a PatientRecord",
            context={"operation": operation, "type": type(patient).__name__},
        )
    return patient


def require_survey(
    survey: Any, operation: str, patient_id: Optional[str] = None
) -> IntakeSurvey:
    if survey is None:
        raise MissingSurveyError(operation, patient_id)
    if not isinstance(survey, IntakeSurvey):
        raise InvalidInputError(
            "Expected an IntakeSurvey",
            context={"operation": operation, "type": type(survey).__name__},
        )
    return survey
