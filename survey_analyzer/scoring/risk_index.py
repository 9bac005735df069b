"""
Clinical Risk Index - Additive Scoring of an Intake Survey

This module turns a patient's intake answers into a non-negative integer
risk index and a display band. Each rule adds a fixed number of points
(RISK_WEIGHTS); tiers within a rule are mutually exclusive and there is no
upper cap. Unknown or missing answers contribute nothing.

Rule Table:
    Age            >65 → +10,  >50 → +5
    Severity       severe → +15, moderate → +8
    Pain (0-10)    >=8 → +12,  5-7 → +6
    Limitation     severe → +15, moderate → +8
    Duration       >1 year → +10, 6-12 months → +7, 3-6 months → +5
    Comorbidities  >2 → +8,  1-2 → +4
    Symptoms       jaundice → +10, fever → +8
    Timeframe      urgent → +10

Pipeline Position:
    Ingestion → [Scoring] → Analysis → Pipeline
                ^^^^^^^^^
                You are here
"""

from typing import List, Optional

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.constants import RISK_WEIGHTS
from survey_analyzer.core.enums import (
    DesiredTimeframe,
    FunctionalLimitation,
    RiskBand,
    Severity,
    Symptom,
    SymptomDuration,
)
from survey_analyzer.core.models import (
    IntakeSurvey,
    PatientRecord,
    RiskAssessment,
    RiskFactor,
    require_patient,
    require_survey,
)


# =============================================================================
# STAGE 1: RULE EVALUATION
# =============================================================================


def _risk_factors(survey: IntakeSurvey, age: Optional[int]) -> List[RiskFactor]:
    """
    Evaluate every rule against one survey.

    Args:
        survey: Canonical intake survey
        age: Age to score (None skips the age rule)

    Returns:
        Factors that fired, in rule-table order
    """
    factors: List[RiskFactor] = []

    def add(label: str, weight_key: str) -> None:
        factors.append(RiskFactor(label=label, points=RISK_WEIGHTS[weight_key]))

    # -------------------------------------------------------------------------
    # 1.1 Demographics
    # -------------------------------------------------------------------------
    if age is not None:
        if age > 65:
            add("Age over 65", "age_over_65")
        elif age > 50:
            add("Age over 50", "age_over_50")

    # -------------------------------------------------------------------------
    # 1.2 Symptom Burden
    # -------------------------------------------------------------------------
    if survey.severity is Severity.SEVERE:
        add("Severe symptoms", "severity_severe")
    elif survey.severity is Severity.MODERATE:
        add("Moderate symptoms", "severity_moderate")

    pain = survey.pain_intensity
    if pain is not None:
        if pain >= 8:
            add(f"High pain intensity ({pain}/10)", "pain_high")
        elif pain >= 5:
            add(f"Moderate pain intensity ({pain}/10)", "pain_moderate")

    if survey.functional_limitation is FunctionalLimitation.SEVERE:
        add("Severe functional limitation", "limitation_severe")
    elif survey.functional_limitation is FunctionalLimitation.MODERATE:
        add("Moderate functional limitation", "limitation_moderate")

    if survey.duration is SymptomDuration.MORE_THAN_1_YEAR:
        add("Symptoms for more than a year", "duration_over_1_year")
    elif survey.duration is SymptomDuration.SIX_TO_TWELVE_MONTHS:
        add("Symptoms for 6-12 months", "duration_6_12_months")
    elif survey.duration is SymptomDuration.THREE_TO_SIX_MONTHS:
        add("Symptoms for 3-6 months", "duration_3_6_months")

    # -------------------------------------------------------------------------
    # 1.3 Comorbidities and Warning Signs
    # -------------------------------------------------------------------------
    count = survey.comorbidity_count
    if count > 2:
        add(f"{count} comorbidities", "comorbidities_many")
    elif count >= 1:
        add(f"{count} comorbidit{'y' if count == 1 else 'ies'}", "comorbidities_some")

    if Symptom.JAUNDICE in survey.symptoms:
        add("Jaundice", "symptom_jaundice")
    if Symptom.FEVER in survey.symptoms:
        add("Fever", "symptom_fever")

    if survey.desired_timeframe is DesiredTimeframe.URGENT:
        add("Wants urgent resolution", "timeframe_urgent")

    return factors


# =============================================================================
# STAGE 2: PUBLIC SCORING API
# =============================================================================


def compute_risk_index(patient: PatientRecord, survey: IntakeSurvey) -> int:
    """
    Risk index of a patient, with age taken from the patient record.

    Raises:
        MissingPatientError / MissingSurveyError: If either input is None
        InvalidInputError: If an input is not a canonical model
    """
    require_patient(patient, "compute_risk_index")
    require_survey(survey, "compute_risk_index", patient.patient_id)
    return sum(f.points for f in _risk_factors(survey, patient.age))


def compute_survey_risk_index(survey: IntakeSurvey) -> int:
    """Risk index from a survey alone, using the age reported on the form."""
    require_survey(survey, "compute_survey_risk_index")
    return sum(f.points for f in _risk_factors(survey, survey.age))


def classify_risk_band(
    score: int, config: Optional[AnalyzerConfiguration] = None
) -> RiskBand:
    """Map a risk index to High / Moderate / Low using the configured thresholds."""
    config = config or AnalyzerConfiguration()
    if score >= config.risk_high_threshold:
        return RiskBand.HIGH
    if score >= config.risk_moderate_threshold:
        return RiskBand.MODERATE
    return RiskBand.LOW


def assess_risk(
    patient: PatientRecord,
    survey: IntakeSurvey,
    config: Optional[AnalyzerConfiguration] = None,
) -> RiskAssessment:
    """
    Score a patient and explain the score.

    Returns:
        RiskAssessment with the index, its band and every contributing factor

    Example:
        >>> assessment = assess_risk(patient, survey)
        >>> assessment.score, assessment.band
        (44, <RiskBand.MODERATE: 'Moderate'>)
    """
    require_patient(patient, "assess_risk")
    require_survey(survey, "assess_risk", patient.patient_id)

    factors = _risk_factors(survey, patient.age)
    score = sum(f.points for f in factors)
    band = classify_risk_band(score, config)

    logger.debug(
        f"Risk index for patient {patient.patient_id}: {score} ({band.value}) "
        f"from {len(factors)} factors"
    )
    return RiskAssessment(score=score, band=band, factors=factors)
