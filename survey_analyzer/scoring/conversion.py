"""
Conversion Likelihood - How likely a patient is to proceed to surgery

Two heuristic estimates used by the recommendation and pipeline layers:

    estimate_conversion_probability → probability in [0, 1]
    calculate_benefit_risk_ratio    → expected benefit over surgical risk

Both are deterministic and read only canonical survey fields.
"""

from typing import Optional

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.enums import (
    ConversionOutlook,
    FunctionalLimitation,
    Severity,
    SurgeryConcern,
)
from survey_analyzer.core.models import (
    IntakeSurvey,
    PatientRecord,
    require_patient,
    require_survey,
)


BASE_PROBABILITY = 0.3
# Below this much evidence the estimate is pulled back toward the base.
MIN_FACTOR_WEIGHT = 2.0
REGRESSION_KEEP = 0.7


# =============================================================================
# STAGE 1: CONVERSION PROBABILITY
# =============================================================================


def estimate_conversion_probability(
    patient: PatientRecord, survey: IntakeSurvey
) -> float:
    """
    Estimate the probability that the patient proceeds to surgery.

    Algorithm:
        1. Start at 0.3
        2. Severity: severe +0.25 (weight 1), moderate +0.15 (weight 0.5)
        3. Limitation: severe +0.20 (weight 1), moderate +0.10 (weight 0.5)
        4. Symptoms for 6 months or more: +0.10 (weight 0.5)
        5. Doubts about whether surgery is necessary: -0.05
        6. Age 40-65: +0.05; age over 70: -0.10
        7. Clamp to [0, 1]
        8. If total weight < 2, regress toward the base: p * 0.7 + 0.09

    An empty survey returns the base probability unchanged.

    Raises:
        MissingPatientError / MissingSurveyError: If either input is None
    """
    require_patient(patient, "estimate_conversion_probability")
    require_survey(survey, "estimate_conversion_probability", patient.patient_id)

    if survey.is_empty:
        return BASE_PROBABILITY

    probability = BASE_PROBABILITY
    weight = 0.0

    if survey.severity is Severity.SEVERE:
        probability += 0.25
        weight += 1.0
    elif survey.severity is Severity.MODERATE:
        probability += 0.15
        weight += 0.5

    if survey.functional_limitation is FunctionalLimitation.SEVERE:
        probability += 0.20
        weight += 1.0
    elif survey.functional_limitation is FunctionalLimitation.MODERATE:
        probability += 0.10
        weight += 0.5

    if survey.is_chronic:
        probability += 0.10
        weight += 0.5

    if survey.has_concern(SurgeryConcern.UNSURE_NECESSITY):
        probability -= 0.05

    if 40 <= patient.age <= 65:
        probability += 0.05
    elif patient.age > 70:
        probability -= 0.10

    probability = max(0.0, min(1.0, probability))

    if weight < MIN_FACTOR_WEIGHT:
        probability = probability * REGRESSION_KEEP + BASE_PROBABILITY * (
            1 - REGRESSION_KEEP
        )

    probability = round(probability, 4)
    logger.debug(
        f"Conversion probability for patient {patient.patient_id}: "
        f"{probability} (evidence weight {weight})"
    )
    return probability


def conversion_outlook(
    probability: float, config: Optional[AnalyzerConfiguration] = None
) -> ConversionOutlook:
    """Bucket a probability into high / medium / low."""
    config = config or AnalyzerConfiguration()
    if probability >= config.conversion_high_threshold:
        return ConversionOutlook.HIGH
    if probability >= config.conversion_medium_threshold:
        return ConversionOutlook.MEDIUM
    return ConversionOutlook.LOW


# =============================================================================
# STAGE 2: BENEFIT / RISK RATIO
# =============================================================================


def calculate_benefit_risk_ratio(patient: PatientRecord, survey: IntakeSurvey) -> float:
    """
    Ratio of expected benefit to surgical risk, rounded to 2 decimals.

    Benefits: 1.0, +0.5 severe symptoms, +0.3 chronic, +0.4 severe limitation
    Risks:    1.0, +0.3 age over 70, +0.1 fear of the procedure,
              +0.1 per comorbidity
    """
    require_patient(patient, "calculate_benefit_risk_ratio")
    require_survey(survey, "calculate_benefit_risk_ratio", patient.patient_id)

    benefits = 1.0
    if survey.severity is Severity.SEVERE:
        benefits += 0.5
    if survey.is_chronic:
        benefits += 0.3
    if survey.functional_limitation is FunctionalLimitation.SEVERE:
        benefits += 0.4

    risks = 1.0
    if patient.age > 70:
        risks += 0.3
    if survey.has_concern(SurgeryConcern.PROCEDURE_FEAR):
        risks += 0.1
    risks += 0.1 * survey.comorbidity_count

    return round(benefits / risks, 2)
