"""
Recommendation Generation - Categorized next actions for the care team

Builds up to four RecommendationCategory objects in a fixed order:

    clinical             → Medical work-up and prioritization
    educational          → Information to resolve fears and doubts
    logistical           → Scheduling, support and payment
    conversion_strategy  → Follow-up plan driven by the conversion probability

The first three are included only when at least one of their triggers
fires. The conversion strategy is always present.
"""

import math
from typing import List, Optional

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.constants import ICONS
from survey_analyzer.core.enums import (
    ConversionOutlook,
    DesiredTimeframe,
    FunctionalLimitation,
    InsuranceType,
    Severity,
    SurgeryConcern,
    Symptom,
)
from survey_analyzer.core.exceptions import InvalidInputError
from survey_analyzer.core.models import (
    IntakeSurvey,
    PatientRecord,
    RecommendationCategory,
    require_patient,
    require_survey,
)
from survey_analyzer.scoring.conversion import conversion_outlook


# =============================================================================
# STAGE 1: CATEGORY BUILDERS
# =============================================================================
# Each builder returns the list of items for its category, possibly empty.


def _clinical_items(patient: PatientRecord, survey: IntakeSurvey, config) -> List[str]:
    items: List[str] = []
    if survey.severity is Severity.SEVERE and survey.has_high_pain(
        config.high_pain_threshold
    ):
        items.append("Schedule a priority surgical evaluation.")
        items.append("Review pain control until the procedure.")
    if survey.functional_limitation in (
        FunctionalLimitation.MODERATE,
        FunctionalLimitation.SEVERE,
    ):
        items.append("Document the functional limitation in the clinical record.")
    if survey.comorbidity_count > 0:
        items.append("Request pre-operative clearance for the reported comorbidities.")
    if Symptom.JAUNDICE in survey.symptoms or Symptom.FEVER in survey.symptoms:
        items.append("Order liver function tests and a complete blood count.")
    if patient.age > 65:
        items.append("Request a cardiovascular evaluation before surgery.")
    if survey.is_chronic:
        items.append("Assess the response to previous conservative treatment.")
    return items


def _educational_items(survey: IntakeSurvey) -> List[str]:
    items: List[str] = []
    if survey.has_concern(SurgeryConcern.PROCEDURE_FEAR):
        items.append("Explain the procedure step by step to reduce anxiety.")
    if survey.has_concern(SurgeryConcern.UNSURE_NECESSITY):
        items.append("Explain the long-term risks of not operating.")
    if survey.is_chronic:
        items.append("Provide educational material about the condition.")
    if survey.has_concern(SurgeryConcern.ANESTHESIA):
        items.append("Offer a pre-anesthesia consultation.")
    if survey.has_concern(SurgeryConcern.COMPLICATIONS):
        items.append("Share complication rates and the safety protocol.")
    return items


def _logistical_items(survey: IntakeSurvey) -> List[str]:
    items: List[str] = []
    if survey.has_concern(SurgeryConcern.RECOVERY_TIME) or survey.has_concern(
        SurgeryConcern.MISSING_WORK
    ):
        items.append("Plan the surgery date around the patient's work schedule.")
    if survey.has_support_person is False or survey.has_concern(
        SurgeryConcern.NO_HOME_SUPPORT
    ):
        items.append("Coordinate post-operative support at home.")
    if survey.has_concern(SurgeryConcern.TOTAL_COST) or survey.insurance is InsuranceType.NONE:
        items.append("Present financing options and a detailed quote.")
    if survey.insurance.has_coverage:
        items.append("Verify insurance coverage and pre-authorization requirements.")
    if survey.desired_timeframe is DesiredTimeframe.URGENT:
        items.append("Reserve the earliest available surgical slot.")
    return items


def _conversion_items(survey: IntakeSurvey, outlook: ConversionOutlook, percent: int) -> List[str]:
    if outlook is ConversionOutlook.HIGH:
        items = [
            f"High surgery probability ({percent}%).",
            "Emphasize the team's experience and the safety of the procedure.",
            "Schedule the surgery as soon as possible.",
        ]
        if survey.has_concern(SurgeryConcern.RECOVERY_TIME):
            items.append("Emphasize fast recovery and the post-operative protocol.")
        return items

    if outlook is ConversionOutlook.MEDIUM:
        items = [
            f"Medium surgery probability ({percent}%).",
            "Undecided patient: focus on resolving the main concerns.",
        ]
        if survey.has_concern(SurgeryConcern.PROCEDURE_FEAR):
            items.append("Share testimonials from satisfied patients.")
        if survey.has_concern(SurgeryConcern.RECOVERY_TIME):
            items.append("Emphasize fast recovery and early return to work.")
        items.append("Schedule a follow-up in 1-2 weeks.")
        items.append("Offer a second-opinion consultation.")
        return items

    items = [
        f"Low surgery probability ({percent}%).",
        "Explain the long-term risks of not having surgery.",
        "Provide educational material about the condition.",
        "Schedule a follow-up in 3 months.",
        "Register the patient for periodic phone follow-up.",
    ]
    return items


# =============================================================================
# STAGE 2: PUBLIC API
# =============================================================================


def generate_recommendations(
    patient: PatientRecord,
    survey: IntakeSurvey,
    conversion_probability: float,
    config: Optional[AnalyzerConfiguration] = None,
) -> List[RecommendationCategory]:
    """
    Build the recommendation categories for one patient.

    Args:
        patient: Patient record
        survey: Canonical intake survey
        conversion_probability: Probability in [0, 1] that the patient proceeds
        config: Thresholds (defaults when None)

    Returns:
        Categories in fixed order; conversion_strategy is always last

    Raises:
        MissingPatientError / MissingSurveyError: If either input is None
        InvalidInputError: If the probability is not a finite number in [0, 1]
    """
    require_patient(patient, "generate_recommendations")
    require_survey(survey, "generate_recommendations", patient.patient_id)
    if (
        isinstance(conversion_probability, bool)
        or not isinstance(conversion_probability, (int, float))
        or not math.isfinite(conversion_probability)
        or not 0.0 <= conversion_probability <= 1.0
    ):
        raise InvalidInputError(
            "Conversion probability must be a number between 0 and 1",
            context={"conversion_probability": conversion_probability},
        )
    config = config or AnalyzerConfiguration()

    categories: List[RecommendationCategory] = []

    clinical = _clinical_items(patient, survey, config)
    if clinical:
        categories.append(
            RecommendationCategory(
                id="clinical",
                title="Clinical recommendations",
                description="Medical actions suggested by the survey answers.",
                icon=ICONS["stethoscope"],
                recommendations=clinical,
            )
        )

    educational = _educational_items(survey)
    if educational:
        categories.append(
            RecommendationCategory(
                id="educational",
                title="Patient education",
                description="Information that addresses the patient's fears and doubts.",
                icon=ICONS["file"],
                recommendations=educational,
            )
        )

    logistical = _logistical_items(survey)
    if logistical:
        categories.append(
            RecommendationCategory(
                id="logistical",
                title="Logistics",
                description="Scheduling, support and payment arrangements.",
                icon=ICONS["calendar"],
                recommendations=logistical,
            )
        )

    outlook = conversion_outlook(conversion_probability, config)
    percent = int(conversion_probability * 100 + 0.5)
    categories.append(
        RecommendationCategory(
            id="conversion_strategy",
            title="Follow-up strategy",
            description="Follow-up and communication plan for this patient.",
            icon=ICONS["message"],
            recommendations=_conversion_items(survey, outlook, percent),
        )
    )

    logger.debug(
        f"Recommendations for patient {patient.patient_id}: "
        f"{[c.id for c in categories]} (outlook {outlook.value})"
    )
    return categories
