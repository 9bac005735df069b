"""
Insight Generation - Clinician-facing observations about one patient

Each rule below inspects the canonical survey (and the patient record for
age) and may emit one Insight. Rules are evaluated in a fixed order and the
result is sorted by impact (high, medium, low), keeping generation order for
ties. A survey that triggers no rule yields an empty list.
"""

from typing import Callable, List, Optional

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.constants import ICONS
from survey_analyzer.core.enums import (
    FunctionalLimitation,
    ImpactLevel,
    InsuranceType,
    Severity,
    SurgeryConcern,
)
from survey_analyzer.core.models import (
    Insight,
    IntakeSurvey,
    PatientRecord,
    require_patient,
    require_survey,
)


InsightRule = Callable[[PatientRecord, IntakeSurvey, AnalyzerConfiguration], Optional[Insight]]


# =============================================================================
# STAGE 1: HIGH-IMPACT RULES
# =============================================================================


def _severe_with_high_pain(patient, survey, config) -> Optional[Insight]:
    if survey.severity is not Severity.SEVERE:
        return None
    if not survey.has_high_pain(config.high_pain_threshold):
        return None
    return Insight(
        id="severe-symptoms",
        title="Severe symptoms with high pain",
        description=(
            f"The patient reports severe symptoms and pain of "
            f"{survey.pain_intensity}/10, which significantly affects quality of life."
        ),
        impact=ImpactLevel.HIGH,
        actionable=True,
        recommendation="Prioritize the surgical evaluation and offer an early date.",
        icon=ICONS["alert"],
    )


def _severe_limitation(patient, survey, config) -> Optional[Insight]:
    if survey.functional_limitation is not FunctionalLimitation.SEVERE:
        return None
    return Insight(
        id="functional-impact",
        title="High impact on daily activities",
        description="Daily activities are severely limited by the condition.",
        impact=ImpactLevel.HIGH,
        actionable=True,
        recommendation="Explain how surgery can restore normal function.",
        icon=ICONS["activity"],
    )


def _procedure_fear(patient, survey, config) -> Optional[Insight]:
    if not survey.has_concern(SurgeryConcern.PROCEDURE_FEAR):
        return None
    return Insight(
        id="procedure-fear",
        title="Fear of the procedure",
        description="The patient is afraid of the surgical procedure itself.",
        impact=ImpactLevel.HIGH,
        actionable=True,
        recommendation=(
            "Walk through the procedure step by step and share outcomes of "
            "similar patients."
        ),
        icon=ICONS["heart"],
    )


def _doubts_necessity(patient, survey, config) -> Optional[Insight]:
    if not survey.has_concern(SurgeryConcern.UNSURE_NECESSITY):
        return None
    return Insight(
        id="necessity-doubts",
        title="Doubts about the need for surgery",
        description="The patient is not sure surgery is the best option.",
        impact=ImpactLevel.HIGH,
        actionable=True,
        recommendation=(
            "Review the findings with the patient, compare alternatives and "
            "explain the risks of waiting."
        ),
        icon=ICONS["help"],
    )


# =============================================================================
# STAGE 2: MEDIUM-IMPACT RULES
# =============================================================================


def _time_constraint(patient, survey, config) -> Optional[Insight]:
    if not (
        survey.has_concern(SurgeryConcern.RECOVERY_TIME)
        or survey.has_concern(SurgeryConcern.MISSING_WORK)
    ):
        return None
    return Insight(
        id="time-constraint",
        title="Time constraints",
        description="Recovery time or time off work weighs on the decision.",
        impact=ImpactLevel.MEDIUM,
        actionable=True,
        recommendation=(
            "Explain the minimally invasive recovery timeline and help plan "
            "the date around work."
        ),
        icon=ICONS["clock"],
    )


def _chronic_condition(patient, survey, config) -> Optional[Insight]:
    if not survey.is_chronic:
        return None
    return Insight(
        id="chronic-condition",
        title="Chronic condition",
        description="Symptoms have been present for six months or more.",
        impact=ImpactLevel.MEDIUM,
        actionable=True,
        recommendation=(
            "Surgery may be more beneficial than continuing conservative treatment."
        ),
        icon=ICONS["calendar"],
    )


def _support_gap(patient, survey, config) -> Optional[Insight]:
    if not (
        survey.has_support_person is False
        or survey.has_concern(SurgeryConcern.NO_HOME_SUPPORT)
    ):
        return None
    return Insight(
        id="support-gap",
        title="No support during recovery",
        description="The patient may not have someone to help at home after surgery.",
        impact=ImpactLevel.MEDIUM,
        actionable=True,
        recommendation="Plan post-operative support and home-care instructions early.",
        icon=ICONS["users"],
    )


def _multiple_comorbidities(patient, survey, config) -> Optional[Insight]:
    if survey.comorbidity_count <= 2:
        return None
    return Insight(
        id="multiple-comorbidities",
        title="Multiple comorbidities",
        description=f"The patient reports {survey.comorbidity_count} chronic conditions.",
        impact=ImpactLevel.MEDIUM,
        actionable=True,
        recommendation="Request a pre-operative risk assessment before scheduling.",
        icon=ICONS["stethoscope"],
    )


def _financial_barrier(patient, survey, config) -> Optional[Insight]:
    if not survey.has_concern(SurgeryConcern.TOTAL_COST):
        return None
    if survey.insurance is not InsuranceType.NONE:
        return None
    return Insight(
        id="financial-barrier",
        title="Financial barrier",
        description="The patient is worried about cost and has no insurance.",
        impact=ImpactLevel.MEDIUM,
        actionable=True,
        recommendation="Present a transparent quote and the available payment plans.",
        icon=ICONS["dollar"],
    )


# =============================================================================
# STAGE 3: LOW-IMPACT RULES
# =============================================================================


def _age_factor(patient, survey, config) -> Optional[Insight]:
    if patient.age <= 50:
        return None
    return Insight(
        id="age-factor",
        title="Age factor",
        description=(
            f"At {patient.age} years old, comorbid conditions should be "
            f"reviewed as part of surgical planning."
        ),
        impact=ImpactLevel.LOW,
        actionable=False,
        recommendation=None,
        icon=ICONS["lightbulb"],
    )


INSIGHT_RULES: List[InsightRule] = [
    _severe_with_high_pain,
    _severe_limitation,
    _procedure_fear,
    _doubts_necessity,
    _time_constraint,
    _chronic_condition,
    _support_gap,
    _multiple_comorbidities,
    _financial_barrier,
    _age_factor,
]


# =============================================================================
# STAGE 4: PUBLIC API
# =============================================================================


def generate_insights(
    patient: PatientRecord,
    survey: IntakeSurvey,
    config: Optional[AnalyzerConfiguration] = None,
) -> List[Insight]:
    """
    Generate insights for one patient.

    Args:
        patient: Patient record (age is read from here)
        survey: Canonical intake survey
        config: Thresholds (defaults when None)

    Returns:
        Insights ordered by impact, generation order kept for ties

    Raises:
        MissingPatientError / MissingSurveyError: If either input is None
    """
    require_patient(patient, "generate_insights")
    require_survey(survey, "generate_insights", patient.patient_id)
    config = config or AnalyzerConfiguration()

    insights = [
        insight
        for insight in (rule(patient, survey, config) for rule in INSIGHT_RULES)
        if insight is not None
    ]
    insights.sort(key=lambda i: i.impact.rank, reverse=True)

    logger.debug(
        f"Generated {len(insights)} insights for patient {patient.patient_id}: "
        f"{[i.id for i in insights]}"
    )
    return insights
