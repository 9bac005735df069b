"""
Persuasive Talking Points and Follow-up Messages

Builds the material a coordinator uses when talking to a patient about
scheduling surgery:

    generate_persuasive_points   → Ranked PersuasivePoint cards
    generate_persuasive_messages → Short sentences for follow-up calls

Every answered survey yields at least three points: when the answers
trigger fewer, generic points are appended in a fixed order. A survey with
no answers at all yields no points.
"""

from typing import List, Optional

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.constants import ICONS, POSITIVE_RECOMMENDATION_FACTORS
from survey_analyzer.core.enums import (
    FunctionalLimitation,
    PointCategory,
    PointStrength,
    Severity,
    SurgeryConcern,
    normalize_code,
)
from survey_analyzer.core.models import (
    IntakeSurvey,
    PatientRecord,
    PersuasivePoint,
    require_patient,
    require_survey,
)


MIN_POINTS = 3
MIN_MESSAGES = 2


# =============================================================================
# STAGE 1: GENERIC POINTS
# =============================================================================
# Appended in this order while fewer than MIN_POINTS points exist.

GENERIC_POINTS = (
    PersuasivePoint(
        id="expert-recommendation",
        title="Specialist recommendation",
        description=(
            "Based on the evaluation, the surgical team recommends treating the "
            "condition before it progresses."
        ),
        icon=ICONS["stethoscope"],
        category=PointCategory.CLINICAL,
        strength=PointStrength.HIGH,
    ),
    PersuasivePoint(
        id="experienced-team",
        title="Experienced team",
        description="The procedure is performed routinely by an experienced surgical team.",
        icon=ICONS["award"],
        category=PointCategory.EMOTIONAL,
        strength=PointStrength.MEDIUM,
    ),
    PersuasivePoint(
        id="modern-techniques",
        title="Modern techniques",
        description="Minimally invasive techniques mean less pain and a faster recovery.",
        icon=ICONS["zap"],
        category=PointCategory.QUALITY,
        strength=PointStrength.LOW,
    ),
)


# =============================================================================
# STAGE 2: PERSUASIVE POINTS
# =============================================================================


def _has_positive_recommendations(survey: IntakeSurvey) -> bool:
    factors = {normalize_code(f) for f in survey.important_factors}
    return any(code in factors for code in POSITIVE_RECOMMENDATION_FACTORS)


def generate_persuasive_points(
    patient: PatientRecord,
    survey: IntakeSurvey,
    config: Optional[AnalyzerConfiguration] = None,
) -> List[PersuasivePoint]:
    """
    Build talking points for one patient, strongest first.

    Triggers (generation order):
        severe symptoms               → clinical, high
        pain at or above threshold    → clinical, high
        symptoms for 6+ months        → clinical, medium
        moderate/severe limitation    → quality, high
        fear of the procedure         → emotional, medium
        known insurance other than none → financial, medium
        "positive recommendations" factor → social, medium

    Returns:
        Points sorted by strength (stable); at least three unless the
        survey is empty

    Raises:
        MissingPatientError / MissingSurveyError: If either input is None
    """
    require_patient(patient, "generate_persuasive_points")
    require_survey(survey, "generate_persuasive_points", patient.patient_id)
    config = config or AnalyzerConfiguration()

    if survey.is_empty:
        return []

    points: List[PersuasivePoint] = []

    if survey.severity is Severity.SEVERE:
        points.append(
            PersuasivePoint(
                id="prevent-complications",
                title="Prevent complications",
                description=(
                    "Treating a severe condition now avoids complications that "
                    "could require emergency surgery."
                ),
                icon=ICONS["shield"],
                category=PointCategory.CLINICAL,
                strength=PointStrength.HIGH,
            )
        )

    if survey.has_high_pain(config.high_pain_threshold):
        points.append(
            PersuasivePoint(
                id="pain-relief",
                title="Pain relief",
                description=(
                    f"Current pain of {survey.pain_intensity}/10 can be "
                    f"significantly reduced with surgery."
                ),
                icon=ICONS["heart"],
                category=PointCategory.CLINICAL,
                strength=PointStrength.HIGH,
            )
        )

    if survey.is_chronic:
        points.append(
            PersuasivePoint(
                id="long-term-solution",
                title="Long-term solution",
                description=(
                    "Long-standing symptoms rarely improve without treatment; "
                    "surgery offers a definitive solution."
                ),
                icon=ICONS["calendar"],
                category=PointCategory.CLINICAL,
                strength=PointStrength.MEDIUM,
            )
        )

    if survey.functional_limitation in (
        FunctionalLimitation.MODERATE,
        FunctionalLimitation.SEVERE,
    ):
        points.append(
            PersuasivePoint(
                id="quality-of-life",
                title="Better quality of life",
                description="Surgery can restore normal daily activities.",
                icon=ICONS["activity"],
                category=PointCategory.QUALITY,
                strength=PointStrength.HIGH,
            )
        )

    if survey.has_concern(SurgeryConcern.PROCEDURE_FEAR):
        points.append(
            PersuasivePoint(
                id="safe-procedure",
                title="A safe, well-known procedure",
                description=(
                    "Modern surgical techniques have greatly reduced risks and "
                    "improved the patient experience."
                ),
                icon=ICONS["shield"],
                category=PointCategory.EMOTIONAL,
                strength=PointStrength.MEDIUM,
            )
        )

    if survey.insurance.has_coverage:
        points.append(
            PersuasivePoint(
                id="insurance-coverage",
                title="Insurance coverage",
                description=(
                    "The patient's insurance may cover a significant part of "
                    "the procedure."
                ),
                icon=ICONS["dollar"],
                category=PointCategory.FINANCIAL,
                strength=PointStrength.MEDIUM,
            )
        )

    if _has_positive_recommendations(survey):
        points.append(
            PersuasivePoint(
                id="positive-references",
                title="Trusted references",
                description="Other patients recommend the team, which the patient values.",
                icon=ICONS["users"],
                category=PointCategory.SOCIAL,
                strength=PointStrength.MEDIUM,
            )
        )

    for generic in GENERIC_POINTS:
        if len(points) >= MIN_POINTS:
            break
        points.append(generic)

    points.sort(key=lambda p: p.strength.rank, reverse=True)

    logger.debug(
        f"Persuasive points for patient {patient.patient_id}: {[p.id for p in points]}"
    )
    return points


# =============================================================================
# STAGE 3: FOLLOW-UP MESSAGES
# =============================================================================


def generate_persuasive_messages(
    patient: PatientRecord,
    survey: IntakeSurvey,
    config: Optional[AnalyzerConfiguration] = None,
) -> List[str]:
    """Short follow-up sentences, padded with a general message when fewer than two."""
    require_patient(patient, "generate_persuasive_messages")
    require_survey(survey, "generate_persuasive_messages", patient.patient_id)
    config = config or AnalyzerConfiguration()

    messages: List[str] = []

    if survey.has_high_pain(config.high_pain_threshold):
        messages.append(
            f"Your current pain level ({survey.pain_intensity}/10) could be "
            f"significantly relieved by surgery."
        )
    if survey.is_chronic:
        messages.append(
            "Long-lasting symptoms rarely improve on their own; surgery offers "
            "a definitive solution."
        )
    if survey.severity is Severity.SEVERE:
        messages.append(
            "A severe condition carries a risk of complications if it is not "
            "treated surgically."
        )
    if survey.functional_limitation in (
        FunctionalLimitation.MODERATE,
        FunctionalLimitation.SEVERE,
    ):
        messages.append(
            "Surgery could restore your ability to carry out daily activities."
        )
    if survey.has_concern(SurgeryConcern.PROCEDURE_FEAR):
        messages.append(
            "Modern surgical techniques have greatly reduced risks and "
            "improved the patient experience."
        )
    if survey.has_concern(SurgeryConcern.RECOVERY_TIME):
        messages.append(
            "Our accelerated recovery program lets most patients return to "
            "normal activities sooner."
        )

    if len(messages) < MIN_MESSAGES:
        messages.append(
            "Surgery offers the best chance to resolve your condition for good "
            "and improve your quality of life."
        )
    return messages
