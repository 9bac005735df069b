"""
Cohort Analysis - Population-level views over many intake surveys

Functions in this module receive surveys only (no patient records), so any
age-dependent scoring uses the age reported on each survey.

Operations:
    generate_cohort_insights → One-sentence findings for the whole cohort
    get_priority_patients    → Surveys at or above the priority risk threshold
    top_symptoms             → Most frequently reported symptoms
    apply_filters            → Narrow a cohort by age, severity, group, insurance, text
    generate_summary_report  → Markdown summary of the cohort
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.constants import (
    INSUFFICIENT_DATA_MESSAGE,
    INSURANCE_LABELS,
    NO_SURVEY_DATA_REPORT,
    SEVERITY_LABELS,
    SYMPTOM_LABELS,
)
from survey_analyzer.core.enums import (
    DesiredTimeframe,
    InsuranceType,
    Severity,
    Symptom,
)
from survey_analyzer.core.models import IntakeSurvey, SymptomFrequency
from survey_analyzer.grouping.diagnosis_grouper import DiagnosisGrouper
from survey_analyzer.scoring.risk_index import compute_survey_risk_index


def percent(count: int, total: int) -> int:
    """Integer percentage rounded half-up."""
    if total <= 0:
        return 0
    return (count * 200 + total) // (2 * total)


# =============================================================================
# STAGE 1: PRIORITY PATIENTS
# =============================================================================


def get_priority_patients(
    surveys: Sequence[IntakeSurvey],
    threshold: Optional[int] = None,
    config: Optional[AnalyzerConfiguration] = None,
) -> List[IntakeSurvey]:
    """
    Surveys whose risk index is at or above the priority threshold.

    Returns:
        Matching surveys sorted by risk index, highest first (stable)
    """
    config = config or AnalyzerConfiguration()
    if threshold is None:
        threshold = config.priority_threshold

    scored = [(compute_survey_risk_index(s), s) for s in surveys]
    priority = [(score, s) for score, s in scored if score >= threshold]
    priority.sort(key=lambda item: item[0], reverse=True)
    return [s for _, s in priority]


# =============================================================================
# STAGE 2: COHORT INSIGHTS
# =============================================================================


def generate_cohort_insights(
    surveys: Sequence[IntakeSurvey],
    config: Optional[AnalyzerConfiguration] = None,
    grouper: Optional[DiagnosisGrouper] = None,
) -> List[str]:
    """
    Summarize a cohort in a few sentences.

    Sentences, in order (each omitted when its count is zero):
        1. Most common diagnosis group and its share
        2. Share with severe symptoms
        3. Share with high pain
        4. Share with at least one comorbidity
        5. Share wanting urgent care
        6. Share that qualifies as priority

    Returns:
        The sentences, or [INSUFFICIENT_DATA_MESSAGE] for an empty cohort
    """
    config = config or AnalyzerConfiguration()
    surveys = list(surveys)
    if not surveys:
        return [INSUFFICIENT_DATA_MESSAGE]

    grouper = grouper or DiagnosisGrouper(config)
    total = len(surveys)
    insights: List[str] = []

    # Strict comparison keeps the first category in configured order on ties.
    most_common, max_count = "", 0
    for category, members in grouper.group(surveys).items():
        if len(members) > max_count:
            most_common, max_count = category, len(members)
    if max_count > 0:
        insights.append(
            f"The most common diagnosis is {most_common} "
            f"({percent(max_count, total)}% of patients)."
        )

    severe = sum(1 for s in surveys if s.severity is Severity.SEVERE)
    if severe:
        insights.append(f"{percent(severe, total)}% of patients report severe symptoms.")

    high_pain = sum(1 for s in surveys if s.has_high_pain(config.high_pain_threshold))
    if high_pain:
        insights.append(
            f"{percent(high_pain, total)}% of patients report intense pain "
            f"(>={config.high_pain_threshold}/10)."
        )

    with_comorbidities = sum(1 for s in surveys if s.comorbidity_count > 0)
    if with_comorbidities:
        insights.append(
            f"{percent(with_comorbidities, total)}% of patients have at least "
            f"one comorbidity."
        )

    urgent = sum(1 for s in surveys if s.desired_timeframe is DesiredTimeframe.URGENT)
    if urgent:
        insights.append(f"{percent(urgent, total)}% of patients want urgent care.")

    priority = len(get_priority_patients(surveys, config=config))
    if priority:
        insights.append(
            f"{percent(priority, total)}% of patients require priority attention "
            f"according to clinical criteria."
        )

    logger.debug(f"Generated {len(insights)} cohort insights for {total} surveys")
    return insights


# =============================================================================
# STAGE 3: SYMPTOM FREQUENCIES
# =============================================================================


def top_symptoms(surveys: Sequence[IntakeSurvey], limit: int = 5) -> List[SymptomFrequency]:
    """Most reported symptoms, by count then by symptom order in the questionnaire."""
    surveys = list(surveys)
    counts: Counter = Counter()
    for survey in surveys:
        counts.update(survey.symptoms)

    order = {symptom: index for index, symptom in enumerate(Symptom)}
    ranked = sorted(counts.items(), key=lambda item: (-item[1], order[item[0]]))
    return [
        SymptomFrequency(
            symptom=symptom,
            label=SYMPTOM_LABELS.get(symptom.value, symptom.value),
            count=count,
            percentage=percent(count, len(surveys)),
        )
        for symptom, count in ranked[:limit]
    ]


# =============================================================================
# STAGE 4: FILTERS
# =============================================================================


@dataclass
class SurveyFilters:
    """
    Criteria for narrowing a cohort. Unset criteria match everything.

    Attributes:
        min_age / max_age: Inclusive age range (surveys without age are excluded
            when either bound is set)
        severity: Exact severity
        diagnosis: Probable diagnosis category
        insurance: Exact insurance type
        search: Case-insensitive text searched in the diagnosis detail,
            comments and important factors
    """

    min_age: Optional[int] = None
    max_age: Optional[int] = None
    severity: Optional[Severity] = None
    diagnosis: Optional[str] = None
    insurance: Optional[InsuranceType] = None
    search: Optional[str] = None


def _matches(
    survey: IntakeSurvey, filters: SurveyFilters, grouper: DiagnosisGrouper
) -> bool:
    if filters.min_age is not None or filters.max_age is not None:
        if survey.age is None:
            return False
        if filters.min_age is not None and survey.age < filters.min_age:
            return False
        if filters.max_age is not None and survey.age > filters.max_age:
            return False

    if filters.severity is not None and survey.severity is not filters.severity:
        return False

    if filters.insurance is not None and survey.insurance is not filters.insurance:
        return False

    if filters.diagnosis is not None and grouper.classify(survey) != filters.diagnosis:
        return False

    if filters.search:
        needle = filters.search.casefold()
        haystack = " ".join(
            [survey.diagnosis_detail or "", survey.comments or ""]
            + list(survey.important_factors)
        ).casefold()
        if needle not in haystack:
            return False

    return True


def apply_filters(
    surveys: Sequence[IntakeSurvey],
    filters: SurveyFilters,
    config: Optional[AnalyzerConfiguration] = None,
) -> List[IntakeSurvey]:
    """Surveys matching every set criterion, in input order."""
    grouper = DiagnosisGrouper(config)
    return [s for s in surveys if _matches(s, filters, grouper)]


# =============================================================================
# STAGE 5: SUMMARY REPORT
# =============================================================================


def _distribution(counts: Dict[str, int], total: int) -> List[str]:
    return [
        f"- {label}: {count} ({count / total * 100:.1f}%)"
        for label, count in sorted(counts.items(), key=lambda item: -item[1])
    ]


def generate_summary_report(surveys: Sequence[IntakeSurvey]) -> str:
    """
    Markdown summary of a cohort.

    Sections: general statistics, severity distribution, insurance
    distribution and a one-paragraph conclusion. Averages skip surveys that
    did not answer the question.
    """
    surveys = list(surveys)
    if not surveys:
        return NO_SURVEY_DATA_REPORT

    total = len(surveys)
    ages = [s.age for s in surveys if s.age is not None]
    pains = [s.pain_intensity for s in surveys if s.pain_intensity is not None]

    severity_counts: Dict[str, int] = Counter(
        SEVERITY_LABELS[s.severity.value] for s in surveys
    )
    insurance_counts: Dict[str, int] = Counter(
        INSURANCE_LABELS[s.insurance.value] for s in surveys
    )

    lines = ["# Survey Summary Report", "", "## General Statistics", ""]
    lines.append(f"- Total surveys: {total}")
    lines.append(
        f"- Average age: {sum(ages) / len(ages):.1f} years" if ages else "- Average age: n/a"
    )
    lines.append(
        f"- Average pain level: {sum(pains) / len(pains):.1f}/10"
        if pains
        else "- Average pain level: n/a"
    )
    lines += ["", "## Severity Distribution", ""]
    lines += _distribution(severity_counts, total)
    lines += ["", "## Insurance Distribution", ""]
    lines += _distribution(insurance_counts, total)

    top_severity, top_severity_count = max(
        severity_counts.items(), key=lambda item: item[1]
    )
    top_insurance, top_insurance_count = max(
        insurance_counts.items(), key=lambda item: item[1]
    )
    lines += [
        "",
        "## Conclusions",
        "",
        f"This report summarizes {total} surveys. Most patients report "
        f'"{top_severity}" severity ({top_severity_count} patients) and most '
        f'report "{top_insurance}" coverage ({top_insurance_count} patients).',
    ]
    return "\n".join(lines)
