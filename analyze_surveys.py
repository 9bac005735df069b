"""
Analyze Intake Surveys from a JSON File

Loads patients and surveys from a JSON file and prints either the cohort
report or the full analysis of one patient.

Exit Codes:
    0 → Success
    1 → File could not be loaded, patient not found, or analysis failed
    2 → The requested patient has not completed the survey

Usage:
    python analyze_surveys.py surveys.json
    python analyze_surveys.py surveys.json --patient-id p-001
    python analyze_surveys.py surveys.json --json --log-level DEBUG
"""

import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from survey_analyzer.analysis.cohort import generate_summary_report
from survey_analyzer.core.constants import (
    COMORBIDITY_LABELS,
    CONCERN_LABELS,
    DURATION_LABELS,
    INSURANCE_LABELS,
    LIMITATION_LABELS,
    SEVERITY_LABELS,
    SYMPTOM_LABELS,
    TIMEFRAME_LABELS,
)
from survey_analyzer.core.exceptions import SurveyAnalyzerError
from survey_analyzer.core.models import CohortAnalysis, IntakeSurvey, PatientAnalysis
from survey_analyzer.pipeline import SurveyAnalyzer
from survey_analyzer.repository import FileBasedSurveyRepository


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_SURVEY = 2


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Clinical risk and conversion analysis of intake surveys",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Cohort report:
    python analyze_surveys.py surveys.json

  One patient, as JSON:
    python analyze_surveys.py surveys.json --patient-id p-001 --json
        """,
    )
    parser.add_argument("data_file", help="JSON file with a list of patient/survey records")
    parser.add_argument("--patient-id", help="Analyze a single patient instead of the cohort")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr output (default: WARNING)",
    )
    parser.add_argument("--env-file", help="Optional .env file with ANALYZER_* settings")
    return parser


# =============================================================================
# STAGE 1: TEXT RENDERING
# =============================================================================


def render_answers(survey: IntakeSurvey) -> List[str]:
    """Survey answers as readable label lines."""
    pain = "-" if survey.pain_intensity is None else f"{survey.pain_intensity}/10"
    symptoms = sorted(SYMPTOM_LABELS.get(s.value, s.value) for s in survey.symptoms)
    concerns = [CONCERN_LABELS.get(c.value, c.value) for c in survey.surgery_concerns]
    comorbidities = [COMORBIDITY_LABELS.get(c, c) for c in survey.comorbidities]
    return [
        f"  Severity:      {SEVERITY_LABELS[survey.severity.value]} (pain {pain})",
        f"  Duration:      {DURATION_LABELS[survey.duration.value]}",
        f"  Limitation:    {LIMITATION_LABELS[survey.functional_limitation.value]}",
        f"  Timeframe:     {TIMEFRAME_LABELS[survey.desired_timeframe.value]}",
        f"  Insurance:     {INSURANCE_LABELS[survey.insurance.value]}",
        f"  Symptoms:      {', '.join(symptoms) or '-'}",
        f"  Comorbidities: {', '.join(comorbidities) or '-'}",
        f"  Concerns:      {', '.join(concerns) or '-'}",
    ]


def render_patient(analysis: PatientAnalysis, survey: Optional[IntakeSurvey] = None) -> str:
    lines = [
        "=" * 80,
        f"PATIENT {analysis.patient_id} (survey {analysis.survey_id or '-'})",
        "=" * 80,
    ]
    if survey is not None:
        lines += ["Survey answers:"] + render_answers(survey) + [""]
    lines += [
        f"Risk index:          {analysis.risk.score} ({analysis.risk.band.value})",
        f"Probable diagnosis:  {analysis.probable_diagnosis}",
        f"Surgery probability: {analysis.conversion_probability:.0%} "
        f"({analysis.outlook.value})",
        f"Benefit/risk ratio:  {analysis.benefit_risk_ratio}",
        "",
        "Risk factors:",
    ]
    lines += [f"  +{f.points:<3} {f.label}" for f in analysis.risk.factors] or ["  (none)"]

    lines += ["", "Insights:"]
    for insight in analysis.insights:
        lines.append(f"  [{insight.impact.value}] {insight.title}: {insight.description}")
        if insight.recommendation:
            lines.append(f"         -> {insight.recommendation}")
    if not analysis.insights:
        lines.append("  (none)")

    for category in analysis.recommendations:
        lines += ["", f"{category.title}:"]
        lines += [f"  - {item}" for item in category.recommendations]

    lines += ["", "Talking points:"]
    lines += [
        f"  [{p.strength.value}/{p.category.value}] {p.title}: {p.description}"
        for p in analysis.persuasive_points
    ] or ["  (none)"]

    lines += ["", "Follow-up messages:"]
    lines += [f"  - {m}" for m in analysis.persuasive_messages]

    if analysis.comment_analysis:
        comments = analysis.comment_analysis
        lines += [
            "",
            f"Comment readiness: {comments.readiness.value} "
            f"(sentiment {comments.sentiment.sentiment.value})",
            f"Suggested approach: {comments.persuasive_approach}",
        ]
    return "\n".join(lines)


def render_cohort(cohort: CohortAnalysis, summary: str) -> str:
    lines = [summary, "", "## Diagnosis Groups", ""]
    lines += [f"- {name}: {count}" for name, count in cohort.group_counts.items()]
    lines += ["", "## Clinical Insights", ""]
    lines += [f"- {text}" for text in cohort.insights]
    lines += ["", "## Most Reported Symptoms", ""]
    lines += [
        f"- {s.label}: {s.count} ({s.percentage}%)" for s in cohort.top_symptoms
    ] or ["- (none)"]
    lines += ["", "## Priority Surveys", ""]
    lines += [f"- {sid}" for sid in cohort.priority_survey_ids] or ["- (none)"]
    return "\n".join(lines)


# =============================================================================
# STAGE 2: ENTRY POINT
# =============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)

    # Configure logger for clean output
    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        analyzer = SurveyAnalyzer.from_environment(env_file=args.env_file)
        repository = FileBasedSurveyRepository(args.data_file)

        if args.patient_id:
            patient = repository.get_patient(args.patient_id)
            if patient is None:
                logger.error(f"Patient '{args.patient_id}' not found in {args.data_file}")
                return EXIT_FAILURE
            survey = repository.get_survey(args.patient_id)
            if survey is None:
                logger.warning(f"Patient '{args.patient_id}' has not completed the survey")
                return EXIT_NO_SURVEY

            analysis = analyzer.analyze_patient(patient, survey)
            if args.json:
                print(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False))
            else:
                print(render_patient(analysis, survey))
            return EXIT_OK

        surveys = repository.list_surveys()
        cohort = analyzer.analyze_cohort(surveys)
        if args.json:
            print(json.dumps(cohort.to_dict(), indent=2, ensure_ascii=False))
        else:
            print(render_cohort(cohort, generate_summary_report(surveys)))
        return EXIT_OK

    except SurveyAnalyzerError as e:
        logger.error(f"Analysis failed: {e}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
