"""
Tests for persuasive talking points and follow-up messages.
"""

import pytest

from survey_analyzer.analysis.persuasion import (
    GENERIC_POINTS,
    MIN_POINTS,
    generate_persuasive_messages,
    generate_persuasive_points,
)
from survey_analyzer.core.enums import PointCategory, PointStrength
from survey_analyzer.core.exceptions import MissingSurveyError


def _ids(points):
    return [p.id for p in points]


class TestPersuasivePoints:

    def test_empty_survey_has_no_points(self, patient, empty_survey):
        assert generate_persuasive_points(patient, empty_survey) == []

    def test_triggered_points_sorted_by_strength(self, elderly_patient, severe_survey):
        points = generate_persuasive_points(elderly_patient, severe_survey)
        assert _ids(points) == [
            "prevent-complications",
            "pain-relief",
            "quality-of-life",
            "long-term-solution",
        ]

    def test_generic_points_fill_up_to_three(self, patient, mild_survey):
        points = generate_persuasive_points(patient, mild_survey)
        assert points == list(GENERIC_POINTS)
        assert [p.strength for p in points] == [
            PointStrength.HIGH,
            PointStrength.MEDIUM,
            PointStrength.LOW,
        ]

    def test_padding_stops_at_three(self, patient, make_survey):
        points = generate_persuasive_points(patient, make_survey(insurance="imss"))
        assert _ids(points) == [
            "expert-recommendation",
            "insurance-coverage",
            "experienced-team",
        ]
        assert points[1].category is PointCategory.FINANCIAL

    def test_unknown_insurance_is_not_coverage(self, patient, make_survey):
        points = generate_persuasive_points(patient, make_survey(severity="mild"))
        assert "insurance-coverage" not in _ids(points)

    def test_positive_references_factor(self, patient, make_survey):
        survey = make_survey(important_factors=["Recomendaciones positivas"])
        points = generate_persuasive_points(patient, survey)
        social = [p for p in points if p.category is PointCategory.SOCIAL]
        assert _ids(social) == ["positive-references"]

    def test_procedure_fear_point(self, patient, make_survey):
        survey = make_survey(surgery_concerns=["procedure_fear"])
        points = generate_persuasive_points(patient, survey)
        fear = next(p for p in points if p.id == "safe-procedure")
        assert fear.category is PointCategory.EMOTIONAL
        assert fear.strength is PointStrength.MEDIUM

    @pytest.mark.parametrize(
        "fields",
        [
            {"severity": "mild"},
            {"pain_intensity": 10},
            {"comments": "gracias"},
            {"severity": "severe", "insurance": "private", "surgery_concerns": ["procedure_fear"]},
        ],
    )
    def test_answered_survey_gets_at_least_three_sorted_points(
        self, patient, make_survey, fields
    ):
        points = generate_persuasive_points(patient, make_survey(**fields))
        assert len(points) >= MIN_POINTS
        ranks = [p.strength.rank for p in points]
        assert ranks == sorted(ranks, reverse=True)

    def test_missing_survey(self, patient):
        with pytest.raises(MissingSurveyError):
            generate_persuasive_points(patient, None)


class TestPersuasiveMessages:

    def test_triggered_messages(self, elderly_patient, severe_survey):
        messages = generate_persuasive_messages(elderly_patient, severe_survey)
        assert len(messages) == 4
        assert messages[0].startswith("Your current pain level (9/10)")

    def test_single_trigger_gets_general_message(self, patient, make_survey):
        messages = generate_persuasive_messages(
            patient, make_survey(surgery_concerns=["recovery_time"])
        )
        assert len(messages) == 2
        assert messages[0].startswith("Our accelerated recovery program")
        assert messages[1].startswith("Surgery offers the best chance")

    def test_no_trigger_gets_one_general_message(self, patient, mild_survey):
        messages = generate_persuasive_messages(patient, mild_survey)
        assert len(messages) == 1
