"""
Tests for patient insight generation.
"""

import pytest

from survey_analyzer.analysis.insights import generate_insights
from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.enums import ImpactLevel
from survey_analyzer.core.exceptions import MissingSurveyError


def _ids(insights):
    return [i.id for i in insights]


class TestGenerateInsights:

    def test_no_trigger_yields_empty_list(self, patient, empty_survey):
        assert generate_insights(patient, empty_survey) == []

    def test_age_factor_is_informational(self, make_patient, empty_survey):
        insights = generate_insights(make_patient(age=60), empty_survey)
        assert _ids(insights) == ["age-factor"]
        assert insights[0].impact is ImpactLevel.LOW
        assert insights[0].actionable is False
        assert insights[0].recommendation is None

    def test_high_burden_patient(self, elderly_patient, severe_survey):
        insights = generate_insights(elderly_patient, severe_survey)
        assert _ids(insights) == [
            "severe-symptoms",
            "functional-impact",
            "chronic-condition",
            "age-factor",
        ]
        assert "9/10" in insights[0].description

    def test_sorted_by_impact_keeping_generation_order(self, patient, make_survey):
        survey = make_survey(
            duration="more_than_1_year",
            surgery_concerns=["recovery_time", "procedure_fear", "unsure_necessity"],
        )
        insights = generate_insights(patient, survey)
        assert _ids(insights) == [
            "procedure-fear",
            "necessity-doubts",
            "time-constraint",
            "chronic-condition",
        ]
        ranks = [i.impact.rank for i in insights]
        assert ranks == sorted(ranks, reverse=True)

    def test_severe_without_high_pain(self, patient, make_survey):
        survey = make_survey(severity="severe", pain_intensity=6)
        assert "severe-symptoms" not in _ids(generate_insights(patient, survey))

    def test_pain_threshold_is_configurable(self, patient, make_survey):
        survey = make_survey(severity="severe", pain_intensity=6)
        config = AnalyzerConfiguration(high_pain_threshold=6)
        assert "severe-symptoms" in _ids(generate_insights(patient, survey, config))

    @pytest.mark.parametrize(
        "insurance, fires",
        [("none", True), ("imss", False), ("private", False), (None, False)],
    )
    def test_financial_barrier_needs_no_insurance(self, patient, make_survey, insurance, fires):
        survey = make_survey(surgery_concerns=["total_cost"], insurance=insurance)
        assert ("financial-barrier" in _ids(generate_insights(patient, survey))) is fires

    @pytest.mark.parametrize(
        "fields, fires",
        [
            ({"has_support_person": False}, True),
            ({"surgery_concerns": ["no_home_support"]}, True),
            ({"has_support_person": True}, False),
            ({"severity": "mild"}, False),
        ],
    )
    def test_support_gap(self, patient, make_survey, fields, fires):
        insights = generate_insights(patient, make_survey(**fields))
        assert ("support-gap" in _ids(insights)) is fires

    def test_multiple_comorbidities(self, patient, make_survey):
        two = make_survey(comorbidities=["diabetes", "obesity"])
        three = make_survey(comorbidities=["diabetes", "obesity", "hypertension"])
        assert "multiple-comorbidities" not in _ids(generate_insights(patient, two))
        assert "multiple-comorbidities" in _ids(generate_insights(patient, three))

    def test_time_constraint_from_missing_work(self, patient, make_survey):
        survey = make_survey(surgery_concerns=["faltar_trabajo"])
        assert _ids(generate_insights(patient, survey)) == ["time-constraint"]

    def test_missing_survey(self, patient):
        with pytest.raises(MissingSurveyError):
            generate_insights(patient, None)

    def test_to_dict(self, make_patient, empty_survey):
        data = generate_insights(make_patient(age=60), empty_survey)[0].to_dict()
        assert data["impact"] == "low"
        assert data["icon"] == "lightbulb"
