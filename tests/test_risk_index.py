"""
Tests for the clinical risk index and risk bands.
"""

import pytest

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.enums import RiskBand
from survey_analyzer.core.exceptions import MissingPatientError, MissingSurveyError
from survey_analyzer.scoring.risk_index import (
    assess_risk,
    classify_risk_band,
    compute_risk_index,
    compute_survey_risk_index,
)


class TestComputeRiskIndex:

    def test_high_burden_patient(self, elderly_patient, severe_survey):
        # 10 age + 15 severity + 12 pain + 15 limitation + 10 duration
        # + 4 (two comorbidities) + 10 jaundice + 10 urgent
        score = compute_risk_index(elderly_patient, severe_survey)
        assert score == 86
        assert classify_risk_band(score) is RiskBand.HIGH

    def test_lowest_answers_score_zero(self, patient, mild_survey):
        score = compute_risk_index(patient, mild_survey)
        assert score == 0
        assert classify_risk_band(score) is RiskBand.LOW

    def test_empty_survey_scores_only_age(self, make_patient, empty_survey):
        assert compute_risk_index(make_patient(age=66), empty_survey) == 10
        assert compute_risk_index(make_patient(age=51), empty_survey) == 5
        assert compute_risk_index(make_patient(age=50), empty_survey) == 0

    @pytest.mark.parametrize(
        "fields, expected",
        [
            ({"severity": "moderate"}, 8),
            ({"pain_intensity": 5}, 6),
            ({"pain_intensity": 8}, 12),
            ({"pain_intensity": 4}, 0),
            ({"functional_limitation": "moderate"}, 8),
            ({"duration": "3_6_months"}, 5),
            ({"duration": "6_12_months"}, 7),
            ({"duration": "1_3_months"}, 0),
            ({"comorbidities": ["diabetes"]}, 4),
            ({"comorbidities": ["diabetes", "obesity", "asthma"]}, 8),
            ({"symptoms": ["fever"]}, 8),
            ({"symptoms": ["fever", "jaundice"]}, 18),
            ({"desired_timeframe": "urgent"}, 10),
            ({"desired_timeframe": "30_days"}, 0),
        ],
    )
    def test_individual_rules(self, patient, make_survey, fields, expected):
        assert compute_risk_index(patient, make_survey(**fields)) == expected

    def test_monotonic_in_pain(self, patient, make_survey):
        scores = [
            compute_risk_index(patient, make_survey(pain_intensity=pain))
            for pain in range(11)
        ]
        assert scores == sorted(scores)

    def test_deterministic(self, elderly_patient, severe_survey):
        first = compute_risk_index(elderly_patient, severe_survey)
        assert all(
            compute_risk_index(elderly_patient, severe_survey) == first for _ in range(5)
        )

    def test_missing_inputs_raise(self, patient, severe_survey):
        with pytest.raises(MissingPatientError):
            compute_risk_index(None, severe_survey)
        with pytest.raises(MissingSurveyError):
            compute_risk_index(patient, None)


class TestSurveyRiskIndex:

    def test_uses_reported_age(self, severe_survey):
        assert compute_survey_risk_index(severe_survey) == 86

    def test_missing_age_contributes_nothing(self, severe_survey):
        without_age = severe_survey.model_copy(update={"age": None})
        assert compute_survey_risk_index(without_age) == 76


class TestRiskBands:

    @pytest.mark.parametrize(
        "score, band",
        [(0, RiskBand.LOW), (29, RiskBand.LOW), (30, RiskBand.MODERATE),
         (49, RiskBand.MODERATE), (50, RiskBand.HIGH), (140, RiskBand.HIGH)],
    )
    def test_default_thresholds(self, score, band):
        assert classify_risk_band(score) is band

    def test_configured_thresholds(self):
        config = AnalyzerConfiguration(risk_high_threshold=20, risk_moderate_threshold=10)
        assert classify_risk_band(20, config) is RiskBand.HIGH
        assert classify_risk_band(10, config) is RiskBand.MODERATE
        assert classify_risk_band(9, config) is RiskBand.LOW


class TestAssessRisk:

    def test_factors_explain_the_score(self, elderly_patient, severe_survey):
        assessment = assess_risk(elderly_patient, severe_survey)
        assert assessment.score == sum(f.points for f in assessment.factors)
        assert [f.label for f in assessment.factors] == [
            "Age over 65",
            "Severe symptoms",
            "High pain intensity (9/10)",
            "Severe functional limitation",
            "Symptoms for more than a year",
            "2 comorbidities",
            "Jaundice",
            "Wants urgent resolution",
        ]
        assert assessment.band is RiskBand.HIGH

    def test_to_dict(self, patient, make_survey):
        data = assess_risk(patient, make_survey(severity="moderate")).to_dict()
        assert data == {
            "score": 8,
            "band": "Low",
            "factors": [{"label": "Moderate symptoms", "points": 8}],
        }
