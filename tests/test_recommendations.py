"""
Tests for categorized recommendations.
"""

import math

import pytest

from survey_analyzer.analysis.recommendations import generate_recommendations
from survey_analyzer.core.exceptions import InvalidInputError, MissingPatientError


def _by_id(categories):
    return {c.id: c for c in categories}


class TestCategories:

    def test_conversion_strategy_always_present(self, patient, empty_survey):
        categories = generate_recommendations(patient, empty_survey, 0.3)
        assert [c.id for c in categories] == ["conversion_strategy"]

    def test_full_profile_in_fixed_order(self, elderly_patient, severe_survey):
        categories = generate_recommendations(elderly_patient, severe_survey, 0.85)
        assert [c.id for c in categories] == [
            "clinical",
            "educational",
            "logistical",
            "conversion_strategy",
        ]

        clinical = _by_id(categories)["clinical"].recommendations
        assert "Schedule a priority surgical evaluation." in clinical
        assert "Order liver function tests and a complete blood count." in clinical
        assert "Request a cardiovascular evaluation before surgery." in clinical
        assert "Reserve the earliest available surgical slot." in (
            _by_id(categories)["logistical"].recommendations
        )

    def test_educational_from_concerns(self, patient, make_survey):
        survey = make_survey(surgery_concerns=["anesthesia", "complications"])
        educational = _by_id(generate_recommendations(patient, survey, 0.5))["educational"]
        assert educational.recommendations == [
            "Offer a pre-anesthesia consultation.",
            "Share complication rates and the safety protocol.",
        ]

    def test_logistics_for_uninsured_and_insured(self, patient, make_survey):
        uninsured = _by_id(
            generate_recommendations(patient, make_survey(insurance="none"), 0.5)
        )
        assert uninsured["logistical"].recommendations == [
            "Present financing options and a detailed quote."
        ]

        insured = _by_id(
            generate_recommendations(patient, make_survey(insurance="issste"), 0.5)
        )
        assert insured["logistical"].recommendations == [
            "Verify insurance coverage and pre-authorization requirements."
        ]


class TestConversionStrategy:

    def _strategy(self, patient, survey, probability):
        return generate_recommendations(patient, survey, probability)[-1]

    def test_high_probability_closes(self, patient, make_survey):
        strategy = self._strategy(
            patient, make_survey(surgery_concerns=["recovery_time"]), 0.85
        )
        assert strategy.id == "conversion_strategy"
        assert strategy.recommendations[0] == "High surgery probability (85%)."
        assert "Schedule the surgery as soon as possible." in strategy.recommendations
        assert "Emphasize fast recovery and the post-operative protocol." in (
            strategy.recommendations
        )

    def test_medium_probability_follows_up(self, patient, make_survey):
        survey = make_survey(surgery_concerns=["procedure_fear", "recovery_time"])
        strategy = self._strategy(patient, survey, 0.5)
        assert strategy.recommendations == [
            "Medium surgery probability (50%).",
            "Undecided patient: focus on resolving the main concerns.",
            "Share testimonials from satisfied patients.",
            "Emphasize fast recovery and early return to work.",
            "Schedule a follow-up in 1-2 weeks.",
            "Offer a second-opinion consultation.",
        ]

    def test_low_probability_long_term_plan(self, patient, empty_survey):
        strategy = self._strategy(patient, empty_survey, 0.3)
        assert strategy.recommendations[0] == "Low surgery probability (30%)."
        assert "Schedule a follow-up in 3 months." in strategy.recommendations

    @pytest.mark.parametrize("probability", [0.0, 0.4, 0.7, 1.0, 1])
    def test_boundaries_accepted(self, patient, empty_survey, probability):
        assert generate_recommendations(patient, empty_survey, probability)

    @pytest.mark.parametrize(
        "probability", [-0.01, 1.01, math.nan, math.inf, True, "0.5", None]
    )
    def test_invalid_probability(self, patient, empty_survey, probability):
        with pytest.raises(InvalidInputError):
            generate_recommendations(patient, empty_survey, probability)

    def test_missing_patient(self, empty_survey):
        with pytest.raises(MissingPatientError):
            generate_recommendations(None, empty_survey, 0.5)
