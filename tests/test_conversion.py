"""
Tests for conversion probability, outlook and benefit/risk ratio.
"""

import pytest

from survey_analyzer.core.enums import ConversionOutlook
from survey_analyzer.core.exceptions import MissingPatientError
from survey_analyzer.scoring.conversion import (
    BASE_PROBABILITY,
    calculate_benefit_risk_ratio,
    conversion_outlook,
    estimate_conversion_probability,
)


class TestConversionProbability:

    def test_empty_survey_returns_base(self, patient, empty_survey):
        assert estimate_conversion_probability(patient, empty_survey) == BASE_PROBABILITY

    def test_strong_evidence_is_not_regressed(self, elderly_patient, severe_survey):
        # 0.3 + 0.25 severe + 0.20 limitation + 0.10 chronic
        probability = estimate_conversion_probability(elderly_patient, severe_survey)
        assert probability == pytest.approx(0.85)

    def test_weak_evidence_regresses_toward_base(self, patient, make_survey):
        # (0.3 + 0.15 moderate + 0.05 age) * 0.7 + 0.09
        probability = estimate_conversion_probability(
            patient, make_survey(severity="moderate")
        )
        assert probability == pytest.approx(0.44)

    def test_necessity_doubts_lower_probability(self, patient, make_survey):
        probability = estimate_conversion_probability(
            patient,
            make_survey(
                severity="severe",
                functional_limitation="severe",
                surgery_concerns=["unsure_necessity"],
            ),
        )
        assert probability == pytest.approx(0.75)

    def test_older_patients_are_less_likely(self, make_patient, make_survey):
        # (0.3 - 0.10) * 0.7 + 0.09
        probability = estimate_conversion_probability(
            make_patient(age=72), make_survey(severity="mild")
        )
        assert probability == pytest.approx(0.23)

    @pytest.mark.parametrize("age", [18, 40, 65, 71, 95])
    def test_always_in_unit_interval(self, make_patient, severe_survey, mild_survey, age):
        for survey in (severe_survey, mild_survey):
            probability = estimate_conversion_probability(make_patient(age=age), survey)
            assert 0.0 <= probability <= 1.0

    def test_missing_patient(self, severe_survey):
        with pytest.raises(MissingPatientError):
            estimate_conversion_probability(None, severe_survey)


@pytest.mark.parametrize(
    "probability, outlook",
    [
        (1.0, ConversionOutlook.HIGH),
        (0.7, ConversionOutlook.HIGH),
        (0.69, ConversionOutlook.MEDIUM),
        (0.4, ConversionOutlook.MEDIUM),
        (0.39, ConversionOutlook.LOW),
        (0.0, ConversionOutlook.LOW),
    ],
)
def test_conversion_outlook(probability, outlook):
    assert conversion_outlook(probability) is outlook


class TestBenefitRiskRatio:

    def test_neutral_survey(self, patient, empty_survey):
        assert calculate_benefit_risk_ratio(patient, empty_survey) == 1.0

    def test_high_benefit(self, elderly_patient, severe_survey):
        # (1 + 0.5 + 0.3 + 0.4) / (1 + 0.2)
        assert calculate_benefit_risk_ratio(elderly_patient, severe_survey) == 1.83

    def test_high_risk(self, make_patient, make_survey):
        survey = make_survey(surgery_concerns=["procedure_fear"], comorbidities=["diabetes"])
        # 1 / (1 + 0.3 + 0.1 + 0.1)
        assert calculate_benefit_risk_ratio(make_patient(age=75), survey) == 0.67
