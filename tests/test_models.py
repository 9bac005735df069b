"""
Tests for coded enums, input models and input guards.
"""

import pytest
from pydantic import ValidationError

from survey_analyzer.core.enums import (
    DesiredTimeframe,
    FunctionalLimitation,
    ImpactLevel,
    InsuranceType,
    PointStrength,
    Severity,
    SurgeryConcern,
    Symptom,
    SymptomDuration,
)
from survey_analyzer.core.exceptions import (
    InvalidInputError,
    MissingPatientError,
    MissingSurveyError,
)
from survey_analyzer.core.models import (
    IntakeSurvey,
    PatientRecord,
    parse_optional_bool,
    require_patient,
    require_survey,
)


class TestCodedEnums:
    """Parsing raw questionnaire answers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("severe", Severity.SEVERE),
            ("SEVERE", Severity.SEVERE),
            ("severa", Severity.SEVERE),
            (" Moderada ", Severity.MODERATE),
            (Severity.MILD, Severity.MILD),
            ("muy mal", Severity.UNKNOWN),
            (None, Severity.UNKNOWN),
            (True, Severity.UNKNOWN),
            ("", Severity.UNKNOWN),
        ],
    )
    def test_severity_from_code(self, raw, expected):
        assert Severity.from_code(raw) is expected

    def test_legacy_aliases(self):
        assert SymptomDuration.from_code("mas_1_anio") is SymptomDuration.MORE_THAN_1_YEAR
        assert SymptomDuration.from_code("6-12 meses") is SymptomDuration.SIX_TO_TWELVE_MONTHS
        assert FunctionalLimitation.from_code("mucho") is FunctionalLimitation.SEVERE
        assert DesiredTimeframe.from_code("urgente") is DesiredTimeframe.URGENT
        assert SurgeryConcern.from_code("preocupacionCostoTotal") is SurgeryConcern.TOTAL_COST
        assert Symptom.from_code("Bulto o hinchazón visible") is Symptom.VISIBLE_LUMP

    def test_is_known(self):
        assert Severity.SEVERE.is_known
        assert not Severity.UNKNOWN.is_known

    def test_insurance_coverage(self):
        assert InsuranceType.from_code("Ninguno") is InsuranceType.NONE
        assert InsuranceType.IMSS.has_coverage
        assert InsuranceType.PRIVATE.has_coverage
        assert not InsuranceType.NONE.has_coverage
        assert not InsuranceType.UNKNOWN.has_coverage

    def test_rank_orders_high_first(self):
        assert ImpactLevel.HIGH.rank > ImpactLevel.MEDIUM.rank > ImpactLevel.LOW.rank
        assert PointStrength.HIGH.rank > PointStrength.MEDIUM.rank > PointStrength.LOW.rank


class TestIntakeSurvey:
    """Coercion and derived properties of the canonical survey."""

    @pytest.mark.parametrize(
        "raw, expected",
        [(12, 10), (-3, 0), ("8", 8), (7.9, 7), ("abc", None), (None, None), (float("nan"), None)],
    )
    def test_pain_is_parsed_and_clamped(self, raw, expected):
        assert IntakeSurvey(pain_intensity=raw).pain_intensity == expected

    def test_unknown_symptoms_are_dropped(self):
        survey = IntakeSurvey(symptoms=["bulto_visible", "tos", "fiebre"])
        assert survey.symptoms == frozenset({Symptom.VISIBLE_LUMP, Symptom.FEVER})

    def test_single_symptom_string_is_accepted(self):
        assert IntakeSurvey(symptoms="ictericia").symptoms == frozenset({Symptom.JAUNDICE})

    def test_concerns_deduplicated_in_order(self):
        survey = IntakeSurvey(
            surgery_concerns=["miedo_procedimiento", "procedure_fear", "nada", "costo_total"]
        )
        assert survey.surgery_concerns == (
            SurgeryConcern.PROCEDURE_FEAR,
            SurgeryConcern.TOTAL_COST,
        )

    def test_comorbidities_normalized(self):
        survey = IntakeSurvey(
            comorbidities=["Hipertensión", "ninguna", "  ", "diabetes", "hipertension"]
        )
        assert survey.comorbidities == ("hypertension", "diabetes")
        assert survey.comorbidity_count == 2

    def test_negative_survey_age_is_ignored(self):
        assert IntakeSurvey(age=-4).age is None
        assert IntakeSurvey(age="52").age == 52

    def test_is_chronic(self):
        assert IntakeSurvey(duration="6_12_months").is_chronic
        assert IntakeSurvey(duration="more_than_1_year").is_chronic
        assert not IntakeSurvey(duration="3_6_months").is_chronic
        assert not IntakeSurvey().is_chronic

    def test_high_pain_threshold(self):
        survey = IntakeSurvey(pain_intensity=7)
        assert survey.has_high_pain()
        assert not survey.has_high_pain(8)
        assert not IntakeSurvey().has_high_pain()

    def test_prior_diagnosis_text_respects_explicit_no(self):
        assert IntakeSurvey(diagnosis_detail="inguinal").prior_diagnosis_text == "inguinal"
        survey = IntakeSurvey(has_prior_diagnosis="no", diagnosis_detail="inguinal")
        assert survey.prior_diagnosis_text is None

    def test_is_empty(self):
        assert IntakeSurvey().is_empty
        assert IntakeSurvey(survey_id="s-1", patient_id="p-1").is_empty
        assert not IntakeSurvey(severity="mild").is_empty
        assert not IntakeSurvey(comments="hola").is_empty

    def test_frozen_and_hashable(self):
        first = IntakeSurvey(severity="severa", symptoms=["fiebre"])
        second = IntakeSurvey(severity="severe", symptoms=["fever"])
        assert first == second
        assert hash(first) == hash(second)
        with pytest.raises(ValidationError):
            first.severity = Severity.MILD


class TestPatientRecord:
    def test_numeric_id_is_coerced(self):
        assert PatientRecord(patient_id=7, age=40).patient_id == "7"

    def test_negative_age_rejected(self):
        with pytest.raises(ValidationError):
            PatientRecord(patient_id="p", age=-1)

    def test_age_required(self):
        with pytest.raises(ValidationError):
            PatientRecord(patient_id="p")


@pytest.mark.parametrize(
    "raw, expected",
    [("sí", True), ("Si", True), ("yes", True), (1, True), ("no", False), (0, False),
     ("no_seguro", None), (None, None)],
)
def test_parse_optional_bool(raw, expected):
    assert parse_optional_bool(raw) is expected


class TestInputGuards:
    def test_missing_patient(self):
        with pytest.raises(MissingPatientError) as exc_info:
            require_patient(None, "compute_risk_index")
        assert exc_info.value.operation == "compute_risk_index"

    def test_missing_survey_is_an_invalid_input(self):
        with pytest.raises(InvalidInputError):
            require_survey(None, "generate_insights", "p-1")
        with pytest.raises(MissingSurveyError) as exc_info:
            require_survey(None, "generate_insights", "p-1")
        assert exc_info.value.patient_id == "p-1"

    def test_wrong_type(self):
        with pytest.raises(InvalidInputError):
            require_survey({"severity": "severe"}, "generate_insights")
        with pytest.raises(InvalidInputError):
            require_patient("p-1", "generate_insights")
