"""
Pytest configuration and fixtures
"""
import json

import pytest

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.models import IntakeSurvey, PatientRecord


@pytest.fixture
def config() -> AnalyzerConfiguration:
    """Default analyzer configuration."""
    return AnalyzerConfiguration()


@pytest.fixture
def make_patient():
    """Factory for patient records; defaults to a 40-year-old."""

    def _make(**fields) -> PatientRecord:
        fields.setdefault("patient_id", "p-001")
        fields.setdefault("name", "Ana López")
        fields.setdefault("age", 40)
        return PatientRecord(**fields)

    return _make


@pytest.fixture
def make_survey():
    """Factory for canonical intake surveys."""

    def _make(**fields) -> IntakeSurvey:
        fields.setdefault("survey_id", "s-001")
        fields.setdefault("patient_id", "p-001")
        return IntakeSurvey(**fields)

    return _make


@pytest.fixture
def patient(make_patient) -> PatientRecord:
    return make_patient()


@pytest.fixture
def elderly_patient(make_patient) -> PatientRecord:
    return make_patient(patient_id="p-070", name="Jorge Ruiz", age=70)


@pytest.fixture
def severe_survey(make_survey) -> IntakeSurvey:
    """High-burden survey: severe, pain 9, chronic, jaundice, urgent."""
    return make_survey(
        survey_id="s-070",
        patient_id="p-070",
        age=70,
        severity="severe",
        pain_intensity=9,
        duration="more_than_1_year",
        functional_limitation="severe",
        comorbidities=["diabetes", "hypertension"],
        symptoms=["jaundice"],
        desired_timeframe="urgent",
    )


@pytest.fixture
def mild_survey(make_survey) -> IntakeSurvey:
    """Every answer at its lowest value."""
    return make_survey(
        age=40,
        severity="mild",
        pain_intensity=0,
        duration="less_than_1_month",
        functional_limitation="none",
        comorbidities=[],
        symptoms=[],
        desired_timeframe="no_rush",
        insurance="none",
    )


@pytest.fixture
def empty_survey(make_survey) -> IntakeSurvey:
    """A survey with no answered question."""
    return make_survey()


@pytest.fixture
def legacy_analysis_payload() -> dict:
    """Survey in the legacy dashboard shape."""
    return {
        "id": "enc-12",
        "pacienteId": "pac-12",
        "nombre": "María",
        "apellidos": "Gómez Pérez",
        "edad": 58,
        "severidadCondicion": "severa",
        "intensidadDolor": "8",
        "duracionSintomas": "6_12_meses",
        "limitacionFuncional": "moderada",
        "sintomas": ["bulto_visible", "dolor_esfuerzos"],
        "comorbilidades": ["Hipertensión"],
        "plazoDeseado": "urgente",
        "preocupacionesCirugia": ["miedo_procedimiento", "tiempo_recuperacion"],
        "seguroMedico": "IMSS",
        "diagnosticoPrevio": "si",
        "detallesDiagnostico": "Hernia inguinal derecha",
        "apoyoFamiliar": "no",
        "comentarios": "Tengo miedo pero busco alivio y una solución",
    }


@pytest.fixture
def legacy_form_payload() -> dict:
    """Survey in the legacy questionnaire form shape."""
    return {
        "id": "form-3",
        "patientId": "pac-3",
        "edad": 45,
        "severidadSintomasActuales": "moderada",
        "intensidadDolorActual": 6,
        "desdeCuandoSintomaPrincipal": "mas_1_anio",
        "afectacionActividadesDiarias": "un_poco",
        "sintomasAdicionales": ["Dolor después de comer", "Náuseas"],
        "condicionesMedicasCronicas": ["Ninguna"],
        "plazoResolucionIdeal": "proximo_mes",
        "preocupacionesPrincipales": ["preocupacionCostoTotal"],
        "mayorPreocupacionCirugia": "preocupacionNoSeguroMejorOpcion",
        "seguroMedico": "ninguno",
        "diagnosticoPrevio": "si",
        "diagnosticoPrincipalPrevio": "Piedras en la vesícula",
        "detallesAdicionalesDiagnosticoPrevio": "ultrasonido 2023",
    }


@pytest.fixture
def dataset_file(tmp_path, legacy_analysis_payload):
    """JSON dataset with a paired record, a flat legacy record and a patient without survey."""
    records = [
        {
            "patient": {"patient_id": "p-001", "name": "Ana López", "age": 62},
            "survey": {
                "schema_version": 1,
                "survey_id": "s-001",
                "severity": "severe",
                "pain_intensity": 8,
                "duration": "more_than_1_year",
                "functional_limitation": "severe",
                "symptoms": ["visible_lump", "exertion_pain"],
                "comments": "Quiero una solución, tengo confianza en el doctor",
            },
        },
        legacy_analysis_payload,
        {"patient": {"patient_id": "p-003", "age": 30}, "survey": None},
    ]
    path = tmp_path / "surveys.json"
    path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no ANALYZER_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "ANALYZER_RISK_HIGH_THRESHOLD",
        "ANALYZER_RISK_MODERATE_THRESHOLD",
        "ANALYZER_PRIORITY_THRESHOLD",
        "ANALYZER_HIGH_PAIN_THRESHOLD",
        "ANALYZER_CONVERSION_HIGH_THRESHOLD",
        "ANALYZER_CONVERSION_MEDIUM_THRESHOLD",
        "ANALYZER_CACHE_CAPACITY",
        "ANALYZER_TOP_SYMPTOM_LIMIT",
    ):
        # setenv first so teardown restores the variable's original absence
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
