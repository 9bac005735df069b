"""
Survey Ingestion - Adapting stored payloads to the canonical models

Surveys reach the analyzer in three shapes: the canonical schema written by
this package, the legacy dashboard shape, and the legacy questionnaire form
shape. Each shape has an adapter; `adapt_survey()` asks them in order and
uses the first that recognizes the payload.

Adapter Hierarchy:
    SurveyAdapter (Protocol)
    ├── CanonicalSurveyAdapter    → Payload carries "schema_version"
    ├── IntakeFormSurveyAdapter   → severidadSintomasActuales, intensidadDolorActual, ...
    └── AnalysisSurveyAdapter     → severidadCondicion, intensidadDolor, ...

Usage:
    from survey_analyzer.ingestion import adapt_patient, adapt_survey

    survey = adapt_survey({"severidadCondicion": "severa", "intensidadDolor": 8})
    survey.severity  # Severity.SEVERE
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from loguru import logger
from pydantic import ValidationError

from survey_analyzer.core.exceptions import (
    IngestionError,
    InvalidInputError,
    UnrecognizedSurveyShapeError,
)
from survey_analyzer.core.models import IntakeSurvey, PatientRecord


# =============================================================================
# STAGE 1: ADAPTER PROTOCOL
# =============================================================================


@runtime_checkable
class SurveyAdapter(Protocol):
    """
    Contract for survey shape adapters.

    Required Members:
        shape_name        → Name used in logs
        matches(payload)  → True when this adapter understands the payload
        adapt(payload)    → Canonical IntakeSurvey
    """

    @property
    def shape_name(self) -> str:
        ...

    def matches(self, payload: Mapping[str, Any]) -> bool:
        ...

    def adapt(self, payload: Mapping[str, Any]) -> IntakeSurvey:
        ...


def _build_survey(shape: str, fields: Dict[str, Any]) -> IntakeSurvey:
    try:
        return IntakeSurvey.model_validate(fields)
    except ValidationError as e:
        raise IngestionError(
            "Survey payload has invalid field types",
            context={"shape": shape, "errors": e.error_count()},
        ) from e


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _join_text(*parts: Any) -> Optional[str]:
    text = ". ".join(str(p).strip() for p in parts if p is not None and str(p).strip())
    return text or None


# =============================================================================
# STAGE 2: SHAPE ADAPTERS
# =============================================================================


class CanonicalSurveyAdapter:
    """Surveys already written in the canonical schema."""

    @property
    def shape_name(self) -> str:
        return "canonical"

    def matches(self, payload: Mapping[str, Any]) -> bool:
        return "schema_version" in payload

    def adapt(self, payload: Mapping[str, Any]) -> IntakeSurvey:
        return _build_survey(self.shape_name, dict(payload))


class IntakeFormSurveyAdapter:
    """
    Legacy questionnaire form submissions.

    Field Mapping:
        severidadSintomasActuales         → severity
        intensidadDolorActual             → pain_intensity
        desdeCuandoSintomaPrincipal       → duration
        afectacionActividadesDiarias      → functional_limitation
        sintomasAdicionales               → symptoms
        condicionesMedicasCronicas        → comorbidities
        plazoResolucionIdeal              → desired_timeframe
        preocupacionesPrincipales +
        mayorPreocupacionCirugia          → surgery_concerns
        diagnosticoPrincipalPrevio +
        detallesAdicionalesDiagnosticoPrevio → diagnosis_detail
    """

    MARKERS = (
        "severidadSintomasActuales",
        "intensidadDolorActual",
        "desdeCuandoSintomaPrincipal",
        "afectacionActividadesDiarias",
    )

    @property
    def shape_name(self) -> str:
        return "intake_form"

    def matches(self, payload: Mapping[str, Any]) -> bool:
        return any(marker in payload for marker in self.MARKERS)

    def adapt(self, payload: Mapping[str, Any]) -> IntakeSurvey:
        concerns: List[Any] = list(payload.get("preocupacionesPrincipales") or [])
        if payload.get("mayorPreocupacionCirugia"):
            concerns.append(payload["mayorPreocupacionCirugia"])

        fields = {
            "survey_id": _first(payload, "id", "survey_id"),
            "patient_id": _first(payload, "patient_id", "patientId"),
            "age": payload.get("edad"),
            "symptoms": payload.get("sintomasAdicionales"),
            "severity": payload.get("severidadSintomasActuales"),
            "pain_intensity": payload.get("intensidadDolorActual"),
            "duration": payload.get("desdeCuandoSintomaPrincipal"),
            "functional_limitation": payload.get("afectacionActividadesDiarias"),
            "comorbidities": payload.get("condicionesMedicasCronicas"),
            "desired_timeframe": payload.get("plazoResolucionIdeal"),
            "surgery_concerns": concerns,
            "insurance": payload.get("seguroMedico"),
            "important_factors": payload.get("aspectosMasImportantes"),
            "has_prior_diagnosis": payload.get("diagnosticoPrevio"),
            "diagnosis_detail": _join_text(
                payload.get("diagnosticoPrincipalPrevio"),
                payload.get("detallesAdicionalesDiagnosticoPrevio"),
            ),
            "comments": _first(
                payload, "informacionAdicionalImportante", "comentarios"
            ),
        }
        return _build_survey(self.shape_name, fields)


class AnalysisSurveyAdapter:
    """
    Legacy dashboard survey records.

    Field Mapping:
        severidadCondicion    → severity
        intensidadDolor       → pain_intensity
        duracionSintomas      → duration
        limitacionFuncional   → functional_limitation
        sintomas              → symptoms
        comorbilidades        → comorbidities
        plazoDeseado          → desired_timeframe
        preocupacionesCirugia → surgery_concerns
        detallesDiagnostico   → diagnosis_detail
    """

    MARKERS = (
        "severidadCondicion",
        "intensidadDolor",
        "duracionSintomas",
        "limitacionFuncional",
    )

    @property
    def shape_name(self) -> str:
        return "analysis"

    def matches(self, payload: Mapping[str, Any]) -> bool:
        return any(marker in payload for marker in self.MARKERS)

    def adapt(self, payload: Mapping[str, Any]) -> IntakeSurvey:
        fields = {
            "survey_id": _first(payload, "id", "survey_id"),
            "patient_id": _first(payload, "patient_id", "patientId", "pacienteId"),
            "age": payload.get("edad"),
            "symptoms": payload.get("sintomas"),
            "severity": payload.get("severidadCondicion"),
            "pain_intensity": payload.get("intensidadDolor"),
            "duration": payload.get("duracionSintomas"),
            "functional_limitation": payload.get("limitacionFuncional"),
            "comorbidities": payload.get("comorbilidades"),
            "desired_timeframe": payload.get("plazoDeseado"),
            "surgery_concerns": payload.get("preocupacionesCirugia"),
            "insurance": payload.get("seguroMedico"),
            "important_factors": payload.get("aspectosImportantes"),
            "has_prior_diagnosis": payload.get("diagnosticoPrevio"),
            "diagnosis_detail": payload.get("detallesDiagnostico"),
            "has_support_person": payload.get("apoyoFamiliar"),
            "comments": payload.get("comentarios"),
        }
        return _build_survey(self.shape_name, fields)


DEFAULT_ADAPTERS: Sequence[SurveyAdapter] = (
    CanonicalSurveyAdapter(),
    IntakeFormSurveyAdapter(),
    AnalysisSurveyAdapter(),
)


# =============================================================================
# STAGE 3: PUBLIC API
# =============================================================================


def adapt_survey(
    payload: Any, adapters: Optional[Sequence[SurveyAdapter]] = None
) -> IntakeSurvey:
    """
    Convert a stored survey payload into an IntakeSurvey.

    Raises:
        InvalidInputError: If the payload is not a mapping
        UnrecognizedSurveyShapeError: If no adapter recognizes the payload
        IngestionError: If a recognized payload has unusable field types
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError(
            "Survey payload must be a mapping",
            context={"type": type(payload).__name__},
        )

    for adapter in adapters or DEFAULT_ADAPTERS:
        if adapter.matches(payload):
            logger.debug(f"Adapting survey with '{adapter.shape_name}' adapter")
            return adapter.adapt(payload)

    raise UnrecognizedSurveyShapeError(list(payload.keys()))


def adapt_patient(payload: Any) -> PatientRecord:
    """
    Convert a stored patient payload into a PatientRecord.

    Accepts the canonical shape (patient_id, name, age, ...) and the legacy
    shape (id, nombre, apellidos, edad, enfermedadesCronicas, ...).

    Raises:
        InvalidInputError: If the payload is not a mapping
        IngestionError: If the shape is unknown or the age is invalid
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError(
            "Patient payload must be a mapping",
            context={"type": type(payload).__name__},
        )

    if "age" in payload:
        fields = dict(payload)
        if "patient_id" not in fields and "id" in fields:
            fields["patient_id"] = fields.pop("id")
    elif "edad" in payload or "nombre" in payload:
        name = " ".join(
            str(part).strip()
            for part in (payload.get("nombre"), payload.get("apellidos"))
            if part
        )
        fields = {
            "patient_id": _first(payload, "patient_id", "pacienteId", "patientId", "id"),
            "name": name,
            "age": payload.get("edad"),
            "chronic_conditions": _first(
                payload, "enfermedadesCronicas", "condicionesMedicasCronicas"
            ),
            "has_prior_diagnosis": payload.get("diagnosticoPrevio"),
            "diagnosis_detail": _first(
                payload, "detallesDiagnostico", "diagnosticoPrincipalPrevio"
            ),
        }
    else:
        raise IngestionError(
            "Patient payload does not match any known shape",
            context={"keys": sorted(str(k) for k in payload.keys())[:8]},
        )

    try:
        return PatientRecord.model_validate(fields)
    except ValidationError as e:
        raise IngestionError(
            "Patient payload failed validation",
            context={
                "patient_id": fields.get("patient_id"),
                "fields": sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
            },
        ) from e
