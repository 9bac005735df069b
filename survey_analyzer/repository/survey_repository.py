"""
Survey Repository - Data Access Abstraction

This module provides a clean interface for reading patients and their
intake surveys, abstracting away where the records are stored. The analyzer
itself never does I/O; the repository is the opaque data source used by the
command-line report and by hosts that keep surveys in files.

Architecture:
    SurveyRepository (Protocol)
    └── FileBasedSurveyRepository → Loads a JSON list of records

Record Formats (JSON list entries):
    {"patient": {...}, "survey": {...} | null}   → paired record
    {"nombre": ..., "edad": ..., "severidadCondicion": ...}  → flat legacy survey

Usage:
    from survey_analyzer.repository import FileBasedSurveyRepository

    repo = FileBasedSurveyRepository("surveys.json")
    patient = repo.get_patient("p-001")
    survey = repo.get_survey("p-001")
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from loguru import logger

from survey_analyzer.core.exceptions import (
    DatasetLoadError,
    IngestionError,
    InvalidInputError,
)
from survey_analyzer.core.models import IntakeSurvey, PatientRecord
from survey_analyzer.ingestion.adapters import adapt_patient, adapt_survey


# =============================================================================
# STAGE 1: REPOSITORY PROTOCOL (INTERFACE)
# =============================================================================


@runtime_checkable
class SurveyRepository(Protocol):
    """
    Protocol defining the interface for survey data sources.

    Required Methods:
        list_patients()    → Every patient, in source order
        list_surveys()     → Every completed survey, in source order
        get_patient(id)    → One patient or None
        get_survey(id)     → The patient's survey or None
    """

    def list_patients(self) -> List[PatientRecord]:
        ...

    def list_surveys(self) -> List[IntakeSurvey]:
        ...

    def get_patient(self, patient_id: str) -> Optional[PatientRecord]:
        ...

    def get_survey(self, patient_id: str) -> Optional[IntakeSurvey]:
        ...

    @property
    def total_records(self) -> int:
        ...


# =============================================================================
# STAGE 2: FILE-BASED REPOSITORY IMPLEMENTATION
# =============================================================================


class FileBasedSurveyRepository:
    """
    Survey repository backed by a local JSON file.

    What it does:
        Loads a JSON list of records, adapts each one through the ingestion
        layer and indexes patients and surveys by patient id.

    How it works:
        STAGE 2.1: Validate the file path
        STAGE 2.2: Parse the JSON list
        STAGE 2.3: Adapt each record; skip (with a warning) those that fail

    Example:
        >>> repo = FileBasedSurveyRepository("surveys.json")
        >>> repo.total_records
        12
    """

    def __init__(self, dataset_path: str):
        """
        Initialize repository from JSON file.

        Raises:
            DatasetLoadError: If the file is missing, unreadable, not JSON,
                or not a list of records
        """
        self._dataset_path = Path(dataset_path)
        if not self._dataset_path.exists():
            raise DatasetLoadError(str(self._dataset_path), "File not found")

        self._patients: Dict[str, PatientRecord] = {}
        self._surveys: Dict[str, IntakeSurvey] = {}
        self._skipped = 0

        self._load_dataset()

        logger.info(
            f"FileBasedSurveyRepository initialized | "
            f"Patients: {len(self._patients)} | "
            f"Surveys: {len(self._surveys)} | "
            f"Skipped: {self._skipped}"
        )

    # =========================================================================
    # STAGE 3: DATASET LOADING
    # =========================================================================

    def _load_dataset(self) -> None:
        logger.info(f"Loading surveys from: {self._dataset_path}")
        try:
            with open(self._dataset_path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetLoadError(str(self._dataset_path), f"Invalid JSON: {e}")
        except UnicodeDecodeError as e:
            raise DatasetLoadError(str(self._dataset_path), f"Invalid encoding: {e}")
        except PermissionError:
            raise DatasetLoadError(str(self._dataset_path), "Permission denied")
        except OSError as e:
            raise DatasetLoadError(str(self._dataset_path), str(e))

        if not isinstance(raw_data, list):
            raise DatasetLoadError(
                str(self._dataset_path), "Top-level JSON value must be a list of records"
            )

        for index, record in enumerate(raw_data):
            try:
                patient, survey = self._adapt_record(record, index)
            except (IngestionError, InvalidInputError) as e:
                self._skipped += 1
                logger.warning(f"Skipping record {index}: {e}")
                continue

            if patient.patient_id in self._patients:
                logger.warning(
                    f"Duplicate patient id '{patient.patient_id}' at record {index}; "
                    f"keeping the later record"
                )
            self._patients[patient.patient_id] = patient
            if survey is not None:
                self._surveys[patient.patient_id] = survey
            else:
                self._surveys.pop(patient.patient_id, None)

    def _adapt_record(
        self, record: Any, index: int
    ) -> Tuple[PatientRecord, Optional[IntakeSurvey]]:
        if not isinstance(record, Mapping):
            raise InvalidInputError(
                "Record must be a JSON object", context={"type": type(record).__name__}
            )

        if "patient" in record:
            patient_payload = record["patient"]
            survey_payload = record.get("survey")
        else:
            patient_payload = record
            survey_payload = record

        patient = adapt_patient(_with_default_id(patient_payload, f"record-{index}"))
        if survey_payload is None:
            return patient, None

        survey = adapt_survey(survey_payload)
        if not survey.patient_id:
            survey = survey.model_copy(update={"patient_id": patient.patient_id})
        if not survey.survey_id:
            survey = survey.model_copy(update={"survey_id": f"survey-{index}"})
        return patient, survey

    # =========================================================================
    # STAGE 4: PUBLIC API
    # =========================================================================

    def list_patients(self) -> List[PatientRecord]:
        return list(self._patients.values())

    def list_surveys(self) -> List[IntakeSurvey]:
        return list(self._surveys.values())

    def get_patient(self, patient_id: str) -> Optional[PatientRecord]:
        return self._patients.get(patient_id)

    def get_survey(self, patient_id: str) -> Optional[IntakeSurvey]:
        """The patient's survey, or None when the patient has not completed one."""
        return self._surveys.get(patient_id)

    @property
    def total_records(self) -> int:
        return len(self._patients)

    @property
    def skipped_records(self) -> int:
        return self._skipped


_PATIENT_ID_KEYS = ("patient_id", "pacienteId", "patientId", "id")


def _with_default_id(payload: Any, default_id: str) -> Any:
    if not isinstance(payload, Mapping):
        return payload
    if any(payload.get(key) not in (None, "") for key in _PATIENT_ID_KEYS):
        return payload
    return {**payload, "patient_id": default_id}
