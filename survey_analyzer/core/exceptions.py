"""
Domain Exceptions for Survey Analysis

This module defines all custom exceptions raised by the survey analyzer.
Data-quality problems inside a survey (an unrecognized severity code, a pain
value out of range) are NOT errors: they degrade to "no contribution" and are
never raised. Exceptions are reserved for missing core entities, unusable
payloads and invalid configuration.

Exception Hierarchy:
    SurveyAnalyzerError (base)
    ├── ConfigurationError              → Invalid configuration
    ├── InvalidInputError               → Missing or malformed core input
    │   ├── MissingPatientError
    │   └── MissingSurveyError
    ├── IngestionError                  → Payload could not be adapted
    │   └── UnrecognizedSurveyShapeError
    └── RepositoryError                 → Data source failures
        └── DatasetLoadError

Usage:
    from survey_analyzer.core.exceptions import MissingSurveyError

    try:
        analysis = analyzer.analyze_patient(patient, survey)
    except MissingSurveyError:
        render_survey_not_completed()
"""

from typing import Optional


# =============================================================================
# STAGE 1: BASE EXCEPTION
# =============================================================================


class SurveyAnalyzerError(Exception):
    """
    Base exception for all survey analyzer errors.

    Attributes:
        message: Human-readable error description
        context: Dictionary of additional context for debugging
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format message with context for display."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


# =============================================================================
# STAGE 2: CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(SurveyAnalyzerError):
    """
    Error in analyzer configuration.

    When raised:
        - Band thresholds out of order (moderate >= high)
        - Conversion thresholds outside [0, 1]
        - Diagnosis keyword table targeting a category that is not configured
        - Non-numeric environment overrides

    Example:
        >>> raise ConfigurationError(
        ...     "Moderate risk threshold must be below high threshold",
        ...     context={"moderate": 60, "high": 50}
        ... )
    """

    pass


# =============================================================================
# STAGE 3: INVALID INPUT ERRORS
# =============================================================================
# Raised when a core entity is absent. Callers must be able to tell
# "no risk factors" (score 0) apart from "no data" (exception).


class InvalidInputError(SurveyAnalyzerError):
    """
    A required input is missing or is not of the expected type.

    When raised:
        - A None patient or survey reaches a scoring/insight function
        - A raw dict is passed where a canonical model is expected
        - A conversion probability outside [0, 1]
    """

    pass


class MissingPatientError(InvalidInputError):
    """No patient record was supplied."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            "Patient record is required", context={"operation": operation}
        )


class MissingSurveyError(InvalidInputError):
    """
    No intake survey was supplied.

    Hosts should check for a completed survey before calling into the
    analyzer and render a "survey not completed" state instead.

    Attributes:
        operation: Name of the operation that needed the survey
        patient_id: Patient whose survey was missing (if known)
    """

    def __init__(self, operation: str, patient_id: Optional[str] = None):
        self.operation = operation
        self.patient_id = patient_id
        super().__init__(
            "Intake survey is required",
            context={"operation": operation, "patient_id": patient_id},
        )


# =============================================================================
# STAGE 4: INGESTION ERRORS
# =============================================================================


class IngestionError(SurveyAnalyzerError):
    """Base exception for payloads that cannot be mapped to canonical models."""

    pass


class UnrecognizedSurveyShapeError(IngestionError):
    """
    No registered adapter recognizes the survey payload.

    Attributes:
        keys: Top-level keys found in the payload (for troubleshooting)
    """

    def __init__(self, keys: list):
        self.keys = keys
        preview = sorted(str(k) for k in keys)[:8]
        super().__init__(
            "Survey payload does not match any known shape",
            context={"keys": preview},
        )


# =============================================================================
# STAGE 5: REPOSITORY ERRORS
# =============================================================================


class RepositoryError(SurveyAnalyzerError):
    """Error accessing a survey data source."""

    pass


class DatasetLoadError(RepositoryError):
    """
    Survey dataset could not be loaded.

    When raised:
        - File not found
        - Invalid JSON format
        - Top-level JSON value is not a list of records

    Attributes:
        file_path: Path to the dataset file
        reason: Why loading failed
    """

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(
            f"Failed to load surveys from {file_path}: {reason}",
            context={"file_path": file_path, "reason": reason},
        )
