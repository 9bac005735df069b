"""
Ingestion Layer - Legacy survey shapes to canonical models

Submodules:
    adapters.py → Shape adapters, adapt_survey() and adapt_patient()
"""

from survey_analyzer.ingestion.adapters import (
    AnalysisSurveyAdapter,
    CanonicalSurveyAdapter,
    IntakeFormSurveyAdapter,
    SurveyAdapter,
    adapt_patient,
    adapt_survey,
)

__all__ = [
    "SurveyAdapter",
    "CanonicalSurveyAdapter",
    "IntakeFormSurveyAdapter",
    "AnalysisSurveyAdapter",
    "adapt_survey",
    "adapt_patient",
]
