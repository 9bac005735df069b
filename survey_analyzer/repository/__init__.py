"""
Repository Layer - Survey data access

Submodules:
    survey_repository.py → SurveyRepository protocol and JSON file implementation
"""

from survey_analyzer.repository.survey_repository import (
    FileBasedSurveyRepository,
    SurveyRepository,
)

__all__ = ["SurveyRepository", "FileBasedSurveyRepository"]
