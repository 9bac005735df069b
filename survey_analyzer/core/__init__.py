"""
Core Layer - Domain Models, Enums, and Configuration

This layer contains the foundation of the survey analyzer: closed
enumerations, canonical input models, output dataclasses, label and weight
tables, configuration and the exception hierarchy.

Submodules:
    models.py     → Data structures (PatientRecord, IntakeSurvey, Insight, ...)
    enums.py      → Enumerations (Severity, SymptomDuration, RiskBand, ...)
    constants.py  → Label, alias, weight and lexicon tables
    config.py     → Configuration dataclass
    cache.py      → Bounded LRU cache
    exceptions.py → Domain-specific exceptions

Dependency Rule:
    This layer depends on NOTHING else in the package.
    All other layers may depend on this layer.
"""

from survey_analyzer.core.cache import BoundedCache
from survey_analyzer.core.config import AnalyzerConfiguration, ConfigDefaults
from survey_analyzer.core.enums import (
    ConversionOutlook,
    DesiredTimeframe,
    FunctionalLimitation,
    ImpactLevel,
    InsuranceType,
    PointCategory,
    PointStrength,
    RiskBand,
    Sentiment,
    Severity,
    SurgeryConcern,
    SurgeryReadiness,
    Symptom,
    SymptomDuration,
)
from survey_analyzer.core.exceptions import (
    ConfigurationError,
    DatasetLoadError,
    IngestionError,
    InvalidInputError,
    MissingPatientError,
    MissingSurveyError,
    RepositoryError,
    SurveyAnalyzerError,
    UnrecognizedSurveyShapeError,
)
from survey_analyzer.core.models import (
    CohortAnalysis,
    Insight,
    IntakeSurvey,
    PatientAnalysis,
    PatientRecord,
    PersuasivePoint,
    RecommendationCategory,
    RiskAssessment,
    RiskFactor,
    SentimentResult,
    SurgeryCommentAnalysis,
    SymptomFrequency,
)

__all__ = [
    # Models
    "PatientRecord",
    "IntakeSurvey",
    "RiskFactor",
    "RiskAssessment",
    "Insight",
    "RecommendationCategory",
    "PersuasivePoint",
    "SentimentResult",
    "SurgeryCommentAnalysis",
    "SymptomFrequency",
    "PatientAnalysis",
    "CohortAnalysis",
    # Enums
    "Symptom",
    "Severity",
    "SymptomDuration",
    "FunctionalLimitation",
    "DesiredTimeframe",
    "SurgeryConcern",
    "InsuranceType",
    "ImpactLevel",
    "PointStrength",
    "PointCategory",
    "RiskBand",
    "ConversionOutlook",
    "Sentiment",
    "SurgeryReadiness",
    # Configuration
    "AnalyzerConfiguration",
    "ConfigDefaults",
    "BoundedCache",
    # Exceptions
    "SurveyAnalyzerError",
    "ConfigurationError",
    "InvalidInputError",
    "MissingPatientError",
    "MissingSurveyError",
    "IngestionError",
    "UnrecognizedSurveyShapeError",
    "RepositoryError",
    "DatasetLoadError",
]
