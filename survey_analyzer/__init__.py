"""
Survey Analyzer - Clinical risk scoring and conversion-likelihood engine

Turns a patient's pre-surgical intake survey into a risk index, a probable
diagnosis group, clinician insights, categorized recommendations and ranked
talking points, and summarizes whole cohorts of surveys.

Package Layout:
    core/        → Enums, models, configuration, constants, cache, exceptions
    ingestion/   → Legacy survey shapes to canonical models
    repository/  → JSON file survey repository
    scoring/     → Risk index, conversion probability, benefit/risk ratio
    grouping/    → Probable-diagnosis rules and grouper
    analysis/    → Insights, recommendations, persuasion, sentiment, cohorts
    pipeline.py  → SurveyAnalyzer facade

Quick Start:
    from survey_analyzer import SurveyAnalyzer, adapt_patient, adapt_survey

    analyzer = SurveyAnalyzer()
    analysis = analyzer.analyze_patient(adapt_patient(raw_patient), adapt_survey(raw_survey))
"""

from survey_analyzer.analysis import (
    SurveyFilters,
    analyze_sentiment,
    analyze_surgery_comments,
    apply_filters,
    generate_cohort_insights,
    generate_insights,
    generate_persuasive_messages,
    generate_persuasive_points,
    generate_recommendations,
    generate_summary_report,
    get_priority_patients,
    top_symptoms,
)
from survey_analyzer.core import (
    AnalyzerConfiguration,
    BoundedCache,
    CohortAnalysis,
    ConfigurationError,
    DatasetLoadError,
    IngestionError,
    Insight,
    IntakeSurvey,
    InvalidInputError,
    MissingPatientError,
    MissingSurveyError,
    PatientAnalysis,
    PatientRecord,
    PersuasivePoint,
    RecommendationCategory,
    RiskAssessment,
    RiskBand,
    SurveyAnalyzerError,
    UnrecognizedSurveyShapeError,
)
from survey_analyzer.core.constants import INSUFFICIENT_DATA_MESSAGE
from survey_analyzer.grouping import (
    DiagnosisGrouper,
    classify_probable_diagnosis,
    group_by_probable_diagnosis,
)
from survey_analyzer.ingestion import adapt_patient, adapt_survey
from survey_analyzer.pipeline import SurveyAnalyzer
from survey_analyzer.repository import FileBasedSurveyRepository, SurveyRepository
from survey_analyzer.scoring import (
    assess_risk,
    calculate_benefit_risk_ratio,
    classify_risk_band,
    compute_risk_index,
    compute_survey_risk_index,
    conversion_outlook,
    estimate_conversion_probability,
)

__version__ = "1.0.0"

__all__ = [
    # Facade
    "SurveyAnalyzer",
    # Models
    "PatientRecord",
    "IntakeSurvey",
    "RiskAssessment",
    "Insight",
    "RecommendationCategory",
    "PersuasivePoint",
    "PatientAnalysis",
    "CohortAnalysis",
    "RiskBand",
    # Configuration
    "AnalyzerConfiguration",
    "BoundedCache",
    "INSUFFICIENT_DATA_MESSAGE",
    # Scoring
    "compute_risk_index",
    "compute_survey_risk_index",
    "assess_risk",
    "classify_risk_band",
    "estimate_conversion_probability",
    "conversion_outlook",
    "calculate_benefit_risk_ratio",
    # Grouping
    "DiagnosisGrouper",
    "group_by_probable_diagnosis",
    "classify_probable_diagnosis",
    # Analysis
    "generate_insights",
    "generate_recommendations",
    "generate_persuasive_points",
    "generate_persuasive_messages",
    "analyze_sentiment",
    "analyze_surgery_comments",
    "generate_cohort_insights",
    "get_priority_patients",
    "top_symptoms",
    "SurveyFilters",
    "apply_filters",
    "generate_summary_report",
    # Ingestion / repository
    "adapt_survey",
    "adapt_patient",
    "SurveyRepository",
    "FileBasedSurveyRepository",
    # Exceptions
    "SurveyAnalyzerError",
    "ConfigurationError",
    "InvalidInputError",
    "MissingPatientError",
    "MissingSurveyError",
    "IngestionError",
    "UnrecognizedSurveyShapeError",
    "DatasetLoadError",
]
