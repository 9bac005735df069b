"""
Survey Analyzer - Main Orchestrator

This is the PUBLIC API entry point for the survey analyzer. It coordinates
the scoring, grouping and analysis layers behind two calls: one patient at
a time, or a whole cohort.

Architecture Diagram:
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          SurveyAnalyzer                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │   ┌───────────┐    ┌───────────┐    ┌──────────────────────────┐   │
    │   │  Scoring  │ →  │ Grouping  │ →  │ Analysis (insights, recs,│   │
    │   │           │    │           │    │ persuasion, sentiment)   │   │
    │   └───────────┘    └───────────┘    └──────────────────────────┘   │
    └─────────────────────────────────────────────────────────────────────┘

Usage:
    from survey_analyzer import SurveyAnalyzer

    analyzer = SurveyAnalyzer.from_environment()
    analysis = analyzer.analyze_patient(patient, survey)
    cohort = analyzer.analyze_cohort(surveys)
"""

import copy
from typing import Optional, Sequence

from loguru import logger

from survey_analyzer.analysis.cohort import (
    generate_cohort_insights,
    get_priority_patients,
    top_symptoms,
)
from survey_analyzer.analysis.insights import generate_insights
from survey_analyzer.analysis.persuasion import (
    generate_persuasive_messages,
    generate_persuasive_points,
)
from survey_analyzer.analysis.recommendations import generate_recommendations
from survey_analyzer.analysis.sentiment import analyze_surgery_comments
from survey_analyzer.core.cache import BoundedCache
from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.models import (
    CohortAnalysis,
    IntakeSurvey,
    PatientAnalysis,
    PatientRecord,
    require_patient,
    require_survey,
)
from survey_analyzer.grouping.diagnosis_grouper import DiagnosisGrouper
from survey_analyzer.scoring.conversion import (
    calculate_benefit_risk_ratio,
    conversion_outlook,
    estimate_conversion_probability,
)
from survey_analyzer.scoring.risk_index import assess_risk


# =============================================================================
# STAGE 1: ANALYZER CLASS
# =============================================================================


class SurveyAnalyzer:
    """
    Main orchestrator for survey analysis.

    What it does:
        Runs every per-patient analysis (risk, conversion, insights,
        recommendations, persuasion, comment sentiment) in one call, and
        every cohort analysis (groups, insights, priority list, symptoms)
        in another.

    How it works:
        STAGE 1: Validate configuration and build the diagnosis grouper
        STAGE 2: analyze_patient() → PatientAnalysis (optionally memoised)
        STAGE 3: analyze_cohort()  → CohortAnalysis

    Example:
        >>> analyzer = SurveyAnalyzer(cache=BoundedCache(capacity=64))
        >>> analysis = analyzer.analyze_patient(patient, survey)
        >>> analysis.risk.band
        <RiskBand.MODERATE: 'Moderate'>
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfiguration] = None,
        cache: Optional[BoundedCache] = None,
        grouper: Optional[DiagnosisGrouper] = None,
    ):
        """
        Initialize analyzer with configuration and optional component overrides.

        Args:
            config: Analyzer configuration (defaults when None)
            cache: Optional caller-owned cache for per-patient analyses
            grouper: Optional diagnosis grouper override

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        # =====================================================================
        # STAGE 1.1: STORE CONFIGURATION
        # =====================================================================
        self._config = config or AnalyzerConfiguration()
        self._config.validate()

        # =====================================================================
        # STAGE 1.2: INITIALIZE COMPONENTS
        # =====================================================================
        self._grouper = grouper or DiagnosisGrouper(self._config)
        self._cache = cache

        logger.info(
            f"SurveyAnalyzer initialized | "
            f"Risk bands: {self._config.risk_moderate_threshold}/"
            f"{self._config.risk_high_threshold} | "
            f"Priority: {self._config.priority_threshold} | "
            f"Cache: {'on' if cache is not None else 'off'}"
        )

    @classmethod
    def from_environment(
        cls, env_file: Optional[str] = None, cache: Optional[BoundedCache] = None
    ) -> "SurveyAnalyzer":
        """Create an analyzer from ANALYZER_* environment variables."""
        config = AnalyzerConfiguration.from_environment(env_file)
        return cls(config=config, cache=cache)

    @property
    def config(self) -> AnalyzerConfiguration:
        return self._config

    @property
    def cache(self) -> Optional[BoundedCache]:
        return self._cache

    # =========================================================================
    # STAGE 2: PER-PATIENT ANALYSIS
    # =========================================================================

    def analyze_patient(
        self,
        patient: PatientRecord,
        survey: IntakeSurvey,
        conversion_probability: Optional[float] = None,
    ) -> PatientAnalysis:
        """
        Run every per-patient analysis.

        Args:
            patient: Patient record
            survey: The patient's intake survey
            conversion_probability: Known probability in [0, 1]; estimated
                from the survey when None

        Returns:
            PatientAnalysis (a private copy when served from the cache)

        Raises:
            MissingPatientError / MissingSurveyError: If either input is None
            InvalidInputError: If the supplied probability is not in [0, 1]
        """
        require_patient(patient, "analyze_patient")
        require_survey(survey, "analyze_patient", patient.patient_id)

        cache_key = (patient, survey, conversion_probability)
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for patient {patient.patient_id}")
                return copy.deepcopy(cached)

        probability = conversion_probability
        if probability is None:
            probability = estimate_conversion_probability(patient, survey)

        # Recommendations validate the probability before anything else is built.
        recommendations = generate_recommendations(
            patient, survey, probability, self._config
        )

        analysis = PatientAnalysis(
            patient_id=patient.patient_id,
            survey_id=survey.survey_id,
            risk=assess_risk(patient, survey, self._config),
            conversion_probability=probability,
            outlook=conversion_outlook(probability, self._config),
            benefit_risk_ratio=calculate_benefit_risk_ratio(patient, survey),
            probable_diagnosis=self._grouper.classify(survey),
            insights=generate_insights(patient, survey, self._config),
            recommendations=recommendations,
            persuasive_points=generate_persuasive_points(patient, survey, self._config),
            persuasive_messages=generate_persuasive_messages(
                patient, survey, self._config
            ),
            comment_analysis=(
                analyze_surgery_comments(survey.comments) if survey.comments else None
            ),
        )

        if self._cache is not None:
            self._cache.set(cache_key, copy.deepcopy(analysis))

        logger.debug(
            f"Analyzed patient {patient.patient_id} | risk {analysis.risk.score} "
            f"({analysis.risk.band.value}) | p={probability}"
        )
        return analysis

    # =========================================================================
    # STAGE 3: COHORT ANALYSIS
    # =========================================================================

    def analyze_cohort(self, surveys: Sequence[IntakeSurvey]) -> CohortAnalysis:
        """
        Run every cohort analysis over a list of surveys.

        Returns:
            CohortAnalysis with group counts, insights, priority survey ids
            (highest risk first) and the most reported symptoms
        """
        surveys = list(surveys)
        for survey in surveys:
            require_survey(survey, "analyze_cohort")

        logger.info(f"Analyzing cohort of {len(surveys)} surveys")

        groups = self._grouper.group(surveys)
        priority = get_priority_patients(surveys, config=self._config)

        return CohortAnalysis(
            total_surveys=len(surveys),
            group_counts={name: len(members) for name, members in groups.items()},
            insights=generate_cohort_insights(surveys, self._config, self._grouper),
            priority_survey_ids=[s.survey_id for s in priority],
            top_symptoms=top_symptoms(surveys, self._config.top_symptom_limit),
        )
