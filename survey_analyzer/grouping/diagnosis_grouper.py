"""
Diagnosis Grouping - Pluggable Probable-Diagnosis Rules

This module partitions a cohort of surveys into probable-diagnosis groups
using an ordered chain of rules. For each survey the first rule that returns
a category wins; surveys no rule claims go to the fallback category.

Rule Hierarchy:
    DiagnosisRule (Abstract)
    ├── PriorDiagnosisKeywordRule  → Keyword search in the prior diagnosis text
    └── SymptomHeuristicRule       → Symptom combinations

Why a rule chain:
    New heuristics (imaging findings, clinician overrides) are added as
    rules without touching the grouper, and each rule is tested alone.

Guarantees:
    - Every configured category appears in the result, possibly empty
    - Every survey lands in exactly one category
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from survey_analyzer.core.config import AnalyzerConfiguration
from survey_analyzer.core.enums import Symptom
from survey_analyzer.core.exceptions import ConfigurationError
from survey_analyzer.core.models import IntakeSurvey, require_survey


INGUINAL = "Hernia Inguinal"
UMBILICAL = "Hernia Umbilical"
GALLBLADDER = "Vesícula"


# =============================================================================
# STAGE 1: ABSTRACT BASE RULE
# =============================================================================


class DiagnosisRule(ABC):
    """
    Abstract base class for probable-diagnosis rules.

    Template Method Pattern:
        Subclasses implement `_do_classify()`; `classify()` adds logging.
        A rule returns None when it does not apply to the survey, which
        passes the survey on to the next rule in the chain.
    """

    def __init__(self, config: Optional[AnalyzerConfiguration] = None):
        self._config = config or AnalyzerConfiguration()

    @property
    @abstractmethod
    def rule_name(self) -> str:
        """Human-readable name of this rule."""
        ...

    @property
    @abstractmethod
    def target_categories(self) -> Tuple[str, ...]:
        """Every category this rule can return."""
        ...

    def classify(self, survey: IntakeSurvey) -> Optional[str]:
        category = self._do_classify(survey)
        if category is not None:
            logger.debug(
                f"[{self.rule_name}] survey {survey.survey_id or '?'} -> {category}"
            )
        return category

    @abstractmethod
    def _do_classify(self, survey: IntakeSurvey) -> Optional[str]:
        ...


# =============================================================================
# STAGE 2: PRIOR DIAGNOSIS KEYWORD RULE
# =============================================================================


class PriorDiagnosisKeywordRule(DiagnosisRule):
    """
    Classify from the free-text prior diagnosis.

    What it does:
        When the survey carries prior diagnosis text, searches it
        case-insensitively for each category's keywords in table order.
        A prior diagnosis with no recognized keyword maps to the fallback
        category; heuristics are not consulted in that case.

    Example:
        "Hernia inguinal derecha" -> "Hernia Inguinal"
        "Colecistitis crónica"    -> "Otro"
    """

    @property
    def rule_name(self) -> str:
        return "PriorDiagnosisKeyword"

    @property
    def target_categories(self) -> Tuple[str, ...]:
        return tuple(self._config.diagnosis_keywords) + (self._config.fallback_category,)

    def _do_classify(self, survey: IntakeSurvey) -> Optional[str]:
        text = survey.prior_diagnosis_text
        if not text:
            return None

        haystack = text.casefold()
        for category, keywords in self._config.diagnosis_keywords.items():
            if any(keyword.casefold() in haystack for keyword in keywords):
                return category
        return self._config.fallback_category


# =============================================================================
# STAGE 3: SYMPTOM HEURISTIC RULE
# =============================================================================


class SymptomHeuristicRule(DiagnosisRule):
    """
    Classify from symptom combinations when no prior diagnosis exists.

    Heuristics (first match wins):
        visible lump + pain on exertion → Hernia Inguinal
        visible lump                    → Hernia Umbilical
        pain after meals or jaundice    → Vesícula
    """

    @property
    def rule_name(self) -> str:
        return "SymptomHeuristic"

    @property
    def target_categories(self) -> Tuple[str, ...]:
        return (INGUINAL, UMBILICAL, GALLBLADDER)

    def _do_classify(self, survey: IntakeSurvey) -> Optional[str]:
        symptoms = survey.symptoms
        if Symptom.VISIBLE_LUMP in symptoms:
            if Symptom.EXERTION_PAIN in symptoms:
                return INGUINAL
            return UMBILICAL
        if Symptom.POST_MEAL_PAIN in symptoms or Symptom.JAUNDICE in symptoms:
            return GALLBLADDER
        return None


# =============================================================================
# STAGE 4: GROUPER
# =============================================================================


class DiagnosisGrouper:
    """
    Runs the rule chain over surveys.

    What it does:
        Validates that every rule targets a configured category, then
        classifies single surveys or partitions whole cohorts.

    Example:
        >>> grouper = DiagnosisGrouper()
        >>> groups = grouper.group(surveys)
        >>> list(groups)
        ['Hernia Inguinal', 'Hernia Umbilical', 'Hernia Incisional', 'Vesícula', 'Otro']
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfiguration] = None,
        rules: Optional[Sequence[DiagnosisRule]] = None,
    ):
        self._config = config or AnalyzerConfiguration()
        if rules is None:
            rules = (
                PriorDiagnosisKeywordRule(self._config),
                SymptomHeuristicRule(self._config),
            )
        self._rules: Tuple[DiagnosisRule, ...] = tuple(rules)
        self._validate()

    @property
    def config(self) -> AnalyzerConfiguration:
        return self._config

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._config.diagnosis_categories)

    def _validate(self) -> None:
        categories = set(self._config.diagnosis_categories)
        if self._config.fallback_category not in categories:
            raise ConfigurationError(
                "Fallback category is not a configured diagnosis category",
                context={"fallback": self._config.fallback_category},
            )
        for rule in self._rules:
            missing = [c for c in rule.target_categories if c not in categories]
            if missing:
                raise ConfigurationError(
                    "Diagnosis rule targets categories that are not configured",
                    context={"rule": rule.rule_name, "missing": missing},
                )

    def classify(self, survey: IntakeSurvey) -> str:
        require_survey(survey, "classify_probable_diagnosis")
        for rule in self._rules:
            category = rule.classify(survey)
            if category is not None:
                return category
        return self._config.fallback_category

    def group(self, surveys: Iterable[IntakeSurvey]) -> Dict[str, List[IntakeSurvey]]:
        groups: Dict[str, List[IntakeSurvey]] = {
            category: [] for category in self._config.diagnosis_categories
        }
        for survey in surveys:
            groups[self.classify(survey)].append(survey)

        logger.debug(
            "Diagnosis groups: "
            + ", ".join(f"{name}={len(members)}" for name, members in groups.items())
        )
        return groups


# =============================================================================
# STAGE 5: FUNCTIONAL API
# =============================================================================


def group_by_probable_diagnosis(
    surveys: Iterable[IntakeSurvey], config: Optional[AnalyzerConfiguration] = None
) -> Dict[str, List[IntakeSurvey]]:
    """
    Partition surveys into probable-diagnosis groups.

    Returns:
        Dict keyed by every configured category in order, each holding the
        surveys classified into it (input order preserved)

    Raises:
        ConfigurationError: If a rule targets a category that is not configured
    """
    return DiagnosisGrouper(config).group(surveys)


def classify_probable_diagnosis(
    survey: IntakeSurvey, config: Optional[AnalyzerConfiguration] = None
) -> str:
    """Probable diagnosis category of a single survey."""
    return DiagnosisGrouper(config).classify(survey)
