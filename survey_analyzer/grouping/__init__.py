"""
Grouping Layer - Probable Diagnosis Partitioning

Submodules:
    diagnosis_grouper.py → Rule chain and grouper
"""

from survey_analyzer.grouping.diagnosis_grouper import (
    DiagnosisGrouper,
    DiagnosisRule,
    PriorDiagnosisKeywordRule,
    SymptomHeuristicRule,
    classify_probable_diagnosis,
    group_by_probable_diagnosis,
)

__all__ = [
    "DiagnosisRule",
    "PriorDiagnosisKeywordRule",
    "SymptomHeuristicRule",
    "DiagnosisGrouper",
    "group_by_probable_diagnosis",
    "classify_probable_diagnosis",
]
