"""
Analysis Layer - Insights, Recommendations, Persuasion, Sentiment and Cohorts

Submodules:
    insights.py        → Per-patient insights ordered by impact
    recommendations.py → Categorized next actions
    persuasion.py      → Talking points and follow-up messages
    sentiment.py       → Lexicon sentiment of free-text comments
    cohort.py          → Population-level insights, priority list, filters, report
"""

from survey_analyzer.analysis.cohort import (
    SurveyFilters,
    apply_filters,
    generate_cohort_insights,
    generate_summary_report,
    get_priority_patients,
    top_symptoms,
)
from survey_analyzer.analysis.insights import generate_insights
from survey_analyzer.analysis.persuasion import (
    generate_persuasive_messages,
    generate_persuasive_points,
)
from survey_analyzer.analysis.recommendations import generate_recommendations
from survey_analyzer.analysis.sentiment import analyze_sentiment, analyze_surgery_comments

__all__ = [
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
]
