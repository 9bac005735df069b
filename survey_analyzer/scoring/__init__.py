"""
Scoring Layer - Risk Index and Conversion Likelihood

Submodules:
    risk_index.py  → Additive risk index, band and contributing factors
    conversion.py  → Conversion probability, outlook and benefit/risk ratio
"""

from survey_analyzer.scoring.conversion import (
    calculate_benefit_risk_ratio,
    conversion_outlook,
    estimate_conversion_probability,
)
from survey_analyzer.scoring.risk_index import (
    assess_risk,
    classify_risk_band,
    compute_risk_index,
    compute_survey_risk_index,
)

__all__ = [
    "compute_risk_index",
    "compute_survey_risk_index",
    "assess_risk",
    "classify_risk_band",
    "estimate_conversion_probability",
    "conversion_outlook",
    "calculate_benefit_risk_ratio",
]
