"""Calculator entry points.

Each module exposes one ``calculate_*`` function plus small helpers.  No
calculator calls another, and none keeps state between calls.
"""

from periop_calculators.calculators.apfel import calculate_apfel_score, get_apfel_risk_factor_info
from periop_calculators.calculators.meld import (
    calculate_meld_score,
    get_meld_risk_category,
    is_high_risk_meld,
    meld_formula,
)
from periop_calculators.calculators.rcri import calculate_rcri, rcri_risk_class
from periop_calculators.calculators.stop_bang import calculate_stop_bang, calculate_stop_bang_score

__all__ = [
    "calculate_apfel_score",
    "get_apfel_risk_factor_info",
    "calculate_meld_score",
    "get_meld_risk_category",
    "is_high_risk_meld",
    "meld_formula",
    "calculate_rcri",
    "rcri_risk_class",
    "calculate_stop_bang",
    "calculate_stop_bang_score",
]
