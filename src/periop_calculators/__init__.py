"""periop_calculators — perioperative risk-scoring calculators.

Public API:
    calculate_rcri            — Revised Cardiac Risk Index (class I-IV)
    calculate_stop_bang       — STOP-BANG obstructive sleep apnea screen
    calculate_stop_bang_score — STOP-BANG score only
    calculate_apfel_score     — Apfel postoperative nausea and vomiting score
    calculate_meld_score      — MELD liver disease severity score

Helpers:
    is_high_risk_surgery      — keyword classifier for the RCRI surgery factor
    rcri_risk_class           — RCRI class for a factor count
    get_apfel_risk_factor_info — description of an Apfel risk factor
    is_high_risk_meld         — MELD ≥ 20
    get_meld_risk_category    — MELD risk category for a score
    compute_bmi               — BMI from kg and cm, one decimal place

Errors:
    CalculatorError   — raised on invalid input (subclass of ValueError)
    ErrorCode         — INVALID_SHAPE / MISSING_REQUIRED / WRONG_KIND / OUT_OF_RANGE
    ValidationIssue   — {code, message, field?}
    ValidationResult  — {isValid, errors}

Input and result records live in ``periop_calculators.models``.

Example::

    from periop_calculators import calculate_stop_bang

    result = calculate_stop_bang({
        "snoring": True, "tiredness": True, "observed": False, "pressure": True,
        "bmi": 36, "age": 55, "neckCircumference": 43, "gender": "male",
    })
    result.score   # 7
    result.risk    # 'high'
"""

from periop_calculators.calculators import (
    calculate_apfel_score,
    calculate_meld_score,
    calculate_rcri,
    calculate_stop_bang,
    calculate_stop_bang_score,
    get_apfel_risk_factor_info,
    get_meld_risk_category,
    is_high_risk_meld,
    rcri_risk_class,
)
from periop_calculators.errors import CalculatorError, ErrorCode, ValidationIssue
from periop_calculators.models import (
    ApfelRiskFactors,
    ApfelScoreInput,
    ApfelScoreResult,
    MELDLabValues,
    MELDScoreInput,
    MELDScoreResult,
    PatientDemographics,
    RCRIInput,
    RCRIResult,
    RCRIRiskFactors,
    StopBangComponents,
    StopBangInput,
    StopBangResult,
)
from periop_calculators.surgery import is_high_risk_surgery
from periop_calculators.validation import ValidationResult, compute_bmi

__version__ = "1.1.0"

__all__ = [
    # Calculators
    "calculate_apfel_score",
    "calculate_meld_score",
    "calculate_rcri",
    "calculate_stop_bang",
    "calculate_stop_bang_score",
    # Helpers
    "compute_bmi",
    "get_apfel_risk_factor_info",
    "get_meld_risk_category",
    "is_high_risk_meld",
    "is_high_risk_surgery",
    "rcri_risk_class",
    # Errors
    "CalculatorError",
    "ErrorCode",
    "ValidationIssue",
    "ValidationResult",
    # Models
    "ApfelRiskFactors",
    "ApfelScoreInput",
    "ApfelScoreResult",
    "MELDLabValues",
    "MELDScoreInput",
    "MELDScoreResult",
    "PatientDemographics",
    "RCRIInput",
    "RCRIResult",
    "RCRIRiskFactors",
    "StopBangComponents",
    "StopBangInput",
    "StopBangResult",
]
