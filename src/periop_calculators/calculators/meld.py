"""MELD (Model for End-Stage Liver Disease) score.

    MELD = 3.78 × ln(bilirubin) + 11.2 × ln(INR) + 9.57 × ln(creatinine) + 6.43

Each lab value is clamped to [1.0, 4.0] before the formula is applied;
dialysis within the past week forces creatinine to 4.0.  The raw score is
rounded to one decimal, bounded to [6, 40], then rounded to an integer.

Risk of 3-month mortality by score:

  - ≤9     low        1.9%
  - 10-19  moderate   6.0%
  - 20-29  high       19.6%
  - ≥30    very-high  52.6%

Validation is fail-fast in the order bilirubin, creatinine, INR, dialysis.
Values above a plausibility ceiling (bilirubin 50, creatinine 15, INR 10)
are rejected as probable unit errors.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from periop_calculators.constants import (
    MELD_BILIRUBIN_ALERT,
    MELD_BILIRUBIN_COEF,
    MELD_CONSTANT,
    MELD_CREATININE_ALERT,
    MELD_CREATININE_COEF,
    MELD_DIALYSIS_CREATININE,
    MELD_HIGH_RISK_SCORE,
    MELD_INR_ALERT,
    MELD_INR_COEF,
    MELD_LAB_CEILING,
    MELD_LAB_FLOOR,
    MELD_MAX_BILIRUBIN,
    MELD_MAX_CREATININE,
    MELD_MAX_INR,
    MELD_MAX_SCORE,
    MELD_MIN_SCORE,
)
from periop_calculators.errors import CalculatorError, ErrorCode
from periop_calculators.models.results import MELDLabValues, MELDScoreResult
from periop_calculators.tiers import MELD_TIERS, RangeTier, lookup_tier
from periop_calculators.validation import (
    is_boolean,
    read_field,
    require_record,
    round_half_up,
    validate_required_numeric_range,
)

logger = logging.getLogger(__name__)

# (field, label, plausibility ceiling, positive-number message, too-high message)
_LAB_RULES: tuple[tuple[str, str, float, str, str], ...] = (
    (
        "bilirubin", "bilirubin", MELD_MAX_BILIRUBIN,
        "must be a positive number in mg/dL",
        f"value appears too high (>{MELD_MAX_BILIRUBIN} mg/dL), please verify units",
    ),
    (
        "creatinine", "creatinine", MELD_MAX_CREATININE,
        "must be a positive number in mg/dL",
        f"value appears too high (>{MELD_MAX_CREATININE} mg/dL), please verify units",
    ),
    (
        "inr", "INR", MELD_MAX_INR,
        "must be a positive number",
        f"value appears too high (>{MELD_MAX_INR}), please verify",
    ),
)

_TIER_RECOMMENDATIONS: dict[str, list[str]] = {
    "low": [
        "Low surgical risk - proceed with standard perioperative care",
        "Monitor liver function perioperatively",
    ],
    "moderate": [
        "Moderate surgical risk - optimize liver function before elective surgery",
        "Consider enhanced postoperative monitoring",
        "Avoid hepatotoxic medications when possible",
    ],
    "high": [
        "High surgical risk - multidisciplinary evaluation recommended",
        "Consider deferring elective surgery until liver function improves",
        "If surgery necessary, plan for intensive postoperative care",
        "Evaluate for liver transplant candidacy",
    ],
    "very-high": [
        "Very high surgical risk - surgery should be avoided unless life-threatening",
        "Urgent liver transplant evaluation indicated",
        "If emergency surgery required, plan for ICU-level care",
        "Multidisciplinary team approach essential",
    ],
}


def calculate_meld_score(data: Any) -> MELDScoreResult:
    """Calculate the MELD score.

    Args:
        data: a ``MELDScoreInput`` or mapping with ``bilirubin``,
              ``creatinine``, ``inr`` and optional ``dialysis``.

    Returns:
        MELDScoreResult with score, mortality risk and recommendations.
        ``lab_values`` echoes the supplied (unclamped) values.

    Raises:
        CalculatorError: on the first invalid field.
    """
    record = require_record(data, "Invalid input: MELDScoreInput object required")
    _validate(record)

    bilirubin = read_field(record, "bilirubin")
    creatinine = read_field(record, "creatinine")
    inr = read_field(record, "inr")
    dialysis = bool(read_field(record, "dialysis"))

    score = meld_formula(bilirubin, inr, creatinine, dialysis)
    tier = lookup_tier(MELD_TIERS, score)
    logger.debug("MELD score=%d risk=%s dialysis=%s", score, tier.label, dialysis)

    labs = MELDLabValues(
        bilirubin=bilirubin, creatinine=creatinine, inr=inr, dialysis=dialysis
    )
    return MELDScoreResult(
        score=score,
        mortality_risk=tier.percentage_text,
        mortality_percentage=tier.percentage,
        risk=tier.label,
        interpretation=_interpretation(score, tier),
        lab_values=labs,
        recommendations=_recommendations(tier, labs),
    )


def meld_formula(bilirubin: float, inr: float, creatinine: float, dialysis: bool = False) -> int:
    """Integer MELD score from already-validated lab values."""
    bilirubin = _clamp(bilirubin, MELD_LAB_FLOOR, MELD_LAB_CEILING)
    inr = _clamp(inr, MELD_LAB_FLOOR, MELD_LAB_CEILING)
    if dialysis:
        creatinine = MELD_DIALYSIS_CREATININE
    else:
        creatinine = _clamp(creatinine, MELD_LAB_FLOOR, MELD_LAB_CEILING)

    raw = (
        MELD_BILIRUBIN_COEF * math.log(bilirubin)
        + MELD_INR_COEF * math.log(inr)
        + MELD_CREATININE_COEF * math.log(creatinine)
        + MELD_CONSTANT
    )
    bounded = _clamp(round_half_up(raw, 1), MELD_MIN_SCORE, MELD_MAX_SCORE)
    return int(round_half_up(bounded))


def is_high_risk_meld(score: int) -> bool:
    """True for high or very-high surgical risk (score ≥ 20)."""
    return score >= MELD_HIGH_RISK_SCORE


def get_meld_risk_category(score: int) -> str:
    """Risk category for a MELD score without running the full calculation."""
    return lookup_tier(MELD_TIERS, score).label


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def _validate(record: dict[str, Any]) -> None:
    for name, label, ceiling, positive_msg, high_msg in _LAB_RULES:
        result = validate_required_numeric_range(
            read_field(record, name),
            0,
            ceiling,
            name,
            min_exclusive=True,
            missing_message=f"Invalid {label}: value is required",
            kind_message=f"Invalid {label}: {positive_msg}",
            below_message=f"Invalid {label}: {positive_msg}",
            above_message=f"Invalid {label}: {high_msg}",
        )
        if not result.is_valid:
            issue = result.errors[0]
            logger.warning("MELD rejected: %s (%s)", issue.field, issue.code.value)
            raise CalculatorError.from_issue(issue)

    dialysis = read_field(record, "dialysis")
    if dialysis is not None and not is_boolean(dialysis):
        logger.warning("MELD rejected: dialysis (%s)", ErrorCode.WRONG_KIND.value)
        raise CalculatorError(
            "Invalid dialysis: must be a boolean value", ErrorCode.WRONG_KIND, "dialysis"
        )


def _format_percentage(value: float) -> str:
    # 6.0 renders as "6"
    return f"{value:g}"


def _interpretation(score: int, tier: RangeTier) -> str:
    return (
        f"MELD score of {score} indicates {tier.label.replace('-', ' ', 1)} risk of "
        f"3-month mortality ({_format_percentage(tier.percentage)}%). "
        "This score is used to assess liver disease severity and perioperative "
        "risk in patients with end-stage liver disease."
    )


def _recommendations(tier: RangeTier, labs: MELDLabValues) -> list[str]:
    recommendations = [
        "Document MELD score in preoperative assessment",
        "Consider hepatology consultation for liver disease management",
    ]
    recommendations.extend(_TIER_RECOMMENDATIONS[tier.label])

    if labs.bilirubin > MELD_BILIRUBIN_ALERT:
        recommendations.append(
            "Elevated bilirubin - investigate for biliary obstruction or worsening liver function"
        )
    if labs.inr > MELD_INR_ALERT:
        recommendations.append(
            "Significantly elevated INR - consider vitamin K, FFP, or PCC for procedural correction"
        )
    if labs.creatinine > MELD_CREATININE_ALERT or labs.dialysis:
        recommendations.append(
            "Renal dysfunction present - avoid nephrotoxic agents and monitor fluid balance"
        )
        if labs.dialysis:
            recommendations.append("Patient on dialysis - coordinate timing with nephrology team")

    recommendations.append("Monitor for hepatic encephalopathy")
    recommendations.append("Assess for ascites and portal hypertension")
    recommendations.append("Evaluate coagulation status before procedures")
    return recommendations
