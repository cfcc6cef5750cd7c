"""Revised Cardiac Risk Index (RCRI).

Reference: Lee TH, et al. Derivation and prospective validation of a simple
index for prediction of cardiac risk of major noncardiac surgery.
Circulation. 1999;100(10):1043-9.

One point per factor (0-6), mapped to classes I-IV:

  - 0  → I    0.4%
  - 1  → II   0.9%
  - 2  → III  6.6%
  - 3+ → IV   ≥11%

Validation is fail-fast: the first invalid factor raises.
"""

from __future__ import annotations

import logging
from typing import Any

from periop_calculators.errors import CalculatorError, ErrorCode
from periop_calculators.models.base import alias_for
from periop_calculators.models.results import RCRIResult, RCRIRiskFactors
from periop_calculators.tiers import RCRI_TIERS, RangeTier, lookup_tier
from periop_calculators.validation import check_boolean, read_field, require_record

logger = logging.getLogger(__name__)

RCRI_FACTORS: tuple[str, ...] = (
    "high_risk_surgery",
    "ischemic_heart_disease",
    "congestive_heart_failure",
    "cerebrovascular_disease",
    "insulin_dependent_diabetes",
    "renal_insufficiency",
)

_RISK_DESCRIPTIONS: dict[str, str] = {
    "I": "very low",
    "II": "low",
    "III": "intermediate",
    "IV": "high",
}

# Tier-specific guidance, keyed by risk class
_CLASS_RECOMMENDATIONS: dict[str, list[str]] = {
    "I": [
        "Proceed with surgery with standard perioperative care",
        "No additional cardiac testing indicated based on RCRI alone",
    ],
    "II": [
        "Consider perioperative beta-blockade if not already prescribed",
        "Ensure optimal medical management of cardiac risk factors",
    ],
    "III": [
        "Consider cardiology consultation for perioperative risk assessment",
        "Optimize medical management before elective surgery",
        "Consider non-invasive cardiac testing if it will change management",
    ],
    "IV": [
        "Strongly consider cardiology consultation before surgery",
        "Consider additional cardiac testing (stress test, echo) if results would change management",
        "Optimize all modifiable risk factors before elective surgery",
        "Consider perioperative beta-blockade and statin therapy",
    ],
}

# Factor-specific guidance, in the order it is appended
_FACTOR_RECOMMENDATIONS: tuple[tuple[str, list[str]], ...] = (
    ("congestive_heart_failure", [
        "Optimize heart failure management preoperatively",
        "Consider echocardiography to assess current cardiac function",
    ]),
    ("ischemic_heart_disease", [
        "Ensure patient is on appropriate antiplatelet therapy considering surgical bleeding risk",
        "Continue statin therapy perioperatively",
    ]),
    ("insulin_dependent_diabetes", [
        "Optimize glycemic control perioperatively",
        "Monitor for diabetic complications",
    ]),
    ("renal_insufficiency", [
        "Avoid nephrotoxic medications",
        "Consider nephrology consultation for perioperative management",
        "Monitor volume status carefully",
    ]),
    ("cerebrovascular_disease", [
        "Consider carotid evaluation if symptomatic",
        "Maintain adequate blood pressure perioperatively",
    ]),
)


def calculate_rcri(data: Any) -> RCRIResult:
    """Calculate the Revised Cardiac Risk Index.

    Args:
        data: an ``RCRIInput`` or a mapping with the six boolean factors
              (snake_case or camelCase keys).

    Returns:
        RCRIResult with score, class, estimated risk and recommendations.

    Raises:
        CalculatorError: on the first missing or non-boolean factor, or
            when *data* is not a record.
    """
    record = require_record(data, "Invalid input: RCRIInput object required")

    for name in RCRI_FACTORS:
        issue = check_boolean(
            record, name, f"Invalid input: {alias_for(name)} must be a boolean value"
        )
        if issue is not None:
            logger.warning("RCRI rejected: %s (%s)", issue.field, issue.code.value)
            raise CalculatorError.from_issue(issue)

    factors = RCRIRiskFactors(**{name: read_field(record, name) for name in RCRI_FACTORS})
    score = sum(1 for name in RCRI_FACTORS if getattr(factors, name))
    tier = lookup_tier(RCRI_TIERS, score)
    logger.debug("RCRI score=%d class=%s", score, tier.label)

    return RCRIResult(
        score=score,
        risk_class=tier.label,
        estimated_risk=tier.percentage_text,
        risk_percentage=tier.percentage,
        interpretation=_interpretation(score, tier),
        risk_factors=factors,
        recommendations=_recommendations(tier, factors),
    )


def rcri_risk_class(score: int) -> str:
    """RCRI class ('I'-'IV') for a factor count."""
    if score < 0:
        raise CalculatorError(
            "RCRI score cannot be negative", ErrorCode.OUT_OF_RANGE, "score"
        )
    return lookup_tier(RCRI_TIERS, score).label


def _interpretation(score: int, tier: RangeTier) -> str:
    if score == 0:
        factors = "no risk factors identified"
    elif score == 1:
        factors = "1 risk factor"
    else:
        factors = f"{score} risk factors"
    return (
        f"RCRI Class {tier.label} with {factors}. "
        f"Estimated risk of major cardiac complications is {tier.percentage_text}. "
        f"This represents {_RISK_DESCRIPTIONS[tier.label]} cardiac risk."
    )


def _recommendations(tier: RangeTier, factors: RCRIRiskFactors) -> list[str]:
    recommendations = list(_CLASS_RECOMMENDATIONS[tier.label])

    for name, lines in _FACTOR_RECOMMENDATIONS:
        if getattr(factors, name):
            recommendations.extend(lines)

    recommendations.append("Monitor for signs of cardiac complications postoperatively")
    return recommendations
