"""Apfel simplified score for postoperative nausea and vomiting (PONV).

Reference: Apfel CC, et al. A simplified risk score for predicting
postoperative nausea and vomiting. Anesthesiology. 1999;91(3):693-700.

Four risk factors, one point each.  Incidence by score is 10, 21, 39, 61
and 79 percent; categories are low (0), moderate (1), high (2) and
very-high (3-4).
"""

from __future__ import annotations

import logging
from typing import Any

from periop_calculators.constants import APFEL_OPIOID_SPARING_SCORE
from periop_calculators.errors import CalculatorError
from periop_calculators.models.base import alias_for
from periop_calculators.models.results import ApfelRiskFactors, ApfelScoreResult
from periop_calculators.tiers import APFEL_INCIDENCE, APFEL_TIERS, lookup_tier
from periop_calculators.validation import check_boolean, read_field, require_record

logger = logging.getLogger(__name__)

APFEL_FACTORS: tuple[str, ...] = (
    "female",
    "non_smoker",
    "history_of_ponv",
    "postoperative_opioids",
)

_FACTOR_INFO: dict[str, str] = {
    "female": "Female gender is associated with 2-3 times higher risk of PONV compared to males",
    "non_smoker": (
        "Non-smoking status increases PONV risk, possibly due to chronic nicotine "
        "exposure providing antiemetic effects in smokers"
    ),
    "history_of_ponv": "Previous PONV or motion sickness is a strong predictor of future PONV episodes",
    "postoperative_opioids": "Postoperative opioid use is a dose-dependent risk factor for PONV",
}


def calculate_apfel_score(data: Any) -> ApfelScoreResult:
    """Calculate the Apfel score for PONV.

    Raises:
        CalculatorError: on the first missing or non-boolean factor, or when
            *data* is not a record.
    """
    record = require_record(data, "Invalid input: ApfelScoreInput object required")

    for name in APFEL_FACTORS:
        issue = check_boolean(
            record, name, f"Invalid input: {alias_for(name)} must be a boolean value"
        )
        if issue is not None:
            logger.warning("Apfel rejected: %s (%s)", issue.field, issue.code.value)
            raise CalculatorError.from_issue(issue)

    factors = ApfelRiskFactors(**{name: read_field(record, name) for name in APFEL_FACTORS})
    score = sum(1 for name in APFEL_FACTORS if getattr(factors, name))
    percentage = APFEL_INCIDENCE[score]
    risk = lookup_tier(APFEL_TIERS, score).label
    logger.debug("Apfel score=%d risk=%s", score, risk)

    return ApfelScoreResult(
        score=score,
        risk_percentage=percentage,
        risk=risk,
        interpretation=_interpretation(score, risk, percentage),
        risk_factors=factors,
        recommendations=_recommendations(score, factors),
    )


def get_apfel_risk_factor_info(factor: str) -> str:
    """Describe an Apfel risk factor (snake_case or camelCase name)."""
    for name, info in _FACTOR_INFO.items():
        if factor in (name, alias_for(name)):
            return info
    return "Unknown risk factor"


def _interpretation(score: int, risk: str, percentage: int) -> str:
    count = "no" if score == 0 else str(score)
    noun = "risk factor" if score == 1 else "risk factors"
    return (
        f"Apfel Score of {score} with {count} {noun} indicates "
        f"{risk.replace('-', ' ', 1)} risk for PONV. "
        f"Estimated incidence: {percentage}% chance of experiencing "
        "postoperative nausea and vomiting."
    )


def _recommendations(score: int, factors: ApfelRiskFactors) -> list[str]:
    recommendations: list[str] = []

    if score == 0:
        recommendations.append("Low risk patient - routine PONV prophylaxis may not be necessary")
        recommendations.append("Consider prophylaxis if other risk factors present (e.g., type of surgery)")
    elif score == 1:
        recommendations.append("Consider single-agent PONV prophylaxis")
        recommendations.append("Options include dexamethasone, ondansetron, or droperidol")
    elif score == 2:
        recommendations.append("Recommend dual-agent PONV prophylaxis")
        recommendations.append("Consider combination therapy (e.g., dexamethasone + ondansetron)")
    else:
        recommendations.append("High-risk patient - recommend multimodal PONV prophylaxis")
        recommendations.append("Consider 3-4 antiemetic agents from different classes")
        recommendations.append("Consider total intravenous anesthesia (TIVA) with propofol")
        if score >= APFEL_OPIOID_SPARING_SCORE and factors.postoperative_opioids:
            recommendations.append(
                "Consider regional anesthesia or non-opioid analgesics to reduce opioid requirements"
            )

    recommendations.append("Monitor for PONV in PACU and postoperative period")
    recommendations.append("Have rescue antiemetics readily available")
    return recommendations
