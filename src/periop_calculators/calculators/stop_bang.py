"""STOP-BANG obstructive sleep apnea screen.

Eight yes/no items, one point each:

  - S, T, O, P: snoring, tiredness, observed apnea, high blood pressure
  - B: BMI > 35
  - A: age > 50
  - N: neck circumference > 40 cm
  - G: male gender

B, A, N and G are derived from numeric fields which may come from the
input record or, when absent there, from ``PatientDemographics`` (BMI is
computed from weight and height).  Thresholds are strict: a value equal to
the threshold does not score.

Score 0-2 is low risk, 3-4 intermediate, 5-8 high.

Unlike the other calculators, validation here aggregates: every failing
field is collected and reported in one ``CalculatorError``.
"""

from __future__ import annotations

import logging
from typing import Any

from periop_calculators.constants import (
    GENDERS,
    STOP_BANG_AGE_THRESHOLD,
    STOP_BANG_BMI_THRESHOLD,
    STOP_BANG_ICU_SCORE,
    STOP_BANG_NECK_THRESHOLD_CM,
)
from periop_calculators.errors import CalculatorError, ErrorCode, ValidationIssue
from periop_calculators.models.base import alias_for
from periop_calculators.models.results import StopBangComponents, StopBangResult
from periop_calculators.tiers import STOP_BANG_TIERS, lookup_tier
from periop_calculators.validation import (
    check_boolean,
    compute_bmi,
    derive_or_require,
    read_field,
    require_record,
    validate_age,
    validate_bmi,
    validate_required_numeric_range,
)

logger = logging.getLogger(__name__)

# Questionnaire answers that map straight to S, T, O, P
_DIRECT_ITEMS: tuple[tuple[str, str], ...] = (
    ("S", "snoring"),
    ("T", "tiredness"),
    ("O", "observed"),
    ("P", "pressure"),
)


def calculate_stop_bang(data: Any, demographics: Any = None) -> StopBangResult:
    """Calculate the STOP-BANG score for obstructive sleep apnea risk.

    Args:
        data: a ``StopBangInput`` or equivalent mapping.
        demographics: optional ``PatientDemographics`` (or mapping) used to
            fill age, BMI (from weight/height), gender and neck size when the
            input omits them.

    Returns:
        StopBangResult with score, risk level, components and recommendations.

    Raises:
        CalculatorError: ``INVALID_SHAPE`` immediately for a non-record
            input; otherwise one error listing every invalid field.
    """
    record = require_record(data, "Invalid input: StopBangInput object required")
    demo: dict[str, Any] = {}
    if demographics is not None:
        demo = require_record(
            demographics, "Invalid demographics: PatientDemographics object required"
        )

    issues: list[ValidationIssue] = []

    # --- Resolve derivable fields before validating them ---
    age = derive_or_require(read_field(record, "age"), lambda: read_field(demo, "age"))
    issues.extend(validate_age(age).errors)

    bmi = read_field(record, "bmi")
    weight = read_field(demo, "weight")
    height = read_field(demo, "height")
    if bmi is None and weight is not None and height is not None:
        try:
            bmi = compute_bmi(weight, height)
        except CalculatorError as exc:
            issues.extend(exc.errors)
        else:
            issues.extend(validate_bmi(bmi).errors)
    else:
        issues.extend(validate_bmi(bmi, weight, height).errors)

    gender = derive_or_require(read_field(record, "gender"), lambda: read_field(demo, "sex"))
    gender_issue = _check_gender(gender)
    if gender_issue is not None:
        issues.append(gender_issue)
    elif isinstance(gender, str):
        gender = gender.strip().lower()

    neck = derive_or_require(
        read_field(record, "neck_circumference"),
        lambda: read_field(demo, "neck_circumference"),
    )
    if neck is not None:
        issues.extend(validate_required_numeric_range(
            neck,
            0,
            None,
            "neck_circumference",
            min_exclusive=True,
            kind_message="Neck circumference must be a number in cm",
            below_message="Neck circumference must be a positive number in cm",
            above_message="Neck circumference must be a positive number in cm",
        ).errors)

    for _, name in _DIRECT_ITEMS:
        issue = check_boolean(record, name, f"{alias_for(name)} must be a boolean value")
        if issue is not None:
            issues.append(issue)

    if issues:
        logger.warning(
            "STOP-BANG rejected: %s", ", ".join(i.field or "?" for i in issues)
        )
        raise CalculatorError.from_issues(issues)

    components = StopBangComponents(
        **{letter: read_field(record, name) for letter, name in _DIRECT_ITEMS},
        B=bmi > STOP_BANG_BMI_THRESHOLD,
        A=age > STOP_BANG_AGE_THRESHOLD,
        N=neck is not None and neck > STOP_BANG_NECK_THRESHOLD_CM,
        G=gender == "male",
    )
    score = sum(1 for flag in components.model_dump().values() if flag)
    risk = lookup_tier(STOP_BANG_TIERS, score).label
    logger.debug("STOP-BANG score=%d risk=%s", score, risk)

    return StopBangResult(
        score=score,
        risk=risk,
        interpretation=_interpretation(score, risk),
        components=components,
        recommendations=_recommendations(score, risk, components),
    )


def calculate_stop_bang_score(data: Any, demographics: Any = None) -> int:
    """Just the numeric STOP-BANG score (0-8)."""
    try:
        return calculate_stop_bang(data, demographics).score
    except CalculatorError as exc:
        raise CalculatorError(
            f"Cannot calculate STOP-BANG score: {exc.message}",
            exc.code,
            exc.field,
            exc.errors,
        ) from exc


def _check_gender(gender: Any) -> ValidationIssue | None:
    if gender is None:
        return ValidationIssue(
            code=ErrorCode.MISSING_REQUIRED,
            message="Gender is required for STOP-BANG calculation",
            field="gender",
        )
    if not isinstance(gender, str):
        return ValidationIssue(
            code=ErrorCode.WRONG_KIND,
            message="Gender must be 'male' or 'female'",
            field="gender",
        )
    if gender.strip().lower() not in GENDERS:
        return ValidationIssue(
            code=ErrorCode.OUT_OF_RANGE,
            message="Gender must be 'male' or 'female'",
            field="gender",
        )
    return None


def _interpretation(score: int, risk: str) -> str:
    base = f"STOP-BANG score of {score} indicates {risk} risk of obstructive sleep apnea."
    if risk == "low":
        return f"{base} The patient has a low probability of moderate to severe OSA."
    if risk == "intermediate":
        return (
            f"{base} Further evaluation may be warranted based on clinical judgment "
            "and planned procedure."
        )
    return (
        f"{base} The patient has a high probability of moderate to severe OSA. "
        "Consider polysomnography and perioperative precautions."
    )


def _recommendations(score: int, risk: str, components: StopBangComponents) -> list[str]:
    recommendations = ["Document STOP-BANG score in preoperative assessment"]

    if risk == "low":
        recommendations.append("Proceed with standard anesthetic care")
        recommendations.append("No specific OSA precautions required")
    elif risk == "intermediate":
        recommendations.append("Consider extended monitoring in PACU")
        recommendations.append("Use caution with sedatives and opioids")
        recommendations.append("Consider referral for sleep study if multiple risk factors present")
        if components.B or components.N:
            recommendations.append("Optimize positioning to maintain airway patency")
    else:
        recommendations.append("Strong consideration for polysomnography before elective surgery")
        recommendations.append("Consider using short-acting agents")
        recommendations.append("Plan for possible postoperative continuous monitoring")
        recommendations.append("Have difficult airway equipment readily available")
        recommendations.append("Consider regional anesthesia when appropriate")
        recommendations.append("Minimize opioid use - consider multimodal analgesia")
        if score >= STOP_BANG_ICU_SCORE:
            recommendations.append("Consider postoperative ICU admission for major surgery")

    if components.P:
        recommendations.append("Ensure blood pressure is optimized preoperatively")
    if components.B:
        recommendations.append("Consider weight loss counseling for elective procedures")

    return recommendations
