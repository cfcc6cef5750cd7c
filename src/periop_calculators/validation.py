"""Validation and derivation helpers used by the calculators.

The ``validate_*`` helpers never raise: they return a
:class:`ValidationResult` that the caller either aggregates (STOP-BANG) or
turns into an immediate :class:`~periop_calculators.errors.CalculatorError`
(fail-fast calculators).

Field lookup accepts both the Python (snake_case) field name and its
camelCase wire alias, so plain dicts produced by other clients can be
passed straight in.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from periop_calculators.constants import (
    STOP_BANG_MAX_AGE,
    STOP_BANG_MAX_BMI,
    STOP_BANG_MIN_AGE,
    STOP_BANG_MIN_BMI,
)
from periop_calculators.errors import CalculatorError, ErrorCode, ValidationIssue
from periop_calculators.models.base import alias_for

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Wide enough to quantize any finite float without InvalidOperation
_EXACT = Context(prec=400)


class ValidationResult(BaseModel):
    """Outcome of one or more field checks: ``{isValid, errors}``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    is_valid: bool = True
    errors: list[ValidationIssue] = []

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(is_valid=True, errors=[])

    @classmethod
    def fail(cls, *issues: ValidationIssue) -> ValidationResult:
        return cls(is_valid=False, errors=list(issues))

    def merge(self, *others: ValidationResult) -> ValidationResult:
        """Combine results, preserving issue order."""
        errors = list(self.errors)
        for other in others:
            errors.extend(other.errors)
        return ValidationResult(is_valid=not errors, errors=errors)


# ---------------------------------------------------------------------------
# Record access
# ---------------------------------------------------------------------------

def require_record(data: Any, message: str) -> dict[str, Any]:
    """Return *data* as a plain dict, or raise ``INVALID_SHAPE``.

    Accepts any ``Mapping`` or pydantic model; ``None`` and every other
    type are rejected with *message*.
    """
    if isinstance(data, BaseModel):
        return data.model_dump()
    if isinstance(data, Mapping):
        return dict(data)
    logger.warning("Rejected input of type %s: %s", type(data).__name__, message)
    raise CalculatorError(message, ErrorCode.INVALID_SHAPE)


def read_field(record: Mapping[str, Any], name: str) -> Any:
    """Read *name* from *record*, falling back to its camelCase alias.

    ``None`` is treated the same as an absent key.
    """
    value = record.get(name)
    if value is None:
        value = record.get(alias_for(name))
    return value


def is_number(value: Any) -> bool:
    """True for ints and floats; ``bool`` is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def check_boolean(record: Mapping[str, Any], name: str, message: str) -> ValidationIssue | None:
    """Check a required boolean field; returns the issue or ``None``.

    Missing and wrong-kind values share *message* but carry distinct codes.
    """
    value = read_field(record, name)
    if value is None:
        return ValidationIssue(code=ErrorCode.MISSING_REQUIRED, message=message, field=name)
    if not is_boolean(value):
        return ValidationIssue(code=ErrorCode.WRONG_KIND, message=message, field=name)
    return None


# ---------------------------------------------------------------------------
# Numeric validation
# ---------------------------------------------------------------------------

def validate_required_numeric_range(
    value: Any,
    minimum: float,
    maximum: float | None,
    field: str,
    *,
    min_exclusive: bool = False,
    missing_message: str | None = None,
    kind_message: str | None = None,
    below_message: str | None = None,
    above_message: str | None = None,
) -> ValidationResult:
    """Check that *value* is present, numeric, and within range.

    The range is ``[minimum, maximum]``, or ``(minimum, maximum]`` when
    *min_exclusive* is set.  ``maximum=None`` leaves the top open.
    Non-finite floats are always out of range.
    """
    if value is None:
        return ValidationResult.fail(ValidationIssue(
            code=ErrorCode.MISSING_REQUIRED,
            message=missing_message or f"{field} is required",
            field=field,
        ))
    if not is_number(value):
        return ValidationResult.fail(ValidationIssue(
            code=ErrorCode.WRONG_KIND,
            message=kind_message or f"{field} must be a number",
            field=field,
        ))

    if maximum is None:
        range_message = f"{field} must be a finite number above {minimum}"
    else:
        range_message = f"{field} must be between {minimum} and {maximum}"
    too_low = value <= minimum if min_exclusive else value < minimum
    if too_low or math.isnan(value):
        return ValidationResult.fail(ValidationIssue(
            code=ErrorCode.OUT_OF_RANGE,
            message=below_message or range_message,
            field=field,
        ))
    if math.isinf(value) or (maximum is not None and value > maximum):
        return ValidationResult.fail(ValidationIssue(
            code=ErrorCode.OUT_OF_RANGE,
            message=above_message or range_message,
            field=field,
        ))
    return ValidationResult.ok()


def validate_age(age: Any) -> ValidationResult:
    """Adult age check used by STOP-BANG (18–120 years)."""
    return validate_required_numeric_range(
        age,
        STOP_BANG_MIN_AGE,
        STOP_BANG_MAX_AGE,
        "age",
        missing_message="Age is required",
        kind_message="Age must be a number",
        below_message="STOP-BANG is validated for adults 18 years and older",
        above_message="Please enter a valid age",
    )


def validate_bmi(bmi: Any, weight: Any = None, height: Any = None) -> ValidationResult:
    """BMI check: either a BMI in [10, 70] or both weight and height."""
    if bmi is None:
        if weight is None or height is None:
            return ValidationResult.fail(ValidationIssue(
                code=ErrorCode.MISSING_REQUIRED,
                message="Either BMI or both weight and height must be provided",
                field="bmi",
            ))
        return ValidationResult.ok()
    message = f"BMI must be between {STOP_BANG_MIN_BMI} and {STOP_BANG_MAX_BMI}"
    return validate_required_numeric_range(
        bmi,
        STOP_BANG_MIN_BMI,
        STOP_BANG_MAX_BMI,
        "bmi",
        kind_message="BMI must be a number",
        below_message=message,
        above_message=message,
    )


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

def derive_or_require(primary: T | None, derive: Callable[[], T | None]) -> T | None:
    """Return *primary* if supplied, otherwise whatever *derive* produces.

    *derive* returns ``None`` when the secondary inputs cannot fill the
    field; the caller's validation then reports it as missing.
    """
    if primary is not None:
        return primary
    return derive()


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero (``round()`` rounds them to even).

    Scales before rounding, so a value stored just below a half can still
    round up.  Used for the MELD score.
    """
    factor = 10 ** digits
    return math.copysign(math.floor(abs(value) * factor + 0.5) / factor, value)


def round_exact(value: float, digits: int = 1) -> float:
    """Round the exact binary value of *value*, halves away from zero.

    35.05 is stored as 35.04999... and rounds to 35.0; an exact tie such
    as 22.25 rounds to 22.3.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_EXACT))


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Body-mass index from kg and cm, rounded to one decimal place.

    Raises:
        CalculatorError: on ``bmi`` when weight or height is not a positive
            finite number, or when they do not give a finite BMI.
    """
    if not (is_number(weight_kg) and is_number(height_cm)):
        raise CalculatorError(
            "Weight and height must be numbers", ErrorCode.WRONG_KIND, "bmi"
        )
    if not all(math.isfinite(v) and v > 0 for v in (weight_kg, height_cm)):
        raise CalculatorError(
            "Weight and height must be positive numbers", ErrorCode.OUT_OF_RANGE, "bmi"
        )

    height_m = height_cm / 100
    area = height_m * height_m
    bmi = weight_kg / area if area > 0 else math.inf
    if not math.isfinite(bmi):
        raise CalculatorError(
            "Weight and height do not give a valid BMI", ErrorCode.OUT_OF_RANGE, "bmi"
        )
    return round_exact(bmi, 1)
