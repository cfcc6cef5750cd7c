"""Error representation shared by every calculator.

All calculators reject invalid input by raising :class:`CalculatorError`
before any score is computed.  The exception carries a machine-readable
:class:`ErrorCode`, the offending field (when the failure is field-specific)
and the full list of :class:`ValidationIssue` records behind it:

  - fail-fast calculators raise with exactly one issue
  - the aggregating calculator (STOP-BANG) raises once with every issue

``CalculatorError`` subclasses ``ValueError`` so callers that only care
about "bad input" can keep catching the built-in type.
"""

from __future__ import annotations

import enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, enum.Enum):
    """Machine-readable failure kinds.

    Callers dispatch on these to tell a malformed record apart from a
    field that is missing, of the wrong type, or outside its domain.
    """

    INVALID_SHAPE = "INVALID_SHAPE"
    MISSING_REQUIRED = "MISSING_REQUIRED"
    WRONG_KIND = "WRONG_KIND"
    OUT_OF_RANGE = "OUT_OF_RANGE"


class ValidationIssue(BaseModel):
    """A single validation failure: ``{code, message, field?}``."""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    field: str | None = None


class CalculatorError(ValueError):
    """Raised when calculator input fails validation."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        field: str | None = None,
        errors: Iterable[ValidationIssue] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.field = field
        if errors is None:
            errors = [ValidationIssue(code=code, message=message, field=field)]
        self.errors: tuple[ValidationIssue, ...] = tuple(errors)

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> CalculatorError:
        """Build a fail-fast error from one issue."""
        return cls(issue.message, issue.code, issue.field, [issue])

    @classmethod
    def from_issues(
        cls, issues: Iterable[ValidationIssue], prefix: str = "Validation errors"
    ) -> CalculatorError:
        """Build an aggregated error listing every issue.

        The message joins all issue messages; ``code`` and ``field`` are
        taken from the first issue.
        """
        issues = list(issues)
        if not issues:
            raise ValueError("from_issues() needs at least one issue")
        message = f"{prefix}: " + ", ".join(i.message for i in issues)
        first = issues[0]
        return cls(message, first.code, first.field, issues)

    @property
    def fields(self) -> list[str]:
        """Names of every field that failed, in the order reported."""
        return [i.field for i in self.errors if i.field is not None]

    def __repr__(self) -> str:
        return f"CalculatorError(code={self.code.value!r}, field={self.field!r}, message={self.message!r})"
