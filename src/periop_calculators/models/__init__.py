"""Public model re-exports for periop_calculators.

Consumers should import from ``periop_calculators.models`` rather than
reaching into sub-modules directly.
"""

# --- Base ---
from periop_calculators.models.base import InputModel, RecordModel, alias_for

# --- Inputs ---
from periop_calculators.models.inputs import (
    ApfelScoreInput,
    MELDScoreInput,
    PatientDemographics,
    RCRIInput,
    StopBangInput,
)

# --- Results ---
from periop_calculators.models.results import (
    ApfelRiskFactors,
    ApfelScoreResult,
    MELDLabValues,
    MELDScoreResult,
    RCRIResult,
    RCRIRiskFactors,
    StopBangComponents,
    StopBangResult,
)

__all__ = [
    # Base
    "InputModel",
    "RecordModel",
    "alias_for",
    # Inputs
    "ApfelScoreInput",
    "MELDScoreInput",
    "PatientDemographics",
    "RCRIInput",
    "StopBangInput",
    # Results
    "ApfelRiskFactors",
    "ApfelScoreResult",
    "MELDLabValues",
    "MELDScoreResult",
    "RCRIResult",
    "RCRIRiskFactors",
    "StopBangComponents",
    "StopBangResult",
]
