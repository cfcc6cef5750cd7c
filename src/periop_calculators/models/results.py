"""Result records returned by the calculators.

Every result carries the score, its tier, an interpretation sentence, an
echo of the factors used, and an ordered list of recommendations:
general guidance first, then tier-specific, then factor-specific, then the
closing lines every result gets.
"""

from typing import List, Literal

from .base import RecordModel


# --- RCRI ---

class RCRIRiskFactors(RecordModel):
    high_risk_surgery: bool
    ischemic_heart_disease: bool
    congestive_heart_failure: bool
    cerebrovascular_disease: bool
    insulin_dependent_diabetes: bool
    renal_insufficiency: bool


class RCRIResult(RecordModel):
    """RCRI score (0-6) with class I-IV and complication rate."""

    score: int
    risk_class: Literal["I", "II", "III", "IV"]
    estimated_risk: str
    risk_percentage: float
    interpretation: str
    risk_factors: RCRIRiskFactors
    recommendations: List[str]


# --- STOP-BANG ---

class StopBangComponents(RecordModel):
    """One flag per STOP-BANG letter."""

    S: bool  # Snoring
    T: bool  # Tiredness
    O: bool  # Observed apnea
    P: bool  # Pressure
    B: bool  # BMI > 35
    A: bool  # Age > 50
    N: bool  # Neck > 40 cm
    G: bool  # Gender male


class StopBangResult(RecordModel):
    """STOP-BANG score (0-8) with OSA risk category."""

    score: int
    risk: Literal["low", "intermediate", "high"]
    interpretation: str
    components: StopBangComponents
    recommendations: List[str]


# --- Apfel ---

class ApfelRiskFactors(RecordModel):
    female: bool
    non_smoker: bool
    history_of_ponv: bool
    postoperative_opioids: bool


class ApfelScoreResult(RecordModel):
    """Apfel score (0-4) with PONV incidence."""

    score: int
    risk_percentage: int
    risk: Literal["low", "moderate", "high", "very-high"]
    interpretation: str
    risk_factors: ApfelRiskFactors
    recommendations: List[str]


# --- MELD ---

class MELDLabValues(RecordModel):
    """Lab values as supplied, before clamping."""

    bilirubin: float
    creatinine: float
    inr: float
    dialysis: bool


class MELDScoreResult(RecordModel):
    """MELD score (6-40) with 3-month mortality."""

    score: int
    mortality_risk: str
    mortality_percentage: float
    risk: Literal["low", "moderate", "high", "very-high"]
    interpretation: str
    lab_values: MELDLabValues
    recommendations: List[str]
