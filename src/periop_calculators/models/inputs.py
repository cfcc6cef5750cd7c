"""Input records for the calculators.

Each calculator also accepts a plain mapping with the same fields (in
snake_case or camelCase); these models are the typed form of that record.
Fields that may be derived from :class:`PatientDemographics` are optional.
"""

from typing import Literal, Optional

from .base import InputModel


class PatientDemographics(InputModel):
    """Secondary record used to fill STOP-BANG age, BMI, gender and neck size.

    Every field is optional so a partial record can still supply what it has.
    """

    age: Optional[float] = None
    sex: Optional[Literal["male", "female"]] = None
    weight: Optional[float] = None  # kg
    height: Optional[float] = None  # cm
    neck_circumference: Optional[float] = None  # cm


class RCRIInput(InputModel):
    """Revised Cardiac Risk Index factors (Lee et al., 1999)."""

    # Intraperitoneal, intrathoracic, or suprainguinal vascular
    high_risk_surgery: bool
    ischemic_heart_disease: bool
    congestive_heart_failure: bool
    cerebrovascular_disease: bool
    insulin_dependent_diabetes: bool
    # Preoperative creatinine > 2.0 mg/dL
    renal_insufficiency: bool


class StopBangInput(InputModel):
    """STOP-BANG questionnaire answers."""

    snoring: bool
    tiredness: bool
    observed: bool  # observed apnea
    pressure: bool  # hypertension
    bmi: Optional[float] = None
    age: Optional[float] = None
    neck_circumference: Optional[float] = None  # cm
    gender: Optional[Literal["male", "female"]] = None


class ApfelScoreInput(InputModel):
    """Apfel simplified PONV risk factors."""

    female: bool
    non_smoker: bool
    history_of_ponv: bool  # PONV or motion sickness
    postoperative_opioids: bool


class MELDScoreInput(InputModel):
    """MELD laboratory values (mg/dL for bilirubin and creatinine)."""

    bilirubin: float
    creatinine: float
    inr: float
    # Dialysis twice, or 24h CVVHD, within the past week
    dialysis: bool = False
