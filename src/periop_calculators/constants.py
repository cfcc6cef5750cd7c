"""Perioperative calculator constants shared across the package.

These values are referenced by the calculators, validation helpers, and
tier tables.  They reproduce the published formulas and cut-offs exactly;
unlike deployment settings they are not overridable from the environment.
"""

# --- STOP-BANG ---

# Components B, A and N count only when the value strictly exceeds the threshold.
STOP_BANG_BMI_THRESHOLD = 35
STOP_BANG_AGE_THRESHOLD = 50
STOP_BANG_NECK_THRESHOLD_CM = 40

# Age and BMI domains accepted by the screen (inclusive).
STOP_BANG_MIN_AGE = 18
STOP_BANG_MAX_AGE = 120
STOP_BANG_MIN_BMI = 10
STOP_BANG_MAX_BMI = 70

# Recommend ICU admission for major surgery at or above this score.
STOP_BANG_ICU_SCORE = 6

GENDERS: tuple[str, ...] = ("male", "female")

# --- MELD ---

# Each lab value is clamped to this range before entering the formula.
MELD_LAB_FLOOR = 1.0
MELD_LAB_CEILING = 4.0

# Creatinine used for patients dialysed in the past week.
MELD_DIALYSIS_CREATININE = 4.0

MELD_MIN_SCORE = 6
MELD_MAX_SCORE = 40

# Formula coefficients: 3.78 ln(bili) + 11.2 ln(INR) + 9.57 ln(cr) + 6.43
MELD_BILIRUBIN_COEF = 3.78
MELD_INR_COEF = 11.2
MELD_CREATININE_COEF = 9.57
MELD_CONSTANT = 6.43

# Plausibility ceilings: values above these are treated as unit errors.
MELD_MAX_BILIRUBIN = 50
MELD_MAX_CREATININE = 15
MELD_MAX_INR = 10

# Lab-specific recommendations fire strictly above these values.
MELD_BILIRUBIN_ALERT = 3.0
MELD_INR_ALERT = 2.0
MELD_CREATININE_ALERT = 2.0

# Scores at or above this are "high surgical risk".
MELD_HIGH_RISK_SCORE = 20

# --- Apfel ---

APFEL_OPIOID_SPARING_SCORE = 3

# --- RCRI ---

# Substrings that mark a procedure description as high-risk surgery.
HIGH_RISK_SURGERY_KEYWORDS: tuple[str, ...] = (
    "intraperitoneal",
    "intrathoracic",
    "suprainguinal vascular",
    "aortic",
    "major vascular",
    "peripheral vascular",
    "thoracic",
    "abdominal",
    "esophagectomy",
    "hepatectomy",
    "pancreatectomy",
    "pneumonectomy",
)
