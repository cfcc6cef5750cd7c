"""STOP-BANG calculator tests.

Covers component derivation (including demographics fallback and BMI
calculation), strict thresholds, recommendations, and the aggregated
validation error that lists every failing field.
"""

import math

import pytest

from periop_calculators import (
    CalculatorError,
    ErrorCode,
    PatientDemographics,
    StopBangInput,
    calculate_stop_bang,
    calculate_stop_bang_score,
)


def _answers(**overrides):
    """Direct questionnaire answers, all negative unless overridden."""
    base = {"snoring": False, "tiredness": False, "observed": False, "pressure": False}
    base.update(overrides)
    return base


# =====================================================================
# Scenario table
# =====================================================================


class TestScenarios:
    def test_all_scenarios(self, scenarios):
        for case in scenarios["stop_bang"]:
            result = calculate_stop_bang(case["input"], case.get("demographics"))
            expected = case["expected"]
            assert result.score == expected["score"], case["id"]
            assert result.risk == expected["risk"], case["id"]
            assert result.components.model_dump() == expected["components"], case["id"]


# =====================================================================
# Thresholds (strict greater-than)
# =====================================================================


class TestThresholds:
    """A value equal to the threshold does not score; just above does."""

    def test_bmi_boundary(self):
        at = calculate_stop_bang({**_answers(), "bmi": 35, "age": 30, "gender": "female"})
        above = calculate_stop_bang({**_answers(), "bmi": 35.1, "age": 30, "gender": "female"})
        assert at.components.B is False
        assert above.components.B is True

    def test_age_boundary(self):
        at = calculate_stop_bang({**_answers(), "bmi": 25, "age": 50, "gender": "female"})
        above = calculate_stop_bang({**_answers(), "bmi": 25, "age": 51, "gender": "female"})
        assert at.components.A is False
        assert above.components.A is True

    def test_neck_boundary(self):
        base = {**_answers(), "bmi": 25, "age": 30, "gender": "female"}
        assert calculate_stop_bang({**base, "neckCircumference": 40}).components.N is False
        assert calculate_stop_bang({**base, "neckCircumference": 41}).components.N is True

    def test_missing_neck_does_not_score(self, stop_bang_low):
        del stop_bang_low["neckCircumference"]
        assert calculate_stop_bang(stop_bang_low).components.N is False

    @pytest.mark.parametrize("score,risk", [(2, "low"), (3, "intermediate"), (4, "intermediate"), (5, "high")])
    def test_tier_boundaries(self, score, risk):
        letters = ["snoring", "tiredness", "observed", "pressure"]
        answers = _answers(**{name: True for name in letters[:min(score, 4)]})
        age = 60 if score > 4 else 30
        result = calculate_stop_bang({**answers, "bmi": 25, "age": age, "gender": "female"})
        assert result.score == score
        assert result.risk == risk


# =====================================================================
# Demographics fallback
# =====================================================================


class TestDemographics:
    """Missing age/BMI/gender/neck are filled from PatientDemographics."""

    def test_bmi_computed_from_weight_and_height(self):
        demo = PatientDemographics(age=40, sex="female", weight=110, height=170)
        # 110 / 1.7^2 = 38.1
        result = calculate_stop_bang(_answers(), demo)
        assert result.components.B is True

    def test_derived_bmi_at_threshold_does_not_score(self):
        """35.05 kg at 100 cm gives BMI 35.0, not 35.1."""
        demo = {"age": 30, "sex": "female", "weight": 35.05, "height": 100}
        result = calculate_stop_bang(_answers(), demo)
        assert result.components.B is False
        assert result.score == 0

    def test_derived_bmi_just_above_threshold_scores(self):
        demo = {"age": 30, "sex": "female", "weight": 35.1, "height": 100}
        assert calculate_stop_bang(_answers(), demo).components.B is True

    @pytest.mark.parametrize("weight,height", [
        (0, 170),
        (-70, 170),
        (70, -170),
        (math.nan, 170),
        (math.inf, 170),
        (70, math.inf),
        (70, 1e-200),
    ])
    def test_unusable_weight_or_height(self, weight, height):
        demo = {"age": 30, "sex": "female", "weight": weight, "height": height}
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(_answers(), demo)
        assert exc.value.code is ErrorCode.OUT_OF_RANGE
        assert exc.value.fields == ["bmi"]

    def test_derived_bmi_outside_domain(self):
        demo = {"age": 30, "sex": "female", "weight": 300, "height": 150}
        with pytest.raises(CalculatorError, match="BMI must be between 10 and 70"):
            calculate_stop_bang(_answers(), demo)

    def test_explicit_bmi_ignores_bad_measurements(self):
        demo = {"age": 30, "sex": "female", "weight": math.inf, "height": 0}
        result = calculate_stop_bang({**_answers(), "bmi": 25}, demo)
        assert result.components.B is False

    def test_input_value_wins_over_demographics(self):
        demo = {"age": 70, "sex": "male", "weight": 120, "height": 160}
        result = calculate_stop_bang({**_answers(), "age": 40, "bmi": 28, "gender": "female"}, demo)
        assert result.components.A is False
        assert result.components.B is False
        assert result.components.G is False

    def test_typed_input_with_typed_demographics(self):
        data = StopBangInput(snoring=True, tiredness=False, observed=False, pressure=False)
        demo = PatientDemographics(age=55, sex="male", weight=80, height=180, neck_circumference=43)
        result = calculate_stop_bang(data, demo)
        assert result.components.model_dump() == {
            "S": True, "T": False, "O": False, "P": False,
            "B": False, "A": True, "N": True, "G": True,
        }
        assert result.score == 4

    def test_gender_is_case_insensitive(self):
        result = calculate_stop_bang({**_answers(), "bmi": 25, "age": 30, "gender": "Male"})
        assert result.components.G is True


# =====================================================================
# Interpretation and recommendations
# =====================================================================


class TestText:
    def test_interpretation(self, stop_bang_low):
        result = calculate_stop_bang(stop_bang_low)
        assert result.interpretation == (
            "STOP-BANG score of 0 indicates low risk of obstructive sleep apnea. "
            "The patient has a low probability of moderate to severe OSA."
        )

    def test_low_risk_recommendations(self, stop_bang_low):
        assert calculate_stop_bang(stop_bang_low).recommendations == [
            "Document STOP-BANG score in preoperative assessment",
            "Proceed with standard anesthetic care",
            "No specific OSA precautions required",
        ]

    def test_intermediate_airway_positioning_needs_b_or_n(self):
        base = {**_answers(snoring=True, tiredness=True), "age": 30, "gender": "male"}
        without = calculate_stop_bang({**base, "bmi": 25}).recommendations
        with_bmi = calculate_stop_bang({**base, "bmi": 36}).recommendations
        line = "Optimize positioning to maintain airway patency"
        assert line not in without
        assert line in with_bmi
        # B also adds the weight-loss line after the tier block
        assert with_bmi[-1] == "Consider weight loss counseling for elective procedures"

    def test_high_risk_recommendations(self):
        data = {
            **_answers(snoring=True, tiredness=True, observed=True, pressure=True),
            "age": 60, "bmi": 40, "gender": "male",
        }
        recs = calculate_stop_bang(data).recommendations
        assert "Consider regional anesthesia when appropriate" in recs
        assert "Have difficult airway equipment readily available" in recs
        assert "Consider postoperative ICU admission for major surgery" in recs
        assert recs[-2:] == [
            "Ensure blood pressure is optimized preoperatively",
            "Consider weight loss counseling for elective procedures",
        ]

    def test_icu_line_only_from_score_six(self):
        data = {**_answers(snoring=True, tiredness=True, observed=True), "age": 60, "bmi": 25, "gender": "male"}
        result = calculate_stop_bang(data)
        assert result.score == 5
        assert "Consider postoperative ICU admission for major surgery" not in result.recommendations


# =====================================================================
# Validation (aggregated)
# =====================================================================


class TestValidation:
    def test_missing_age_without_demographics(self):
        data = {**_answers(), "bmi": 25, "gender": "female"}
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(data)
        assert exc.value.code is ErrorCode.MISSING_REQUIRED
        assert exc.value.field == "age"
        assert str(exc.value) == "Validation errors: Age is required"

    def test_all_missing_fields_reported_together(self):
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(_answers(snoring=True))
        assert exc.value.fields == ["age", "bmi", "gender"]
        assert str(exc.value) == (
            "Validation errors: Age is required, "
            "Either BMI or both weight and height must be provided, "
            "Gender is required for STOP-BANG calculation"
        )
        assert all(e.code is ErrorCode.MISSING_REQUIRED for e in exc.value.errors)

    def test_child_age_rejected(self):
        data = {**_answers(snoring=True), "age": 10, "bmi": 25, "gender": "male"}
        with pytest.raises(CalculatorError, match="validated for adults 18 years and older") as exc:
            calculate_stop_bang(data)
        assert exc.value.code is ErrorCode.OUT_OF_RANGE

    def test_age_bounds_are_inclusive(self):
        for age in (18, 120):
            calculate_stop_bang({**_answers(), "age": age, "bmi": 25, "gender": "female"})
        with pytest.raises(CalculatorError, match="Please enter a valid age"):
            calculate_stop_bang({**_answers(), "age": 121, "bmi": 25, "gender": "female"})

    def test_bmi_out_of_range(self):
        with pytest.raises(CalculatorError, match="BMI must be between 10 and 70") as exc:
            calculate_stop_bang({**_answers(), "age": 30, "bmi": 75, "gender": "female"})
        assert exc.value.field == "bmi"

    def test_mixed_failures_keep_distinct_codes(self):
        data = {
            "snoring": "sometimes", "tiredness": False, "observed": False,
            "age": "old", "bmi": 25, "gender": "other",
        }
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(data)
        codes = {e.field: e.code for e in exc.value.errors}
        assert codes == {
            "age": ErrorCode.WRONG_KIND,
            "gender": ErrorCode.OUT_OF_RANGE,
            "snoring": ErrorCode.WRONG_KIND,
            "pressure": ErrorCode.MISSING_REQUIRED,
        }

    def test_non_numeric_neck(self, stop_bang_low):
        stop_bang_low["neckCircumference"] = "large"
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(stop_bang_low)
        assert exc.value.field == "neck_circumference"
        assert exc.value.code is ErrorCode.WRONG_KIND

    @pytest.mark.parametrize("neck", [math.inf, -math.inf, math.nan, 0, -38])
    def test_neck_must_be_positive_and_finite(self, stop_bang_low, neck):
        stop_bang_low["neckCircumference"] = neck
        with pytest.raises(CalculatorError, match="Neck circumference must be a positive number in cm") as exc:
            calculate_stop_bang(stop_bang_low)
        assert exc.value.field == "neck_circumference"
        assert exc.value.code is ErrorCode.OUT_OF_RANGE

    def test_neck_from_demographics_is_validated(self, stop_bang_low):
        del stop_bang_low["neckCircumference"]
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(stop_bang_low, {"neck_circumference": math.inf})
        assert exc.value.fields == ["neck_circumference"]

    @pytest.mark.parametrize("bad", [None, "invalid", 3.5])
    def test_invalid_shape(self, bad):
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(bad)
        assert exc.value.code is ErrorCode.INVALID_SHAPE

    def test_invalid_demographics_shape(self, stop_bang_low):
        with pytest.raises(CalculatorError) as exc:
            calculate_stop_bang(stop_bang_low, "55 year old male")
        assert exc.value.code is ErrorCode.INVALID_SHAPE


class TestScoreOnly:
    def test_returns_number(self):
        data = {**_answers(snoring=True, tiredness=True, pressure=True), "age": 55, "bmi": 30, "gender": "male"}
        # S, T, P, A, G
        assert calculate_stop_bang_score(data) == 5

    def test_wraps_error_message(self):
        with pytest.raises(CalculatorError, match="^Cannot calculate STOP-BANG score: Validation errors") as exc:
            calculate_stop_bang_score(_answers())
        assert exc.value.field == "age"
        assert len(exc.value.errors) == 3
