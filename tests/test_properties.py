"""Cross-calculator properties.

  - score stays in the documented range and maps to exactly one tier
  - adding a true factor never lowers the score or the tier
  - repeated calls give identical results
"""

import itertools

import pytest

from periop_calculators import (
    calculate_apfel_score,
    calculate_meld_score,
    calculate_rcri,
    calculate_stop_bang,
)
from periop_calculators.calculators.apfel import APFEL_FACTORS
from periop_calculators.calculators.rcri import RCRI_FACTORS

_RCRI_ORDER = ["I", "II", "III", "IV"]
_APFEL_ORDER = ["low", "moderate", "high", "very-high"]
_STOP_BANG_ORDER = ["low", "intermediate", "high"]
_STOP_BANG_DIRECT = ("snoring", "tiredness", "observed", "pressure")


def _combinations(names):
    """Every true/false assignment over *names*."""
    for values in itertools.product([False, True], repeat=len(names)):
        yield dict(zip(names, values))


def _stop_bang(flags, bmi=25, age=30, neck=38, gender="female"):
    return calculate_stop_bang(
        {**flags, "bmi": bmi, "age": age, "neck_circumference": neck, "gender": gender}
    )


class TestRangeAndTier:
    def test_rcri(self):
        for combo in _combinations(RCRI_FACTORS):
            result = calculate_rcri(combo)
            assert result.score == sum(combo.values())
            assert 0 <= result.score <= 6
            assert result.risk_class == _RCRI_ORDER[min(result.score, 3)]

    def test_apfel(self):
        for combo in _combinations(APFEL_FACTORS):
            result = calculate_apfel_score(combo)
            assert 0 <= result.score <= 4
            assert result.risk == _APFEL_ORDER[min(result.score, 3)]

    def test_stop_bang(self):
        for combo in _combinations(_STOP_BANG_DIRECT):
            for bmi, age, neck, gender in itertools.product((30, 40), (30, 60), (38, 44), ("female", "male")):
                result = _stop_bang(combo, bmi, age, neck, gender)
                assert 0 <= result.score <= 8
                expected = "low" if result.score <= 2 else "intermediate" if result.score <= 4 else "high"
                assert result.risk == expected


class TestMonotonicity:
    """Turning one more factor on never decreases score or tier."""

    def test_rcri(self):
        for combo in _combinations(RCRI_FACTORS):
            base = calculate_rcri(combo)
            for name in (n for n, v in combo.items() if not v):
                bumped = calculate_rcri({**combo, name: True})
                assert bumped.score == base.score + 1
                assert _RCRI_ORDER.index(bumped.risk_class) >= _RCRI_ORDER.index(base.risk_class)

    def test_apfel(self):
        for combo in _combinations(APFEL_FACTORS):
            base = calculate_apfel_score(combo)
            for name in (n for n, v in combo.items() if not v):
                bumped = calculate_apfel_score({**combo, name: True})
                assert bumped.score == base.score + 1
                assert bumped.risk_percentage > base.risk_percentage
                assert _APFEL_ORDER.index(bumped.risk) >= _APFEL_ORDER.index(base.risk)

    def test_stop_bang(self):
        for combo in _combinations(_STOP_BANG_DIRECT):
            base = _stop_bang(combo)
            variants = [
                _stop_bang(combo, bmi=36),
                _stop_bang(combo, age=51),
                _stop_bang(combo, neck=41),
                _stop_bang(combo, gender="male"),
            ]
            variants += [_stop_bang({**combo, n: True}) for n, v in combo.items() if not v]
            for bumped in variants:
                assert bumped.score == base.score + 1
                assert _STOP_BANG_ORDER.index(bumped.risk) >= _STOP_BANG_ORDER.index(base.risk)


class TestIdempotence:
    @pytest.mark.parametrize("call,data", [
        (calculate_rcri, {name: True for name in RCRI_FACTORS}),
        (calculate_apfel_score, {name: True for name in APFEL_FACTORS}),
        (calculate_meld_score, {"bilirubin": 2.0, "creatinine": 1.5, "inr": 1.8}),
        (calculate_stop_bang, {"snoring": True, "tiredness": False, "observed": True,
                               "pressure": False, "age": 52, "bmi": 31, "gender": "male"}),
    ])
    def test_same_input_same_result(self, call, data):
        first = call(data)
        second = call(data)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_input_mapping_not_mutated(self):
        data = {"bilirubin": 0.5, "creatinine": 0.8, "inr": 0.9}
        calculate_meld_score(data)
        assert data == {"bilirubin": 0.5, "creatinine": 0.8, "inr": 0.9}
