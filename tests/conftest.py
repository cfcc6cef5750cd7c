import pytest

from helpers.loader import load_all_scenarios


@pytest.fixture(scope="session")
def scenarios():
    return load_all_scenarios()


@pytest.fixture
def rcri_none():
    """RCRI input with every factor false (camelCase, as external callers send it)."""
    return {
        "highRiskSurgery": False,
        "ischemicHeartDisease": False,
        "congestiveHeartFailure": False,
        "cerebrovascularDisease": False,
        "insulinDependentDiabetes": False,
        "renalInsufficiency": False,
    }


@pytest.fixture
def apfel_none():
    return {
        "female": False,
        "nonSmoker": False,
        "historyOfPONV": False,
        "postoperativeOpioids": False,
    }


@pytest.fixture
def stop_bang_low():
    """Complete STOP-BANG input scoring 0."""
    return {
        "snoring": False,
        "tiredness": False,
        "observed": False,
        "pressure": False,
        "bmi": 25,
        "age": 45,
        "neckCircumference": 38,
        "gender": "female",
    }
