"""Tests for calculator form validation."""

from datetime import date

import pytest
from pydantic import ValidationError

from dose_taper.engine.evaluator import evaluate_taper
from dose_taper.evaluation.validation import (
    MISSING_SWITCH_FIELDS,
    MISSING_TAPER_FIELDS,
    SAME_SWITCH_DRUGS,
    CaseValidationError,
    parse_date,
    parse_number,
    validate_percentage_rate,
    validate_switch_form,
    validate_taper_form,
)
from dose_taper.models.patient import Comorbidity, Route, SuppressionStatus


def taper_form(**overrides):
    form = {"drug": "prednisone", "dose": "20", "duration_weeks": "3", "start_date": "2026-01-05"}
    form.update(overrides)
    return form


def switch_form(**overrides):
    form = {"source": "fluoxetine", "destination": "escitalopram", "dose": "20", "start_date": "2026-01-05"}
    form.update(overrides)
    return form


@pytest.mark.parametrize("value,expected", [("20", 20.0), ("20mg", 20.0), ("7,5", 7.5), (" 12.5 ", 12.5), (3, 3.0)])
def test_parse_number(value, expected):
    assert parse_number(value, "Dose") == expected


@pytest.mark.parametrize("value", ["twenty", True, "mg"])
def test_parse_number_rejects(value):
    with pytest.raises(CaseValidationError, match="Dose must be a number"):
        parse_number(value, "Dose")


def test_parse_date():
    assert parse_date("2026-03-01") == date(2026, 3, 1)
    assert parse_date("") == date.today()
    with pytest.raises(CaseValidationError, match="YYYY-MM-DD"):
        parse_date("01/03/2026")


def test_valid_taper_form():
    case = validate_taper_form(taper_form(
        pulse_therapy="yes",
        suppression="No",
        comorbidities=["Diabetes", "renal failure"],
        route="intravenous",
        patient_name="  Jane Doe ",
        age="67",
    ))
    assert case.dose == 20
    assert case.duration_weeks == 3
    assert case.start_date == date(2026, 1, 5)
    assert case.pulse_therapy
    assert case.suppression == SuppressionStatus.NO
    assert case.comorbidities == frozenset({Comorbidity.DIABETES, Comorbidity.RENAL_FAILURE})
    assert case.route == Route.INTRAVENOUS
    assert case.patient_name == "Jane Doe"
    assert case.age == 67


def test_taper_defaults():
    case = validate_taper_form(taper_form())
    assert case.suppression == SuppressionStatus.UNKNOWN
    assert case.route == Route.ORAL
    assert not case.pulse_therapy
    assert case.comorbidities == frozenset()


@pytest.mark.parametrize("field", ["drug", "dose", "duration_weeks"])
def test_taper_required_fields(field):
    with pytest.raises(CaseValidationError) as excinfo:
        validate_taper_form(taper_form(**{field: " "}))
    assert excinfo.value.message == MISSING_TAPER_FIELDS


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"dose": "0"}, "Dose must be greater than zero."),
        ({"dose": "-5"}, "Dose must be greater than zero."),
        ({"duration_weeks": "-1"}, "Duration cannot be negative."),
        ({"duration_weeks": "2.5"}, "Duration must be a whole number."),
        ({"dose": "inf"}, "Dose must be a number."),
        ({"dose": "nan"}, "Dose must be a number."),
        ({"dose": "1e308"}, "Dose cannot exceed 10000 mg."),
    ],
)
def test_taper_invalid_numbers(overrides, message):
    with pytest.raises(CaseValidationError) as excinfo:
        validate_taper_form(taper_form(**overrides))
    assert excinfo.value.message == message


def test_taper_invalid_choice():
    with pytest.raises(CaseValidationError, match="Invalid comorbidity 'gout'"):
        validate_taper_form(taper_form(comorbidities=["gout"]))


def test_taper_model_error_becomes_one_message():
    with pytest.raises(CaseValidationError, match="^Invalid age"):
        validate_taper_form(taper_form(age="-4"))


def test_unknown_corticosteroid_is_accepted(caplog):
    with caplog.at_level("WARNING", logger="dose_taper.evaluation.validation"):
        case = validate_taper_form(taper_form(drug="cortisonex"))
    assert case.drug == "cortisonex"
    assert "not in the reference table" in caplog.text


def test_validation_error_is_value_error():
    assert issubclass(CaseValidationError, ValueError)


def test_valid_switch_form():
    case = validate_switch_form(switch_form(source="Fluoxetine", duration_weeks="12", switch_goal="fewer side effects"))
    assert case.source == "fluoxetine"
    assert case.duration_weeks == 12
    assert case.switch_goal == "fewer side effects"


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"dose": ""}, MISSING_SWITCH_FIELDS),
        ({"destination": None}, MISSING_SWITCH_FIELDS),
        ({"destination": "FLUOXETINE"}, SAME_SWITCH_DRUGS),
        ({"destination": "placebozine"}, "Unknown antidepressant 'placebozine'."),
        ({"dose": "0"}, "Dose must be greater than zero."),
        ({"dose": "-inf"}, "Dose must be a number."),
        ({"dose": "20000"}, "Dose cannot exceed 10000 mg."),
    ],
)
def test_invalid_switch_form(overrides, message):
    with pytest.raises(CaseValidationError) as excinfo:
        validate_switch_form(switch_form(**overrides))
    assert excinfo.value.message == message


@pytest.mark.parametrize("value", ["0", "100", "-10", "abc"])
def test_percentage_rate_bounds(value):
    with pytest.raises(CaseValidationError):
        validate_percentage_rate(value)


def test_percentage_rate_accepts_percent_values():
    assert validate_percentage_rate("12,5") == 12.5


def test_largest_accepted_dose_can_be_evaluated():
    case = validate_taper_form(taper_form(dose="10000"))
    result = evaluate_taper(case)
    assert result.schedule.steps[0].dose == 10000
    assert result.schedule.ceiling_reached


def test_case_models_reject_infinite_dose(make_taper_case):
    with pytest.raises(ValidationError):
        make_taper_case(dose=float("inf"))
