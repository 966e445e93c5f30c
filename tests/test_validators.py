from datetime import date, timedelta

import pytest

from app.core.exceptions import (
    ChoiceError,
    FieldValidationError,
    FormatError,
    FutureDateError,
    RequiredError,
    TooShortError,
)
from app.core.validators import (
    PROFILE_GENDERS,
    validate_dob,
    validate_gender,
    validate_name,
    validate_patient_fields,
)


@pytest.mark.parametrize(
    "value, error",
    [
        ("", RequiredError),
        ("   ", RequiredError),
        (None, RequiredError),
        ("Al", TooShortError),
        (" Al ", TooShortError),
        ("Ali123", FormatError),
        ("Ali-Khan", FormatError),
    ],
)
def test_name_failures(value, error):
    with pytest.raises(error):
        validate_name(value)


def test_name_passes_and_is_trimmed():
    assert validate_name("Ali Khan") == "Ali Khan"
    assert validate_name("  Ali Khan ") == "Ali Khan"


def test_dob_in_future_fails():
    with pytest.raises(FutureDateError):
        validate_dob(date.today() + timedelta(days=1))


def test_dob_today_passes():
    today = date.today()
    assert validate_dob(today) == today


def test_dob_missing_fails():
    with pytest.raises(RequiredError):
        validate_dob(None)


def test_dob_uses_given_reference_day():
    with pytest.raises(FutureDateError):
        validate_dob(date(2020, 1, 2), today=date(2020, 1, 1))


def test_gender():
    assert validate_gender("male") == "male"
    assert validate_gender("female") == "female"
    with pytest.raises(RequiredError):
        validate_gender("")
    with pytest.raises(ChoiceError):
        validate_gender("other")
    assert validate_gender("other", PROFILE_GENDERS) == "other"


def test_patient_fields_report_every_error_at_once():
    with pytest.raises(FieldValidationError) as exc_info:
        validate_patient_fields("Al", "123", date.today() + timedelta(days=3), None)

    errors = exc_info.value.errors
    assert errors == {
        "name": "Name must be at least 3 characters",
        "cnic": "CNIC must be exactly 13 digits",
        "dob": "DOB cannot be in the future",
        "gender": "Gender is required",
    }
    assert exc_info.value.status_code == 422


def test_patient_fields_pass():
    validate_patient_fields("Ali Khan", "1234567890123", date(2000, 1, 1), "male")
