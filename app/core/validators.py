"""
Client-facing form validation for patient and profile payloads.

Each ``validate_*`` function raises a :class:`FieldError` subclass with a
human readable reason, or returns the cleaned value. :func:`collect_errors`
runs a set of them together so every failing field is reported at once.
"""
import re
from datetime import date
from typing import Callable, Dict, Iterable, Optional, Tuple

from app.core.exceptions import (
    ChoiceError,
    FieldError,
    FieldValidationError,
    FormatError,
    FutureDateError,
    RequiredError,
    TooShortError,
)
from app.core.utils import CNIC_LENGTH

NAME_MIN_LENGTH = 3
PATIENT_GENDERS = ("male", "female")
PROFILE_GENDERS = ("male", "female", "other")

_NAME_RE = re.compile(r"^[A-Za-z\s]+$")
_CNIC_RE = re.compile(r"[0-9]{%d}" % CNIC_LENGTH)


def validate_name(value: Optional[str]) -> str:
    if not value or not value.strip():
        raise RequiredError("Name is required")
    if len(value.strip()) < NAME_MIN_LENGTH:
        raise TooShortError(f"Name must be at least {NAME_MIN_LENGTH} characters")
    if not _NAME_RE.match(value):
        raise FormatError("Only letters and spaces allowed")
    return value.strip()


def validate_cnic(digits: Optional[str]) -> str:
    if not digits:
        raise RequiredError("CNIC is required")
    if not _CNIC_RE.fullmatch(digits):
        raise FormatError(f"CNIC must be exactly {CNIC_LENGTH} digits")
    return digits


def validate_dob(value: Optional[date], today: Optional[date] = None) -> date:
    if value is None:
        raise RequiredError("Date of birth is required")
    if value > (today or date.today()):
        raise FutureDateError("DOB cannot be in the future")
    return value


def validate_gender(value: Optional[str], allowed: Iterable[str] = PATIENT_GENDERS) -> str:
    if not value:
        raise RequiredError("Gender is required")
    if value not in allowed:
        raise ChoiceError(f"Gender must be one of: {', '.join(allowed)}")
    return value


def collect_errors(checks: Dict[str, Tuple[Callable, tuple]]) -> Dict[str, str]:
    """Run every check and return ``{field: reason}`` for the failing ones."""
    errors = {}
    for field, (check, args) in checks.items():
        try:
            check(*args)
        except FieldError as exc:
            errors[field] = str(exc)
    return errors


def ensure_valid(checks: Dict[str, Tuple[Callable, tuple]]) -> None:
    errors = collect_errors(checks)
    if errors:
        raise FieldValidationError(errors=errors)


def validate_patient_fields(name, cnic, dob, gender, today: Optional[date] = None) -> None:
    ensure_valid({
        "name": (validate_name, (name,)),
        "cnic": (validate_cnic, (cnic,)),
        "dob": (validate_dob, (dob, today)),
        "gender": (validate_gender, (gender,)),
    })
