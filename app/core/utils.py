import unicodedata
from datetime import datetime, timezone
from typing import NamedTuple, Optional

CNIC_LENGTH = 13


class NormalizedCNIC(NamedTuple):
    digits: str
    display: str


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def cnic_digits(raw: Optional[str]) -> str:
    """Every decimal digit in ``raw`` as ASCII 0-9, untruncated.

    Urdu and Arabic-Indic digits map onto the same canonical form as their
    ASCII equivalents; everything else is dropped.
    """
    digits = []
    for ch in raw or "":
        value = unicodedata.decimal(ch, None)
        if value is not None:
            digits.append(str(value))
    return "".join(digits)


def format_cnic(digits: str) -> str:
    # 12345 / 12345-1234567 / 12345-1234567-1
    if len(digits) > 12:
        return f"{digits[:5]}-{digits[5:12]}-{digits[12:]}"
    if len(digits) > 5:
        return f"{digits[:5]}-{digits[5:]}"
    return digits


def normalize_cnic(raw: Optional[str]) -> NormalizedCNIC:
    """Input mask: digits only, capped at 13, plus the dashed display form."""
    digits = cnic_digits(raw)[:CNIC_LENGTH]
    return NormalizedCNIC(digits=digits, display=format_cnic(digits))


def clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
