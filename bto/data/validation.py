"""
Field parsing and formatting for CSV rows and console input.

Parsers raise ValidationError; the loader turns that into a
CorruptRecordError carrying the file and line.
"""

import re
from datetime import date, datetime
from typing import Optional

from ..config import (
    DATE_FORMAT,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    NRIC_PATTERN,
)
from ..errors import ValidationError
from ..models import FlatKind, MaritalStatus

_NRIC_RE = re.compile(NRIC_PATTERN)


# =============================================================================
# NRIC
# =============================================================================

def is_valid_nric(value: str) -> bool:
    return bool(value) and bool(_NRIC_RE.match(value.strip().upper()))


def parse_nric(value: str) -> str:
    nric = (value or "").strip().upper()
    if not _NRIC_RE.match(nric):
        raise ValidationError(f"'{value}' is not a valid NRIC")
    return nric


# =============================================================================
# DATES
# =============================================================================

def parse_date(value: str) -> date:
    try:
        return datetime.strptime((value or "").strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"'{value}' is not a date (expected YYYY-MM-DD)")


def parse_optional_date(value: str) -> Optional[date]:
    if not value or not value.strip() or value.strip().lower() == "null":
        return None
    return parse_date(value)


def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


# =============================================================================
# ENUMS
# =============================================================================

def parse_marital_status(value: str) -> MaritalStatus:
    """Accepts "Single"/"Married" in any case."""
    text = (value or "").strip().upper()
    try:
        return MaritalStatus[text]
    except KeyError:
        raise ValidationError(f"'{value}' is not a marital status")


def parse_flat_kind(value: str) -> FlatKind:
    """Accepts "2-Room"/"3-Room" labels or the enum names TWO_ROOM/THREE_ROOM."""
    text = (value or "").strip()
    for kind in FlatKind:
        if text.lower() in (kind.value.lower(), kind.name.lower()):
            return kind
    raise ValidationError(f"'{value}' is not a flat type")


def format_flat_kind(kind: FlatKind) -> str:
    return kind.label


def parse_enum(enum_cls, value: str):
    """Parse a stored enum NAME such as "PENDING"."""
    text = (value or "").strip().upper()
    try:
        return enum_cls[text]
    except KeyError:
        raise ValidationError(f"'{value}' is not a valid {enum_cls.__name__}")


def parse_int(value: str, field_name: str) -> int:
    try:
        return int((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} '{value}' is not a whole number")


def parse_price(value: str, field_name: str) -> float:
    try:
        return float((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} '{value}' is not a number")


# =============================================================================
# PASSWORDS
# =============================================================================

def is_valid_password(value: str) -> bool:
    return bool(value) and MIN_PASSWORD_LENGTH <= len(value) <= MAX_PASSWORD_LENGTH
