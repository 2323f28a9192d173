"""
Eligibility rules.

This module is the single source of truth for who may apply for what.
No other module compares ages or marital statuses.
"""

from ..config import MIN_AGE_MARRIED_APPLICANT, MIN_AGE_SINGLE_APPLICANT
from ..models import FlatKind, MaritalStatus

# =============================================================================
# RULE TABLE
# =============================================================================
#   MARRIED, age >= 21  -> any flat kind
#   SINGLE,  age >= 35  -> TWO_ROOM only
#   anything else       -> not eligible

_RULES = {
    MaritalStatus.MARRIED: (MIN_AGE_MARRIED_APPLICANT, frozenset(FlatKind)),
    MaritalStatus.SINGLE: (MIN_AGE_SINGLE_APPLICANT, frozenset({FlatKind.TWO_ROOM})),
}


def is_eligible(person, flat_kind: FlatKind) -> bool:
    """
    Decide whether a person may apply for a flat kind.

    Pure function: no side effects, safe to call any number of times.

    Args:
        person: anything with .age and .marital_status (a Person record)
        flat_kind: FlatKind enum value (a FlatType's .kind)
    """
    rule = _RULES.get(person.marital_status)
    if rule is None:
        return False
    min_age, allowed = rule
    return person.age >= min_age and flat_kind in allowed


def eligible_kinds(person, project) -> list:
    """Flat kinds offered by the project that the person may apply for, in project order."""
    return [ft.kind for ft in project.flat_types if is_eligible(person, ft.kind)]


def is_eligible_for_project(person, project) -> bool:
    """True when the person qualifies for at least one flat type of the project."""
    return bool(eligible_kinds(person, project))
