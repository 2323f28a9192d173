from datetime import date

import pytest

from bto import FlatKind, FlatType, MaritalStatus, Person, Project
from bto.engines import eligible_kinds, is_eligible, is_eligible_for_project


def _person(age, status):
    return Person("Test", "S1234567A", age, status, "password")


@pytest.mark.parametrize("age, status, kind, expected", [
    (21, MaritalStatus.MARRIED, FlatKind.TWO_ROOM, True),
    (21, MaritalStatus.MARRIED, FlatKind.THREE_ROOM, True),
    (20, MaritalStatus.MARRIED, FlatKind.TWO_ROOM, False),
    (34, MaritalStatus.SINGLE, FlatKind.TWO_ROOM, False),
    (35, MaritalStatus.SINGLE, FlatKind.TWO_ROOM, True),
    (35, MaritalStatus.SINGLE, FlatKind.THREE_ROOM, False),
    (60, MaritalStatus.SINGLE, FlatKind.THREE_ROOM, False),
])
def test_eligibility_table(age, status, kind, expected):
    assert is_eligible(_person(age, status), kind) is expected


def _project(*kinds):
    return Project(
        name="P", neighborhood="N", start_date=date(2026, 1, 1), end_date=date(2026, 2, 1),
        manager_nric=None, officer_slots=1,
        flat_types=[FlatType("P", kind, 1, 1, 100.0) for kind in kinds],
    )


def test_eligible_kinds_follow_project_order():
    married = _person(30, MaritalStatus.MARRIED)
    project = _project(FlatKind.THREE_ROOM, FlatKind.TWO_ROOM)
    assert eligible_kinds(married, project) == [FlatKind.THREE_ROOM, FlatKind.TWO_ROOM]


def test_single_not_eligible_for_three_room_only_project():
    single = _person(40, MaritalStatus.SINGLE)
    assert not is_eligible_for_project(single, _project(FlatKind.THREE_ROOM))
    assert is_eligible_for_project(single, _project(FlatKind.THREE_ROOM, FlatKind.TWO_ROOM))
