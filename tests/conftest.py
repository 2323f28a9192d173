"""Test configuration and fixtures."""

from datetime import date

import pytest

from bto import (
    ApplicationStatus,
    FlatKind,
    HousingSystem,
    MaritalStatus,
    OfficerApplicationStatus,
    Person,
)

TODAY = date(2026, 3, 15)


@pytest.fixture
def system():
    """A fresh system with a fixed clock and the standard cast of people."""
    system = HousingSystem(clock=lambda: TODAY)
    cast = [
        (Person("John", "S1234567A", 35, MaritalStatus.SINGLE, "password"), {"applicant": True}),
        (Person("Sarah", "T7654321B", 40, MaritalStatus.MARRIED, "password"), {"applicant": True}),
        (Person("Rachel", "S3456789E", 25, MaritalStatus.SINGLE, "password"), {"applicant": True}),
        (Person("Daniel", "T2109876H", 36, MaritalStatus.SINGLE, "password"), {"officer": True}),
        (Person("Emily", "S6543210I", 28, MaritalStatus.MARRIED, "password"), {"officer": True}),
        (Person("Jessica", "S5678901G", 26, MaritalStatus.MARRIED, "password"), {"manager": True}),
        (Person("Michael", "T8765432F", 36, MaritalStatus.SINGLE, "password"), {"manager": True}),
    ]
    for person, roles in cast:
        system.register_person(person, **roles).unwrap()
    return system


def _person(system, name):
    return system.store.person_by_name(name)


@pytest.fixture
def john(system):
    return _person(system, "John")


@pytest.fixture
def sarah(system):
    return _person(system, "Sarah")


@pytest.fixture
def rachel(system):
    return _person(system, "Rachel")


@pytest.fixture
def daniel(system):
    return _person(system, "Daniel")


@pytest.fixture
def emily(system):
    return _person(system, "Emily")


@pytest.fixture
def jessica(system):
    return _person(system, "Jessica")


@pytest.fixture
def michael(system):
    return _person(system, "Michael")


@pytest.fixture
def acacia(system, jessica):
    """Open today: 2 two-room units, 1 three-room unit, 2 officer slots."""
    return system.projects.create_project(
        jessica, "Acacia Breeze", "Yishun", date(2026, 3, 1), date(2026, 4, 30), 2,
        [(FlatKind.TWO_ROOM, 2, 350000.0), (FlatKind.THREE_ROOM, 1, 450000.0)],
    ).unwrap()


@pytest.fixture
def bayshore(system, michael):
    """Opens after today."""
    return system.projects.create_project(
        michael, "Bayshore Vista", "Bedok", date(2026, 5, 1), date(2026, 6, 30), 1,
        [(FlatKind.TWO_ROOM, 5, 320000.0)],
    ).unwrap()


@pytest.fixture
def successful_application(system, sarah, acacia):
    """Sarah's 3-Room application in Acacia Breeze, already SUCCESSFUL."""
    application = system.applications.submit(sarah, acacia, FlatKind.THREE_ROOM).unwrap()
    system.applications.decide(application, ApplicationStatus.SUCCESSFUL).unwrap()
    return application


@pytest.fixture
def assigned_daniel(system, daniel, acacia):
    """Daniel registered for and approved on Acacia Breeze."""
    registration = system.officers.submit(daniel, acacia).unwrap()
    system.officers.decide(registration, OfficerApplicationStatus.APPROVED).unwrap()
    return daniel
