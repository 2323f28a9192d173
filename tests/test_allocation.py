from bto import (
    CapacityExceededError,
    ConflictError,
    FlatKind,
    NotFoundError,
    StateConflictError,
)


def test_reserve_and_release_keep_counter_in_bounds(system, acacia):
    flat_type = acacia.flat_type(FlatKind.TWO_ROOM)
    assert system.allocation.reserve_unit(flat_type)
    assert system.allocation.reserve_unit(flat_type)
    assert flat_type.available_units == 0

    result = system.allocation.reserve_unit(flat_type)
    assert isinstance(result.error, CapacityExceededError)
    assert flat_type.available_units == 0

    assert system.allocation.release_unit(flat_type)
    assert system.allocation.release_unit(flat_type)
    assert flat_type.available_units == flat_type.total_units

    result = system.allocation.release_unit(flat_type)
    assert isinstance(result.error, StateConflictError)
    assert flat_type.available_units == flat_type.total_units


def test_reserve_then_release_round_trip(system, acacia):
    flat_type = acacia.flat_type(FlatKind.THREE_ROOM)
    before = flat_type.available_units
    system.allocation.reserve_unit(flat_type)
    system.allocation.release_unit(flat_type)
    assert flat_type.available_units == before


def test_reserve_missing_flat_type(system, bayshore):
    result = system.allocation.reserve_unit(bayshore.flat_type(FlatKind.THREE_ROOM))
    assert isinstance(result.error, NotFoundError)


def test_assign_officer_respects_slots(system, bayshore, daniel, emily):
    daniel_role = system.store.officers.find_by_key(daniel.nric)
    emily_role = system.store.officers.find_by_key(emily.nric)

    assert system.allocation.assign_officer(bayshore, daniel_role)
    assert daniel_role.assigned_project == "Bayshore Vista"

    result = system.allocation.assign_officer(bayshore, emily_role)
    assert isinstance(result.error, CapacityExceededError)
    assert bayshore.assigned_officers == [daniel.nric]
    assert emily_role.assigned_project is None


def test_assign_officer_twice_and_elsewhere(system, acacia, bayshore, daniel):
    role = system.store.officers.find_by_key(daniel.nric)
    system.allocation.assign_officer(acacia, role).unwrap()

    again = system.allocation.assign_officer(acacia, role)
    assert isinstance(again.error, StateConflictError)

    elsewhere = system.allocation.assign_officer(bayshore, role)
    assert isinstance(elsewhere.error, ConflictError)
    assert bayshore.assigned_officers == []


def test_unassign_officer(system, acacia, daniel):
    role = system.store.officers.find_by_key(daniel.nric)
    system.allocation.assign_officer(acacia, role).unwrap()
    assert system.allocation.unassign_officer(acacia, role)
    assert role.assigned_project is None
    assert isinstance(system.allocation.unassign_officer(acacia, role).error, NotFoundError)
