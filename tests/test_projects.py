from datetime import date

from bto import (
    ConflictError,
    DuplicateKeyError,
    FlatKind,
    NotFoundError,
    SearchFilter,
    StateConflictError,
    ValidationError,
    Visibility,
)


def _create(system, manager, name, start, end, **kwargs):
    flat_types = kwargs.pop("flat_types", [(FlatKind.TWO_ROOM, 10, 300000.0)])
    return system.projects.create_project(manager, name, "Tampines", start, end, 2, flat_types, **kwargs)


def test_create_project(system, jessica, acacia):
    assert acacia.manager_nric == jessica.nric
    assert acacia.flat_type(FlatKind.TWO_ROOM).available_units == 2
    assert system.projects.find("Acacia Breeze") is acacia
    assert system.projects.managed_projects(jessica.nric) == [acacia]


def test_duplicate_name(system, michael, acacia):
    result = _create(system, michael, "Acacia Breeze", date(2027, 1, 1), date(2027, 2, 1))
    assert isinstance(result.error, DuplicateKeyError)


def test_manager_period_overlap(system, jessica, acacia):
    # Shares the closing day of Acacia Breeze
    result = _create(system, jessica, "Cedar Grove", date(2026, 4, 30), date(2026, 6, 1))
    assert isinstance(result.error, ConflictError)
    assert system.projects.find("Cedar Grove") is None

    assert _create(system, jessica, "Cedar Grove", date(2026, 5, 1), date(2026, 6, 1))


def test_other_manager_may_overlap(system, michael, acacia):
    assert _create(system, michael, "Cedar Grove", date(2026, 3, 1), date(2026, 4, 30))


def test_create_validation(system, jessica):
    bad = [
        ("", date(2027, 1, 1), date(2027, 2, 1), {}),
        ("X", date(2027, 2, 1), date(2027, 1, 1), {}),
        ("X", date(2027, 1, 1), date(2027, 2, 1), {"flat_types": []}),
        ("X", date(2027, 1, 1), date(2027, 2, 1), {"flat_types": [(FlatKind.TWO_ROOM, -1, 1.0)]}),
        ("X", date(2027, 1, 1), date(2027, 2, 1),
         {"flat_types": [(FlatKind.TWO_ROOM, 1, 1.0), (FlatKind.TWO_ROOM, 2, 1.0)]}),
    ]
    for name, start, end, kwargs in bad:
        result = _create(system, jessica, name, start, end, **kwargs)
        assert isinstance(result.error, ValidationError), name
    assert len(system.store.projects) == 0


def test_non_manager_cannot_create(system, john):
    result = _create(system, john, "X", date(2027, 1, 1), date(2027, 2, 1))
    assert isinstance(result.error, NotFoundError)


def test_edit_project(system, acacia):
    system.projects.edit_project(acacia, neighborhood="Sembawang", end=date(2026, 5, 31),
                                 prices={FlatKind.TWO_ROOM: 360000}).unwrap()
    assert acacia.neighborhood == "Sembawang"
    assert acacia.end_date == date(2026, 5, 31)
    assert acacia.flat_type(FlatKind.TWO_ROOM).price == 360000.0


def test_edit_into_overlap_is_rejected(system, jessica, acacia):
    later = _create(system, jessica, "Cedar Grove", date(2026, 6, 1), date(2026, 7, 1)).unwrap()
    result = system.projects.edit_project(later, start=date(2026, 4, 1))
    assert isinstance(result.error, ConflictError)
    assert later.start_date == date(2026, 6, 1)


def test_edit_unknown_flat_kind_price(system, bayshore):
    result = system.projects.edit_project(bayshore, prices={FlatKind.THREE_ROOM: 1.0})
    assert isinstance(result.error, ValidationError)


def test_delete_unreferenced_project(system, daniel, acacia):
    role = system.store.officers.find_by_key(daniel.nric)
    system.allocation.assign_officer(acacia, role).unwrap()
    system.projects.delete_project(acacia).unwrap()
    assert system.projects.find("Acacia Breeze") is None
    assert role.assigned_project is None


def test_delete_referenced_project_refused(system, john, acacia):
    system.enquiries.submit(john, acacia, "Question").unwrap()
    result = system.projects.delete_project(acacia)
    assert isinstance(result.error, StateConflictError)
    assert system.projects.find("Acacia Breeze") is acacia


class TestViewableProjects:
    def test_open_visible_and_eligible(self, system, john, rachel, acacia, bayshore):
        assert system.projects.viewable_projects(john) == [acacia]
        assert system.projects.viewable_projects(rachel) == []

    def test_hidden_project_disappears(self, system, john, acacia):
        system.projects.set_visibility(acacia, Visibility.HIDDEN)
        assert system.projects.viewable_projects(john) == []

    def test_applied_project_stays_visible_when_hidden(self, system, john, acacia):
        system.applications.submit(john, acacia, FlatKind.TWO_ROOM).unwrap()
        system.projects.set_visibility(acacia, Visibility.HIDDEN)
        assert system.projects.viewable_projects(john) == [acacia]

    def test_officer_sees_own_project(self, system, daniel, bayshore):
        role = system.store.officers.find_by_key(daniel.nric)
        system.allocation.assign_officer(bayshore, role).unwrap()
        assert system.projects.viewable_projects(daniel) == [bayshore]

    def test_search_filter(self, system, sarah, acacia):
        cheap = SearchFilter(max_price=400000.0, flat_kinds=[FlatKind.THREE_ROOM])
        assert system.projects.viewable_projects(sarah, cheap) == []
        pricey = SearchFilter(min_price=400000.0, neighborhoods=["Yishun"])
        assert system.projects.viewable_projects(sarah, pricey) == [acacia]
