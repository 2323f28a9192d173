import threading
import unittest

import pytest

from bto import DuplicateKeyError, FlatKind, MaritalStatus, NotFoundError, Person, ValidationError
from bto.store import EntityStore, LockManager, person_key, project_key


def _person(nric, name="Someone"):
    return Person(name, nric, 30, MaritalStatus.MARRIED, "password")


class EntityStoreTests(unittest.TestCase):
    def setUp(self):
        self.people = EntityStore("person", key=lambda p: p.nric)

    def test_add_and_find_by_key(self):
        person = _person("S1234567A")
        result = self.people.add(person)
        self.assertTrue(result)
        self.assertIs(self.people.find_by_key("S1234567A"), person)
        self.assertIn("S1234567A", self.people)
        self.assertEqual(len(self.people), 1)

    def test_duplicate_key_is_rejected_without_mutation(self):
        first = _person("S1234567A", "First")
        self.people.add(first)
        result = self.people.add(_person("S1234567A", "Second"))
        self.assertFalse(result)
        self.assertIsInstance(result.error, DuplicateKeyError)
        self.assertIs(self.people.find_by_key("S1234567A"), first)

    def test_remove_missing_key(self):
        result = self.people.remove("S0000000Z")
        self.assertIsInstance(result.error, NotFoundError)

    def test_remove_returns_entity(self):
        person = _person("S1234567A")
        self.people.add(person)
        result = self.people.remove("S1234567A")
        self.assertIs(result.value, person)
        self.assertIsNone(self.people.find_by_key("S1234567A"))

    def test_find_all_preserves_insertion_order_and_is_a_snapshot(self):
        for nric in ("T1111111A", "S2222222B", "G3333333C"):
            self.people.add(_person(nric))
        snapshot = self.people.find_all()
        self.people.add(_person("F4444444D"))
        self.assertEqual([p.nric for p in snapshot], ["T1111111A", "S2222222B", "G3333333C"])
        self.assertEqual(len(self.people.find_all()), 4)

    def test_find_all_with_predicate(self):
        self.people.add(_person("S1111111A", "Ann"))
        self.people.add(_person("S2222222B", "Bob"))
        found = self.people.find_all(lambda p: p.name == "Bob")
        self.assertEqual([p.nric for p in found], ["S2222222B"])
        self.assertIsNone(self.people.find_one(lambda p: p.name == "Cat"))

    def test_concurrent_inserts_of_same_key_admit_one(self):
        results = []

        def insert():
            results.append(self.people.add(_person("S1234567A")))

        threads = [threading.Thread(target=insert) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(sum(1 for r in results if r), 1)
        self.assertEqual(len(self.people), 1)


def test_lock_manager_is_reentrant_and_ignores_blank_keys():
    locks = LockManager()
    with locks.hold(project_key("Acacia"), person_key("S1234567A"), None, ""):
        with locks.hold(project_key("Acacia")):
            pass


def test_housing_store_active_application(system, sarah, acacia):
    assert system.store.active_application(sarah.nric) is None
    application = system.applications.submit(sarah, acacia, FlatKind.TWO_ROOM).unwrap()
    assert system.store.active_application(sarah.nric) is application
    assert system.store.has_active_application_for(sarah.nric, "Acacia Breeze")
    assert not system.store.has_active_application_for(sarah.nric, "Bayshore Vista")


def test_register_person_officer_is_also_applicant(system, daniel):
    assert system.store.is_officer(daniel.nric)
    assert system.store.is_applicant(daniel.nric)
    assert not system.store.is_manager(daniel.nric)
    assert system.accounts.roles_of(daniel.nric) == {"applicant", "officer"}


def test_person_by_name(system):
    assert system.store.person_by_name("Jessica").nric == "S5678901G"
    assert system.store.person_by_name("Nobody") is None


@pytest.mark.parametrize("nric", ["not-an-nric", "", "S1234567", "s1234567a", "X1234567A"])
def test_register_person_rejects_malformed_nric(system, nric):
    before = len(system.store.people)
    result = system.register_person(_person(nric, "Bad"), applicant=True)
    assert isinstance(result.error, ValidationError)
    assert len(system.store.people) == before
    assert not system.store.is_applicant(nric)
