"""
Housing System - Main Orchestrator.

Wires one HousingStore, one LockManager and one clock into every engine.
Nothing here is global: tests build as many systems as they like.

NOTE: Don't run this file directly. Run from the repository root:
    python3 -m bto --data-dir data
"""

import re
from datetime import date
from typing import Callable, Optional

from .config import NRIC_PATTERN
from .engines import (
    AccountService,
    ApplicationLifecycle,
    BookingLifecycle,
    EnquiryLifecycle,
    OfficerAssignmentLifecycle,
    ProjectAllocation,
    ProjectCatalog,
    ReportEngine,
)
from .errors import ValidationError
from .models import ApplicantRole, ManagerRole, OfficerRole, Person, Result
from .store import HousingStore, LockManager

_NRIC_RE = re.compile(NRIC_PATTERN)


class HousingSystem:
    """
    Entry point for callers (console, tests, loaders).

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    Callers resolve records through `system.store`, then drive one of the
    engines below. Every engine shares the same store, locks and clock, so
    a booking made through `bookings` is immediately visible to `reports`.

        allocation   ProjectAllocation           officer slots, unit inventory
        applications ApplicationLifecycle        BTO applications, withdrawals
        officers     OfficerAssignmentLifecycle  officer registrations
        bookings     BookingLifecycle            bookings, receipts
        enquiries    EnquiryLifecycle            enquiries, replies
        projects     ProjectCatalog              project publication, listings
        reports      ReportEngine                applicant reports
        accounts     AccountService              login, passwords

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        system = HousingSystem(clock=lambda: date(2026, 2, 15))
        system.register_person(Person("John", "S1234567A", 35, MaritalStatus.SINGLE, "password"),
                               applicant=True)
        result = system.applications.submit(person, project, FlatKind.TWO_ROOM)
    """

    def __init__(self, clock: Optional[Callable[[], date]] = None,
                 store: Optional[HousingStore] = None):
        self.clock = clock or date.today
        self.store = store or HousingStore()
        self.locks = LockManager()

        self.allocation = ProjectAllocation(self.store)
        self.applications = ApplicationLifecycle(self.store, self.allocation, self.locks, self.clock)
        self.officers = OfficerAssignmentLifecycle(self.store, self.allocation, self.locks, self.clock)
        self.bookings = BookingLifecycle(self.store, self.allocation, self.applications,
                                         self.locks, self.clock)
        self.enquiries = EnquiryLifecycle(self.store, self.locks, self.clock)
        self.projects = ProjectCatalog(self.store, self.locks, self.clock)
        self.reports = ReportEngine(self.store)
        self.accounts = AccountService(self.store, self.locks)

    def register_person(self, person: Person, applicant: bool = False,
                        officer: bool = False, manager: bool = False) -> Result:
        """
        Add a person and attach the requested role records.

        Officers are always registered as applicants too. Registering an
        NRIC that already exists only adds the missing roles. A malformed
        NRIC is a ValidationError and nothing is stored.
        """
        if not person.nric or not _NRIC_RE.match(person.nric):
            return Result.failure(ValidationError(f"'{person.nric}' is not a valid NRIC"))
        existing = self.store.people.find_by_key(person.nric)
        if existing is None:
            added = self.store.people.add(person)
            if not added:
                return added
            existing = person

        if applicant or officer:
            if not self.store.is_applicant(person.nric):
                self.store.applicants.add(ApplicantRole(nric=person.nric))
        if officer and not self.store.is_officer(person.nric):
            self.store.officers.add(OfficerRole(nric=person.nric))
        if manager and not self.store.is_manager(person.nric):
            self.store.managers.add(ManagerRole(nric=person.nric))

        return Result.success(existing)

    def summary(self) -> dict:
        """Record counts per store, for load/save logging and the console banner."""
        return {
            "people": len(self.store.people),
            "projects": len(self.store.projects),
            "applications": len(self.store.applications),
            "officer_applications": len(self.store.officer_applications),
            "bookings": len(self.store.bookings),
            "receipts": len(self.store.receipts),
            "enquiries": len(self.store.enquiries),
        }
