"""
The bundle of per-entity stores.

HousingStore is a plain object passed into every engine; there is no
global database. It also answers the cross-store questions engines keep
asking (who has which role, which application is active).
"""

from typing import Optional

from ..models import BTOApplication, Person
from .entity_store import EntityStore


class HousingStore:
    """
    All records of one running system, keyed as follows:

        people, applicants, officers, managers  -> NRIC
        projects                                -> project name
        applications, officer_applications,
        bookings, enquiries                     -> generated ID
        receipts                                -> receipt number
    """

    def __init__(self):
        self.people = EntityStore("person", key=lambda p: p.nric)
        self.applicants = EntityStore("applicant", key=lambda r: r.nric)
        self.officers = EntityStore("officer", key=lambda r: r.nric)
        self.managers = EntityStore("manager", key=lambda r: r.nric)
        self.projects = EntityStore("project", key=lambda p: p.name)
        self.applications = EntityStore("application", key=lambda a: a.id)
        self.officer_applications = EntityStore("officer application", key=lambda a: a.id)
        self.bookings = EntityStore("booking", key=lambda b: b.id)
        self.receipts = EntityStore("receipt", key=lambda r: r.number)
        self.enquiries = EntityStore("enquiry", key=lambda e: e.id)

    # =========================================================================
    # PEOPLE
    # =========================================================================

    def person_by_name(self, name: str) -> Optional[Person]:
        return self.people.find_one(lambda p: p.name == name)

    def is_applicant(self, nric: str) -> bool:
        return nric in self.applicants

    def is_officer(self, nric: str) -> bool:
        return nric in self.officers

    def is_manager(self, nric: str) -> bool:
        return nric in self.managers

    # =========================================================================
    # APPLICATIONS
    # =========================================================================

    def active_application(self, nric: str) -> Optional[BTOApplication]:
        """The applicant's single active (PENDING/SUCCESSFUL/BOOKED) application, if any."""
        return self.applications.find_one(
            lambda a: a.applicant_nric == nric and a.is_active
        )

    def has_active_application_for(self, nric: str, project_name: str) -> bool:
        return self.applications.find_one(
            lambda a: a.applicant_nric == nric and a.project_name == project_name and a.is_active
        ) is not None

    def live_booking_for(self, application_id: str):
        return self.bookings.find_one(
            lambda b: b.application_id == application_id and b.is_live
        )
