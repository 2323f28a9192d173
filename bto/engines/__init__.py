"""
Engines for the housing system.

Each engine owns one concern and receives the shared HousingStore (and,
where it mutates, the LockManager and a clock) through its constructor.

Pure rules:
- eligibility: age / marital status / flat kind table

Capacity:
- ProjectAllocation: officer slots and flat-unit inventory

Lifecycles (return Result, never raise for business rules):
- ApplicationLifecycle: BTO applications, withdrawals, booking a unit
- OfficerAssignmentLifecycle: officer registrations for projects
- BookingLifecycle: officer-processed bookings, confirmation, receipts
- EnquiryLifecycle: enquiries and replies

Supporting services:
- ProjectCatalog: manager project publication and project listings
- ReportEngine: applicant reports
- AccountService: login and passwords
"""

from .eligibility import is_eligible, eligible_kinds, is_eligible_for_project
from .allocation import ProjectAllocation
from .applications import ApplicationLifecycle
from .officer_assignment import OfficerAssignmentLifecycle
from .bookings import BookingLifecycle
from .enquiries import EnquiryLifecycle
from .projects import ProjectCatalog
from .reports import ReportEngine
from .accounts import AccountService, ROLE_APPLICANT, ROLE_OFFICER, ROLE_MANAGER
from .identifiers import generate_id

__all__ = [
    "is_eligible",
    "eligible_kinds",
    "is_eligible_for_project",
    "ProjectAllocation",
    "ApplicationLifecycle",
    "OfficerAssignmentLifecycle",
    "BookingLifecycle",
    "EnquiryLifecycle",
    "ProjectCatalog",
    "ReportEngine",
    "AccountService",
    "ROLE_APPLICANT",
    "ROLE_OFFICER",
    "ROLE_MANAGER",
    "generate_id",
]
