"""
Data models for the housing system.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between different parts of the system.
"""

from .enums import (
    ACTIVE_APPLICATION_STATUSES,
    ApplicationStatus,
    BookingStatus,
    EnquiryStatus,
    FlatKind,
    MaritalStatus,
    OfficerApplicationStatus,
    Visibility,
    WithdrawalStatus,
)
from .people import Person, ApplicantRole, OfficerRole, ManagerRole, SearchFilter
from .project import Project, FlatType
from .application import BTOApplication, OfficerApplication
from .booking import Booking, Receipt
from .enquiry import Enquiry
from .report import ReportCriteria, ApplicantReportRow
from .result import Result

__all__ = [
    # Enums
    "ACTIVE_APPLICATION_STATUSES",
    "ApplicationStatus",
    "BookingStatus",
    "EnquiryStatus",
    "FlatKind",
    "MaritalStatus",
    "OfficerApplicationStatus",
    "Visibility",
    "WithdrawalStatus",
    # People and roles
    "Person",
    "ApplicantRole",
    "OfficerRole",
    "ManagerRole",
    "SearchFilter",
    # Projects
    "Project",
    "FlatType",
    # Lifecycle records
    "BTOApplication",
    "OfficerApplication",
    "Booking",
    "Receipt",
    "Enquiry",
    # Reports
    "ReportCriteria",
    "ApplicantReportRow",
    # Results
    "Result",
]
