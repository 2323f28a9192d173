"""
Report data models.

Used by the ReportEngine to describe filter criteria and output rows
for the manager's applicant report.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import ApplicationStatus


@dataclass
class ReportCriteria:
    """
    Filters for the applicant report. Empty lists mean "any".

    By default only BOOKED applications are reported, which is the
    flat-selection report managers ask for.
    """
    ages: list = field(default_factory=list)               # List of int
    marital_statuses: list = field(default_factory=list)   # List of MaritalStatus
    project_name: Optional[str] = None
    flat_kinds: list = field(default_factory=list)         # List of FlatKind
    statuses: list = field(default_factory=lambda: [ApplicationStatus.BOOKED])


@dataclass
class ApplicantReportRow:
    application_id: str
    name: str
    nric: str
    age: int
    marital_status: object                 # MaritalStatus
    project_name: str
    neighborhood: str
    flat_kind: object                      # FlatKind
    status: object                         # ApplicationStatus
