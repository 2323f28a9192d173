"""
Application data models.

BTOApplication: an applicant's request for a flat type in a project.
OfficerApplication: an officer's request to administer a project.
"""

from dataclasses import dataclass
from datetime import date

from .enums import (
    ACTIVE_APPLICATION_STATUSES,
    ApplicationStatus,
    FlatKind,
    OfficerApplicationStatus,
    WithdrawalStatus,
)


@dataclass
class BTOApplication:
    """
    One applicant's application for one project.

    The withdrawal sub-state moves independently of the main status:
    NA -> PENDING -> APPROVED (status becomes WITHDRAWN) or back to NA.
    """
    id: str
    applicant_nric: str
    project_name: str
    flat_kind: FlatKind
    submitted_on: date
    status: ApplicationStatus = ApplicationStatus.PENDING
    withdrawal_status: WithdrawalStatus = WithdrawalStatus.NA

    @property
    def is_active(self) -> bool:
        """Counts toward the one-active-application-per-applicant rule."""
        return self.status in ACTIVE_APPLICATION_STATUSES


@dataclass
class OfficerApplication:
    id: str
    officer_nric: str
    project_name: str
    submitted_on: date
    status: OfficerApplicationStatus = OfficerApplicationStatus.PENDING

    @property
    def is_pending(self) -> bool:
        return self.status == OfficerApplicationStatus.PENDING
