"""
BTO Application Lifecycle Engine.

State machine for BTOApplication:

    PENDING ──decide──▶ SUCCESSFUL ──book──▶ BOOKED
       │
       └─────decide──▶ UNSUCCESSFUL

    any status except WITHDRAWN ──approved withdrawal──▶ WITHDRAWN

Withdrawal is a parallel sub-state: NA ──request──▶ PENDING, then
APPROVED (main status becomes WITHDRAWN) or back to NA when rejected.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..config import BOOKING_ID_PREFIX, BTO_APPLICATION_ID_PREFIX
from ..errors import (
    ConflictError,
    EligibilityError,
    NotFoundError,
    StateConflictError,
    ValidationError,
    WindowClosedError,
)
from ..models import (
    ApplicationStatus,
    Booking,
    BookingStatus,
    BTOApplication,
    FlatKind,
    Result,
    WithdrawalStatus,
)
from ..store import HousingStore, LockManager, person_key, project_key
from .allocation import ProjectAllocation
from .eligibility import is_eligible
from .identifiers import generate_id

logger = logging.getLogger(__name__)

_DECISIONS = (ApplicationStatus.SUCCESSFUL, ApplicationStatus.UNSUCCESSFUL)


class ApplicationLifecycle:
    """
    Creates BTO applications and drives them through their states.

    Every operation runs under the locks of the project and the applicant
    it touches, checks all preconditions first, and returns a Result.
    """

    def __init__(self, store: HousingStore, allocation: ProjectAllocation,
                 locks: Optional[LockManager] = None, clock: Callable[[], date] = date.today):
        self.store = store
        self.allocation = allocation
        self.locks = locks or LockManager()
        self.clock = clock

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    def submit(self, applicant, project, flat_kind: FlatKind) -> Result:
        """
        Submit a new PENDING application.

        Fails with:
            StateConflictError: the applicant already has an active application
            ConflictError: an officer applying for a project they administer
                (or have a pending registration for)
            EligibilityError: age / marital status rules forbid this flat kind
            WindowClosedError: project hidden or outside its application period
        """
        nric = applicant.nric
        with self.locks.hold(project_key(project.name), person_key(nric)):
            if not self.store.is_applicant(nric):
                return self._reject(NotFoundError(f"{nric} is not registered as an applicant"))

            existing = self.store.active_application(nric)
            if existing is not None:
                return self._reject(StateConflictError(
                    f"{nric} already has an active application ({existing.id}, {existing.status.name})"
                ))

            conflict = self._officer_conflict(nric, project.name)
            if conflict is not None:
                return self._reject(conflict)

            if project.flat_type(flat_kind) is None:
                return self._reject(ValidationError(
                    f"{project.name} does not offer {flat_kind.label} flats"
                ))

            if not is_eligible(applicant, flat_kind):
                return self._reject(EligibilityError(
                    f"{applicant.marital_status.label} applicants aged {applicant.age} "
                    f"cannot apply for {flat_kind.label} flats"
                ))

            today = self.clock()
            if not project.is_visible or not project.is_open(today):
                return self._reject(WindowClosedError(
                    f"{project.name} is not open for applications on {today.isoformat()}"
                ))

            application = BTOApplication(
                id=generate_id(BTO_APPLICATION_ID_PREFIX),
                applicant_nric=nric,
                project_name=project.name,
                flat_kind=flat_kind,
                submitted_on=today,
            )
            added = self.store.applications.add(application)
            if not added:
                return added

        logger.info("Application %s submitted by %s for %s (%s)",
                    application.id, nric, project.name, flat_kind.label)
        return Result.success(application)

    def _officer_conflict(self, nric: str, project_name: str) -> Optional[ConflictError]:
        officer = self.store.officers.find_by_key(nric)
        if officer is None:
            return None
        if officer.assigned_project == project_name:
            return ConflictError(f"Officer {nric} administers {project_name} and cannot apply for it")
        registration = self.store.officer_applications.find_one(
            lambda oa: oa.officer_nric == nric and oa.project_name == project_name and oa.is_pending
        )
        if registration is not None:
            return ConflictError(f"Officer {nric} has a pending registration for {project_name}")
        return None

    # =========================================================================
    # DECISION
    # =========================================================================

    def decide(self, application: BTOApplication, outcome: ApplicationStatus) -> Result:
        """Manager's verdict on a PENDING application: SUCCESSFUL or UNSUCCESSFUL."""
        if outcome not in _DECISIONS:
            return self._reject(ValidationError(f"{outcome} is not a valid decision"))

        with self.locks.hold(project_key(application.project_name), person_key(application.applicant_nric)):
            if application.status != ApplicationStatus.PENDING:
                return self._reject(StateConflictError(
                    f"Application {application.id} is {application.status.name}, not PENDING"
                ))
            application.status = outcome

        logger.info("Application %s marked %s", application.id, outcome.name)
        return Result.success(application)

    # =========================================================================
    # WITHDRAWAL
    # =========================================================================

    def request_withdrawal(self, application: BTOApplication) -> Result:
        with self.locks.hold(project_key(application.project_name), person_key(application.applicant_nric)):
            if application.status == ApplicationStatus.WITHDRAWN:
                return self._reject(StateConflictError(f"Application {application.id} is already withdrawn"))
            if application.withdrawal_status == WithdrawalStatus.PENDING:
                return self._reject(StateConflictError(
                    f"Application {application.id} already has a pending withdrawal request"
                ))
            application.withdrawal_status = WithdrawalStatus.PENDING

        logger.info("Withdrawal requested for application %s", application.id)
        return Result.success(application)

    def resolve_withdrawal(self, application: BTOApplication, approve: bool) -> Result:
        """
        Approve or reject a pending withdrawal request.

        Approving a BOOKED application cancels its live booking and puts the
        held unit back into inventory. Rejecting leaves the main status alone.
        """
        with self.locks.hold(project_key(application.project_name), person_key(application.applicant_nric)):
            if application.withdrawal_status != WithdrawalStatus.PENDING:
                return self._reject(StateConflictError(
                    f"Application {application.id} has no pending withdrawal request"
                ))

            if not approve:
                application.withdrawal_status = WithdrawalStatus.NA
                logger.info("Withdrawal rejected for application %s", application.id)
                return Result.success(application)

            if application.status == ApplicationStatus.BOOKED:
                released = self._release_held_unit(application)
                if not released:
                    return self._reject(released.error)

            application.status = ApplicationStatus.WITHDRAWN
            application.withdrawal_status = WithdrawalStatus.APPROVED

        logger.info("Withdrawal approved, application %s is WITHDRAWN", application.id)
        return Result.success(application)

    def _release_held_unit(self, application: BTOApplication) -> Result:
        project = self.store.projects.find_by_key(application.project_name)
        if project is None:
            return Result.failure(NotFoundError(f"Project {application.project_name} not found"))
        flat_type = project.flat_type(application.flat_kind)

        booking = self.store.live_booking_for(application.id)
        if booking is None:
            return self.allocation.release_unit(flat_type)

        released = self.allocation.release_for_booking(booking, flat_type)
        if released:
            booking.status = BookingStatus.CANCELLED
        return released

    # =========================================================================
    # BOOKING
    # =========================================================================

    def book(self, application: BTOApplication, officer_nric: Optional[str] = None) -> Result:
        """
        Reserve a unit for a SUCCESSFUL application and mark it BOOKED.

        On a sold-out flat type the application stays SUCCESSFUL and the
        CapacityExceededError is returned. On success the new PENDING
        Booking is the Result value.
        """
        with self.locks.hold(project_key(application.project_name), person_key(application.applicant_nric)):
            if application.status != ApplicationStatus.SUCCESSFUL:
                return self._reject(StateConflictError(
                    f"Application {application.id} is {application.status.name}, not SUCCESSFUL"
                ))
            if application.withdrawal_status == WithdrawalStatus.PENDING:
                return self._reject(StateConflictError(
                    f"Application {application.id} has a pending withdrawal request"
                ))

            project = self.store.projects.find_by_key(application.project_name)
            if project is None:
                return self._reject(NotFoundError(f"Project {application.project_name} not found"))
            flat_type = project.flat_type(application.flat_kind)

            reserved = self.allocation.reserve_unit(flat_type)
            if not reserved:
                return self._reject(reserved.error)

            booking = Booking(
                id=generate_id(BOOKING_ID_PREFIX),
                application_id=application.id,
                officer_nric=officer_nric,
                flat_kind=application.flat_kind,
                booked_on=self.clock(),
            )
            added = self.store.bookings.add(booking)
            if not added:
                self.allocation.release_unit(flat_type)
                return self._reject(added.error)

            application.status = ApplicationStatus.BOOKED

        logger.info("Application %s BOOKED (%s in %s), booking %s",
                    application.id, application.flat_kind.label, application.project_name, booking.id)
        return Result.success(booking)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find(self, application_id: str) -> Optional[BTOApplication]:
        return self.store.applications.find_by_key(application_id)

    def applications_for(self, nric: str) -> list:
        return self.store.applications.find_all(lambda a: a.applicant_nric == nric)

    def active_application(self, nric: str) -> Optional[BTOApplication]:
        return self.store.active_application(nric)

    def applications_for_project(self, project_name: str,
                                 status: Optional[ApplicationStatus] = None) -> list:
        return self.store.applications.find_all(
            lambda a: a.project_name == project_name and (status is None or a.status == status)
        )

    def pending_withdrawals(self, project_name: str) -> list:
        return self.store.applications.find_all(
            lambda a: a.project_name == project_name and a.withdrawal_status == WithdrawalStatus.PENDING
        )

    @staticmethod
    def _reject(error) -> Result:
        logger.info("Rejected: %s", error)
        return Result.failure(error)
