"""
Booking Lifecycle Engine.

    PENDING ──confirm──▶ CONFIRMED ──(receipt generated once)
       │                    │
       └──────cancel────────┴──▶ CANCELLED   (unit released exactly once)

Unit reservation and the SUCCESSFUL -> BOOKED transition belong to
ApplicationLifecycle.book; this engine adds the officer checks, the
confirmation step and receipts.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..config import RECEIPT_ID_PREFIX
from ..errors import ConflictError, NotFoundError, StateConflictError
from ..models import ApplicationStatus, Booking, BookingStatus, Receipt, Result
from ..store import HousingStore, LockManager, person_key, project_key
from .allocation import ProjectAllocation
from .applications import ApplicationLifecycle
from .identifiers import generate_id

logger = logging.getLogger(__name__)


class BookingLifecycle:
    """
    Officer-side flat booking.

    Usage:
        result = bookings.process_booking(officer, application)
        if result:
            bookings.confirm_booking(result.value)
    """

    def __init__(self, store: HousingStore, allocation: ProjectAllocation,
                 applications: ApplicationLifecycle, locks: Optional[LockManager] = None,
                 clock: Callable[[], date] = date.today):
        self.store = store
        self.allocation = allocation
        self.applications = applications
        self.locks = locks or LockManager()
        self.clock = clock

    def process_booking(self, officer, application) -> Result:
        """
        Book a flat for a SUCCESSFUL application on behalf of its applicant.

        The officer must administer the application's project. Returns the
        new PENDING Booking bound to the officer.
        """
        # Every key book() needs is taken here in one sorted acquisition
        with self.locks.hold(project_key(application.project_name), person_key(officer.nric),
                             person_key(application.applicant_nric)):
            role = self.store.officers.find_by_key(officer.nric)
            if role is None:
                return self._reject(NotFoundError(f"{officer.nric} is not an officer"))
            if role.assigned_project != application.project_name:
                return self._reject(ConflictError(
                    f"Officer {officer.nric} does not administer {application.project_name}"
                ))
            if application.status == ApplicationStatus.BOOKED:
                return self._reject(StateConflictError(f"Application {application.id} is already BOOKED"))
            if application.status != ApplicationStatus.SUCCESSFUL:
                return self._reject(StateConflictError(
                    f"Application {application.id} is {application.status.name}, not SUCCESSFUL"
                ))
            return self.applications.book(application, officer_nric=officer.nric)

    def confirm_booking(self, booking: Booking) -> Result:
        """PENDING -> CONFIRMED, then issue the receipt. The Receipt is the Result value."""
        application = self.store.applications.find_by_key(booking.application_id)
        project_name = application.project_name if application else ""
        with self.locks.hold(project_key(project_name)):
            if booking.status != BookingStatus.PENDING:
                return self._reject(StateConflictError(
                    f"Booking {booking.id} is {booking.status.name}, not PENDING"
                ))
            booking.status = BookingStatus.CONFIRMED
            logger.info("Booking %s CONFIRMED", booking.id)
            return self.generate_receipt(booking)

    def generate_receipt(self, booking: Booking) -> Result:
        """
        Issue the receipt for a CONFIRMED booking.

        Idempotent: a second call returns the receipt already on file.
        """
        application = self.store.applications.find_by_key(booking.application_id)
        project_name = application.project_name if application else ""
        # Project lock shared with cancel_booking
        with self.locks.hold(project_key(project_name), f"receipt:{booking.id}"):
            if booking.status != BookingStatus.CONFIRMED:
                return self._reject(StateConflictError(
                    f"Booking {booking.id} is {booking.status.name}; receipts need CONFIRMED"
                ))
            existing = self.receipt_for(booking)
            if existing is not None:
                return Result.success(existing)

            receipt = Receipt(
                number=generate_id(RECEIPT_ID_PREFIX),
                booking_id=booking.id,
                application_id=booking.application_id,
                issued_on=self.clock(),
            )
            added = self.store.receipts.add(receipt)
            if not added:
                return added

        logger.info("Receipt %s issued for booking %s", receipt.number, booking.id)
        return Result.success(receipt)

    def cancel_booking(self, booking: Booking) -> Result:
        """
        PENDING or CONFIRMED -> CANCELLED.

        The held unit goes back to inventory exactly once and a BOOKED
        application returns to SUCCESSFUL. Cancelling twice is harmless.
        """
        application = self.store.applications.find_by_key(booking.application_id)
        if application is None:
            return self._reject(NotFoundError(f"Application {booking.application_id} not found"))

        with self.locks.hold(project_key(application.project_name), person_key(application.applicant_nric)):
            project = self.store.projects.find_by_key(application.project_name)
            if project is None:
                return self._reject(NotFoundError(f"Project {application.project_name} not found"))

            released = self.allocation.release_for_booking(booking, project.flat_type(booking.flat_kind))
            if not released:
                return self._reject(released.error)

            if booking.status != BookingStatus.CANCELLED:
                booking.status = BookingStatus.CANCELLED
                if application.status == ApplicationStatus.BOOKED:
                    application.status = ApplicationStatus.SUCCESSFUL
                logger.info("Booking %s CANCELLED, unit returned to %s", booking.id, project.name)

        return Result.success(booking)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find(self, booking_id: str) -> Optional[Booking]:
        return self.store.bookings.find_by_key(booking_id)

    def receipt_for(self, booking: Booking) -> Optional[Receipt]:
        return self.store.receipts.find_one(lambda r: r.booking_id == booking.id)

    def booking_for(self, application) -> Optional[Booking]:
        return self.store.live_booking_for(application.id)

    def bookings_for_project(self, project_name: str, status: Optional[BookingStatus] = None) -> list:
        application_ids = {a.id for a in self.applications.applications_for_project(project_name)}
        return self.store.bookings.find_all(
            lambda b: b.application_id in application_ids and (status is None or b.status == status)
        )

    @staticmethod
    def _reject(error) -> Result:
        logger.info("Rejected: %s", error)
        return Result.failure(error)
