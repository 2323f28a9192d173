"""
Enquiry Lifecycle Engine.

    PENDING ──respond──▶ REPLIED   (final, no edit-in-place)

While PENDING the submitter may still edit or delete the enquiry.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..config import ENQUIRY_ID_PREFIX
from ..errors import ConflictError, StateConflictError, ValidationError
from ..models import Enquiry, EnquiryStatus, Result
from ..store import HousingStore, LockManager, project_key
from .identifiers import generate_id

logger = logging.getLogger(__name__)


class EnquiryLifecycle:

    def __init__(self, store: HousingStore, locks: Optional[LockManager] = None,
                 clock: Callable[[], date] = date.today):
        self.store = store
        self.locks = locks or LockManager()
        self.clock = clock

    def submit(self, applicant, project, content: str) -> Result:
        enquiry = Enquiry(
            id=generate_id(ENQUIRY_ID_PREFIX),
            submitter_nric=applicant.nric,
            project_name=project.name,
            content=content,
            submitted_on=self.clock(),
        )
        added = self.store.enquiries.add(enquiry)
        if not added:
            return added
        logger.info("Enquiry %s submitted by %s about %s", enquiry.id, applicant.nric, project.name)
        return Result.success(enquiry)

    def respond(self, enquiry: Enquiry, respondent, reply_text: str) -> Result:
        """
        Reply to a PENDING enquiry.

        The respondent must be an officer assigned to the enquiry's project
        or the project's manager.
        """
        if not reply_text or not reply_text.strip():
            return self._reject(ValidationError("Reply cannot be empty"))

        with self.locks.hold(project_key(enquiry.project_name), f"enquiry:{enquiry.id}"):
            if enquiry.status != EnquiryStatus.PENDING:
                return self._reject(StateConflictError(f"Enquiry {enquiry.id} has already been answered"))
            if not self.handles_project(respondent.nric, enquiry.project_name):
                return self._reject(ConflictError(
                    f"{respondent.nric} does not handle enquiries for {enquiry.project_name}"
                ))

            enquiry.reply = reply_text.strip()
            enquiry.reply_date = self.clock()
            enquiry.respondent_nric = respondent.nric
            enquiry.status = EnquiryStatus.REPLIED

        logger.info("Enquiry %s REPLIED by %s", enquiry.id, respondent.nric)
        return Result.success(enquiry)

    def edit(self, enquiry: Enquiry, content: str) -> Result:
        if not content or not content.strip():
            return self._reject(ValidationError("Enquiry content cannot be empty"))
        with self.locks.hold(f"enquiry:{enquiry.id}"):
            if enquiry.status != EnquiryStatus.PENDING:
                return self._reject(StateConflictError(f"Enquiry {enquiry.id} was answered and cannot be edited"))
            enquiry.content = content
        return Result.success(enquiry)

    def delete(self, enquiry: Enquiry) -> Result:
        with self.locks.hold(f"enquiry:{enquiry.id}"):
            if enquiry.status != EnquiryStatus.PENDING:
                return self._reject(StateConflictError(f"Enquiry {enquiry.id} was answered and cannot be deleted"))
            removed = self.store.enquiries.remove(enquiry.id)
        if removed:
            logger.info("Enquiry %s deleted", enquiry.id)
        return removed

    def handles_project(self, nric: str, project_name: str) -> bool:
        project = self.store.projects.find_by_key(project_name)
        if project is None:
            return False
        if project.manager_nric == nric and self.store.is_manager(nric):
            return True
        officer = self.store.officers.find_by_key(nric)
        return officer is not None and officer.assigned_project == project_name

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find(self, enquiry_id: str) -> Optional[Enquiry]:
        return self.store.enquiries.find_by_key(enquiry_id)

    def enquiries_by(self, nric: str) -> list:
        return self.store.enquiries.find_all(lambda e: e.submitter_nric == nric)

    def enquiries_for_project(self, project_name: str, pending_only: bool = False) -> list:
        return self.store.enquiries.find_all(
            lambda e: e.project_name == project_name
            and (not pending_only or e.status == EnquiryStatus.PENDING)
        )

    def enquiries_for_respondent(self, nric: str, pending_only: bool = False) -> list:
        """Enquiries about every project this officer or manager handles."""
        return self.store.enquiries.find_all(
            lambda e: self.handles_project(nric, e.project_name)
            and (not pending_only or e.status == EnquiryStatus.PENDING)
        )

    @staticmethod
    def _reject(error) -> Result:
        logger.info("Rejected: %s", error)
        return Result.failure(error)

