"""
Officer Assignment Lifecycle Engine.

State machine for OfficerApplication (an officer's registration to
administer a project):

    PENDING ──decide(APPROVED)──▶ APPROVED   (officer bound to the project)
       └─────decide(REJECTED)──▶ REJECTED

Approval goes through ProjectAllocation.assign_officer, so slot capacity
and the officer-vs-applicant conflict are checked at that moment.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..config import OFFICER_APPLICATION_ID_PREFIX
from ..errors import ConflictError, NotFoundError, StateConflictError, ValidationError
from ..models import OfficerApplication, OfficerApplicationStatus, Result
from ..store import HousingStore, LockManager, person_key, project_key
from .allocation import ProjectAllocation
from .identifiers import generate_id

logger = logging.getLogger(__name__)

_DECISIONS = (OfficerApplicationStatus.APPROVED, OfficerApplicationStatus.REJECTED)


class OfficerAssignmentLifecycle:
    """Registers officers for projects and applies the manager's decision."""

    def __init__(self, store: HousingStore, allocation: ProjectAllocation,
                 locks: Optional[LockManager] = None, clock: Callable[[], date] = date.today):
        self.store = store
        self.allocation = allocation
        self.locks = locks or LockManager()
        self.clock = clock

    def submit(self, officer, project) -> Result:
        """
        Register an officer for a project.

        Fails with:
            NotFoundError: no officer role for this NRIC
            StateConflictError: a registration is already PENDING, or the
                officer already administers a project
            ConflictError: the officer has an active BTO application for this project
        """
        nric = officer.nric
        with self.locks.hold(project_key(project.name), person_key(nric)):
            role = self.store.officers.find_by_key(nric)
            if role is None:
                return self._reject(NotFoundError(f"{nric} is not an officer"))

            pending = self.store.officer_applications.find_one(
                lambda oa: oa.officer_nric == nric and oa.is_pending
            )
            if pending is not None:
                return self._reject(StateConflictError(
                    f"Officer {nric} already has a pending registration for {pending.project_name}"
                ))
            if role.assigned_project:
                return self._reject(StateConflictError(
                    f"Officer {nric} already handles {role.assigned_project}"
                ))
            if self.store.has_active_application_for(nric, project.name):
                return self._reject(ConflictError(
                    f"Officer {nric} has an active application for {project.name}"
                ))

            registration = OfficerApplication(
                id=generate_id(OFFICER_APPLICATION_ID_PREFIX),
                officer_nric=nric,
                project_name=project.name,
                submitted_on=self.clock(),
            )
            added = self.store.officer_applications.add(registration)
            if not added:
                return added

        logger.info("Officer registration %s submitted by %s for %s", registration.id, nric, project.name)
        return Result.success(registration)

    def decide(self, registration: OfficerApplication, outcome: OfficerApplicationStatus) -> Result:
        """
        Approve or reject a PENDING registration.

        When approval cannot be honoured (slots full, role conflict) the
        registration stays PENDING and the allocation error is returned.
        """
        if outcome not in _DECISIONS:
            return self._reject(ValidationError(f"{outcome} is not a valid decision"))

        with self.locks.hold(project_key(registration.project_name), person_key(registration.officer_nric)):
            if not registration.is_pending:
                return self._reject(StateConflictError(
                    f"Registration {registration.id} is {registration.status.name}, not PENDING"
                ))

            if outcome == OfficerApplicationStatus.APPROVED:
                project = self.store.projects.find_by_key(registration.project_name)
                role = self.store.officers.find_by_key(registration.officer_nric)
                if project is None or role is None:
                    return self._reject(NotFoundError(
                        f"Registration {registration.id} refers to a missing project or officer"
                    ))
                assigned = self.allocation.assign_officer(project, role)
                if not assigned:
                    return self._reject(assigned.error)

            registration.status = outcome

        logger.info("Officer registration %s %s", registration.id, outcome.name)
        return Result.success(registration)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find(self, registration_id: str) -> Optional[OfficerApplication]:
        return self.store.officer_applications.find_by_key(registration_id)

    def applications_for_officer(self, nric: str) -> list:
        return self.store.officer_applications.find_all(lambda oa: oa.officer_nric == nric)

    def applications_for_project(self, project_name: str, pending_only: bool = False) -> list:
        return self.store.officer_applications.find_all(
            lambda oa: oa.project_name == project_name and (oa.is_pending or not pending_only)
        )

    def registrable_projects(self, officer) -> list:
        """Visible projects with a free slot that the officer could register for right now."""
        role = self.store.officers.find_by_key(officer.nric)
        if role is None or role.assigned_project:
            return []
        return self.store.projects.find_all(
            lambda p: p.is_visible
            and p.free_officer_slots > 0
            and not self.store.has_active_application_for(officer.nric, p.name)
        )

    @staticmethod
    def _reject(error) -> Result:
        logger.info("Rejected: %s", error)
        return Result.failure(error)
