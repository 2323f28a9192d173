"""
Project Allocation Engine.

Manages the two capacity resources every project has:

OFFICER SLOTS
    project.assigned_officers may never grow past project.officer_slots.

UNIT INVENTORY
    Each FlatType's available_units stays within [0, total_units].
    reserve_unit / release_unit are the ONLY code paths that change it.

Callers hold the project's lock (see store.locking) around these calls;
nothing here blocks, a full resource fails immediately.
"""

import logging

from ..errors import CapacityExceededError, ConflictError, NotFoundError, StateConflictError
from ..models import Result
from ..store import HousingStore

logger = logging.getLogger(__name__)


class ProjectAllocation:
    """
    Officer-slot and flat-unit bookkeeping for projects.

    Usage:
        allocation = ProjectAllocation(store)
        allocation.reserve_unit(project.flat_type(FlatKind.TWO_ROOM))
        allocation.assign_officer(project, officer_role)
    """

    def __init__(self, store: HousingStore):
        self.store = store

    # =========================================================================
    # OFFICER SLOTS
    # =========================================================================

    def assign_officer(self, project, officer) -> Result:
        """
        Bind an officer to a project.

        Fails with:
            ConflictError: officer already administers a project, or holds an
                active BTO application for this same project
            CapacityExceededError: every officer slot is taken
        """
        if officer.nric in project.assigned_officers:
            return Result.failure(StateConflictError(
                f"Officer {officer.nric} is already assigned to {project.name}"
            ))
        if officer.assigned_project and officer.assigned_project != project.name:
            return Result.failure(ConflictError(
                f"Officer {officer.nric} already handles {officer.assigned_project}"
            ))
        if self.store.has_active_application_for(officer.nric, project.name):
            return Result.failure(ConflictError(
                f"Officer {officer.nric} has an active application for {project.name}"
            ))
        if len(project.assigned_officers) >= project.officer_slots:
            return Result.failure(CapacityExceededError(
                f"No officer slots left in {project.name} ({project.officer_slots} total)"
            ))

        project.assigned_officers.append(officer.nric)
        officer.assigned_project = project.name
        logger.info("Assigned officer %s to %s (%d/%d slots)",
                    officer.nric, project.name, len(project.assigned_officers), project.officer_slots)
        return Result.success(project)

    def unassign_officer(self, project, officer) -> Result:
        if officer.nric not in project.assigned_officers:
            return Result.failure(NotFoundError(
                f"Officer {officer.nric} is not assigned to {project.name}"
            ))
        project.assigned_officers.remove(officer.nric)
        if officer.assigned_project == project.name:
            officer.assigned_project = None
        logger.info("Unassigned officer %s from %s", officer.nric, project.name)
        return Result.success(project)

    # =========================================================================
    # UNIT INVENTORY
    # =========================================================================

    def reserve_unit(self, flat_type) -> Result:
        if flat_type is None:
            return Result.failure(NotFoundError("Project does not offer this flat type"))
        if flat_type.available_units <= 0:
            return Result.failure(CapacityExceededError(
                f"No {flat_type.kind.label} units left in {flat_type.project_name}"
            ))
        flat_type.available_units -= 1
        logger.debug("Reserved %s unit in %s (%d/%d left)", flat_type.kind.label,
                     flat_type.project_name, flat_type.available_units, flat_type.total_units)
        return Result.success(flat_type)

    def release_unit(self, flat_type) -> Result:
        if flat_type is None:
            return Result.failure(NotFoundError("Project does not offer this flat type"))
        if flat_type.available_units >= flat_type.total_units:
            return Result.failure(StateConflictError(
                f"All {flat_type.kind.label} units in {flat_type.project_name} are already available"
            ))
        flat_type.available_units += 1
        logger.debug("Released %s unit in %s (%d/%d left)", flat_type.kind.label,
                     flat_type.project_name, flat_type.available_units, flat_type.total_units)
        return Result.success(flat_type)

    def release_for_booking(self, booking, flat_type) -> Result:
        """
        Return a booking's unit to inventory exactly once.

        The booking's unit_released flag records that the release already
        happened; later calls succeed without touching the counter.
        """
        if booking.unit_released:
            return Result.success(flat_type)
        result = self.release_unit(flat_type)
        if result:
            booking.unit_released = True
        return result
