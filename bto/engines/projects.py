"""
Project Catalog Engine.

Manager-side project publication plus the project listings applicants
and officers browse.

MANAGER RULE
------------
A manager may not manage two projects whose application periods overlap
(both ends inclusive). Checked on create and on every date edit.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..errors import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from ..models import FlatType, Project, Result, SearchFilter, Visibility
from ..store import HousingStore, LockManager, person_key, project_key
from .eligibility import is_eligible_for_project

logger = logging.getLogger(__name__)


class ProjectCatalog:
    """
    Usage:
        catalog.create_project(manager, "Acacia Breeze", "Yishun",
                               date(2026, 2, 1), date(2026, 3, 1), officer_slots=3,
                               flat_types=[(FlatKind.TWO_ROOM, 100, 350000.0)])
    """

    def __init__(self, store: HousingStore, locks: Optional[LockManager] = None,
                 clock: Callable[[], date] = date.today):
        self.store = store
        self.locks = locks or LockManager()
        self.clock = clock

    # =========================================================================
    # MANAGER OPERATIONS
    # =========================================================================

    def create_project(self, manager, name: str, neighborhood: str, start: date, end: date,
                       officer_slots: int, flat_types: list,
                       visibility: Visibility = Visibility.VISIBLE) -> Result:
        """
        Publish a new project owned by the manager.

        Args:
            flat_types: list of (FlatKind, total_units, price) tuples, at most one per kind
        """
        name = (name or "").strip()
        with self.locks.hold(project_key(name), person_key(manager.nric)):
            if not self.store.is_manager(manager.nric):
                return self._reject(NotFoundError(f"{manager.nric} is not a manager"))

            problem = self._validate(name, start, end, officer_slots, flat_types)
            if problem is not None:
                return self._reject(problem)
            if name in self.store.projects:
                return self._reject(DuplicateKeyError(f"Project '{name}' already exists"))

            clash = self._overlapping_project(manager.nric, start, end)
            if clash is not None:
                return self._reject(ConflictError(
                    f"{manager.nric} already manages {clash.name} "
                    f"({clash.start_date} to {clash.end_date}) in that period"
                ))

            project = Project(
                name=name,
                neighborhood=neighborhood,
                start_date=start,
                end_date=end,
                manager_nric=manager.nric,
                officer_slots=officer_slots,
                visibility=visibility,
                flat_types=[
                    FlatType(project_name=name, kind=kind, total_units=units,
                             available_units=units, price=float(price))
                    for kind, units, price in flat_types
                ],
            )
            added = self.store.projects.add(project)
            if not added:
                return added

        logger.info("Project %s created by %s", name, manager.nric)
        return Result.success(project)

    def edit_project(self, project: Project, neighborhood: Optional[str] = None,
                     start: Optional[date] = None, end: Optional[date] = None,
                     prices: Optional[dict] = None) -> Result:
        """
        Change a project's details. Unit counts and the name (its key) are fixed.

        Args:
            prices: {FlatKind: new_price}
        """
        with self.locks.hold(project_key(project.name)):
            new_start = start or project.start_date
            new_end = end or project.end_date
            if new_end < new_start:
                return self._reject(ValidationError("Closing date is before opening date"))
            if project.manager_nric:
                clash = self._overlapping_project(project.manager_nric, new_start, new_end,
                                                  exclude=project.name)
                if clash is not None:
                    return self._reject(ConflictError(
                        f"New period overlaps {clash.name} managed by the same manager"
                    ))
            for kind, price in (prices or {}).items():
                if project.flat_type(kind) is None:
                    return self._reject(ValidationError(f"{project.name} has no {kind.label} flats"))
                if price < 0:
                    return self._reject(ValidationError("Price cannot be negative"))

            if neighborhood:
                project.neighborhood = neighborhood
            project.start_date = new_start
            project.end_date = new_end
            for kind, price in (prices or {}).items():
                project.flat_type(kind).price = float(price)

        logger.info("Project %s edited", project.name)
        return Result.success(project)

    def set_visibility(self, project: Project, visibility: Visibility) -> Result:
        with self.locks.hold(project_key(project.name)):
            project.visibility = visibility
        logger.info("Project %s is now %s", project.name, visibility.name)
        return Result.success(project)

    def delete_project(self, project: Project) -> Result:
        """
        Remove a project nothing refers to any more.

        Stores never cascade, so a project with applications, registrations,
        or enquiries on file is refused.
        """
        name = project.name
        with self.locks.hold(project_key(name)):
            referenced = (
                self.store.applications.find_one(lambda a: a.project_name == name)
                or self.store.officer_applications.find_one(lambda oa: oa.project_name == name)
                or self.store.enquiries.find_one(lambda e: e.project_name == name)
            )
            if referenced is not None:
                return self._reject(StateConflictError(f"Project {name} still has records referring to it"))

            for nric in list(project.assigned_officers):
                officer = self.store.officers.find_by_key(nric)
                if officer is not None and officer.assigned_project == name:
                    officer.assigned_project = None
            removed = self.store.projects.remove(name)

        if removed:
            logger.info("Project %s deleted", name)
        return removed

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find(self, name: str) -> Optional[Project]:
        return self.store.projects.find_by_key(name)

    def all_projects(self, search_filter: Optional[SearchFilter] = None) -> list:
        return self.store.projects.find_all(
            lambda p: search_filter is None or search_filter.matches(p)
        )

    def managed_projects(self, manager_nric: str) -> list:
        return self.store.projects.find_all(lambda p: p.manager_nric == manager_nric)

    def viewable_projects(self, person, search_filter: Optional[SearchFilter] = None) -> list:
        """
        Projects a person may browse, in catalog order.

        - visible, open today, and eligible for at least one flat type
        - any project they hold a PENDING/SUCCESSFUL/BOOKED application for,
          even after it is hidden
        - an officer's own project
        """
        today = self.clock()
        applied = {a.project_name for a in self.store.applications.find_all(
            lambda a: a.applicant_nric == person.nric and a.is_active
        )}
        officer = self.store.officers.find_by_key(person.nric)
        own = officer.assigned_project if officer else None

        def viewable(project):
            if project.name in applied or project.name == own:
                return True
            return project.is_visible and project.is_open(today) and is_eligible_for_project(person, project)

        projects = self.store.projects.find_all(viewable)
        if search_filter is not None:
            projects = [p for p in projects if search_filter.matches(p)]
        return projects

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _overlapping_project(self, manager_nric: str, start: date, end: date,
                             exclude: Optional[str] = None) -> Optional[Project]:
        return self.store.projects.find_one(
            lambda p: p.manager_nric == manager_nric and p.name != exclude and p.overlaps(start, end)
        )

    @staticmethod
    def _validate(name, start, end, officer_slots, flat_types) -> Optional[ValidationError]:
        if not name:
            return ValidationError("Project name is required")
        if start is None or end is None:
            return ValidationError("Opening and closing dates are required")
        if end < start:
            return ValidationError("Closing date is before opening date")
        if officer_slots < 0:
            return ValidationError("Officer slots cannot be negative")
        if not flat_types:
            return ValidationError("A project needs at least one flat type")
        kinds = [kind for kind, _, _ in flat_types]
        if len(kinds) != len(set(kinds)):
            return ValidationError("Each flat type may only be listed once")
        for kind, units, price in flat_types:
            if units < 0 or price < 0:
                return ValidationError(f"{kind.label}: units and price cannot be negative")
        return None

    @staticmethod
    def _reject(error) -> Result:
        logger.info("Rejected: %s", error)
        return Result.failure(error)
