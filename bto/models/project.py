"""
Project data models.

Contains the Project and FlatType dataclasses. Unit counters on FlatType
are changed only by ProjectAllocation.reserve_unit / release_unit.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .enums import FlatKind, Visibility


@dataclass
class FlatType:
    """
    One flat-type line item of a project.

    Invariant: 0 <= available_units <= total_units
    """
    project_name: str
    kind: FlatKind
    total_units: int
    available_units: int
    price: float


@dataclass
class Project:
    """
    A housing project open for applications during [start_date, end_date].

    Attributes:
        name: Unique key
        neighborhood: Location shown to applicants
        start_date: First day applications are accepted (inclusive)
        end_date: Last day applications are accepted (inclusive)
        manager_nric: NRIC of the owning manager
        officer_slots: How many officers may be assigned
        visibility: Visibility enum value
        flat_types: Ordered list of FlatType line items
        assigned_officers: NRICs of assigned officers, len <= officer_slots
    """
    name: str
    neighborhood: str
    start_date: date
    end_date: date
    manager_nric: Optional[str]
    officer_slots: int
    visibility: Visibility = Visibility.VISIBLE
    flat_types: list = field(default_factory=list)
    assigned_officers: list = field(default_factory=list)

    def flat_type(self, kind: FlatKind) -> Optional[FlatType]:
        for flat_type in self.flat_types:
            if flat_type.kind == kind:
                return flat_type
        return None

    @property
    def is_visible(self) -> bool:
        return self.visibility == Visibility.VISIBLE

    @property
    def free_officer_slots(self) -> int:
        return self.officer_slots - len(self.assigned_officers)

    def is_open(self, today: date) -> bool:
        """True when today falls inside the application period."""
        return self.start_date <= today <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        """True when [start, end] shares at least one day with this project's period."""
        return start <= self.end_date and end >= self.start_date
