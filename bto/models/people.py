"""
People and role data models.

A Person holds identity and credentials. What a person may DO is decided
by which capability records exist for their NRIC:

    ApplicantRole  - may apply for flats and submit enquiries
    OfficerRole    - may register for and administer one project
    ManagerRole    - may create and manage projects

An officer has both an OfficerRole and an ApplicantRole. Roles hold
foreign keys only (NRIC, project name); related records are looked up
through the store when needed.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import MaritalStatus


@dataclass
class SearchFilter:
    """
    A saved project search.

    Empty fields mean "no constraint". A project matches when ANY of its
    flat types falls inside the price range AND is one of the wanted kinds.
    """
    project_name: str = ""
    neighborhoods: list = field(default_factory=list)
    min_price: float = 0.0
    max_price: float = float("inf")
    flat_kinds: list = field(default_factory=list)   # List of FlatKind

    def matches(self, project) -> bool:
        if project is None:
            return False
        if self.project_name and self.project_name != project.name:
            return False
        if self.neighborhoods and project.neighborhood not in self.neighborhoods:
            return False
        for flat_type in project.flat_types:
            price_ok = self.min_price <= flat_type.price <= self.max_price
            kind_ok = not self.flat_kinds or flat_type.kind in self.flat_kinds
            if price_ok and kind_ok:
                return True
        return False


@dataclass
class Person:
    """
    Identity record shared by every role.

    Attributes:
        name: Display name, also used as the cross-reference in CSV rows
        nric: 9-character identity number, the stable key everywhere
        age: Age in years
        marital_status: MaritalStatus enum value
        password: Plain-text credential as stored in the source files
        search_filter: Last saved project search, if any
    """
    name: str
    nric: str
    age: int
    marital_status: MaritalStatus
    password: str
    search_filter: Optional[SearchFilter] = None

    def authenticate(self, password: str) -> bool:
        if self.password is None or password is None:
            return False
        return self.password == password


@dataclass
class ApplicantRole:
    nric: str


@dataclass
class OfficerRole:
    nric: str
    assigned_project: Optional[str] = None   # Project name, at most one


@dataclass
class ManagerRole:
    nric: str
