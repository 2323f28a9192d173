"""
CSV loading.

Reads the nine record files into a fresh HousingSystem. Rows refer to
each other by display name or ID; every reference is resolved against
the store as it fills, so files load in dependency order:

    people -> projects -> applications -> officer applications
           -> bookings -> receipts -> enquiries
"""

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from ..config import (
    APPLICANT_FILE,
    BOOKING_FILE,
    BTO_APPLICATION_FILE,
    DATA_DIR,
    DEFAULT_PASSWORD,
    ENQUIRY_FILE,
    MANAGER_FILE,
    OFFICER_APPLICATION_FILE,
    OFFICER_FILE,
    PROJECT_FILE,
    RECEIPT_FILE,
)
from ..errors import CorruptRecordError, PersistenceError, ValidationError
from ..housing import HousingSystem
from ..models import (
    ApplicationStatus,
    Booking,
    BookingStatus,
    BTOApplication,
    Enquiry,
    EnquiryStatus,
    FlatType,
    OfficerApplication,
    OfficerApplicationStatus,
    Person,
    Project,
    Receipt,
    Visibility,
    WithdrawalStatus,
)
from .validation import (
    parse_date,
    parse_enum,
    parse_flat_kind,
    parse_int,
    parse_marital_status,
    parse_nric,
    parse_optional_date,
    parse_price,
)

logger = logging.getLogger(__name__)

# Minimum column counts per file
_PERSON_COLUMNS = 5
_PROJECT_COLUMNS = 12
_APPLICATION_COLUMNS = 7
_OFFICER_APPLICATION_COLUMNS = 5
_BOOKING_COLUMNS = 6
_RECEIPT_COLUMNS = 3
_ENQUIRY_COLUMNS = 9


class DataLoader:
    """
    Loads and caches the raw rows of every record file.

    WHY LAZY LOADING: `rows()` only reads a file the first time it is
    asked for, so a caller that needs only the people files (e.g. a
    login check) never parses projects or enquiries.

    MISSING FILES: an absent file loads as empty. A fresh data directory
    is a valid, empty system.

    Usage:
        system = DataLoader("data").load()
        system.accounts.authenticate("S1234567A", "password")
    """

    def __init__(self, data_dir=None, clock: Optional[Callable[[], date]] = None):
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR
        self.clock = clock
        self._rows_cache = {}   # Keyed by file name

    def rows(self, filename: str) -> list:
        """
        Data rows of one file as (line_number, [cells]), header skipped.

        Blank lines are ignored; quoted cells (the officer list) are
        handled by the csv module.
        """
        if filename not in self._rows_cache:
            path = self.data_dir / filename
            if not path.exists():
                logger.warning("%s not found, treating as empty", path)
                self._rows_cache[filename] = []
            else:
                try:
                    with open(path, "r", newline="", encoding="utf-8-sig") as f:
                        reader = csv.reader(f)
                        next(reader, None)
                        self._rows_cache[filename] = [
                            (reader.line_num, [cell.strip() for cell in row])
                            for row in reader
                            if any(cell.strip() for cell in row)
                        ]
                except (OSError, csv.Error) as e:
                    raise PersistenceError(f"Cannot read {path}: {e}") from e
        return self._rows_cache[filename]

    def load(self) -> HousingSystem:
        """Build a populated HousingSystem from the data directory."""
        system = HousingSystem(clock=self.clock)
        self._load_people(system)
        self._load_projects(system)
        self._load_applications(system)
        self._load_officer_applications(system)
        self._load_bookings(system)
        self._load_receipts(system)
        self._load_enquiries(system)
        logger.info("Loaded %s from %s", system.summary(), self.data_dir)
        return system

    # =========================================================================
    # PEOPLE
    # =========================================================================

    def _load_people(self, system: HousingSystem):
        for filename, roles in (
            (APPLICANT_FILE, {"applicant": True}),
            (OFFICER_FILE, {"officer": True}),
            (MANAGER_FILE, {"manager": True}),
        ):
            for line, row in self._checked_rows(filename, _PERSON_COLUMNS):
                with _row_context(filename, line):
                    nric = parse_nric(row[1])
                    person = Person(
                        name=row[0],
                        nric=nric,
                        age=parse_int(row[2], "Age"),
                        marital_status=parse_marital_status(row[3]),
                        password=row[4] or DEFAULT_PASSWORD,
                    )
                    existing = system.store.people.find_by_key(nric)
                    if existing is not None and existing.name != person.name:
                        raise ValidationError(f"NRIC {nric} already belongs to {existing.name}")
                    system.register_person(person, **roles)

    # =========================================================================
    # PROJECTS
    # =========================================================================

    def _load_projects(self, system: HousingSystem):
        """
        Project row layout:
            Name, Neighborhood, Type1, Units1, Price1, Type2, Units2, Price2,
            Start, End, ManagerName, OfficerSlots, "Officer1,Officer2"[, Visibility]
        """
        store = system.store
        for line, row in self._checked_rows(PROJECT_FILE, _PROJECT_COLUMNS):
            with _row_context(PROJECT_FILE, line):
                name = row[0]
                flat_types = []
                for offset in (2, 5):
                    if not row[offset] or not row[offset + 1]:
                        continue
                    units = parse_int(row[offset + 1], "Units")
                    flat_types.append(FlatType(
                        project_name=name,
                        kind=parse_flat_kind(row[offset]),
                        total_units=units,
                        available_units=units,
                        price=parse_price(row[offset + 2] or "0", "Price"),
                    ))

                manager = self._person_with_role(system, row[10], store.is_manager, "manager")
                visibility = Visibility.VISIBLE
                if len(row) > 13 and row[13]:
                    visibility = parse_enum(Visibility, row[13])

                project = Project(
                    name=name,
                    neighborhood=row[1],
                    start_date=parse_date(row[8]),
                    end_date=parse_date(row[9]),
                    manager_nric=manager.nric,
                    officer_slots=parse_int(row[11], "Officer slots"),
                    visibility=visibility,
                    flat_types=flat_types,
                )
                self._add(store.projects, project)

                officer_names = row[12] if len(row) > 12 else ""
                for officer_name in (n.strip() for n in officer_names.split(",")):
                    if not officer_name:
                        continue
                    person = self._person_with_role(system, officer_name, store.is_officer, "officer")
                    assigned = system.allocation.assign_officer(project, store.officers.find_by_key(person.nric))
                    if not assigned:
                        raise ValidationError(assigned.error.message)

    # =========================================================================
    # LIFECYCLE RECORDS
    # =========================================================================

    def _load_applications(self, system: HousingSystem):
        """BOOKED applications take their unit out of the project's inventory."""
        store = system.store
        for line, row in self._checked_rows(BTO_APPLICATION_FILE, _APPLICATION_COLUMNS):
            with _row_context(BTO_APPLICATION_FILE, line):
                applicant = self._person_with_role(system, row[2], store.is_applicant, "applicant")
                project = self._project(system, row[3])
                application = BTOApplication(
                    id=row[0],
                    applicant_nric=applicant.nric,
                    project_name=project.name,
                    flat_kind=parse_flat_kind(row[4]),
                    submitted_on=parse_date(row[1]),
                    status=parse_enum(ApplicationStatus, row[5]),
                    withdrawal_status=parse_enum(WithdrawalStatus, row[6] or "NA"),
                )
                if application.status == ApplicationStatus.BOOKED:
                    reserved = system.allocation.reserve_unit(project.flat_type(application.flat_kind))
                    if not reserved:
                        raise ValidationError(reserved.error.message)
                self._add(store.applications, application)

    def _load_officer_applications(self, system: HousingSystem):
        store = system.store
        for line, row in self._checked_rows(OFFICER_APPLICATION_FILE, _OFFICER_APPLICATION_COLUMNS):
            with _row_context(OFFICER_APPLICATION_FILE, line):
                officer = self._person_with_role(system, row[2], store.is_officer, "officer")
                project = self._project(system, row[3])
                self._add(store.officer_applications, OfficerApplication(
                    id=row[0],
                    officer_nric=officer.nric,
                    project_name=project.name,
                    submitted_on=parse_date(row[1]),
                    status=parse_enum(OfficerApplicationStatus, row[4]),
                ))

    def _load_bookings(self, system: HousingSystem):
        """CANCELLED bookings already gave their unit back."""
        store = system.store
        for line, row in self._checked_rows(BOOKING_FILE, _BOOKING_COLUMNS):
            with _row_context(BOOKING_FILE, line):
                application = store.applications.find_by_key(row[2])
                if application is None:
                    raise ValidationError(f"Unknown application '{row[2]}'")
                officer_nric = None
                if row[3]:
                    officer_nric = self._person_with_role(system, row[3], store.is_officer, "officer").nric
                status = parse_enum(BookingStatus, row[5])
                self._add(store.bookings, Booking(
                    id=row[0],
                    application_id=application.id,
                    officer_nric=officer_nric,
                    flat_kind=parse_flat_kind(row[4]),
                    booked_on=parse_date(row[1]),
                    status=status,
                    unit_released=status == BookingStatus.CANCELLED,
                ))

    def _load_receipts(self, system: HousingSystem):
        store = system.store
        for line, row in self._checked_rows(RECEIPT_FILE, _RECEIPT_COLUMNS):
            with _row_context(RECEIPT_FILE, line):
                booking = store.live_booking_for(row[2]) or store.bookings.find_one(
                    lambda b: b.application_id == row[2]
                )
                if booking is None:
                    raise ValidationError(f"No booking for application '{row[2]}'")
                self._add(store.receipts, Receipt(
                    number=row[0],
                    booking_id=booking.id,
                    application_id=row[2],
                    issued_on=parse_date(row[1]),
                ))

    def _load_enquiries(self, system: HousingSystem):
        store = system.store
        for line, row in self._checked_rows(ENQUIRY_FILE, _ENQUIRY_COLUMNS):
            with _row_context(ENQUIRY_FILE, line):
                submitter = self._person_with_role(system, row[5], store.is_applicant, "applicant")
                project = self._project(system, row[6])
                respondent_nric = None
                if row[8] and row[8].lower() != "null":
                    respondent = store.person_by_name(row[8])
                    if respondent is None:
                        raise ValidationError(f"Unknown respondent '{row[8]}'")
                    respondent_nric = respondent.nric
                self._add(store.enquiries, Enquiry(
                    id=row[0],
                    submitter_nric=submitter.nric,
                    project_name=project.name,
                    content=row[2],
                    submitted_on=parse_date(row[1]),
                    status=parse_enum(EnquiryStatus, row[7]),
                    reply=row[3] or None,
                    reply_date=parse_optional_date(row[4]),
                    respondent_nric=respondent_nric,
                ))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _checked_rows(self, filename: str, min_columns: int):
        for line, row in self.rows(filename):
            if len(row) < min_columns:
                logger.error("%s:%d has %d columns, expected %d", filename, line, len(row), min_columns)
                raise CorruptRecordError(
                    f"expected at least {min_columns} columns, got {len(row)}", filename, line
                )
            yield line, row

    @staticmethod
    def _person_with_role(system: HousingSystem, name: str, has_role, role_name: str) -> Person:
        # Names are not unique keys; prefer the person who holds the role
        person = system.store.people.find_one(lambda p: p.name == name and has_role(p.nric))
        if person is None:
            raise ValidationError(f"Unknown {role_name} '{name}'")
        return person

    @staticmethod
    def _project(system: HousingSystem, name: str) -> Project:
        project = system.store.projects.find_by_key(name)
        if project is None:
            raise ValidationError(f"Unknown project '{name}'")
        return project

    @staticmethod
    def _add(entity_store, entity):
        added = entity_store.add(entity)
        if not added:
            raise ValidationError(added.error.message)


class _row_context:
    """Re-raise a row's ValidationError as CorruptRecordError with its position."""

    def __init__(self, filename: str, line: int):
        self.filename = filename
        self.line = line

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None and issubclass(exc_type, ValidationError):
            logger.error("%s:%d: %s", self.filename, self.line, exc.message)
            raise CorruptRecordError(exc.message, self.filename, self.line) from exc
        return False
