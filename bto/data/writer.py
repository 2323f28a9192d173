"""
CSV saving.

Writes every store back to the same nine files DataLoader reads. All
nine are staged as temporary siblings first and moved into place only
once every one of them has been written; a failed save leaves the
previous files untouched.
"""

import csv
import logging
import os
import tempfile
from pathlib import Path

from ..config import (
    APPLICANT_FILE,
    BOOKING_FILE,
    BTO_APPLICATION_FILE,
    DATA_DIR,
    ENQUIRY_FILE,
    MANAGER_FILE,
    OFFICER_APPLICATION_FILE,
    OFFICER_FILE,
    PROJECT_FILE,
    RECEIPT_FILE,
)
from ..errors import PersistenceError
from ..housing import HousingSystem
from ..models import FlatKind
from .validation import format_date, format_flat_kind

logger = logging.getLogger(__name__)

PERSON_HEADER = ["Name", "NRIC", "Age", "Marital Status", "Password"]
PROJECT_HEADER = [
    "Project Name", "Neighborhood",
    "Type 1", "Number of units for Type 1", "Selling price for Type 1",
    "Type 2", "Number of units for Type 2", "Selling price for Type 2",
    "Application opening date", "Application closing date",
    "Manager", "Officer Slot", "Officer", "Visibility",
]
APPLICATION_HEADER = ["ID", "Date", "Applicant", "Project", "Flat Type", "Status", "Withdrawal Status"]
OFFICER_APPLICATION_HEADER = ["ID", "Date", "Officer", "Project", "Status"]
BOOKING_HEADER = ["ID", "Date", "Application ID", "Officer", "Flat Type", "Status"]
RECEIPT_HEADER = ["Receipt Number", "Date", "Application ID"]
ENQUIRY_HEADER = [
    "ID", "Date", "Content", "Reply", "Reply Date",
    "Submitted By", "Project", "Status", "Respondent",
]


class DataWriter:
    """
    Usage:
        DataWriter("data").save(system)
    """

    def __init__(self, data_dir=None):
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR

    def save(self, system: HousingSystem):
        """
        Write all record files.

        Raises:
            PersistenceError: the directory or a file cannot be written
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create {self.data_dir}: {e}") from e

        staged = []
        try:
            for filename, header, rows in _tables(system):
                staged.append((self._write_temp(filename, header, rows), self.data_dir / filename))
            for temp_name, target in staged:
                os.replace(temp_name, target)
        except OSError as e:
            raise PersistenceError(f"Cannot save to {self.data_dir}: {e}") from e
        finally:
            _discard(temp_name for temp_name, _ in staged)
        logger.info("Saved %s to %s", system.summary(), self.data_dir)

    def _write_temp(self, filename: str, header: list, rows: list) -> str:
        """Write one file next to its target and return the temporary path."""
        fd, temp_name = tempfile.mkstemp(prefix=f".{filename}.", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(header)
                writer.writerows(rows)
        except OSError:
            _discard([temp_name])
            raise
        logger.debug("Staged %d rows for %s", len(rows), filename)
        return temp_name


def _discard(temp_names):
    """Remove staged files that were never moved into place."""
    for temp_name in temp_names:
        if os.path.exists(temp_name):
            os.remove(temp_name)


def _tables(system: HousingSystem) -> list:
    """(filename, header, rows) for every record file, in load order."""
    store = system.store
    name_of = _NameLookup(system)
    return [
        (APPLICANT_FILE, PERSON_HEADER, [
            _person_row(p) for p in store.people
            if store.is_applicant(p.nric) and not store.is_officer(p.nric)
        ]),
        (OFFICER_FILE, PERSON_HEADER, [
            _person_row(p) for p in store.people if store.is_officer(p.nric)
        ]),
        (MANAGER_FILE, PERSON_HEADER, [
            _person_row(p) for p in store.people if store.is_manager(p.nric)
        ]),
        (PROJECT_FILE, PROJECT_HEADER, [
            _project_row(project, name_of) for project in store.projects
        ]),
        (BTO_APPLICATION_FILE, APPLICATION_HEADER, [
            [a.id, format_date(a.submitted_on), name_of(a.applicant_nric), a.project_name,
             format_flat_kind(a.flat_kind), a.status.name, a.withdrawal_status.name]
            for a in store.applications
        ]),
        (OFFICER_APPLICATION_FILE, OFFICER_APPLICATION_HEADER, [
            [oa.id, format_date(oa.submitted_on), name_of(oa.officer_nric), oa.project_name, oa.status.name]
            for oa in store.officer_applications
        ]),
        (BOOKING_FILE, BOOKING_HEADER, [
            [b.id, format_date(b.booked_on), b.application_id, name_of(b.officer_nric),
             format_flat_kind(b.flat_kind), b.status.name]
            for b in store.bookings
        ]),
        (RECEIPT_FILE, RECEIPT_HEADER, [
            [r.number, format_date(r.issued_on), r.application_id]
            for r in store.receipts
        ]),
        (ENQUIRY_FILE, ENQUIRY_HEADER, [
            [e.id, format_date(e.submitted_on), e.content, e.reply or "", format_date(e.reply_date),
             name_of(e.submitter_nric), e.project_name, e.status.name, name_of(e.respondent_nric)]
            for e in store.enquiries
        ]),
    ]


class _NameLookup:
    """NRIC -> display name, blank for no one."""

    def __init__(self, system: HousingSystem):
        self.people = system.store.people

    def __call__(self, nric) -> str:
        if not nric:
            return ""
        person = self.people.find_by_key(nric)
        return person.name if person else ""


def _person_row(person) -> list:
    return [person.name, person.nric, person.age, person.marital_status.label, person.password]


def _project_row(project, name_of) -> list:
    row = [project.name, project.neighborhood]
    for kind in (FlatKind.TWO_ROOM, FlatKind.THREE_ROOM):
        flat_type = project.flat_type(kind)
        if flat_type is None:
            row.extend(["", "", ""])
        else:
            row.extend([format_flat_kind(kind), flat_type.total_units, flat_type.price])
    row.extend([
        format_date(project.start_date),
        format_date(project.end_date),
        name_of(project.manager_nric),
        project.officer_slots,
        ",".join(name_of(nric) for nric in project.assigned_officers),
        project.visibility.name,
    ])
    return row
