import shutil
from datetime import date
from pathlib import Path

import pytest

from bto import (
    ApplicationStatus,
    BookingStatus,
    CorruptRecordError,
    DataLoader,
    DataWriter,
    EnquiryStatus,
    FlatKind,
    OfficerApplicationStatus,
    PersistenceError,
    Visibility,
)
from bto.config import APPLICANT_FILE, BOOKING_FILE, BTO_APPLICATION_FILE, PROJECT_FILE

SAMPLE_DIR = Path(__file__).parent.parent / "data"
SAMPLE_TODAY = date(2026, 10, 18)


@pytest.fixture
def sample_dir(tmp_path):
    target = tmp_path / "sample"
    shutil.copytree(SAMPLE_DIR, target)
    return target


@pytest.fixture
def loaded(sample_dir):
    return DataLoader(sample_dir, clock=lambda: SAMPLE_TODAY).load()


def test_sample_data_loads(loaded):
    store = loaded.store
    assert loaded.summary() == {
        "people": 10,
        "projects": 2,
        "applications": 2,
        "officer_applications": 2,
        "bookings": 1,
        "receipts": 1,
        "enquiries": 2,
    }

    acacia = store.projects.find_by_key("Acacia Breeze")
    assert acacia.manager_nric == store.person_by_name("Jessica").nric
    assert acacia.start_date == date(2026, 10, 1)
    assert acacia.visibility == Visibility.VISIBLE
    # One 3-Room unit is held by Sarah's BOOKED application
    assert acacia.flat_type(FlatKind.THREE_ROOM).available_units == 2
    assert acacia.flat_type(FlatKind.TWO_ROOM).available_units == 2

    daniel = store.person_by_name("Daniel")
    assert acacia.assigned_officers == [daniel.nric]
    assert store.officers.find_by_key(daniel.nric).assigned_project == "Acacia Breeze"
    assert store.is_applicant(daniel.nric)

    bayshore = store.projects.find_by_key("Bayshore Vista")
    assert bayshore.flat_type(FlatKind.THREE_ROOM) is None
    assert bayshore.assigned_officers == []


def test_sample_records_are_linked(loaded):
    store = loaded.store
    sarah = store.person_by_name("Sarah")
    application = store.active_application(sarah.nric)
    assert application.status == ApplicationStatus.BOOKED

    booking = loaded.bookings.booking_for(application)
    assert booking.status == BookingStatus.CONFIRMED
    assert not booking.unit_released
    assert loaded.bookings.receipt_for(booking).number == "RCP-000000000001"

    registration = store.officer_applications.find_by_key("OFF-APP-000000000002")
    assert registration.status == OfficerApplicationStatus.PENDING

    replied = store.enquiries.find_by_key("ENQ-000000000001")
    assert replied.status == EnquiryStatus.REPLIED
    assert replied.respondent_nric == store.person_by_name("Daniel").nric
    pending = store.enquiries.find_by_key("ENQ-000000000002")
    assert pending.reply is None
    assert pending.reply_date is None


def test_loaded_system_is_usable(loaded):
    store = loaded.store
    jessica = store.person_by_name("Jessica")
    john_app = store.active_application(store.person_by_name("John").nric)
    assert loaded.applications.decide(john_app, ApplicationStatus.SUCCESSFUL)
    assert loaded.accounts.authenticate(jessica.nric, "password")


def test_round_trip(loaded, tmp_path):
    out = tmp_path / "out"
    loaded.projects.set_visibility(loaded.projects.find("Bayshore Vista"), Visibility.HIDDEN)
    DataWriter(out).save(loaded)

    reloaded = DataLoader(out, clock=lambda: SAMPLE_TODAY).load()
    assert reloaded.summary() == loaded.summary()
    assert reloaded.projects.find("Bayshore Vista").visibility == Visibility.HIDDEN
    acacia = reloaded.projects.find("Acacia Breeze")
    assert acacia.flat_type(FlatKind.THREE_ROOM).available_units == 2
    assert acacia.flat_type(FlatKind.THREE_ROOM).price == 450000.0
    assert reloaded.accounts.roles_of(reloaded.store.person_by_name("Daniel").nric) == {"applicant", "officer"}
    assert not list(out.glob(".*"))


def test_cancelled_booking_marked_released(loaded, tmp_path):
    booking = loaded.store.bookings.find_by_key("BOOK-000000000001")
    loaded.bookings.cancel_booking(booking).unwrap()
    DataWriter(tmp_path).save(loaded)

    reloaded = DataLoader(tmp_path).load()
    reloaded_booking = reloaded.store.bookings.find_by_key("BOOK-000000000001")
    assert reloaded_booking.status == BookingStatus.CANCELLED
    assert reloaded_booking.unit_released


def test_failed_save_leaves_previous_files(loaded, sample_dir, monkeypatch):
    before = {path.name: path.read_text() for path in sample_dir.iterdir()}
    john_app = loaded.store.active_application(loaded.store.person_by_name("John").nric)
    loaded.applications.decide(john_app, ApplicationStatus.SUCCESSFUL).unwrap()
    loaded.applications.book(john_app).unwrap()

    write_temp = DataWriter._write_temp

    def failing_write_temp(self, filename, header, rows):
        if filename == BOOKING_FILE:
            raise PersistenceError("disk full")
        return write_temp(self, filename, header, rows)

    monkeypatch.setattr(DataWriter, "_write_temp", failing_write_temp)
    with pytest.raises(PersistenceError):
        DataWriter(sample_dir).save(loaded)

    after = {path.name: path.read_text() for path in sample_dir.iterdir()}
    assert after == before

    reloaded = DataLoader(sample_dir, clock=lambda: SAMPLE_TODAY).load()
    reloaded_app = reloaded.store.applications.find_by_key(john_app.id)
    assert reloaded_app.status == ApplicationStatus.PENDING


def test_missing_directory_loads_empty(tmp_path):
    system = DataLoader(tmp_path / "nothing").load()
    assert all(count == 0 for count in system.summary().values())


class TestCorruptRecords:
    def test_bad_nric(self, sample_dir):
        path = sample_dir / APPLICANT_FILE
        path.write_text(path.read_text() + "Ghost,BADNRIC,30,Single,password\n")
        with pytest.raises(CorruptRecordError) as info:
            DataLoader(sample_dir).load()
        assert info.value.source == APPLICANT_FILE
        assert info.value.line == 7

    def test_unknown_project_reference(self, sample_dir):
        path = sample_dir / BTO_APPLICATION_FILE
        path.write_text(path.read_text() + "BTO-APP-X,2026-10-06,Grace,Nowhere,2-Room,PENDING,NA\n")
        with pytest.raises(CorruptRecordError, match="Nowhere"):
            DataLoader(sample_dir).load()

    def test_more_bookings_than_units(self, sample_dir):
        path = sample_dir / BTO_APPLICATION_FILE
        path.write_text(path.read_text() + "BTO-APP-B,2026-10-06,James,Acacia Breeze,3-Room,BOOKED,NA\n")
        project_path = sample_dir / PROJECT_FILE
        project_path.write_text(project_path.read_text().replace("3-Room,3,450000.0", "3-Room,1,450000.0"))
        with pytest.raises(CorruptRecordError):
            DataLoader(sample_dir).load()

    def test_short_row(self, sample_dir):
        path = sample_dir / PROJECT_FILE
        path.write_text(path.read_text() + "Broken,Row\n")
        with pytest.raises(CorruptRecordError):
            DataLoader(sample_dir).load()
