from bto import ApplicationStatus, FlatKind, MaritalStatus, ReportCriteria


def _book(system, person, project, kind):
    application = system.applications.submit(person, project, kind).unwrap()
    system.applications.decide(application, ApplicationStatus.SUCCESSFUL).unwrap()
    system.applications.book(application).unwrap()
    return application


def test_default_report_lists_booked_only(system, john, sarah, acacia):
    booked = _book(system, sarah, acacia, FlatKind.THREE_ROOM)
    system.applications.submit(john, acacia, FlatKind.TWO_ROOM).unwrap()

    rows = system.reports.applicant_report()
    assert len(rows) == 1
    row = rows[0]
    assert row.application_id == booked.id
    assert row.name == "Sarah"
    assert row.age == 40
    assert row.marital_status == MaritalStatus.MARRIED
    assert row.neighborhood == "Yishun"
    assert row.flat_kind == FlatKind.THREE_ROOM
    assert row.status == ApplicationStatus.BOOKED


def test_report_filters(system, john, sarah, acacia):
    _book(system, sarah, acacia, FlatKind.THREE_ROOM)
    _book(system, john, acacia, FlatKind.TWO_ROOM)

    singles = system.reports.applicant_report(ReportCriteria(marital_statuses=[MaritalStatus.SINGLE]))
    assert [r.name for r in singles] == ["John"]

    three_room = system.reports.applicant_report(ReportCriteria(flat_kinds=[FlatKind.THREE_ROOM]))
    assert [r.name for r in three_room] == ["Sarah"]

    by_age = system.reports.applicant_report(ReportCriteria(ages=[35]))
    assert [r.name for r in by_age] == ["John"]

    elsewhere = system.reports.applicant_report(ReportCriteria(project_name="Bayshore Vista"))
    assert elsewhere == []


def test_report_any_status(system, john, acacia):
    system.applications.submit(john, acacia, FlatKind.TWO_ROOM).unwrap()
    rows = system.reports.applicant_report(ReportCriteria(statuses=[]))
    assert [r.status for r in rows] == [ApplicationStatus.PENDING]
