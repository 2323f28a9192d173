"""
Command-Line Interface for the BTO Housing System.

This module provides the interactive console. It handles user input and
hands every decision to the engines on a HousingSystem; results are
shown through TerminalDisplay.

MENUS:
------
1. APPLICANT: browse projects, apply, withdraw, enquiries
2. OFFICER: everything an applicant can do, plus project registration,
   flat booking and replying to enquiries for the handled project
3. MANAGER: project publication, approvals, withdrawals, reports

NOTE: Don't run this file directly. Run from the repository root:
    python3 -m bto --data-dir data
"""

import logging

import click

from .config import DATA_DIR, configure_logging
from .data import DataLoader, DataWriter
from .data.validation import parse_date, parse_flat_kind
from .engines import ROLE_MANAGER, ROLE_OFFICER
from .errors import HousingError, PersistenceError
from .housing import HousingSystem
from .models import (
    ApplicationStatus,
    BookingStatus,
    FlatKind,
    MaritalStatus,
    OfficerApplicationStatus,
    ReportCriteria,
    SearchFilter,
    Visibility,
)
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


# =============================================================================
# INPUT HELPERS
# =============================================================================

def _choose(items: list, label: str):
    """Pick one item by its 1-based number; None when cancelled."""
    if not items:
        return None
    choice = click.prompt(f"  {label} number (0 to cancel)", type=click.IntRange(0, len(items)), default=0)
    return items[choice - 1] if choice else None


def _menu(title: str, options: list) -> str:
    TerminalDisplay.print_menu(title, options)
    keys = [key for key, _ in options]
    return click.prompt("  Select", type=click.Choice(keys), show_choices=False)


def _names(system: HousingSystem) -> dict:
    return {p.nric: p.name for p in system.store.people}


def _prompt_flat_kind(kinds: list) -> FlatKind:
    labels = [kind.label for kind in kinds]
    return parse_flat_kind(click.prompt("  Flat type", type=click.Choice(labels)))


def _prompt_date(label: str, default=None):
    while True:
        text = click.prompt(f"  {label} (YYYY-MM-DD)", default=str(default) if default else None)
        try:
            return parse_date(text)
        except HousingError as e:
            TerminalDisplay.print_error(e)


# =============================================================================
# SHARED ACTIONS
# =============================================================================

def _browse_projects(system: HousingSystem, person):
    projects = system.projects.viewable_projects(person, person.search_filter)
    if person.search_filter is not None:
        TerminalDisplay.print_info("Using your saved filter.")
    TerminalDisplay.print_projects(projects, system.clock())
    return projects


def _set_filter(person):
    neighborhoods = click.prompt("  Neighborhoods (comma separated, blank for any)", default="", show_default=False)
    min_price = click.prompt("  Minimum price", type=float, default=0.0)
    max_price = click.prompt("  Maximum price (0 for no limit)", type=float, default=0.0)
    kinds = click.prompt("  Flat type (2-Room / 3-Room, blank for any)", default="", show_default=False)
    person.search_filter = SearchFilter(
        neighborhoods=[n.strip() for n in neighborhoods.split(",") if n.strip()],
        min_price=min_price,
        max_price=max_price or float("inf"),
        flat_kinds=[parse_flat_kind(kinds)] if kinds.strip() else [],
    )
    TerminalDisplay.print_success("Filter saved")


def _change_password(system: HousingSystem, person) -> bool:
    old = click.prompt("  Current password", hide_input=True)
    new = click.prompt("  New password", hide_input=True, confirmation_prompt=True)
    return TerminalDisplay.print_result(system.accounts.change_password(person, old, new),
                                        "Password changed, please log in again")


def _manage_own_enquiries(system: HousingSystem, person):
    enquiries = system.enquiries.enquiries_by(person.nric)
    TerminalDisplay.print_enquiries(enquiries, _names(system))
    enquiry = _choose(enquiries, "Enquiry")
    if enquiry is None:
        return
    action = click.prompt("  (e)dit or (d)elete", type=click.Choice(["e", "d"]))
    if action == "e":
        content = click.prompt("  New content")
        TerminalDisplay.print_result(system.enquiries.edit(enquiry, content), "Enquiry updated")
    else:
        TerminalDisplay.print_result(system.enquiries.delete(enquiry), "Enquiry deleted")


def _reply_to_enquiries(system: HousingSystem, person):
    enquiries = system.enquiries.enquiries_for_respondent(person.nric, pending_only=True)
    TerminalDisplay.print_enquiries(enquiries, _names(system))
    enquiry = _choose(enquiries, "Enquiry")
    if enquiry is not None:
        reply = click.prompt("  Reply")
        TerminalDisplay.print_result(system.enquiries.respond(enquiry, person, reply), "Reply sent")


# =============================================================================
# APPLICANT
# =============================================================================

_APPLICANT_OPTIONS = [
    ("1", "View available projects"),
    ("2", "Set project filter"),
    ("3", "Apply for a project"),
    ("4", "View my applications"),
    ("5", "Request withdrawal"),
    ("6", "Submit an enquiry"),
    ("7", "Edit or delete my enquiries"),
    ("8", "View my receipt"),
]


def _applicant_action(system: HousingSystem, person, choice: str) -> bool:
    """Run one applicant menu action. Returns False when the key is not an applicant action."""
    if choice == "1":
        _browse_projects(system, person)
    elif choice == "2":
        _set_filter(person)
    elif choice == "3":
        project = _choose(_browse_projects(system, person), "Project")
        if project is not None:
            kind = _prompt_flat_kind([ft.kind for ft in project.flat_types])
            TerminalDisplay.print_result(system.applications.submit(person, project, kind),
                                         f"Applied for {kind.label} in {project.name}")
    elif choice == "4":
        TerminalDisplay.print_applications(system.applications.applications_for(person.nric), _names(system))
    elif choice == "5":
        application = system.applications.active_application(person.nric)
        if application is None:
            TerminalDisplay.print_info("You have no active application.")
        elif click.confirm(f"  Withdraw {application.id} ({application.project_name})?"):
            TerminalDisplay.print_result(system.applications.request_withdrawal(application),
                                         "Withdrawal requested")
    elif choice == "6":
        project = _choose(_browse_projects(system, person), "Project")
        if project is not None:
            content = click.prompt("  Your question")
            TerminalDisplay.print_result(system.enquiries.submit(person, project, content), "Enquiry submitted")
    elif choice == "7":
        _manage_own_enquiries(system, person)
    elif choice == "8":
        _show_receipt_for_applicant(system, person)
    else:
        return False
    return True


def _show_receipt_for_applicant(system: HousingSystem, person):
    application = system.store.applications.find_one(
        lambda a: a.applicant_nric == person.nric and a.status == ApplicationStatus.BOOKED
    )
    booking = system.bookings.booking_for(application) if application else None
    receipt = system.bookings.receipt_for(booking) if booking else None
    if receipt is None:
        TerminalDisplay.print_info("No receipt yet; an officer must confirm your booking.")
        return
    project = system.store.projects.find_by_key(application.project_name)
    TerminalDisplay.print_receipt(receipt, person, project, booking)


def _applicant_menu(system: HousingSystem, person):
    options = _APPLICANT_OPTIONS + [("9", "Change password"), ("0", "Log out")]
    while True:
        choice = _menu(f"APPLICANT MENU - {person.name}", options)
        if choice == "0":
            return
        if choice == "9":
            if _change_password(system, person):
                return
            continue
        try:
            _applicant_action(system, person, choice)
        except HousingError as e:
            TerminalDisplay.print_error(e)


# =============================================================================
# OFFICER
# =============================================================================

_OFFICER_OPTIONS = [
    ("10", "Register to handle a project"),
    ("11", "View my registrations"),
    ("12", "View my handled project"),
    ("13", "Book a flat for a successful applicant"),
    ("14", "Confirm a booking and issue receipt"),
    ("15", "Reply to enquiries"),
]


def _officer_menu(system: HousingSystem, person):
    options = _APPLICANT_OPTIONS + _OFFICER_OPTIONS + [("9", "Change password"), ("0", "Log out")]
    while True:
        choice = _menu(f"OFFICER MENU - {person.name}", options)
        if choice == "0":
            return
        if choice == "9":
            if _change_password(system, person):
                return
            continue
        try:
            if _applicant_action(system, person, choice):
                continue
        except HousingError as e:
            TerminalDisplay.print_error(e)
            continue

        role = system.store.officers.find_by_key(person.nric)
        handled = system.store.projects.find_by_key(role.assigned_project) if role.assigned_project else None

        if choice == "10":
            projects = system.officers.registrable_projects(person)
            TerminalDisplay.print_projects(projects, system.clock())
            project = _choose(projects, "Project")
            if project is not None:
                TerminalDisplay.print_result(system.officers.submit(person, project),
                                             f"Registration for {project.name} submitted")
        elif choice == "11":
            TerminalDisplay.print_officer_applications(
                system.officers.applications_for_officer(person.nric), _names(system)
            )
        elif handled is None:
            TerminalDisplay.print_info("You are not handling a project yet.")
        elif choice == "12":
            _print_project_detail(system, handled)
        elif choice == "13":
            applications = system.applications.applications_for_project(
                handled.name, status=ApplicationStatus.SUCCESSFUL
            )
            TerminalDisplay.print_applications(applications, _names(system))
            application = _choose(applications, "Application")
            if application is not None:
                TerminalDisplay.print_result(system.bookings.process_booking(person, application),
                                             f"Flat booked for {application.id}")
        elif choice == "14":
            bookings = system.bookings.bookings_for_project(handled.name, status=BookingStatus.PENDING)
            TerminalDisplay.print_bookings(bookings)
            booking = _choose(bookings, "Booking")
            if booking is not None:
                result = system.bookings.confirm_booking(booking)
                if TerminalDisplay.print_result(result, f"Booking {booking.id} confirmed"):
                    application = system.store.applications.find_by_key(booking.application_id)
                    applicant = system.store.people.find_by_key(application.applicant_nric)
                    TerminalDisplay.print_receipt(result.value, applicant, handled, booking)
        elif choice == "15":
            _reply_to_enquiries(system, person)


def _print_project_detail(system: HousingSystem, project):
    names = _names(system)
    TerminalDisplay.print_project_detail(
        project,
        manager_name=names.get(project.manager_nric, ""),
        officer_names=[names.get(nric, nric) for nric in project.assigned_officers],
    )


# =============================================================================
# MANAGER
# =============================================================================

_MANAGER_OPTIONS = [
    ("1", "View all projects"),
    ("2", "View my projects"),
    ("3", "Create a project"),
    ("4", "Edit a project"),
    ("5", "Toggle project visibility"),
    ("6", "Delete a project"),
    ("7", "Review officer registrations"),
    ("8", "Review BTO applications"),
    ("9", "Review withdrawal requests"),
    ("10", "Applicant report"),
    ("11", "View all enquiries"),
    ("12", "Reply to enquiries"),
    ("13", "Change password"),
    ("0", "Log out"),
]


def _create_project(system: HousingSystem, person):
    name = click.prompt("  Project name")
    neighborhood = click.prompt("  Neighborhood")
    start = _prompt_date("Opening date")
    end = _prompt_date("Closing date")
    slots = click.prompt("  Officer slots", type=click.IntRange(0))
    flat_types = []
    for kind in FlatKind:
        units = click.prompt(f"  {kind.label} units (0 to skip)", type=click.IntRange(0), default=0)
        if units:
            price = click.prompt(f"  {kind.label} price", type=float)
            flat_types.append((kind, units, price))
    TerminalDisplay.print_result(
        system.projects.create_project(person, name, neighborhood, start, end, slots, flat_types),
        f"Project {name} created",
    )


def _edit_project(system: HousingSystem, project):
    neighborhood = click.prompt("  Neighborhood", default=project.neighborhood)
    start = _prompt_date("Opening date", project.start_date)
    end = _prompt_date("Closing date", project.end_date)
    prices = {
        ft.kind: click.prompt(f"  {ft.kind.label} price", type=float, default=ft.price)
        for ft in project.flat_types
    }
    TerminalDisplay.print_result(
        system.projects.edit_project(project, neighborhood=neighborhood, start=start, end=end, prices=prices),
        f"Project {project.name} updated",
    )


def _run_report(system: HousingSystem):
    status_text = click.prompt("  Statuses (comma separated, blank for BOOKED)", default="", show_default=False)
    marital = click.prompt("  Marital status (single/married, blank for any)", default="", show_default=False)
    project_name = click.prompt("  Project (blank for all)", default="", show_default=False)
    kind = click.prompt("  Flat type (2-Room / 3-Room, blank for any)", default="", show_default=False)
    criteria = ReportCriteria(
        marital_statuses=[MaritalStatus[marital.strip().upper()]] if marital.strip() else [],
        project_name=project_name.strip() or None,
        flat_kinds=[parse_flat_kind(kind)] if kind.strip() else [],
    )
    if status_text.strip():
        criteria.statuses = [ApplicationStatus[s.strip().upper()] for s in status_text.split(",") if s.strip()]
    TerminalDisplay.print_report(system.reports.applicant_report(criteria))


def _manager_menu(system: HousingSystem, person):
    while True:
        choice = _menu(f"MANAGER MENU - {person.name}", _MANAGER_OPTIONS)
        own = system.projects.managed_projects(person.nric)
        own_names = {p.name for p in own}
        try:
            if choice == "0":
                return
            elif choice == "1":
                TerminalDisplay.print_projects(system.projects.all_projects(), system.clock())
            elif choice == "2":
                TerminalDisplay.print_projects(own, system.clock())
                project = _choose(own, "Details for project")
                if project is not None:
                    _print_project_detail(system, project)
            elif choice == "3":
                _create_project(system, person)
            elif choice in ("4", "5", "6"):
                TerminalDisplay.print_projects(own, system.clock())
                project = _choose(own, "Project")
                if project is None:
                    continue
                if choice == "4":
                    _edit_project(system, project)
                elif choice == "5":
                    target = Visibility.HIDDEN if project.is_visible else Visibility.VISIBLE
                    TerminalDisplay.print_result(system.projects.set_visibility(project, target),
                                                 f"{project.name} is now {target.name}")
                elif click.confirm(f"  Delete {project.name}?"):
                    TerminalDisplay.print_result(system.projects.delete_project(project),
                                                 f"{project.name} deleted")
            elif choice == "7":
                registrations = [
                    reg for name in own_names
                    for reg in system.officers.applications_for_project(name, pending_only=True)
                ]
                TerminalDisplay.print_officer_applications(registrations, _names(system))
                registration = _choose(registrations, "Registration")
                if registration is not None:
                    approve = click.confirm("  Approve?")
                    outcome = OfficerApplicationStatus.APPROVED if approve else OfficerApplicationStatus.REJECTED
                    TerminalDisplay.print_result(system.officers.decide(registration, outcome),
                                                 f"Registration {outcome.name}")
            elif choice == "8":
                applications = [
                    app for name in own_names
                    for app in system.applications.applications_for_project(name, status=ApplicationStatus.PENDING)
                ]
                TerminalDisplay.print_applications(applications, _names(system))
                application = _choose(applications, "Application")
                if application is not None:
                    approve = click.confirm("  Approve?")
                    outcome = ApplicationStatus.SUCCESSFUL if approve else ApplicationStatus.UNSUCCESSFUL
                    TerminalDisplay.print_result(system.applications.decide(application, outcome),
                                                 f"Application {outcome.name}")
            elif choice == "9":
                pending = [app for name in own_names for app in system.applications.pending_withdrawals(name)]
                TerminalDisplay.print_applications(pending, _names(system))
                application = _choose(pending, "Application")
                if application is not None:
                    approve = click.confirm("  Approve withdrawal?")
                    TerminalDisplay.print_result(system.applications.resolve_withdrawal(application, approve),
                                                 "Withdrawal approved" if approve else "Withdrawal rejected")
            elif choice == "10":
                _run_report(system)
            elif choice == "11":
                TerminalDisplay.print_enquiries(system.store.enquiries.find_all(), _names(system))
            elif choice == "12":
                _reply_to_enquiries(system, person)
            elif choice == "13":
                if _change_password(system, person):
                    return
        except (HousingError, KeyError) as e:
            TerminalDisplay.print_error(e)


# =============================================================================
# ENTRY POINT
# =============================================================================

def _session(system: HousingSystem):
    """Log in repeatedly until the user quits."""
    while True:
        nric = click.prompt("\n  NRIC (blank to quit)", default="", show_default=False)
        if not nric.strip():
            return
        password = click.prompt("  Password", hide_input=True)
        result = system.accounts.authenticate(nric, password)
        if not result:
            TerminalDisplay.print_error(result.error)
            continue

        person = result.value
        roles = system.accounts.roles_of(person.nric)
        TerminalDisplay.print_success(f"Welcome, {person.name}")
        if ROLE_MANAGER in roles:
            _manager_menu(system, person)
        elif ROLE_OFFICER in roles:
            _officer_menu(system, person)
        else:
            _applicant_menu(system, person)


@click.command()
@click.option("--data-dir", type=click.Path(file_okay=False), default=str(DATA_DIR),
              show_default=True, help="Directory holding the CSV record files")
@click.option("--save/--no-save", default=True, help="Write changes back on exit")
@click.option("--verbose", is_flag=True, help="Log engine decisions to stderr")
def main(data_dir: str, save: bool, verbose: bool) -> None:
    """Interactive console for the BTO housing system."""
    configure_logging(verbose)

    try:
        system = DataLoader(data_dir).load()
    except PersistenceError as e:
        raise click.ClickException(str(e))

    TerminalDisplay.print_banner(system.summary())
    try:
        _session(system)
    except click.Abort:
        TerminalDisplay.print_info("Interrupted.")
    finally:
        if save:
            try:
                DataWriter(data_dir).save(system)
            except PersistenceError as e:
                logger.error("Save failed: %s", e)
                raise click.ClickException(str(e))
            TerminalDisplay.print_info(f"Saved to {data_dir}")


if __name__ == "__main__":
    main()
