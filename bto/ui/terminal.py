"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the bto package.

To create a different UI (web, API, etc.), create a new class with
the same method signatures but different output handling.
"""

from ..models import (
    ApplicationStatus,
    BookingStatus,
    EnquiryStatus,
    OfficerApplicationStatus,
    Result,
    WithdrawalStatus,
)


class TerminalDisplay:
    """
    Pretty terminal output for housing records.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures.
       Instead of print(), return HTML or render templates.

    2. FOR API RESPONSE:
       Skip the display entirely and serialize the dataclasses the
       engines return.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_RED = "\033[41m"

    # Status -> color, shared by every record table
    _STATUS_COLORS = {
        ApplicationStatus.PENDING: YELLOW,
        ApplicationStatus.SUCCESSFUL: GREEN,
        ApplicationStatus.UNSUCCESSFUL: RED,
        ApplicationStatus.BOOKED: CYAN,
        ApplicationStatus.WITHDRAWN: DIM,
        OfficerApplicationStatus.PENDING: YELLOW,
        OfficerApplicationStatus.APPROVED: GREEN,
        OfficerApplicationStatus.REJECTED: RED,
        BookingStatus.PENDING: YELLOW,
        BookingStatus.CONFIRMED: GREEN,
        BookingStatus.CANCELLED: DIM,
        EnquiryStatus.PENDING: YELLOW,
        EnquiryStatus.REPLIED: GREEN,
    }

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def status_badge(cls, status) -> str:
        """Return a colored status label for any lifecycle enum."""
        color = cls._STATUS_COLORS.get(status, cls.WHITE)
        return f"{color}{status.name}{cls.RESET}"

    # =========================================================================
    # MESSAGES
    # =========================================================================

    @classmethod
    def print_banner(cls, summary: dict):
        print(f"\n{cls.BOLD}{cls.CYAN}")
        print("╔══════════════════════════════════════════════════════════════════╗")
        print("║         BTO HOUSING MANAGEMENT SYSTEM                            ║")
        print("╚══════════════════════════════════════════════════════════════════╝")
        print(f"{cls.RESET}")
        counts = ", ".join(f"{count} {name.replace('_', ' ')}" for name, count in summary.items())
        print(f"  {cls.DIM}Loaded {counts}{cls.RESET}")

    @classmethod
    def print_success(cls, message: str):
        print(f"  {cls.GREEN}✓ {message}{cls.RESET}")

    @classmethod
    def print_error(cls, error):
        print(f"  {cls.RED}✗ {error}{cls.RESET}")

    @classmethod
    def print_info(cls, message: str):
        print(f"  {cls.DIM}{message}{cls.RESET}")

    @classmethod
    def print_result(cls, result: Result, message: str) -> bool:
        """Report a lifecycle Result; returns its truthiness for chaining."""
        if result:
            cls.print_success(message)
        else:
            cls.print_error(result.error)
        return bool(result)

    @classmethod
    def print_menu(cls, title: str, options: list):
        """
        Args:
            options: list of (key, label) pairs
        """
        cls.print_subheader(title)
        for key, label in options:
            print(f"    {cls.BOLD}{key:>2}{cls.RESET}. {label}")

    # =========================================================================
    # PROJECTS
    # =========================================================================

    @classmethod
    def print_projects(cls, projects: list, today=None):
        if not projects:
            cls.print_info("No projects to show.")
            return
        print(f"\n  {cls.BOLD}{'#':<3} {'PROJECT':<22} {'NEIGHBORHOOD':<14} {'PERIOD':<24} {'FLATS'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 80}{cls.RESET}")
        for i, project in enumerate(projects, 1):
            period = f"{project.start_date} → {project.end_date}"
            flats = ", ".join(
                f"{ft.kind.label} {ft.available_units}/{ft.total_units} @ ${ft.price:,.0f}"
                for ft in project.flat_types
            )
            name_color = cls.WHITE
            if not project.is_visible:
                name_color = cls.DIM
            elif today is not None and project.is_open(today):
                name_color = cls.GREEN
            print(f"  {i:<3} {name_color}{project.name:<22}{cls.RESET} {project.neighborhood:<14} {period:<24} {flats}")

    @classmethod
    def print_project_detail(cls, project, manager_name: str = "", officer_names: list = None):
        cls.print_header(f"PROJECT: {project.name.upper()}")
        print(f"  {cls.BOLD}Neighborhood:{cls.RESET} {project.neighborhood}")
        print(f"  {cls.BOLD}Application period:{cls.RESET} {project.start_date} to {project.end_date}")
        print(f"  {cls.BOLD}Visibility:{cls.RESET} {project.visibility.name}")
        print(f"  {cls.BOLD}Manager:{cls.RESET} {manager_name or project.manager_nric}")
        print(f"  {cls.BOLD}Officers:{cls.RESET} {len(project.assigned_officers)}/{project.officer_slots} "
              f"{', '.join(officer_names or [])}")
        for ft in project.flat_types:
            print(f"    {ft.kind.label:<8} {ft.available_units:>4}/{ft.total_units:<4} units   ${ft.price:,.2f}")

    # =========================================================================
    # LIFECYCLE RECORDS
    # =========================================================================

    @classmethod
    def print_applications(cls, applications: list, names: dict = None):
        """
        Args:
            names: optional {nric: display name} for the applicant column
        """
        if not applications:
            cls.print_info("No applications.")
            return
        names = names or {}
        print(f"\n  {cls.BOLD}{'#':<3} {'ID':<22} {'APPLICANT':<16} {'PROJECT':<20} {'TYPE':<7} {'STATUS':<14} {'WITHDRAWAL'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 96}{cls.RESET}")
        for i, app in enumerate(applications, 1):
            withdrawal = "" if app.withdrawal_status == WithdrawalStatus.NA else app.withdrawal_status.name
            applicant = names.get(app.applicant_nric, app.applicant_nric)
            status = cls.status_badge(app.status)
            # ANSI codes do not count toward the column width
            pad = " " * max(0, 14 - len(app.status.name))
            print(f"  {i:<3} {app.id:<22} {applicant:<16} {app.project_name:<20} "
                  f"{app.flat_kind.label:<7} {status}{pad} {withdrawal}")

    @classmethod
    def print_officer_applications(cls, registrations: list, names: dict = None):
        if not registrations:
            cls.print_info("No officer registrations.")
            return
        names = names or {}
        for i, reg in enumerate(registrations, 1):
            officer = names.get(reg.officer_nric, reg.officer_nric)
            print(f"  {i:<3} {reg.id:<22} {officer:<16} {reg.project_name:<20} "
                  f"{reg.submitted_on}  {cls.status_badge(reg.status)}")

    @classmethod
    def print_bookings(cls, bookings: list):
        if not bookings:
            cls.print_info("No bookings.")
            return
        for i, booking in enumerate(bookings, 1):
            print(f"  {i:<3} {booking.id:<18} {booking.application_id:<22} {booking.flat_kind.label:<7} "
                  f"{booking.booked_on}  {cls.status_badge(booking.status)}")

    @classmethod
    def print_receipt(cls, receipt, person, project, booking):
        cls.print_header(f"RECEIPT {receipt.number}")
        print(f"  {cls.BOLD}Issued:{cls.RESET} {receipt.issued_on}")
        print(f"  {cls.BOLD}Applicant:{cls.RESET} {person.name} ({person.nric})")
        print(f"  {cls.BOLD}Age / status:{cls.RESET} {person.age}, {person.marital_status.label}")
        print(f"  {cls.BOLD}Project:{cls.RESET} {project.name}, {project.neighborhood}")
        print(f"  {cls.BOLD}Flat type:{cls.RESET} {booking.flat_kind.label}")
        print(f"  {cls.BOLD}Booking:{cls.RESET} {booking.id} on {booking.booked_on}")

    @classmethod
    def print_enquiries(cls, enquiries: list, names: dict = None):
        if not enquiries:
            cls.print_info("No enquiries.")
            return
        names = names or {}
        for i, enquiry in enumerate(enquiries, 1):
            submitter = names.get(enquiry.submitter_nric, enquiry.submitter_nric)
            print(f"\n  {cls.BOLD}{i}. [{enquiry.project_name}]{cls.RESET} "
                  f"{cls.status_badge(enquiry.status)}  {cls.DIM}{enquiry.id} by {submitter} "
                  f"on {enquiry.submitted_on}{cls.RESET}")
            print(f"     Q: {enquiry.content}")
            if enquiry.reply:
                respondent = names.get(enquiry.respondent_nric, enquiry.respondent_nric)
                print(f"     {cls.GREEN}A: {enquiry.reply}{cls.RESET} {cls.DIM}({respondent}, {enquiry.reply_date}){cls.RESET}")

    # =========================================================================
    # REPORTS
    # =========================================================================

    @classmethod
    def print_report(cls, rows: list):
        cls.print_header("APPLICANT REPORT")
        if not rows:
            cls.print_info("No applications match these filters.")
            return
        print(f"\n  {cls.BOLD}{'NAME':<16} {'NRIC':<10} {'AGE':>3}  {'MARITAL':<8} {'PROJECT':<20} {'NEIGHBORHOOD':<14} {'TYPE':<7} {'STATUS'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 94}{cls.RESET}")
        for row in rows:
            print(f"  {row.name:<16} {row.nric:<10} {row.age:>3}  {row.marital_status.label:<8} "
                  f"{row.project_name:<20} {row.neighborhood:<14} {row.flat_kind.label:<7} "
                  f"{cls.status_badge(row.status)}")
        print(f"\n  {cls.BOLD}Total:{cls.RESET} {len(rows)}")
