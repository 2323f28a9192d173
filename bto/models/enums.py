"""
Enumerations shared by every record type.

CSV rows store enum NAMES (e.g. "PENDING"), except flat kinds and marital
status, which use the human labels "2-Room" / "Married" found in the
source spreadsheets.
"""

from enum import Enum


class MaritalStatus(Enum):
    SINGLE = "single"
    MARRIED = "married"

    @property
    def label(self) -> str:
        return self.name.capitalize()


class FlatKind(Enum):
    """
    Unit categories within a project.

    TWO_ROOM: open to singles (35+) and married couples (21+)
    THREE_ROOM: married couples (21+) only
    """
    TWO_ROOM = "2-Room"
    THREE_ROOM = "3-Room"

    @property
    def label(self) -> str:
        return self.value


class Visibility(Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class ApplicationStatus(Enum):
    """
    Main progression of a BTO application.

    PENDING: submitted, awaiting the manager's decision
    SUCCESSFUL: selected, may now book a flat
    UNSUCCESSFUL: not selected (terminal)
    BOOKED: a flat unit is held for this application (terminal for decisions)
    WITHDRAWN: withdrawal approved (terminal)
    """
    PENDING = "pending"
    SUCCESSFUL = "successful"
    UNSUCCESSFUL = "unsuccessful"
    BOOKED = "booked"
    WITHDRAWN = "withdrawn"


# Applications in these states count toward the one-active-application rule
ACTIVE_APPLICATION_STATUSES = frozenset({
    ApplicationStatus.PENDING,
    ApplicationStatus.SUCCESSFUL,
    ApplicationStatus.BOOKED,
})


class WithdrawalStatus(Enum):
    """Parallel sub-state tracking a withdrawal request."""
    NA = "na"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OfficerApplicationStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BookingStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class EnquiryStatus(Enum):
    PENDING = "pending"
    REPLIED = "replied"
