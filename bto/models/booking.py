"""
Booking and receipt data models.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .enums import BookingStatus, FlatKind


@dataclass
class Booking:
    """
    A flat unit held for a BOOKED application.

    unit_released flips to True the first time the held unit goes back to
    inventory, so repeated cancellations never release twice.
    """
    id: str
    application_id: str
    officer_nric: Optional[str]            # Processing officer
    flat_kind: FlatKind
    booked_on: date
    status: BookingStatus = BookingStatus.PENDING
    unit_released: bool = False

    @property
    def is_live(self) -> bool:
        return self.status != BookingStatus.CANCELLED


@dataclass
class Receipt:
    """Proof of a CONFIRMED booking. At most one per booking."""
    number: str
    booking_id: str
    application_id: str
    issued_on: date
