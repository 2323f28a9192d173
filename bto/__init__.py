"""
BTO Housing Package
===================

Application and booking lifecycle for public-housing (Build-To-Order)
projects: eligibility, applications and withdrawals, officer assignment,
flat booking with receipts, and enquiries.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                          ENGINE LAYER                                    │
│     (Pure logic - returns Result / dataclasses, NO UI/printing)         │
│                                                                         │
│  ┌──────────────┐  ┌───────────────────┐  ┌──────────────────────────┐  │
│  │ eligibility  │  │ ProjectAllocation │  │ ApplicationLifecycle     │  │
│  │ (rule table) │  │ (slots, units)    │  │ OfficerAssignmentLifecycle│ │
│  └──────────────┘  └───────────────────┘  │ BookingLifecycle         │  │
│                                           │ EnquiryLifecycle         │  │
│  ┌──────────────────────────────────┐     └──────────────────────────┘  │
│  │ ProjectCatalog, ReportEngine,    │                                   │
│  │ AccountService                   │                                   │
│  └──────────────────────────────────┘                                   │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ reads / writes
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                          STORE LAYER                                     │
│   HousingStore (one EntityStore per record kind) + LockManager          │
└─────────────────────────────────────────────────────────────────────────┘
                                   ▲
                                   │ DataLoader / DataWriter (CSV)
                                   │
┌─────────────────────────────────────────────────────────────────────────┐
│                         HousingSystem                                    │
│        (Orchestrator - one store, one lock manager, one clock)          │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│               cli.py (click) + TerminalDisplay                           │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

bto/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants, logging setup
├── errors.py            # HousingError hierarchy
├── housing.py           # HousingSystem orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Dataclasses, enums, Result
├── store/               # EntityStore, HousingStore, LockManager
├── engines/             # Eligibility, allocation, lifecycles, catalog, reports, accounts
├── data/                # CSV validation, DataLoader, DataWriter
└── ui/                  # TerminalDisplay

USAGE
-----

    from bto import DataLoader, FlatKind

    system = DataLoader("data").load()
    person = system.accounts.authenticate("S1234567A", "password").unwrap()
    project = system.projects.find("Acacia Breeze")
    result = system.applications.submit(person, project, FlatKind.TWO_ROOM)
    if not result:
        print(result.error)

Running from command line:

    python -m bto --data-dir data

"""

# Version
__version__ = "1.0.0"

# Main exports
from .housing import HousingSystem
from .cli import main

# Model exports (for programmatic use)
from .models import (
    ApplicationStatus,
    BookingStatus,
    EnquiryStatus,
    FlatKind,
    MaritalStatus,
    OfficerApplicationStatus,
    Visibility,
    WithdrawalStatus,
    Person,
    SearchFilter,
    Project,
    FlatType,
    BTOApplication,
    OfficerApplication,
    Booking,
    Receipt,
    Enquiry,
    ReportCriteria,
    Result,
)

# Error exports
from .errors import (
    HousingError,
    ValidationError,
    NotFoundError,
    DuplicateKeyError,
    ConflictError,
    StateConflictError,
    EligibilityError,
    WindowClosedError,
    CapacityExceededError,
    PersistenceError,
    CorruptRecordError,
)

# Data exports
from .data import DataLoader, DataWriter

# UI exports
from .ui import TerminalDisplay

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "HousingSystem",
    "main",
    # Models
    "ApplicationStatus",
    "BookingStatus",
    "EnquiryStatus",
    "FlatKind",
    "MaritalStatus",
    "OfficerApplicationStatus",
    "Visibility",
    "WithdrawalStatus",
    "Person",
    "SearchFilter",
    "Project",
    "FlatType",
    "BTOApplication",
    "OfficerApplication",
    "Booking",
    "Receipt",
    "Enquiry",
    "ReportCriteria",
    "Result",
    # Errors
    "HousingError",
    "ValidationError",
    "NotFoundError",
    "DuplicateKeyError",
    "ConflictError",
    "StateConflictError",
    "EligibilityError",
    "WindowClosedError",
    "CapacityExceededError",
    "PersistenceError",
    "CorruptRecordError",
    # Data
    "DataLoader",
    "DataWriter",
    # UI
    "TerminalDisplay",
]
