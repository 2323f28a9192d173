"""
Configuration constants for the BTO housing system.

This module contains all configuration values and constants used throughout
the lifecycle engine. Centralizing these makes it easy to adjust
behavior as housing policies change.
"""

import logging
import os
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Base data directory (relative to this file's location)
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.environ.get("BTO_DATA_DIR", BASE_DIR / "data"))

APPLICANT_FILE = "ApplicantList.csv"
OFFICER_FILE = "OfficerList.csv"
MANAGER_FILE = "ManagerList.csv"
PROJECT_FILE = "ProjectList.csv"
BTO_APPLICATION_FILE = "ApplicationList.csv"
OFFICER_APPLICATION_FILE = "OfficerApplicationList.csv"
BOOKING_FILE = "BookingList.csv"
RECEIPT_FILE = "ReceiptList.csv"
ENQUIRY_FILE = "EnquiryList.csv"


# =============================================================================
# ELIGIBILITY RULES
# =============================================================================
# Married applicants may apply from 21 for any flat type.
# Singles may apply from 35, and only for 2-room flats.
# The eligibility engine is the only place these are read.

MIN_AGE_MARRIED_APPLICANT = 21
MIN_AGE_SINGLE_APPLICANT = 35


# =============================================================================
# ACCOUNT RULES
# =============================================================================

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
DEFAULT_PASSWORD = "password"

# NRIC: S/T/F/G, seven digits, one trailing letter (format only, no checksum)
NRIC_PATTERN = r"^[STFG]\d{7}[A-Z]$"


# =============================================================================
# RECORD FORMATS
# =============================================================================

DATE_FORMAT = "%Y-%m-%d"

BTO_APPLICATION_ID_PREFIX = "BTO-APP-"
OFFICER_APPLICATION_ID_PREFIX = "OFF-APP-"
BOOKING_ID_PREFIX = "BOOK-"
RECEIPT_ID_PREFIX = "RCP-"
ENQUIRY_ID_PREFIX = "ENQ-"


# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(verbose: bool = False):
    """Install a root handler for console runs. Library code never calls this."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
