"""
Enquiry data model.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .enums import EnquiryStatus


@dataclass
class Enquiry:
    """
    A question from an applicant about a project.

    Once REPLIED the reply is final; there is no edit-in-place.
    """
    id: str
    submitter_nric: str
    project_name: str
    content: str
    submitted_on: date
    status: EnquiryStatus = EnquiryStatus.PENDING
    reply: Optional[str] = None
    reply_date: Optional[date] = None
    respondent_nric: Optional[str] = None   # Officer or manager who replied
