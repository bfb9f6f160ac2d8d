"""
Input validation helpers for applicant records.

Pure functions, no state.
"""

import re
from typing import Optional

from job_tracker.models.applicant import ApplicantStatus

EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_REGEX = re.compile(r"\+?[\d\s\-()]{10,15}", re.ASCII)

ALLOWED_STATUSES = frozenset(status.value for status in ApplicantStatus)


def validate_email(email: str) -> bool:
    """Check that email has the local@domain.tld shape."""
    return bool(EMAIL_REGEX.fullmatch(email))


def validate_phone(phone: str) -> bool:
    """
    Check phone number format.

    An empty string is valid since phone is optional. Otherwise digits, spaces,
    hyphens and parentheses with an optional leading "+", 10-15 characters after it.
    """
    if phone == "":
        return True
    return bool(PHONE_REGEX.fullmatch(phone))


def validate_status(status: str) -> bool:
    return status in ALLOWED_STATUSES


def sanitize(value: Optional[str]) -> str:
    """Trim surrounding whitespace. None becomes an empty string."""
    if value is None:
        return ""
    return value.strip()
