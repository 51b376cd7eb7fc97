"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def is_blank(value) -> bool:
    """True for None and for strings that are empty after trimming"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    if not re.match(EMAIL_PATTERN, email):
        raise ValueError("Invalid email format")

    return email


def normalize_email(email: str) -> str:
    """Trim and lowercase without format checks, the way contact emails are stored"""
    return email.strip().lower()


def parse_date_param(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 query parameter into a naive UTC datetime.

    Raises:
        HTTPException: 400 if the value is present but not a valid date
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid date format") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
