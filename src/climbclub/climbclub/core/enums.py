from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role used for authorization at the HTTP boundary."""

    ADMIN = "admin"
    MEMBER = "member"


class AttendanceStatus(str, Enum):
    """Status of a member for one session, derived from the stored record."""

    NOT_REGISTERED = "NOT_REGISTERED"
    REGISTERED = "REGISTERED"
    ATTENDED = "ATTENDED"
