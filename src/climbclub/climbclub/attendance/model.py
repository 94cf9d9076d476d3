from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Stored state of one (session, member) pair."""

    registered: bool = False
    attended: bool = False
    notes: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.registered and not self.attended and not self.notes

    @property
    def status(self) -> AttendanceStatus:
        if self.attended:
            return AttendanceStatus.ATTENDED
        if self.registered:
            return AttendanceStatus.REGISTERED
        return AttendanceStatus.NOT_REGISTERED


@dataclass(frozen=True)
class Occupancy:
    registered: int
    capacity: Optional[int]

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and self.registered >= self.capacity

    def to_dict(self) -> dict:
        return {"registered": self.registered, "capacity": self.capacity, "is_full": self.is_full}


@dataclass(frozen=True)
class RosterEntry:
    """Read-model for the attendance roster of one session."""

    member_id: str
    name: str
    registered: bool
    attended: bool
    notes: str
    status: AttendanceStatus
