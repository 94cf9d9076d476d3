from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.validators import as_text
from ..core.enums import AttendanceStatus
from ..core.exceptions import CapacityExceededError, NotFoundError
from ..database.document import ClubDocument
from ..members.model import Member
from ..sessions.model import ClimbSession
from .model import AttendanceRecord, Occupancy


class AttendanceLedger:
    """Registration and attendance state of every (session, member) pair.

    States per pair: absent (no record), registered, attended. Walk-ins may
    go straight from absent to attended; only registration is capacity-checked.
    Unregistering is a soft delete: ``registered`` is cleared but attendance
    and notes stay. A record that ends up with nothing in it is removed, and so is a
    session entry whose last record goes.

    The ledger works on a loaded document and trusts its caller to have
    authorized the call.
    """

    def __init__(self, document: ClubDocument):
        self._doc = document

    def _require_session(self, session_id: str) -> ClimbSession:
        session = self._doc.find_session(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    def _require_member(self, member_id: str) -> Member:
        member = self._doc.find_member(member_id)
        if not member:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    def _put(self, session_id: str, member_id: str, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        if record.is_empty:
            self._drop(session_id, member_id)
            return None
        self._doc.attendance.setdefault(session_id, {})[member_id] = record
        return record

    def _drop(self, session_id: str, member_id: str) -> bool:
        """Remove one record; a session map left empty is removed too."""

        records = self._doc.attendance.get(session_id)
        if not records or member_id not in records:
            return False
        del records[member_id]
        if not records:
            del self._doc.attendance[session_id]
        return True

    # Mutations

    def register(self, session_id: str, member_id: str) -> AttendanceRecord:
        self._require_session(session_id)
        self._require_member(member_id)

        current = self.record_for(session_id, member_id)
        if current and current.registered:
            return current

        occupancy = self.occupancy(session_id)
        if occupancy.is_full:
            raise CapacityExceededError(
                f"Session {session_id} is full ({occupancy.registered}/{occupancy.capacity})"
            )

        record = replace(current or AttendanceRecord(), registered=True)
        self._put(session_id, member_id, record)
        return record

    def unregister(self, session_id: str, member_id: str) -> Optional[AttendanceRecord]:
        """Clear ``registered``; returns the remaining record or None if it was dropped."""

        self._require_session(session_id)
        self._require_member(member_id)

        current = self.record_for(session_id, member_id)
        if not current:
            return None
        return self._put(session_id, member_id, replace(current, registered=False))

    def mark_attended(self, session_id: str, member_id: str, value: bool = True) -> Optional[AttendanceRecord]:
        self._require_session(session_id)
        self._require_member(member_id)

        current = self.record_for(session_id, member_id) or AttendanceRecord()
        return self._put(session_id, member_id, replace(current, attended=bool(value)))

    def set_notes(self, session_id: str, member_id: str, text: Optional[str]) -> Optional[AttendanceRecord]:
        self._require_session(session_id)
        self._require_member(member_id)

        current = self.record_for(session_id, member_id) or AttendanceRecord()
        return self._put(session_id, member_id, replace(current, notes=as_text(text)))

    def admin_add(self, session_id: str, member_id: str) -> AttendanceRecord:
        """Put a member on the roster as registered, without a capacity check."""

        self._require_session(session_id)
        self._require_member(member_id)

        current = self.record_for(session_id, member_id) or AttendanceRecord()
        record = replace(current, registered=True)
        self._put(session_id, member_id, record)
        return record

    def upsert_record(
        self,
        session_id: str,
        member_id: str,
        *,
        registered: bool,
        attended: bool,
        notes: Optional[str] = "",
    ) -> Optional[AttendanceRecord]:
        """Admin full-record write; not capacity-checked."""

        self._require_session(session_id)
        self._require_member(member_id)

        record = AttendanceRecord(registered=bool(registered), attended=bool(attended), notes=as_text(notes))
        return self._put(session_id, member_id, record)

    def remove_record(self, session_id: str, member_id: str) -> bool:
        """Hard delete used by the admin roster view."""

        self._require_session(session_id)
        return self._drop(session_id, member_id)

    def cascade_delete_member(self, member_id: str) -> int:
        return sum(1 for session_id in list(self._doc.attendance) if self._drop(session_id, member_id))

    def cascade_delete_session(self, session_id: str) -> int:
        return len(self._doc.attendance.pop(session_id, None) or {})

    # Queries

    def record_for(self, session_id: str, member_id: str) -> Optional[AttendanceRecord]:
        return self._doc.attendance.get(session_id, {}).get(member_id)

    def status_for(self, session_id: str, member_id: str) -> AttendanceStatus:
        record = self.record_for(session_id, member_id)
        if not record:
            return AttendanceStatus.NOT_REGISTERED
        return record.status

    def registered_count(self, session_id: str) -> int:
        return sum(1 for r in self._doc.attendance.get(session_id, {}).values() if r.registered)

    def attended_count(self, session_id: str) -> int:
        return sum(1 for r in self._doc.attendance.get(session_id, {}).values() if r.attended)

    def occupancy(self, session_id: str) -> Occupancy:
        session = self._require_session(session_id)
        return Occupancy(registered=self.registered_count(session_id), capacity=session.capacity_limit)

    def is_full(self, session_id: str) -> bool:
        return self.occupancy(session_id).is_full

    def roster(self, session_id: str) -> list[tuple[str, AttendanceRecord]]:
        self._require_session(session_id)
        return list(self._doc.attendance.get(session_id, {}).items())
