from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import AttendanceStatus
from ..database.document import ClubDocument, record_to_dict
from ..database.json_base import document_snapshot, document_transaction
from ..database.repository import DocumentRepository
from .ledger import AttendanceLedger
from .model import AttendanceRecord, Occupancy, RosterEntry

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: registration and attendance changes, one transaction each."""

    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    @staticmethod
    def _view(ledger: AttendanceLedger, session_id: str, member_id: str) -> dict:
        record = ledger.record_for(session_id, member_id) or AttendanceRecord()
        return {
            "session_id": session_id,
            "member_id": member_id,
            **record_to_dict(record),
            "status": record.status.value,
            "occupancy": ledger.occupancy(session_id).to_dict(),
        }

    def register(self, *, session_id: str, member_id: str) -> dict:
        with document_transaction(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            ledger.register(session_id, member_id)
            view = self._view(ledger, session_id, member_id)
        logger.info("member %s registered for session %s", member_id, session_id)
        return view

    def unregister(self, *, session_id: str, member_id: str) -> dict:
        with document_transaction(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            ledger.unregister(session_id, member_id)
            view = self._view(ledger, session_id, member_id)
        logger.info("member %s unregistered from session %s", member_id, session_id)
        return view

    def mark_attended(self, *, session_id: str, member_id: str, value: bool = True) -> dict:
        with document_transaction(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            ledger.mark_attended(session_id, member_id, value)
            view = self._view(ledger, session_id, member_id)
        logger.info("member %s attended=%s for session %s", member_id, bool(value), session_id)
        return view

    def set_notes(self, *, session_id: str, member_id: str, text: Optional[str]) -> dict:
        with document_transaction(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            ledger.set_notes(session_id, member_id, text)
            return self._view(ledger, session_id, member_id)

    def admin_add(self, *, session_id: str, member_id: str) -> dict:
        with document_transaction(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            ledger.admin_add(session_id, member_id)
            view = self._view(ledger, session_id, member_id)
        logger.info("admin added member %s to session %s", member_id, session_id)
        return view

    def upsert_record(
        self,
        *,
        session_id: str,
        member_id: str,
        registered: bool,
        attended: bool,
        notes: Optional[str] = "",
    ) -> dict:
        with document_transaction(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            ledger.upsert_record(session_id, member_id, registered=registered, attended=attended, notes=notes)
            return self._view(ledger, session_id, member_id)

    def remove_record(self, *, session_id: str, member_id: str) -> bool:
        with document_transaction(self._documents) as doc:
            removed = AttendanceLedger(doc).remove_record(session_id, member_id)
        if removed:
            logger.info("admin removed member %s from session %s", member_id, session_id)
        return removed

    def occupancy(self, session_id: str) -> Occupancy:
        with document_snapshot(self._documents) as doc:
            return AttendanceLedger(doc).occupancy(session_id)

    def status_for(self, *, session_id: str, member_id: str) -> AttendanceStatus:
        with document_snapshot(self._documents) as doc:
            return AttendanceLedger(doc).status_for(session_id, member_id)

    def roster(self, session_id: str) -> list[RosterEntry]:
        with document_snapshot(self._documents) as doc:
            return build_roster(doc, session_id)

    def attendance_map(self) -> dict:
        with document_snapshot(self._documents) as doc:
            return {
                sid: {mid: record_to_dict(r) for mid, r in records.items()}
                for sid, records in doc.attendance.items()
            }


def build_roster(doc: ClubDocument, session_id: str) -> list[RosterEntry]:
    out: list[RosterEntry] = []
    for member_id, record in AttendanceLedger(doc).roster(session_id):
        member = doc.find_member(member_id)
        out.append(
            RosterEntry(
                member_id=member_id,
                name=member.name if member else "(deleted member)",
                registered=record.registered,
                attended=record.attended,
                notes=record.notes,
                status=record.status,
            )
        )
    out.sort(key=lambda e: e.name.lower())
    return out
