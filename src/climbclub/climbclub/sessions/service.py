from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional

from ..attendance.ledger import AttendanceLedger
from ..common.datetime_utils import today_local
from ..common.validators import as_text, optional_capacity, require_hhmm, require_iso_date, require_non_empty
from ..core.exceptions import NotFoundError
from ..database.document import session_to_dict
from ..database.json_base import document_snapshot, document_transaction
from ..database.repository import DocumentRepository
from .model import ClimbSession

logger = logging.getLogger(__name__)

_FORM_KEYS = ("id", "date", "start", "end", "location", "discipline", "capacity", "notes")


class SessionService:
    """Use case: manage climbing sessions (admin)."""

    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    @staticmethod
    def _build(session_id: str, data: Mapping[str, Any]) -> ClimbSession:
        # Checked in the order the session form lists its fields.
        day = require_iso_date(data.get("date"), "date")
        location = require_non_empty(data.get("location"), "location")
        start = require_hhmm(data.get("start"), "start")
        end = require_hhmm(data.get("end"), "end")
        discipline = require_non_empty(data.get("discipline"), "discipline")

        return ClimbSession(
            session_id=session_id,
            date=day,
            start=start,
            end=end,
            location=location,
            discipline=discipline,
            capacity=optional_capacity(data.get("capacity")),
            notes=as_text(data.get("notes")).strip(),
            extra={k: v for k, v in data.items() if k not in _FORM_KEYS},
        )

    def create_session(self, data: Mapping[str, Any]) -> ClimbSession:
        session = self._build("", data)
        with document_transaction(self._documents) as doc:
            session = replace(session, session_id=doc.next_id())
            doc.sessions.append(session)
        logger.info("created session %s on %s (%s)", session.session_id, session.date, session.discipline)
        return session

    def update_session(self, session_id: str, data: Mapping[str, Any]) -> ClimbSession:
        session = self._build(session_id, data)
        with document_transaction(self._documents) as doc:
            if not doc.replace_session(session):
                raise NotFoundError("Session not found")
        return session

    def delete_session(self, session_id: str) -> int:
        with document_transaction(self._documents) as doc:
            if not doc.find_session(session_id):
                raise NotFoundError("Session not found")
            doc.sessions = [s for s in doc.sessions if s.session_id != session_id]
            removed = AttendanceLedger(doc).cascade_delete_session(session_id)
        logger.info("deleted session %s (%d attendance records)", session_id, removed)
        return removed

    def get_session(self, session_id: str) -> ClimbSession:
        with document_snapshot(self._documents) as doc:
            session = doc.find_session(session_id)
        if not session:
            raise NotFoundError("Session not found")
        return session

    def list_sessions(self, *, discipline: Optional[str] = None, query: Optional[str] = None) -> list[ClimbSession]:
        with document_snapshot(self._documents) as doc:
            sessions = list(doc.sessions)

        if discipline and discipline != "all":
            sessions = [s for s in sessions if s.discipline == discipline]
        sessions = _matching(sessions, query)
        sessions.sort(key=lambda s: (s.date, s.start))
        return sessions

    def registration_board(
        self,
        *,
        today: Optional[date] = None,
        query: Optional[str] = None,
        member_id: Optional[str] = None,
    ) -> list[dict]:
        """Upcoming sessions with occupancy and, when given, one member's status."""

        cutoff = (today or today_local()).strftime("%Y-%m-%d")
        with document_snapshot(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            sessions = sorted(_matching(list(doc.sessions), query), key=lambda s: (s.date, s.start))

            board: list[dict] = []
            for s in sessions:
                if s.date < cutoff:
                    continue
                occupancy = ledger.occupancy(s.session_id)
                row = {**session_to_dict(s), "occupancy": occupancy.to_dict()}
                if member_id:
                    status = ledger.status_for(s.session_id, member_id)
                    record = ledger.record_for(s.session_id, member_id)
                    already = bool(record and record.registered)
                    row["status"] = status.value
                    row["can_register"] = already or not occupancy.is_full
                board.append(row)
            return board


def _matching(sessions: list[ClimbSession], query: Optional[str]) -> list[ClimbSession]:
    q = (query or "").strip().lower()
    if not q:
        return sessions
    return [s for s in sessions if q in " ".join([s.location, s.discipline, s.notes]).lower()]
