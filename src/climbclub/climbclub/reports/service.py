from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Optional

from ..attendance.ledger import AttendanceLedger
from ..attendance.service import build_roster
from ..core.constants import HISTORY_FILTERS, TOP_ATTENDEES_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..database.document import ClubDocument
from ..database.json_base import document_snapshot
from ..database.repository import DocumentRepository


@dataclass(frozen=True)
class ClubStats:
    members: int
    sessions: int
    total_attendance: int
    average_occupancy: int
    top_attendees: list[dict]


@dataclass(frozen=True)
class MemberHistory:
    rows: list[dict]
    summary: dict


EXPORT_COLUMNS = {
    "members": ["id", "name", "email", "belay", "emergency", "pr", "notes"],
    "sessions": ["id", "date", "location", "start", "end", "discipline", "capacity", "notes"],
    "attendance": ["session_id", "member_id", "registered", "attended", "notes"],
}


class ReportService:
    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    def club_stats(self) -> ClubStats:
        with document_snapshot(self._documents) as doc:
            return _club_stats(doc)

    def member_history(self, member_id: str, *, query: Optional[str] = None, filter_by: str = "all") -> MemberHistory:
        """Every session with this member's status, newest first.

        Totals always cover all sessions matching `query`; `filter_by` only
        narrows the rows.
        """

        if filter_by not in HISTORY_FILTERS:
            raise ValidationError(f"Unknown filter {filter_by!r}")

        with document_snapshot(self._documents) as doc:
            if not doc.find_member(member_id):
                raise NotFoundError("Member not found")
            ledger = AttendanceLedger(doc)
            q = (query or "").strip().lower()

            rows: list[dict] = []
            for s in sorted(doc.sessions, key=lambda s: s.date, reverse=True):
                if q and q not in " ".join([s.location, s.discipline, s.notes]).lower():
                    continue
                record = ledger.record_for(s.session_id, member_id)
                rows.append(
                    {
                        "session_id": s.session_id,
                        "date": s.date,
                        "location": s.location,
                        "discipline": s.discipline,
                        "start": s.start,
                        "end": s.end,
                        "registered": bool(record and record.registered),
                        "attended": bool(record and record.attended),
                        "notes": record.notes if record else "",
                        "status": ledger.status_for(s.session_id, member_id).value,
                    }
                )

        registered = sum(1 for r in rows if r["registered"])
        attended = sum(1 for r in rows if r["attended"])
        summary = {
            "total": len(rows),
            "registered": registered,
            "attended": attended,
            "rate": round(attended / registered * 100) if registered else 0,
        }

        if filter_by == "registered":
            rows = [r for r in rows if r["registered"]]
        elif filter_by == "attended":
            rows = [r for r in rows if r["attended"]]
        elif filter_by == "missed":
            rows = [r for r in rows if r["registered"] and not r["attended"]]

        return MemberHistory(rows=rows, summary=summary)

    def session_summary(self, session_id: str) -> dict:
        with document_snapshot(self._documents) as doc:
            ledger = AttendanceLedger(doc)
            occupancy = ledger.occupancy(session_id)
            roster = build_roster(doc, session_id)
            attended = ledger.attended_count(session_id)

        return {
            "session_id": session_id,
            "occupancy": occupancy.to_dict(),
            "attended": attended,
            "roster": [
                {
                    "member_id": e.member_id,
                    "name": e.name,
                    "registered": e.registered,
                    "attended": e.attended,
                    "notes": e.notes,
                    "status": e.status.value,
                }
                for e in roster
            ],
        }

    def export_csv(self, kind: str) -> str:
        if kind not in EXPORT_COLUMNS:
            raise ValidationError(f"Unknown export {kind!r}")

        with document_snapshot(self._documents) as doc:
            rows = _export_rows(doc, kind)

        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS[kind])
        for row in rows:
            writer.writerow(["" if v is None else v for v in row])
        return out.getvalue()


def _club_stats(doc: ClubDocument) -> ClubStats:
    ledger = AttendanceLedger(doc)

    total_attendance = sum(ledger.attended_count(sid) for sid in doc.attendance)

    ratios = []
    for s in doc.sessions:
        limit = s.capacity_limit
        ratios.append(ledger.registered_count(s.session_id) / limit if limit else 0)
    average_occupancy = round(sum(ratios) / len(ratios) * 100) if ratios else 0

    counts = {m.member_id: 0 for m in doc.members}
    for records in doc.attendance.values():
        for mid, r in records.items():
            if r.attended and mid in counts:
                counts[mid] += 1
    ranked = sorted(doc.members, key=lambda m: counts[m.member_id], reverse=True)
    top = [
        {"member_id": m.member_id, "name": m.name, "attended": counts[m.member_id]}
        for m in ranked[:TOP_ATTENDEES_LIMIT]
    ]

    return ClubStats(
        members=len(doc.members),
        sessions=len(doc.sessions),
        total_attendance=total_attendance,
        average_occupancy=average_occupancy,
        top_attendees=top,
    )


def _export_rows(doc: ClubDocument, kind: str) -> list[list]:
    if kind == "members":
        return [[m.member_id, m.name, m.email, m.belay, m.emergency, m.pr, m.notes] for m in doc.members]
    if kind == "sessions":
        return [
            [s.session_id, s.date, s.location, s.start, s.end, s.discipline, s.capacity, s.notes]
            for s in doc.sessions
        ]
    return [
        [sid, mid, r.registered, r.attended, r.notes]
        for sid, records in doc.attendance.items()
        for mid, r in records.items()
    ]
