"""The club document: members, sessions, attendance and the id sequence.

On disk this is the JSON shape the club app has always used:

    {"members": [...], "sessions": [...],
     "attendance": {sessionId: {memberId: {registered, attended, notes}}},
     "_seq": 1}

Older files kept registrations apart from attendance
(``registrations: {sessionId: [memberId]}`` and ``attendance: {sessionId:
{memberId: true}}``). `document_from_dict` folds that shape into the single
record form; `document_to_dict` always writes the record form.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..common.validators import as_bool, as_text
from ..core.constants import FIRST_SEQUENCE
from ..core.exceptions import ValidationError
from ..members.model import Member
from ..sessions.model import ClimbSession

_MEMBER_KEYS = ("id", "name", "email", "belay", "emergency", "pr", "notes")
_SESSION_KEYS = ("id", "date", "start", "end", "location", "discipline", "capacity", "notes")


@dataclass
class ClubDocument:
    members: list[Member] = field(default_factory=list)
    sessions: list[ClimbSession] = field(default_factory=list)
    attendance: dict[str, dict[str, AttendanceRecord]] = field(default_factory=dict)
    sequence: int = FIRST_SEQUENCE

    def next_id(self) -> str:
        new_id = self.sequence
        self.sequence += 1
        return str(new_id)

    def find_member(self, member_id: str) -> Optional[Member]:
        for m in self.members:
            if m.member_id == member_id:
                return m
        return None

    def find_session(self, session_id: str) -> Optional[ClimbSession]:
        for s in self.sessions:
            if s.session_id == session_id:
                return s
        return None

    def replace_member(self, member: Member) -> bool:
        for i, m in enumerate(self.members):
            if m.member_id == member.member_id:
                self.members[i] = member
                return True
        return False

    def replace_session(self, session: ClimbSession) -> bool:
        for i, s in enumerate(self.sessions):
            if s.session_id == session.session_id:
                self.sessions[i] = session
                return True
        return False


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _capacity_or_none(value: Any) -> Optional[int]:
    # Negative or fractional limits cannot be honoured and read as unlimited.
    capacity = _int_or_none(value)
    if capacity is None or capacity < 0:
        return None
    return capacity


def member_from_dict(raw: Mapping[str, Any]) -> Member:
    return Member(
        member_id=as_text(raw.get("id")),
        name=as_text(raw.get("name")),
        email=as_text(raw.get("email")),
        belay=as_bool(raw.get("belay", False)),
        emergency=as_text(raw.get("emergency")),
        pr=as_text(raw.get("pr")),
        notes=as_text(raw.get("notes")),
        extra={k: v for k, v in raw.items() if k not in _MEMBER_KEYS},
    )


def member_to_dict(m: Member) -> dict:
    return {
        **m.extra,
        "id": m.member_id,
        "name": m.name,
        "email": m.email,
        "belay": m.belay,
        "emergency": m.emergency,
        "pr": m.pr,
        "notes": m.notes,
    }


def session_from_dict(raw: Mapping[str, Any]) -> ClimbSession:
    return ClimbSession(
        session_id=as_text(raw.get("id")),
        date=as_text(raw.get("date")),
        start=as_text(raw.get("start")),
        end=as_text(raw.get("end")),
        location=as_text(raw.get("location")),
        discipline=as_text(raw.get("discipline")),
        capacity=_capacity_or_none(raw.get("capacity")),
        notes=as_text(raw.get("notes")),
        extra={k: v for k, v in raw.items() if k not in _SESSION_KEYS},
    )


def session_to_dict(s: ClimbSession) -> dict:
    out = {
        **s.extra,
        "id": s.session_id,
        "date": s.date,
        "location": s.location,
        "start": s.start,
        "end": s.end,
        "discipline": s.discipline,
    }
    if s.capacity is not None:
        out["capacity"] = s.capacity
    out["notes"] = s.notes
    return out


def record_from_value(value: Any) -> AttendanceRecord:
    # Legacy files stored a bare boolean meaning "attended".
    if isinstance(value, bool):
        return AttendanceRecord(attended=value)
    if not isinstance(value, Mapping):
        return AttendanceRecord()
    return AttendanceRecord(
        registered=as_bool(value.get("registered", False)),
        attended=as_bool(value.get("attended", False)),
        notes=as_text(value.get("notes")),
    )


def record_to_dict(r: AttendanceRecord) -> dict:
    return {"registered": r.registered, "attended": r.attended, "notes": r.notes}


def _registered_ids(value: Any) -> list[str]:
    if isinstance(value, Mapping):
        return [str(mid) for mid, flag in value.items() if as_bool(flag)]
    if isinstance(value, (list, tuple)):
        return [str(mid) for mid in value]
    return []


def attendance_from_dict(raw_attendance: Any, raw_registrations: Any = None) -> dict[str, dict[str, AttendanceRecord]]:
    out: dict[str, dict[str, AttendanceRecord]] = {}
    if isinstance(raw_attendance, Mapping):
        for sid, per_member in raw_attendance.items():
            if not isinstance(per_member, Mapping):
                continue
            out[str(sid)] = {str(mid): record_from_value(v) for mid, v in per_member.items()}

    if isinstance(raw_registrations, Mapping):
        for sid, value in raw_registrations.items():
            records = out.setdefault(str(sid), {})
            for mid in _registered_ids(value):
                records[mid] = replace(records.get(mid, AttendanceRecord()), registered=True)

    for records in out.values():
        for mid in [mid for mid, r in records.items() if r.is_empty]:
            del records[mid]
    return {sid: records for sid, records in out.items() if records}


def document_from_dict(raw: Any) -> ClubDocument:
    """Build a document from parsed JSON, filling defaults for missing parts."""

    if raw is None:
        return ClubDocument()
    if not isinstance(raw, Mapping):
        raise ValidationError("Club data must be a JSON object")

    members = [member_from_dict(m) for m in raw.get("members") or [] if isinstance(m, Mapping)]
    sessions = [session_from_dict(s) for s in raw.get("sessions") or [] if isinstance(s, Mapping)]
    attendance = attendance_from_dict(raw.get("attendance"), raw.get("registrations"))

    sequence = _int_or_none(raw.get("_seq", raw.get("sequence"))) or FIRST_SEQUENCE
    numeric_ids = [int(x.member_id) for x in members if x.member_id.isdigit()]
    numeric_ids += [int(x.session_id) for x in sessions if x.session_id.isdigit()]
    if numeric_ids:
        sequence = max(sequence, max(numeric_ids) + 1)

    return ClubDocument(members=members, sessions=sessions, attendance=attendance, sequence=sequence)


def document_to_dict(doc: ClubDocument) -> dict:
    return {
        "members": [member_to_dict(m) for m in doc.members],
        "sessions": [session_to_dict(s) for s in doc.sessions],
        "attendance": {
            sid: {mid: record_to_dict(r) for mid, r in records.items()}
            for sid, records in doc.attendance.items()
        },
        "_seq": doc.sequence,
    }
