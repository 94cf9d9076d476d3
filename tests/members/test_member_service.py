from __future__ import annotations

import pytest

from src.climbclub.climbclub.attendance.service import AttendanceService
from src.climbclub.climbclub.core.exceptions import AlreadyExistsError, NotFoundError, ValidationError
from src.climbclub.climbclub.members.service import MemberService


def test_create_member_uses_sequence(documents):
    svc = MemberService(documents)

    member = svc.create_member({"name": "  Erik ", "email": "erik@example.com", "belay": "on", "shoe_size": 43})

    assert member.member_id == "14"
    assert member.name == "Erik"
    assert member.belay is True
    assert member.extra == {"shoe_size": 43}
    assert documents.raw["_seq"] == 15


def test_ids_are_never_reused_after_delete(documents):
    svc = MemberService(documents)
    first = svc.create_member({"name": "Erik"})
    svc.delete_member(first.member_id)

    second = svc.create_member({"name": "Frida"})

    assert second.member_id != first.member_id


@pytest.mark.parametrize(
    "data",
    [
        {"name": ""},
        {"name": "   "},
        {"email": "x@example.com"},
        {"name": "Erik", "email": "not-an-email"},
    ],
)
def test_create_member_validation(documents, data):
    with pytest.raises(ValidationError):
        MemberService(documents).create_member(data)


def test_duplicate_email_rejected(documents):
    with pytest.raises(AlreadyExistsError):
        MemberService(documents).create_member({"name": "Anna 2", "email": "ANNA@example.com"})


def test_update_member_keeps_id(documents):
    svc = MemberService(documents)

    updated = svc.update_member("12", {"id": "999", "name": "Cecilie B", "pr": "V5"})

    assert updated.member_id == "12"
    assert svc.get_member("12").pr == "V5"


def test_update_unknown_member(documents):
    with pytest.raises(NotFoundError):
        MemberService(documents).update_member("404", {"name": "Nobody"})


def test_delete_member_cascades_attendance(documents):
    attendance = AttendanceService(documents)
    attendance.register(session_id="1", member_id="10")
    attendance.mark_attended(session_id="3", member_id="10")
    attendance.register(session_id="1", member_id="11")

    removed = MemberService(documents).delete_member("10")

    assert removed == 2
    raw = documents.raw
    assert all("10" not in records for records in raw["attendance"].values())
    assert "11" in raw["attendance"]["1"]
    with pytest.raises(NotFoundError):
        MemberService(documents).get_member("10")


def test_list_members_search(documents):
    svc = MemberService(documents)

    assert [m.name for m in svc.list_members()] == ["Anna", "Bjørn", "Cecilie", "Didrik"]
    assert [m.name for m in svc.list_members("BJORN@")] == ["Bjørn"]
