from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..attendance.ledger import AttendanceLedger
from ..common.validators import as_bool, as_text, optional_email, require_non_empty
from ..core.exceptions import AlreadyExistsError, NotFoundError
from ..database.document import ClubDocument
from ..database.json_base import document_snapshot, document_transaction
from ..database.repository import DocumentRepository
from .model import Member

logger = logging.getLogger(__name__)

_FORM_KEYS = ("id", "name", "email", "belay", "emergency", "pr", "notes")


class MemberService:
    """Use case: manage members (sign-up form and admin edits)."""

    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    @staticmethod
    def _build(member_id: str, data: Mapping[str, Any]) -> Member:
        return Member(
            member_id=member_id,
            name=require_non_empty(data.get("name"), "name"),
            email=optional_email(data.get("email")),
            belay=as_bool(data.get("belay", False)),
            emergency=as_text(data.get("emergency")).strip(),
            pr=as_text(data.get("pr")).strip(),
            notes=as_text(data.get("notes")).strip(),
            extra={k: v for k, v in data.items() if k not in _FORM_KEYS},
        )

    @staticmethod
    def _check_unique_email(doc: ClubDocument, member: Member) -> None:
        if not member.email:
            return
        for m in doc.members:
            if m.member_id != member.member_id and m.email.lower() == member.email.lower():
                raise AlreadyExistsError(f"A member with email {member.email} already exists")

    def create_member(self, data: Mapping[str, Any]) -> Member:
        with document_transaction(self._documents) as doc:
            member = self._build("", data)
            self._check_unique_email(doc, member)
            member = replace(member, member_id=doc.next_id())
            doc.members.append(member)
        logger.info("created member %s (%s)", member.member_id, member.name)
        return member

    def update_member(self, member_id: str, data: Mapping[str, Any]) -> Member:
        """Replace a member's fields; the id never changes."""

        with document_transaction(self._documents) as doc:
            if not doc.find_member(member_id):
                raise NotFoundError("Member not found")
            member = self._build(member_id, data)
            self._check_unique_email(doc, member)
            doc.replace_member(member)
        return member

    def delete_member(self, member_id: str) -> int:
        """Delete a member and drop them from every session. Returns records removed."""

        with document_transaction(self._documents) as doc:
            if not doc.find_member(member_id):
                raise NotFoundError("Member not found")
            doc.members = [m for m in doc.members if m.member_id != member_id]
            removed = AttendanceLedger(doc).cascade_delete_member(member_id)
        logger.info("deleted member %s (%d attendance records)", member_id, removed)
        return removed

    def get_member(self, member_id: str) -> Member:
        with document_snapshot(self._documents) as doc:
            member = doc.find_member(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member

    def list_members(self, query: Optional[str] = None) -> list[Member]:
        with document_snapshot(self._documents) as doc:
            members = list(doc.members)

        q = (query or "").strip().lower()
        if q:
            members = [m for m in members if q in m.name.lower() or q in m.email.lower()]
        members.sort(key=lambda m: m.name.lower())
        return members
