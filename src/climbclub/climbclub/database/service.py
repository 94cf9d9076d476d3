from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import optional_capacity
from ..core.exceptions import ValidationError
from .document import document_from_dict, document_to_dict
from .json_base import document_snapshot, document_transaction
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


class DataService:
    """Use case: export and import the whole club document (admin)."""

    def __init__(self, documents: DocumentRepository):
        self._documents = documents

    def export_document(self) -> dict:
        with document_snapshot(self._documents) as doc:
            return document_to_dict(doc)

    def import_document(self, raw: Any) -> dict:
        """Replace all data with `raw`; missing parts default to empty."""

        incoming = document_from_dict(raw)
        _check_capacities(raw)
        with document_transaction(self._documents) as doc:
            doc.members = incoming.members
            doc.sessions = incoming.sessions
            doc.attendance = incoming.attendance
            doc.sequence = incoming.sequence
        logger.info(
            "imported %d members, %d sessions", len(incoming.members), len(incoming.sessions)
        )
        return {"members": len(incoming.members), "sessions": len(incoming.sessions)}


def _check_capacities(raw: Mapping[str, Any]) -> None:
    for s in raw.get("sessions") or []:
        if isinstance(s, Mapping):
            try:
                optional_capacity(s.get("capacity"))
            except ValidationError as e:
                raise ValidationError(f"Session {s.get('id')}: {e}") from e
