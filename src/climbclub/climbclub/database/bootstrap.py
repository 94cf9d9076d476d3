from __future__ import annotations

import logging

from ..members.model import Member
from ..sessions.model import ClimbSession
from .connection import JsonFileConnection
from .document import ClubDocument
from .json_document_repository import JsonDocumentRepository

logger = logging.getLogger(__name__)

SAMPLE_LOCATION = "Grip Sluppen"

_DISCIPLINE_NOTES = {
    "Bouldering": "Buldring for alle nivåer. Sosialt og gøy!",
    "Top-rope": "Topptau for alle nivåer. Nybegynnere velkomne!",
    "Lead": "Ledklatring - brattkort påkrevd!",
    "Strength/Conditioning": "Styrketrening og kondisjon. Ta med treningsklær.",
}

_SAMPLE_SESSIONS = (
    ("2025-08-01", "Bouldering"),
    ("2025-08-06", "Top-rope"),
    ("2025-08-08", "Lead"),
    ("2025-08-13", "Bouldering"),
    ("2025-09-02", "Bouldering"),
    ("2025-09-04", "Top-rope"),
    ("2025-09-09", "Lead"),
    ("2025-09-11", "Bouldering"),
    ("2025-09-16", "Strength/Conditioning"),
    ("2025-09-18", "Top-rope"),
    ("2025-09-23", "Bouldering"),
    ("2025-09-25", "Lead"),
    ("2025-09-30", "Bouldering"),
)

_SAMPLE_MEMBERS = (
    ("Magnus Moldekleiv", "magnus@example.com", True, "12345678", "V6 / Orange", "Instruktør"),
    ("Anna Hansen", "anna@example.com", True, "87654321", "V4 / Grønn", ""),
    ("Erik Normann", "erik@example.com", False, "11223344", "V2 / Gul", "Nybegynner"),
)


def build_sample_document() -> ClubDocument:
    doc = ClubDocument()
    for day, discipline in _SAMPLE_SESSIONS:
        doc.sessions.append(
            ClimbSession(
                session_id=doc.next_id(),
                date=day,
                start="19:00",
                end="23:00",
                location=SAMPLE_LOCATION,
                discipline=discipline,
                capacity=8 if discipline == "Strength/Conditioning" else 12,
                notes=_DISCIPLINE_NOTES[discipline],
            )
        )
    for name, email, belay, emergency, pr, notes in _SAMPLE_MEMBERS:
        doc.members.append(
            Member(
                member_id=doc.next_id(),
                name=name,
                email=email,
                belay=belay,
                emergency=emergency,
                pr=pr,
                notes=notes,
            )
        )
    return doc


def ensure_data_file(conn: JsonFileConnection, *, seed: bool = False) -> bool:
    """Create the data file if missing. Returns True when a file was created."""

    with conn.lock:
        if conn.exists():
            logger.info("Data file %s already exists, skipping initialization", conn.path)
            return False

        repo = JsonDocumentRepository(conn)
        doc = build_sample_document() if seed else ClubDocument()
        repo.save(doc)
        logger.info(
            "Initialized %s with %d sessions and %d members", conn.path, len(doc.sessions), len(doc.members)
        )
        return True
