from __future__ import annotations

import copy
import threading
from typing import Optional

import pytest

from src.climbclub.climbclub.database.document import ClubDocument, document_from_dict, document_to_dict
from src.climbclub.climbclub.main import create_app
from src.climbclub.climbclub.members.model import Member
from src.climbclub.climbclub.sessions.model import ClimbSession


class InMemoryDocuments:
    """Document repository kept as plain JSON-like data, like the file would be."""

    def __init__(self, document: Optional[ClubDocument] = None):
        self._raw = document_to_dict(document or ClubDocument())
        self.lock = threading.RLock()
        self.saves = 0

    def load(self) -> ClubDocument:
        return document_from_dict(copy.deepcopy(self._raw))

    def save(self, document: ClubDocument) -> None:
        self._raw = document_to_dict(document)
        self.saves += 1

    @property
    def raw(self) -> dict:
        return copy.deepcopy(self._raw)


def build_club() -> ClubDocument:
    """Sessions 1 (capacity 2), 2 (unlimited), 3 (past); members 10-13."""

    return ClubDocument(
        sessions=[
            ClimbSession("1", "2030-09-02", "19:00", "23:00", "Grip Sluppen", "Bouldering", capacity=2),
            ClimbSession("2", "2030-09-04", "19:00", "23:00", "Grip Sluppen", "Top-rope", capacity=0),
            ClimbSession("3", "2020-08-01", "19:00", "23:00", "Grip Sluppen", "Lead", capacity=12, notes="brattkort"),
        ],
        members=[
            Member("10", "Anna", email="anna@example.com", belay=True),
            Member("11", "Bjørn", email="bjorn@example.com"),
            Member("12", "Cecilie"),
            Member("13", "Didrik", pr="V4"),
        ],
        sequence=14,
    )


@pytest.fixture
def club() -> ClubDocument:
    return build_club()


@pytest.fixture
def documents() -> InMemoryDocuments:
    return InMemoryDocuments(build_club())


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "climbclub.json"


@pytest.fixture
def app(data_file, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"DATA_FILE": str(data_file), "ADMIN_PASSWORD": "test-admin", "AUTO_SEED_DATA": False})
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/auth/login", json={"password": "test-admin"})
    assert resp.status_code == 200
    return client
