from __future__ import annotations

import json

import pytest

from src.climbclub.climbclub.database.connection import JsonFileConnection, StoreConfig
from src.climbclub.climbclub.database.document import document_to_dict
from src.climbclub.climbclub.database.json_document_repository import JsonDocumentRepository

from conftest import build_club


@pytest.fixture
def seeded(app, data_file):
    conn = JsonFileConnection.get_instance(StoreConfig(data_file=data_file))
    JsonDocumentRepository(conn).save(build_club())
    return data_file


def _on_disk(data_file) -> dict:
    return json.loads(data_file.read_text(encoding="utf-8"))


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "OK"


def test_app_creates_empty_data_file(client, data_file):
    assert _on_disk(data_file) == {"members": [], "sessions": [], "attendance": {}, "_seq": 1}


def test_admin_login_flow(client):
    assert client.get("/api/auth/me").get_json() == {"role": "member"}

    wrong = client.post("/api/auth/login", json={"password": "guess"})
    assert wrong.status_code == 401
    assert wrong.get_json()["error"] == "authentication_error"

    assert client.post("/api/auth/login", json={"password": "test-admin"}).status_code == 200
    assert client.get("/api/auth/me").get_json() == {"role": "admin"}

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").get_json() == {"role": "member"}


@pytest.mark.parametrize(
    "method, url",
    [
        ("get", "/api/data"),
        ("put", "/api/data"),
        ("get", "/api/attendance"),
        ("delete", "/api/attendance/1/10"),
        ("post", "/api/sessions"),
        ("delete", "/api/members/10"),
        ("get", "/api/reports/export/members.csv"),
    ],
)
def test_admin_routes_need_login(client, seeded, method, url):
    resp = getattr(client, method)(url, json={})

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "authorization_error"


def test_signup_and_public_member_list(client, seeded):
    resp = client.post("/api/members", json={"name": "Erik", "email": "erik@example.com", "belay": True})

    assert resp.status_code == 201
    assert resp.get_json()["id"] == "14"

    listed = client.get("/api/members").get_json()
    assert {"id": "14", "name": "Erik"} in listed
    assert all(set(m) == {"id", "name"} for m in listed)


def test_signup_validation_and_duplicates(client, seeded):
    assert client.post("/api/members", json={"name": ""}).status_code == 400
    assert client.post("/api/members", data="not json").status_code == 400

    dup = client.post("/api/members", json={"name": "Anna B", "email": "anna@example.com"})
    assert dup.status_code == 409
    assert dup.get_json()["error"] == "already_exists"


def test_register_until_full(client, seeded):
    assert client.post("/api/sessions/1/register", json={"member_id": "10"}).status_code == 200
    second = client.post("/api/sessions/1/register", json={"member_id": "11"})
    assert second.get_json()["occupancy"] == {"registered": 2, "capacity": 2, "is_full": True}

    full = client.post("/api/sessions/1/register", json={"member_id": "12"})
    assert full.status_code == 409
    assert full.get_json()["error"] == "capacity_exceeded"

    # already registered members are not rejected by the full session
    again = client.post("/api/sessions/1/register", json={"member_id": "10"})
    assert again.status_code == 200

    assert client.post("/api/sessions/1/unregister", json={"member_id": "11"}).status_code == 200
    assert client.post("/api/sessions/1/register", json={"member_id": "12"}).status_code == 200

    assert set(_on_disk(seeded)["attendance"]["1"]) == {"10", "12"}


def test_register_errors(client, seeded):
    assert client.post("/api/sessions/404/register", json={"member_id": "10"}).status_code == 404
    assert client.post("/api/sessions/1/register", json={"member_id": "404"}).status_code == 404

    missing = client.post("/api/sessions/1/register", json={})
    assert missing.status_code == 400
    assert "member_id" in missing.get_json()["message"]


def test_walk_in_and_notes(client, seeded):
    resp = client.post("/api/sessions/2/attend", json={"member_id": "13"})
    assert resp.get_json()["status"] == "ATTENDED"
    assert resp.get_json()["registered"] is False

    client.post("/api/sessions/2/notes", json={"member_id": "13", "notes": "Prøvde lead"})

    record = _on_disk(seeded)["attendance"]["2"]["13"]
    assert record == {"registered": False, "attended": True, "notes": "Prøvde lead"}

    session = client.get("/api/sessions/2").get_json()
    assert session["occupancy"] == {"registered": 0, "capacity": None, "is_full": False}


def test_upcoming_board_for_member(client, seeded):
    board = client.get("/api/sessions/upcoming?member_id=10").get_json()

    assert [row["id"] for row in board] == ["1", "2"]
    assert board[0]["status"] == "NOT_REGISTERED"
    assert board[0]["can_register"] is True


def test_admin_attendance_edits(admin_client, seeded):
    put = admin_client.put("/api/attendance/1/12", json={"registered": True, "attended": True, "notes": "ok"})
    assert put.status_code == 200

    added = admin_client.post("/api/attendance/1/10/add")
    assert added.get_json()["status"] == "REGISTERED"

    roster = admin_client.get("/api/attendance/1").get_json()
    assert [r["member_id"] for r in roster["roster"]] == ["10", "12"]
    assert roster["attended"] == 1

    assert admin_client.delete("/api/attendance/1/12").get_json() == {"success": True, "removed": True}
    assert admin_client.delete("/api/attendance/1/12").get_json()["removed"] is False
    assert admin_client.delete("/api/attendance/404/12").status_code == 404

    assert admin_client.get("/api/attendance").get_json() == {
        "1": {"10": {"registered": True, "attended": False, "notes": ""}}
    }


def test_admin_session_crud(admin_client, seeded):
    created = admin_client.post(
        "/api/sessions",
        json={
            "date": "2030-10-01",
            "location": "Grip Sluppen",
            "start": "19:00",
            "end": "23:00",
            "discipline": "Bouldering",
            "capacity": "",
        },
    )
    assert created.status_code == 201
    sid = created.get_json()["id"]
    assert "capacity" not in created.get_json()

    bad = admin_client.put(f"/api/sessions/{sid}", json={"date": "tomorrow"})
    assert bad.status_code == 400

    admin_client.post(f"/api/sessions/{sid}/register", json={"member_id": "10"})
    deleted = admin_client.delete(f"/api/sessions/{sid}")
    assert deleted.get_json() == {"success": True, "attendance_removed": 1}
    assert sid not in _on_disk(seeded)["attendance"]


def test_admin_member_delete_cascades(admin_client, seeded):
    admin_client.post("/api/sessions/1/register", json={"member_id": "11"})
    admin_client.post("/api/sessions/2/attend", json={"member_id": "11"})

    resp = admin_client.delete("/api/members/11")

    assert resp.get_json() == {"success": True, "attendance_removed": 2}
    assert admin_client.get("/api/members/11").status_code == 404
    full = admin_client.get("/api/members").get_json()
    assert full[0]["email"] == "anna@example.com"


def test_member_history_endpoint(client, seeded):
    client.post("/api/sessions/1/register", json={"member_id": "10"})

    body = client.get("/api/members/10/history?filter=missed").get_json()

    assert [r["session_id"] for r in body["rows"]] == ["1"]
    assert body["summary"]["registered"] == 1
    assert client.get("/api/members/10/history?filter=bogus").status_code == 400


def test_data_export_and_import(admin_client, seeded):
    exported = admin_client.get("/api/data").get_json()
    assert exported == document_to_dict(build_club())

    exported["members"] = exported["members"][:1]
    imported = admin_client.put("/api/data", json=exported)
    assert imported.get_json() == {"success": True, "members": 1, "sessions": 3}
    assert len(_on_disk(seeded)["members"]) == 1

    assert admin_client.put("/api/data", json=["nope"]).status_code == 400


def test_corrupt_data_file_is_an_opaque_500(client, seeded):
    seeded.write_text("{", encoding="utf-8")

    resp = client.get("/api/sessions")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "storage_error", "message": "Failed to access club data"}


def test_stats_and_csv_export(admin_client, seeded):
    admin_client.post("/api/sessions/3/attend", json={"member_id": "10"})

    stats = admin_client.get("/api/reports/stats").get_json()
    assert stats["total_attendance"] == 1
    assert stats["top_attendees"][0]["name"] == "Anna"

    resp = admin_client.get("/api/reports/export/attendance.csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert resp.data.startswith(b"\xef\xbb\xbf")
    assert "attachment" in resp.headers["Content-Disposition"]

    assert admin_client.get("/api/reports/export/payroll.csv").status_code == 400


def test_unknown_route_is_json(client):
    resp = client.get("/api/nowhere")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


@pytest.mark.parametrize("capacity", [-1, 2.5, "two"])
def test_data_import_rejects_bad_capacity(admin_client, seeded, capacity):
    before = _on_disk(seeded)
    incoming = document_to_dict(build_club())
    incoming["sessions"][1]["capacity"] = capacity

    resp = admin_client.put("/api/data", json=incoming)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"
    assert _on_disk(seeded) == before
    assert admin_client.post("/api/sessions/2/register", json={"member_id": "10"}).status_code == 200


def test_numeric_notes_are_saved_as_text(client, seeded):
    resp = client.post("/api/sessions/2/notes", json={"member_id": "12", "notes": 5})

    assert resp.get_json()["notes"] == "5"
    assert _on_disk(seeded)["attendance"]["2"]["12"]["notes"] == "5"


def test_unregister_leaves_no_empty_session_entry(client, seeded):
    client.post("/api/sessions/1/register", json={"member_id": "10"})
    client.post("/api/sessions/1/unregister", json={"member_id": "10"})

    assert _on_disk(seeded)["attendance"] == {}


def test_response_keeps_field_order(client, seeded):
    resp = client.get("/api/sessions/1")

    assert list(json.loads(resp.data))[:3] == ["id", "date", "location"]
