import pytest

from .conftest import client, create_equipment, create_request, create_team, create_user


def test_request_defaults_and_relations(client):
    team = create_team(client)
    eq = create_equipment(client, team_id=team["id"])
    creator = create_user(client, name="Alice Operator")
    req = create_request(client, equipment_id=eq["id"], created_by=creator["id"])

    assert req["stage"] == "new"
    assert req["type"] == "corrective"
    assert req["priority"] == "medium"
    assert req["assigned_to"] is None
    # team is inherited from the equipment when not given
    assert req["team_id"] == team["id"]
    assert req["equipment"]["name"] == "CNC Miller XN-500"
    assert req["creator"]["name"] == "Alice Operator"


def test_list_requests_envelope(client):
    create_request(client, subject="First")
    create_request(client, subject="Second")
    resp = client.get("/api/requests")
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"data"}
    assert {r["subject"] for r in body["data"]} == {"First", "Second"}


def test_empty_list(client):
    resp = client.get("/api/requests")
    assert resp.status_code == 200
    assert resp.json() == {"data": []}


@pytest.mark.parametrize("start", ["new", "in_progress", "repaired", "scrap"])
@pytest.mark.parametrize("target", ["new", "in_progress", "repaired", "scrap"])
def test_any_stage_to_any_stage(client, start, target):
    req = create_request(client, stage=start)
    resp = client.put(f"/api/requests/{req['id']}/stage", json={"stage": target})
    assert resp.status_code == 200
    assert resp.json()["data"]["stage"] == target


@pytest.mark.parametrize("bad", ["in-progress", "done", "NEW", ""])
def test_unknown_stage_rejected(client, bad):
    req = create_request(client)
    resp = client.put(f"/api/requests/{req['id']}/stage", json={"stage": bad})
    assert resp.status_code == 422
    assert client.get(f"/api/requests/{req['id']}").json()["data"]["stage"] == "new"


def test_stage_extras(client):
    req = create_request(client)
    scrap = client.put(
        f"/api/requests/{req['id']}/stage",
        json={"stage": "scrap", "scrap_reason": "Too expensive to fix motor."},
    )
    assert scrap.json()["data"]["scrap_reason"] == "Too expensive to fix motor."

    repaired = client.put(
        f"/api/requests/{req['id']}/stage", json={"stage": "repaired", "duration": 2.5}
    )
    assert repaired.json()["data"]["duration"] == 2.5


def test_stage_unknown_request(client):
    resp = client.put(
        "/api/requests/00000000-0000-0000-0000-000000000000/stage", json={"stage": "new"}
    )
    assert resp.status_code == 404


def test_update_and_assign(client):
    tech = create_user(client, name="Sarah Tech", role="technician")
    req = create_request(client)
    resp = client.put(
        f"/api/requests/{req['id']}",
        json={"assigned_to": tech["id"], "priority": "critical"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["assignee"]["name"] == "Sarah Tech"
    assert data["priority"] == "critical"

    bad = client.put(f"/api/requests/{req['id']}", json={"priority": "urgent"})
    assert bad.status_code == 422


def test_unknown_assignee(client):
    resp = client.post(
        "/api/requests",
        json={"subject": "x", "assigned_to": "00000000-0000-0000-0000-000000000000"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User not found"


def test_calendar(client):
    create_request(client, subject="Later", scheduled_date="2030-01-08T09:00:00")
    create_request(client, subject="Sooner", scheduled_date="2030-01-02T09:00:00")
    create_request(client, subject="Unscheduled")

    resp = client.get("/api/requests/calendar")
    assert resp.status_code == 200
    assert [r["subject"] for r in resp.json()["data"]] == ["Sooner", "Later"]

    bounded = client.get(
        "/api/requests/calendar",
        params={"start": "2030-01-05T00:00:00", "end": "2030-01-31T00:00:00"},
    )
    assert [r["subject"] for r in bounded.json()["data"]] == ["Later"]


def test_delete_request(client):
    req = create_request(client)
    assert client.delete(f"/api/requests/{req['id']}").status_code == 204
    assert client.get(f"/api/requests/{req['id']}").status_code == 404
    assert client.delete(f"/api/requests/{req['id']}").status_code == 404


def test_null_stage_rejected_on_update(client):
    req = create_request(client, stage="in_progress")
    resp = client.put(f"/api/requests/{req['id']}", json={"stage": None})
    assert resp.status_code == 422
    assert client.get(f"/api/requests/{req['id']}").json()["data"]["stage"] == "in_progress"

    cleared = client.put(f"/api/requests/{req['id']}", json={"scheduled_date": None, "subject": "Belt slipping"})
    assert cleared.status_code == 200
    assert cleared.json()["data"]["subject"] == "Belt slipping"


def test_update_unknown_equipment_reference(client):
    req = create_request(client)
    resp = client.put(
        f"/api/requests/{req['id']}",
        json={"equipment_id": "00000000-0000-0000-0000-000000000000"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Equipment not found"
