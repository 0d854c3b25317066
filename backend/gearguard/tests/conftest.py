import os
os.environ["TESTING"] = "1"
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
import pytest
from fastapi.testclient import TestClient
import sys
from pathlib import Path
import uuid
import requests

sys.path.append(str(Path(__file__).resolve().parents[2]))

from gearguard.main import app
from gearguard.database import Base, get_db, make_engine, make_session_factory

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = make_session_factory(engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def create_department(client, name="Production"):
    resp = client.post("/api/departments", json={"name": name, "description": f"{name} floor"})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def create_user(client, *, role="employee", name=None, email=None, department_id=None):
    payload = {
        "name": name or "Test User",
        "email": email or f"user-{uuid.uuid4()}@example.com",
        "password": "password123",
        "role": role,
    }
    if department_id:
        payload["department_id"] = department_id
    resp = client.post("/api/users", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def create_team(client, name="Alpha Squad"):
    resp = client.post("/api/teams", json={"team_name": name, "description": "Heavy machinery"})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def create_equipment(client, *, name="CNC Miller XN-500", serial="CNC-2024-001", **extra):
    payload = {"name": name, "serial_number": serial, "type": "Machining", "location": "Zone A", **extra}
    resp = client.post("/api/equipment", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def create_request(client, *, subject="Strange noise from CNC", **extra):
    resp = client.post("/api/requests", json={"subject": subject, **extra})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


class DownSession:
    """Session stand-in whose every call fails at the transport level."""

    def __init__(self):
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url))
        raise requests.ConnectionError("connection refused")
