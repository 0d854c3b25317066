import json

import pytest

from gearguard.client import demo, pages
from gearguard.client.api import ApiError, GearGuardClient
from .conftest import DownSession, client, create_department, create_equipment, create_request, create_user


class StubClient:
    def __init__(self, requests_=None, equipment=None, fail=()):
        self._requests = requests_ or []
        self._equipment = equipment or []
        self._fail = set(fail)

    def _maybe_fail(self, name):
        if name in self._fail:
            raise ApiError(f"{name} unavailable", 500)

    def list_requests(self):
        self._maybe_fail("requests")
        return self._requests

    def list_equipment(self):
        self._maybe_fail("equipment")
        return self._equipment


@pytest.fixture
def down_client():
    return GearGuardClient(base_url="http://gearguard.invalid/api", session=DownSession())


@pytest.fixture
def live_client(client):
    return GearGuardClient(base_url="http://testserver/api", session=client)


def test_transport_failure_raises_api_error(down_client):
    with pytest.raises(ApiError) as info:
        down_client.list_requests()
    assert info.value.status_code is None
    assert down_client.session.calls == [("GET", "http://gearguard.invalid/api/requests")]


def test_http_error_carries_detail(live_client):
    with pytest.raises(ApiError) as info:
        live_client.get_request("00000000-0000-0000-0000-000000000000")
    assert info.value.status_code == 404
    assert info.value.message == "Request not found"


def test_dashboard_live_counts():
    stub = StubClient(
        requests_=[{"stage": "new"}, {"stage": "in_progress"}, {"stage": "scrap"}],
        equipment=[{"id": 1}],
    )
    page = pages.load_dashboard(stub)
    assert not page.demo
    assert (page.total_requests, page.new_requests, page.in_progress_requests, page.total_equipment) == (3, 1, 1, 1)


def test_dashboard_demo_when_both_empty():
    page = pages.load_dashboard(StubClient(fail=("requests", "equipment")))
    assert page.demo
    assert (page.total_requests, page.new_requests, page.in_progress_requests, page.total_equipment) == (7, 3, 2, 8)


def test_dashboard_partial_failure_uses_live_half():
    page = pages.load_dashboard(StubClient(equipment=[{"id": 1}, {"id": 2}], fail=("requests",)))
    assert not page.demo
    assert page.total_requests == 0
    assert page.total_equipment == 2


def test_dashboard_malformed_records_fall_back_to_fixed_counts():
    page = pages.load_dashboard(StubClient(requests_=["not-a-record"]))
    assert page.demo
    assert page.total_requests == demo.DEMO_DASHBOARD_COUNTS["total_requests"]


def test_kanban_demo_on_empty(live_client):
    page = pages.load_kanban(live_client)
    assert page.demo
    assert [c.count for c in page.columns] == [2, 2, 1, 1]


def test_kanban_demo_on_failure(down_client):
    page = pages.load_kanban(down_client)
    assert page.demo
    assert page.columns[0].requests[0]["subject"] == "Conveyor 3 Overheating"


def test_kanban_live(client, live_client):
    create_request(client, subject="Conveyor Belt Jam", stage="in_progress")
    page = pages.load_kanban(live_client)
    assert not page.demo
    assert [c.count for c in page.columns] == [0, 1, 0, 0]
    assert page.columns[1].requests[0]["subject"] == "Conveyor Belt Jam"


def test_equipment_demo_sets(live_client, down_client):
    empty = pages.load_equipment_list(live_client)
    assert empty.demo and len(empty.equipment) == 5
    failed = pages.load_equipment_list(down_client)
    assert failed.demo and len(failed.equipment) == 2


def test_equipment_demo_records_are_copies(live_client):
    page = pages.load_equipment_list(live_client)
    page.equipment[0]["name"] = "changed"
    assert demo.DEMO_EQUIPMENT[0]["name"] == "CNC Miller XN-500"


def test_equipment_live_search(client, live_client):
    create_equipment(client)
    create_equipment(client, name="Hydraulic Press 50T", serial="HP-50-88")
    page = pages.load_equipment_list(live_client, search="hp-50")
    assert not page.demo
    assert len(page.equipment) == 2
    assert [e["name"] for e in page.visible] == ["Hydraulic Press 50T"]


def test_user_management_filters(client, live_client):
    prod = create_department(client, "Production")
    create_user(client, name="Alice Operator", department_id=prod["id"])
    create_user(client, name="Sarah Tech", role="technician")
    create_user(client, name="Bob Builder", department_id=prod["id"])

    page = pages.load_user_management(live_client, department="Production")
    assert page.error is None
    assert len(page.users) == 3
    assert [u["name"] for u in page.visible] == ["Alice Operator", "Bob Builder"]

    techs = pages.load_user_management(live_client, role="technician")
    assert [u["name"] for u in techs.visible] == ["Sarah Tech"]


def test_user_management_failure_shows_error(down_client):
    page = pages.load_user_management(down_client)
    assert page.error == "Failed to load users."
    assert page.users == []


def test_admin_overview_live(client, live_client):
    create_request(client, subject="Pump Noise", stage="scrap")
    create_request(client, subject="Sensor Fail", stage="repaired")
    page = pages.load_admin_overview(live_client, "critical")
    assert not page.demo
    assert page.stats["counts"]["open_requests"] == 0
    assert [r["subject"] for r in page.visible_requests] == ["Pump Noise"]
    assert page.status_chart == [("NEW", 0), ("IN_PROGRESS", 0), ("REPAIRED", 1), ("SCRAP", 1)]


def test_admin_overview_demo(down_client):
    page = pages.load_admin_overview(down_client, "new")
    assert page.demo
    assert page.stats["counts"]["total_users"] == 12
    assert [r["subject"] for r in page.visible_requests] == ["Conveyor Halt", "Hydraulic Leak"]


def test_request_detail(client, live_client, down_client):
    req = create_request(client, subject="Forklift leaking oil")
    assert pages.load_request_detail(live_client, req["id"]).request["subject"] == "Forklift leaking oil"
    failed = pages.load_request_detail(down_client, req["id"])
    assert failed.request is None
    assert failed.error == "Failed to load request details."


def test_change_stage(client, live_client):
    req = create_request(client)
    updated = pages.change_stage(live_client, req["id"], "repaired", duration=1.5)
    assert updated["stage"] == "repaired"
    assert updated["duration"] == 1.5


def test_change_stage_rejects_unknown_locally(down_client):
    with pytest.raises(ValueError):
        pages.change_stage(down_client, "anything", "done")
    assert down_client.session.calls == []


def test_mutations_surface_errors(live_client, down_client):
    with pytest.raises(ApiError):
        pages.delete_request(live_client, "00000000-0000-0000-0000-000000000000")
    with pytest.raises(ApiError):
        pages.delete_user(down_client, "00000000-0000-0000-0000-000000000000")


def test_delete_user_page_action(client, live_client):
    user = create_user(client)
    pages.delete_user(live_client, user["id"])
    assert live_client.list_users() == []


def test_reports_live_and_demo(client, live_client, down_client):
    empty = pages.load_reports(live_client, "7d")
    assert empty.demo
    assert empty.report["kpi"]["completed_requests"] == 14
    assert "Electrical" in empty.drill_down

    create_request(client, stage="repaired", duration=3)
    live = pages.load_reports(live_client, "7d")
    assert not live.demo
    assert live.report["kpi"]["completed_requests"] == 1

    unknown = pages.load_reports(down_client, "decade")
    assert unknown.demo
    assert unknown.range == "30d"
    assert unknown.report["kpi"]["completed_requests"] == 86


def test_export_report(tmp_path, down_client):
    page = pages.load_reports(down_client, "1y")
    target = pages.export_report(page, tmp_path / "report.json")
    saved = json.loads(target.read_text())
    assert saved["range"] == "1y"
    assert saved["demo"] is True
    assert len(saved["report"]["cost_over_time"]) == 12
    assert saved["drill_down"]["Hydraulic"][0]["equipment"] == "Press H1"
