from gearguard.client import views


USERS = [
    {"id": "u1", "name": "Admin User", "role": "admin", "department": {"id": "d1", "name": "Production"}, "department_id": "d1"},
    {"id": "u2", "name": "Sarah Tech", "role": "technician", "department": {"id": "d4", "name": "Facilities"}, "department_id": "d4"},
    {"id": "u3", "name": "Alice Operator", "role": "employee", "department": {"id": "d1", "name": "Production"}, "department_id": "d1"},
    {"id": "u4", "name": "John Spark", "role": "technician", "department": None, "department_id": None},
    {"id": "u5", "name": "Dave Fixit", "role": "technician", "department": {"id": "d4", "name": "Facilities"}, "department_id": "d4"},
]


def test_filter_by_role_preserves_order():
    result = views.filter_records(USERS, role="technician")
    assert [u["id"] for u in result] == ["u2", "u4", "u5"]


def test_filter_all_and_none_are_ignored():
    assert views.filter_records(USERS, role="all") == USERS
    assert views.filter_records(USERS, role=None, department="") == USERS


def test_filter_by_department_name_or_id():
    by_name = views.filter_records(USERS, department="Production")
    by_id = views.filter_records(USERS, department="d1")
    assert [u["id"] for u in by_name] == ["u1", "u3"]
    assert by_id == by_name


def test_filter_combined_predicates():
    result = views.filter_records(USERS, role="technician", department="Facilities")
    assert [u["id"] for u in result] == ["u2", "u5"]
    assert views.filter_records(USERS, role="manager") == []


def test_filter_is_exact_subset():
    for role in ("admin", "manager", "technician", "employee"):
        subset = views.filter_records(USERS, role=role)
        assert subset == [u for u in USERS if u["role"] == role]


EQUIPMENT = [
    {"name": "CNC Miller XN-500", "serial_number": "CNC-2024-001"},
    {"name": "Hydraulic Press 50T", "serial_number": "HP-50-88"},
    {"name": "Robot Arm ABB", "serial_number": "RB-ABB-22"},
]


def test_search_matches_name_case_insensitively():
    assert [e["name"] for e in views.search_equipment(EQUIPMENT, "press")] == ["Hydraulic Press 50T"]
    assert [e["name"] for e in views.search_equipment(EQUIPMENT, "ROBOT")] == ["Robot Arm ABB"]


def test_search_matches_serial():
    assert [e["name"] for e in views.search_equipment(EQUIPMENT, "cnc-2024")] == ["CNC Miller XN-500"]
    assert [e["name"] for e in views.search_equipment(EQUIPMENT, "abb")] == ["Robot Arm ABB"]


def test_search_empty_term_returns_all():
    assert views.search_equipment(EQUIPMENT, "") == EQUIPMENT
    assert views.search_equipment(EQUIPMENT, None) == EQUIPMENT
    assert views.search_equipment(EQUIPMENT, "zzz") == []


def test_kanban_columns_order_and_grouping():
    reqs = [
        {"id": 1, "stage": "scrap"},
        {"id": 2, "stage": "new"},
        {"id": 3, "stage": "in_progress"},
        {"id": 4, "stage": "new"},
        {"id": 5, "stage": "archived"},
    ]
    columns = views.kanban_columns(reqs)
    assert [c.id for c in columns] == ["new", "in_progress", "repaired", "scrap"]
    assert [c.title for c in columns] == ["New Requests", "In Progress", "Completed", "Scrapped"]
    assert [r["id"] for r in columns[0].requests] == [2, 4]
    assert columns[2].count == 0
    assert sum(c.count for c in columns) == 4


def test_recent_activity_filters():
    reqs = [{"stage": s} for s in ["new", "in_progress", "repaired", "scrap", "new"]]
    assert len(views.filter_recent_activity(reqs, "all")) == 5
    assert len(views.filter_recent_activity(reqs, "new")) == 2
    assert len(views.filter_recent_activity(reqs, "in-progress")) == 1
    assert [r["stage"] for r in views.filter_recent_activity(reqs, "critical")] == ["new", "scrap", "new"]


def test_dashboard_counts():
    reqs = [{"stage": "new"}, {"stage": "in_progress"}, {"stage": "new"}, {"stage": "repaired"}]
    assert views.dashboard_counts(reqs, [1, 2]) == {
        "total_requests": 4,
        "new_requests": 2,
        "in_progress_requests": 1,
        "total_equipment": 2,
    }


def test_status_chart_fills_missing_stages():
    stats = {"charts": {"status": [{"stage": "repaired", "count": 7}]}}
    assert views.status_chart(stats) == [("NEW", 0), ("IN_PROGRESS", 0), ("REPAIRED", 7), ("SCRAP", 0)]


def test_name_of():
    assert views.name_of({"name": "Belt #4"}) == "Belt #4"
    assert views.name_of(None) == "N/A"
    assert views.name_of(None, "Unassigned") == "Unassigned"
