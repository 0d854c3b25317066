"""Fixed sample records shown when live data is unavailable."""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

DEMO_EQUIPMENT = [
    {"id": 1, "name": "CNC Miller XN-500", "serial_number": "CNC-2024-001", "type": "Machining", "location": "Zone A", "status": "operational", "department": {"name": "Production"}},
    {"id": 2, "name": "Hydraulic Press 50T", "serial_number": "HP-50-88", "type": "Press", "location": "Zone B", "status": "operational", "department": {"name": "Production"}},
    {"id": 3, "name": "Conveyor Belt System", "serial_number": "CV-100-22", "type": "Logistics", "location": "Loading Dock", "status": "under_maintenance", "department": {"name": "Logistics"}},
    {"id": 4, "name": "Robot Arm ABB", "serial_number": "RB-ABB-22", "type": "Assembly", "location": "Line 2", "status": "operational", "department": {"name": "Assembly"}},
    {"id": 5, "name": "Forklift Toyota 22", "serial_number": "FL-22-99", "type": "Vehicle", "location": "Warehouse", "status": "maintenance_required", "department": {"name": "Logistics"}},
]

# smaller set used when the equipment call itself blew up
DEMO_EQUIPMENT_ON_ERROR = DEMO_EQUIPMENT[:2]

_KANBAN_SEED = [
    (101, "Conveyor 3 Overheating", "high", "new", "Main Conveyor Belt", None, 0),
    (102, "Forklift B2 Service", "medium", "new", "Forklift B2", "Sarah Tech", 0),
    (103, "Safety Sensor Misfire", "critical", "in_progress", "Press Machine #4", "Dave Fixit", 1),
    (104, "Annual Calibration", "low", "in_progress", "Testing Unit A", "John Spark", 2),
    (105, "Motor Replacement", "high", "repaired", "Drill Press X1", "Sarah Tech", 5),
    (106, "Obsolete Switch Gear", "low", "scrap", "Old Generator", "Mike Manager", 10),
]

# dashboard only needs stages and a machine count
DEMO_DASHBOARD_STAGES = ["new", "new", "new", "in_progress", "in_progress", "repaired", "scrap"]
DEMO_DASHBOARD_EQUIPMENT_COUNT = 8
DEMO_DASHBOARD_COUNTS = {
    "total_requests": 12,
    "new_requests": 4,
    "in_progress_requests": 3,
    "total_equipment": 8,
}

DEMO_ADMIN_STATS = {
    "counts": {
        "total_users": 12,
        "technicians": 5,
        "active_equipment": 45,
        "open_requests": 8,
    },
    "charts": {
        "status": [
            {"stage": "new", "count": 3},
            {"stage": "in_progress", "count": 5},
            {"stage": "repaired", "count": 12},
            {"stage": "scrap", "count": 1},
        ]
    },
    "recent_requests": [
        {"id": "1", "subject": "Conveyor Halt", "equipment": {"name": "Belt #4"}, "assignee": {"name": "John Doe"}, "stage": "new"},
        {"id": "2", "subject": "Pump Noise", "equipment": {"name": "Pump A-1"}, "assignee": {"name": "Jane Smith"}, "stage": "in_progress"},
        {"id": "3", "subject": "Sensor Fail", "equipment": {"name": "Sensor X"}, "assignee": {"name": "Bob Wilson"}, "stage": "repaired"},
        {"id": "4", "subject": "Motor Burnout", "equipment": {"name": "Motor M5"}, "assignee": {"name": "Alice Brown"}, "stage": "scrap"},
        {"id": "5", "subject": "Hydraulic Leak", "equipment": {"name": "Press P-9"}, "assignee": {"name": "Mike Ross"}, "stage": "new"},
    ],
}

DEMO_REPORTS = {
    "7d": {
        "kpi": {"total_maintenance_cost": 2400, "avg_repair_time": 3.2, "completed_requests": 14, "preventive_compliance": 98},
        "cost_over_time": [
            {"label": "Mon", "cost": 300}, {"label": "Tue", "cost": 450}, {"label": "Wed", "cost": 200},
            {"label": "Thu", "cost": 600}, {"label": "Fri", "cost": 350}, {"label": "Sat", "cost": 150}, {"label": "Sun", "cost": 350},
        ],
        "faults_by_type": [
            {"name": "Electrical", "value": 3}, {"name": "Mechanical", "value": 5}, {"name": "Hydraulic", "value": 1}, {"name": "Software", "value": 1},
        ],
        "requests_by_team": [
            {"name": "Alpha", "completed": 5, "open": 1}, {"name": "Beta", "completed": 4, "open": 2}, {"name": "Gamma", "completed": 5, "open": 0},
        ],
    },
    "30d": {
        "kpi": {"total_maintenance_cost": 12500, "avg_repair_time": 4.5, "completed_requests": 86, "preventive_compliance": 92},
        "cost_over_time": [
            {"label": "Week 1", "cost": 2500}, {"label": "Week 2", "cost": 3200}, {"label": "Week 3", "cost": 2800}, {"label": "Week 4", "cost": 4000},
        ],
        "faults_by_type": [
            {"name": "Electrical", "value": 12}, {"name": "Mechanical", "value": 18}, {"name": "Hydraulic", "value": 6}, {"name": "Software", "value": 4},
        ],
        "requests_by_team": [
            {"name": "Alpha", "completed": 24, "open": 4}, {"name": "Beta", "completed": 18, "open": 7}, {"name": "Gamma", "completed": 30, "open": 2},
        ],
    },
    "1y": {
        "kpi": {"total_maintenance_cost": 145000, "avg_repair_time": 5.1, "completed_requests": 1042, "preventive_compliance": 89},
        "cost_over_time": [
            {"label": "Jan", "cost": 12000}, {"label": "Feb", "cost": 15000}, {"label": "Mar", "cost": 11000}, {"label": "Apr", "cost": 14000},
            {"label": "May", "cost": 9000}, {"label": "Jun", "cost": 22000}, {"label": "Jul", "cost": 13000}, {"label": "Aug", "cost": 16000},
            {"label": "Sep", "cost": 14000}, {"label": "Oct", "cost": 18000}, {"label": "Nov", "cost": 12000}, {"label": "Dec", "cost": 19000},
        ],
        "faults_by_type": [
            {"name": "Electrical", "value": 120}, {"name": "Mechanical", "value": 250}, {"name": "Hydraulic", "value": 80}, {"name": "Software", "value": 45},
        ],
        "requests_by_team": [
            {"name": "Alpha", "completed": 350, "open": 12}, {"name": "Beta", "completed": 290, "open": 15}, {"name": "Gamma", "completed": 402, "open": 8},
        ],
    },
}

DEMO_DRILL_DOWN = {
    "Electrical": [
        {"id": 101, "equipment": "Motor A1", "issue": "Short Circuit", "cost": 200},
        {"id": 102, "equipment": "Panel B", "issue": "Fuse Blown", "cost": 50},
    ],
    "Mechanical": [
        {"id": 201, "equipment": "Conv Belt", "issue": "Bearing Fail", "cost": 450},
        {"id": 202, "equipment": "Pump P3", "issue": "Leakage", "cost": 300},
    ],
    "Hydraulic": [
        {"id": 301, "equipment": "Press H1", "issue": "Pressure Loss", "cost": 800},
    ],
    "Software": [
        {"id": 401, "equipment": "PLC Unit", "issue": "Firmware Bug", "cost": 0},
    ],
}


def demo_requests(now: datetime | None = None) -> list[dict]:
    """Return the kanban sample requests, aged relative to ``now``."""

    now = now or datetime.now(timezone.utc)
    return [
        {
            "id": rid,
            "subject": subject,
            "priority": priority,
            "stage": stage,
            "equipment": {"name": equipment},
            "assignee": {"name": assignee} if assignee else None,
            "created_at": (now - timedelta(days=age)).isoformat(),
        }
        for rid, subject, priority, stage, equipment, assignee, age in _KANBAN_SEED
    ]


def demo_report(range_key: str) -> dict:
    """Return a copy of the mock report for ``range_key``; unknown keys get 30d."""

    key = range_key if range_key in DEMO_REPORTS else "30d"
    return {"range": key, **copy.deepcopy(DEMO_REPORTS[key])}


def fresh(records):
    """Deep copy a demo set so callers may mutate what they receive."""

    return copy.deepcopy(records)
