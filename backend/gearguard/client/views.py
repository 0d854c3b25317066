"""Derived views over fetched records.

Everything here is a pure function of its inputs: filters keep the original
record order and never mutate the records they are handed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..schemas import REQUEST_STAGES

KANBAN_COLUMNS: list[tuple[str, str]] = [
    ("new", "New Requests"),
    ("in_progress", "In Progress"),
    ("repaired", "Completed"),
    ("scrap", "Scrapped"),
]

STAGE_LABELS = {
    "new": "New",
    "in_progress": "In Progress",
    "repaired": "Repaired",
    "scrap": "Scrap",
}

STATUS_LABELS = {
    "operational": "Operational",
    "under_maintenance": "Under Maintenance",
    "maintenance_required": "Maintenance Required",
    "retired": "Retired",
}

ROLE_LABELS = {
    "admin": "Admin",
    "manager": "Manager",
    "technician": "Technician",
    "employee": "Employee",
}

# admin overview shorthand for work nobody has picked up or that was written off
CRITICAL_STAGES = frozenset({"new", "scrap"})

_NO_FILTER = (None, "", "all")


@dataclass
class KanbanColumn:
    id: str
    title: str
    requests: list[dict] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.requests)


def _candidates(record: dict, key: str) -> set[str]:
    values = set()
    value = record.get(key)
    if isinstance(value, dict):
        values.update(str(value[k]) for k in ("id", "name") if value.get(k) is not None)
    elif value is not None:
        values.add(str(value))
    if record.get(f"{key}_id") is not None:
        values.add(str(record[f"{key}_id"]))
    return values


def filter_records(records: Iterable[dict], **criteria) -> list[dict]:
    """Keep records equal to every active criterion.

    A criterion set to ``None``, ``""`` or ``"all"`` is ignored. Nested
    objects such as ``department`` match on their ``id`` or ``name``, and a
    sibling ``<key>_id`` field is honoured as well.
    """

    active = {k: str(v) for k, v in criteria.items() if v not in _NO_FILTER}
    return [
        r for r in records
        if all(expected in _candidates(r, key) for key, expected in active.items())
    ]


def search_equipment(records: Iterable[dict], term: str | None) -> list[dict]:
    """Case-insensitive substring search on name or serial number."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(records)
    return [
        r for r in records
        if needle in (r.get("name") or "").lower()
        or needle in (r.get("serial_number") or "").lower()
    ]


def normalize_stage(value: str) -> str:
    return value.strip().lower().replace("-", "_")


def filter_recent_activity(requests: Iterable[dict], flt: str = "all") -> list[dict]:
    flt = normalize_stage(flt or "all")
    if flt == "all":
        return list(requests)
    if flt == "critical":
        return [r for r in requests if r.get("stage") in CRITICAL_STAGES]
    return [r for r in requests if r.get("stage") == flt]


def kanban_columns(requests: Iterable[dict]) -> list[KanbanColumn]:
    """Group requests into the four stage columns, in board order."""

    columns = {stage: KanbanColumn(stage, title) for stage, title in KANBAN_COLUMNS}
    for r in requests:
        column = columns.get(r.get("stage"))
        if column is not None:
            column.requests.append(r)
    return list(columns.values())


def dashboard_counts(requests: list[dict], equipment: list) -> dict:
    return {
        "total_requests": len(requests),
        "new_requests": sum(1 for r in requests if r.get("stage") == "new"),
        "in_progress_requests": sum(1 for r in requests if r.get("stage") == "in_progress"),
        "total_equipment": len(equipment),
    }


def status_chart(stats: dict) -> list[tuple[str, int]]:
    """Bar chart series for the admin overview: upper-cased stage and count."""

    counts = {row["stage"]: row["count"] for row in stats.get("charts", {}).get("status", [])}
    return [(stage.upper(), counts.get(stage, 0)) for stage in REQUEST_STAGES]


def name_of(value: dict | None, default: str = "N/A") -> str:
    return (value or {}).get("name") or default
