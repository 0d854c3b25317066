"""Maintenance report aggregation over a trailing time window."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models

# purpose: back the reports dashboard KPIs with live request data
# depends_on: gearguard.models.MaintenanceRequest, gearguard.models.MaintenanceTeam

RANGE_WINDOWS: dict[str, timedelta] = {
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "1y": timedelta(days=365),
}

OPEN_STAGES = ("new", "in_progress")


class ReportRangeError(ValueError):
    """Raised when a report window key is not recognised."""


def window_start(range_key: str, now: datetime | None = None) -> datetime:
    """Return the inclusive lower bound of the window named by ``range_key``."""

    try:
        window = RANGE_WINDOWS[range_key]
    except KeyError:
        raise ReportRangeError(
            f"unknown range {range_key!r}; expected one of {', '.join(RANGE_WINDOWS)}"
        ) from None
    return (now or datetime.now(timezone.utc)) - window


def build_report(db: Session, range_key: str = "30d", now: datetime | None = None) -> dict:
    """Summarise requests created inside the window.

    ``avg_repair_time`` is the mean ``duration`` of repaired requests that
    recorded one. ``preventive_compliance`` is the share of preventive
    requests that reached ``repaired``, reported as a percentage and 100 when
    no preventive work was planned.
    """

    since = window_start(range_key, now)
    requests = (
        db.query(models.MaintenanceRequest)
        .filter(models.MaintenanceRequest.created_at >= since)
        .all()
    )

    repaired = [r for r in requests if r.stage == "repaired"]
    durations = [r.duration for r in repaired if r.duration is not None]
    preventive = [r for r in requests if r.type == "preventive"]
    preventive_done = [r for r in preventive if r.stage == "repaired"]

    kpi = {
        "total_requests": len(requests),
        "completed_requests": len(repaired),
        "avg_repair_time": round(sum(durations) / len(durations), 2) if durations else 0.0,
        "preventive_compliance": (
            round(100.0 * len(preventive_done) / len(preventive), 1) if preventive else 100.0
        ),
    }

    by_team: dict = {}
    for r in requests:
        if r.team_id is None:
            continue
        bucket = by_team.setdefault(r.team_id, {"completed": 0, "open": 0})
        if r.stage == "repaired":
            bucket["completed"] += 1
        elif r.stage in OPEN_STAGES:
            bucket["open"] += 1
    team_names = dict(
        db.query(models.MaintenanceTeam.id, models.MaintenanceTeam.team_name)
        .filter(models.MaintenanceTeam.id.in_(list(by_team)))
        .all()
    ) if by_team else {}
    requests_by_team = sorted(
        (
            {"name": team_names.get(team_id, "Unknown"), **counts}
            for team_id, counts in by_team.items()
        ),
        key=lambda row: row["name"],
    )

    type_counts = dict(
        db.query(models.MaintenanceRequest.type, func.count(models.MaintenanceRequest.id))
        .filter(models.MaintenanceRequest.created_at >= since)
        .group_by(models.MaintenanceRequest.type)
        .all()
    )
    requests_by_type = [
        {"type": kind, "count": type_counts.get(kind, 0)}
        for kind in ("corrective", "preventive")
    ]

    return {
        "range": range_key,
        "since": since,
        "kpi": kpi,
        "requests_by_team": requests_by_team,
        "requests_by_type": requests_by_type,
    }
