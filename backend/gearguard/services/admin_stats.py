"""Aggregate counters behind the administrator overview."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from .. import models, schemas

OPEN_STAGES = ("new", "in_progress")
RECENT_LIMIT = 5


def stage_distribution(db: Session) -> list[dict]:
    """Return request counts for every stage, zero counts included."""

    rows = dict(
        db.query(models.MaintenanceRequest.stage, func.count(models.MaintenanceRequest.id))
        .group_by(models.MaintenanceRequest.stage)
        .all()
    )
    return [{"stage": stage, "count": rows.get(stage, 0)} for stage in schemas.REQUEST_STAGES]


def recent_requests(db: Session, limit: int = RECENT_LIMIT) -> list[models.MaintenanceRequest]:
    return (
        db.query(models.MaintenanceRequest)
        .options(
            joinedload(models.MaintenanceRequest.equipment),
            joinedload(models.MaintenanceRequest.assignee),
        )
        .order_by(models.MaintenanceRequest.created_at.desc())
        .limit(limit)
        .all()
    )


def build_admin_stats(db: Session) -> dict:
    """Collect headline counts, the stage chart and the latest requests."""

    counts = {
        "total_users": db.query(func.count(models.User.id)).scalar() or 0,
        "technicians": (
            db.query(func.count(models.User.id))
            .filter(models.User.role == "technician")
            .scalar()
            or 0
        ),
        "active_equipment": (
            db.query(func.count(models.Equipment.id))
            .filter(models.Equipment.status != "retired")
            .scalar()
            or 0
        ),
        "open_requests": (
            db.query(func.count(models.MaintenanceRequest.id))
            .filter(models.MaintenanceRequest.stage.in_(OPEN_STAGES))
            .scalar()
            or 0
        ),
    }
    return {
        "counts": counts,
        "charts": {"status": stage_distribution(db)},
        "recent_requests": recent_requests(db),
    }
