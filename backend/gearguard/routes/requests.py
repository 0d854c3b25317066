from datetime import datetime
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from ..database import get_db
from .. import models, schemas

router = APIRouter(prefix="/api/requests", tags=["requests"])

_REFERENCES = {
    "equipment_id": (models.Equipment, "Equipment not found"),
    "team_id": (models.MaintenanceTeam, "Team not found"),
    "created_by": (models.User, "User not found"),
    "assigned_to": (models.User, "User not found"),
}


def _check_references(db: Session, data: dict):
    for key, (model, message) in _REFERENCES.items():
        if data.get(key) and not db.get(model, data[key]):
            raise HTTPException(status_code=400, detail=message)


def _with_relations(query):
    return query.options(
        joinedload(models.MaintenanceRequest.equipment),
        joinedload(models.MaintenanceRequest.team),
        joinedload(models.MaintenanceRequest.creator),
        joinedload(models.MaintenanceRequest.assignee),
    )


def _get_or_404(db: Session, request_id: UUID) -> models.MaintenanceRequest:
    obj = db.get(models.MaintenanceRequest, request_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Request not found")
    return obj


@router.post("", response_model=schemas.DataEnvelope[schemas.MaintenanceRequestOut])
def create_request(
    payload: schemas.MaintenanceRequestCreate,
    db: Session = Depends(get_db),
):
    data = payload.model_dump()
    _check_references(db, data)
    # a request filed against a machine defaults to that machine's team
    if data["equipment_id"] and not data["team_id"]:
        data["team_id"] = db.get(models.Equipment, data["equipment_id"]).team_id
    obj = models.MaintenanceRequest(**data)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return {"data": obj}


@router.get("", response_model=schemas.DataEnvelope[list[schemas.MaintenanceRequestOut]])
def list_requests(db: Session = Depends(get_db)):
    rows = (
        _with_relations(db.query(models.MaintenanceRequest))
        .order_by(models.MaintenanceRequest.created_at.desc())
        .all()
    )
    return {"data": rows}


@router.get("/calendar", response_model=schemas.DataEnvelope[list[schemas.MaintenanceRequestOut]])
def request_calendar(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    query = _with_relations(db.query(models.MaintenanceRequest)).filter(
        models.MaintenanceRequest.scheduled_date.isnot(None)
    )
    if start:
        query = query.filter(models.MaintenanceRequest.scheduled_date >= start)
    if end:
        query = query.filter(models.MaintenanceRequest.scheduled_date <= end)
    return {"data": query.order_by(models.MaintenanceRequest.scheduled_date.asc()).all()}


@router.get("/{request_id}", response_model=schemas.DataEnvelope[schemas.MaintenanceRequestOut])
def get_request(request_id: UUID, db: Session = Depends(get_db)):
    return {"data": _get_or_404(db, request_id)}


@router.put("/{request_id}", response_model=schemas.DataEnvelope[schemas.MaintenanceRequestOut])
def update_request(
    request_id: UUID,
    data: schemas.MaintenanceRequestUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_or_404(db, request_id)
    changes = data.model_dump(exclude_unset=True)
    _check_references(db, changes)
    for k, v in changes.items():
        setattr(obj, k, v)
    db.commit()
    db.refresh(obj)
    return {"data": obj}


@router.put("/{request_id}/stage", response_model=schemas.DataEnvelope[schemas.MaintenanceRequestOut])
def update_stage(
    request_id: UUID,
    data: schemas.StageUpdate,
    db: Session = Depends(get_db),
):
    # any stage may follow any other
    obj = _get_or_404(db, request_id)
    obj.stage = data.stage
    if data.stage == "scrap" and data.scrap_reason is not None:
        obj.scrap_reason = data.scrap_reason
    if data.stage == "repaired" and data.duration is not None:
        obj.duration = data.duration
    db.commit()
    db.refresh(obj)
    return {"data": obj}


@router.delete("/{request_id}", status_code=204)
def delete_request(request_id: UUID, db: Session = Depends(get_db)):
    obj = _get_or_404(db, request_id)
    db.delete(obj)
    db.commit()
    return
