from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from ..database import get_db
from .. import models, schemas

router = APIRouter(prefix="/api/equipment", tags=["equipment"])


def _check_references(db: Session, data: dict):
    if data.get("department_id") and not db.get(models.Department, data["department_id"]):
        raise HTTPException(status_code=400, detail="Department not found")
    if data.get("team_id") and not db.get(models.MaintenanceTeam, data["team_id"]):
        raise HTTPException(status_code=400, detail="Team not found")


@router.post("", response_model=schemas.DataEnvelope[schemas.EquipmentOut])
def create_equipment(
    equipment: schemas.EquipmentCreate,
    db: Session = Depends(get_db),
):
    payload = equipment.model_dump()
    _check_references(db, payload)
    db_eq = models.Equipment(**payload)
    db.add(db_eq)
    db.commit()
    db.refresh(db_eq)
    return {"data": db_eq}


@router.get("", response_model=schemas.DataEnvelope[list[schemas.EquipmentOut]])
def list_equipment(db: Session = Depends(get_db)):
    items = (
        db.query(models.Equipment)
        .options(joinedload(models.Equipment.department), joinedload(models.Equipment.team))
        .order_by(models.Equipment.created_at.asc())
        .all()
    )
    return {"data": items}


@router.get("/{equipment_id}", response_model=schemas.DataEnvelope[schemas.EquipmentOut])
def get_equipment(equipment_id: UUID, db: Session = Depends(get_db)):
    eq = db.get(models.Equipment, equipment_id)
    if not eq:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"data": eq}


@router.put("/{equipment_id}", response_model=schemas.DataEnvelope[schemas.EquipmentOut])
def update_equipment(
    equipment_id: UUID,
    data: schemas.EquipmentUpdate,
    db: Session = Depends(get_db),
):
    eq = db.get(models.Equipment, equipment_id)
    if not eq:
        raise HTTPException(status_code=404, detail="Equipment not found")
    changes = data.model_dump(exclude_unset=True)
    _check_references(db, changes)
    for k, v in changes.items():
        setattr(eq, k, v)
    db.commit()
    db.refresh(eq)
    return {"data": eq}


@router.delete("/{equipment_id}", status_code=204)
def delete_equipment(equipment_id: UUID, db: Session = Depends(get_db)):
    eq = db.get(models.Equipment, equipment_id)
    if not eq:
        raise HTTPException(status_code=404, detail="Equipment not found")
    db.query(models.MaintenanceRequest).filter(
        models.MaintenanceRequest.equipment_id == equipment_id
    ).update({models.MaintenanceRequest.equipment_id: None}, synchronize_session=False)
    db.delete(eq)
    db.commit()
    return
