from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .. import models, schemas

router = APIRouter(prefix="/api/departments", tags=["departments"])


@router.get("", response_model=schemas.DataEnvelope[list[schemas.DepartmentOut]])
def list_departments(db: Session = Depends(get_db)):
    return {"data": db.query(models.Department).order_by(models.Department.name).all()}


@router.post("", response_model=schemas.DataEnvelope[schemas.DepartmentOut])
def create_department(department: schemas.DepartmentCreate, db: Session = Depends(get_db)):
    db_department = models.Department(**department.model_dump())
    db.add(db_department)
    db.commit()
    db.refresh(db_department)
    return {"data": db_department}
