from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload
from uuid import UUID

from ..database import get_db
from ..security import hash_password
from .. import models, schemas

router = APIRouter(prefix="/api/users", tags=["users"])


def _ensure_department(db: Session, department_id: UUID | None):
    if department_id and not db.get(models.Department, department_id):
        raise HTTPException(status_code=400, detail="Department not found")


def _email_taken(db: Session, email: str, exclude: UUID | None = None) -> bool:
    query = db.query(models.User).filter(models.User.email == email)
    if exclude:
        query = query.filter(models.User.id != exclude)
    return query.first() is not None


@router.get("", response_model=schemas.DataEnvelope[list[schemas.UserOut]])
def list_users(db: Session = Depends(get_db)):
    users = (
        db.query(models.User)
        .options(joinedload(models.User.department))
        .order_by(models.User.created_at.asc())
        .all()
    )
    return {"data": users}


@router.post("", response_model=schemas.DataEnvelope[schemas.UserOut])
def create_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    if _email_taken(db, user.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    _ensure_department(db, user.department_id)
    db_user = models.User(
        name=user.name,
        email=user.email,
        hashed_password=hash_password(user.password),
        role=user.role,
        department_id=user.department_id,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return {"data": db_user}


@router.get("/{user_id}", response_model=schemas.DataEnvelope[schemas.UserOut])
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"data": user}


@router.put("/{user_id}", response_model=schemas.DataEnvelope[schemas.UserOut])
def update_user(
    user_id: UUID,
    data: schemas.UserUpdate,
    db: Session = Depends(get_db),
):
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    changes = data.model_dump(exclude_unset=True)
    if changes.get("email") and _email_taken(db, changes["email"], exclude=user_id):
        raise HTTPException(status_code=400, detail="Email already registered")
    _ensure_department(db, changes.get("department_id"))
    password = changes.pop("password", None)
    if password:
        user.hashed_password = hash_password(password)
    for k, v in changes.items():
        setattr(user, k, v)
    db.commit()
    db.refresh(user)
    return {"data": user}


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: UUID, db: Session = Depends(get_db)):
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    # requests outlive the people who filed or worked them
    db.query(models.MaintenanceRequest).filter(
        models.MaintenanceRequest.created_by == user_id
    ).update({models.MaintenanceRequest.created_by: None}, synchronize_session=False)
    db.query(models.MaintenanceRequest).filter(
        models.MaintenanceRequest.assigned_to == user_id
    ).update({models.MaintenanceRequest.assigned_to: None}, synchronize_session=False)
    db.delete(user)
    db.commit()
    return
