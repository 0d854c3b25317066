from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload
from uuid import UUID

from ..database import get_db
from .. import models, schemas

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("", response_model=schemas.DataEnvelope[list[schemas.TeamOut]])
def list_teams(db: Session = Depends(get_db)):
    teams = (
        db.query(models.MaintenanceTeam)
        .options(selectinload(models.MaintenanceTeam.members).joinedload(models.TeamMember.user))
        .order_by(models.MaintenanceTeam.team_name)
        .all()
    )
    return {"data": teams}


@router.post("", response_model=schemas.DataEnvelope[schemas.TeamOut])
def create_team(team: schemas.TeamCreate, db: Session = Depends(get_db)):
    db_team = models.MaintenanceTeam(**team.model_dump())
    db.add(db_team)
    db.commit()
    db.refresh(db_team)
    return {"data": db_team}


@router.post("/{team_id}/members", response_model=schemas.DataEnvelope[schemas.TeamMemberOut])
def add_member(
    team_id: UUID,
    member: schemas.TeamMemberAdd,
    db: Session = Depends(get_db),
):
    team = db.get(models.MaintenanceTeam, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    db_user = db.get(models.User, member.user_id)
    if not db_user:
        raise HTTPException(status_code=400, detail="User not found")
    existing = db.get(models.TeamMember, (team_id, member.user_id))
    if existing:
        raise HTTPException(status_code=400, detail="User already member")
    membership = models.TeamMember(team_id=team_id, user_id=db_user.id, role=member.role)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    return {"data": membership}
