from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .. import schemas
from ..services.admin_stats import build_admin_stats

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", response_model=schemas.DataEnvelope[schemas.AdminStats])
def admin_stats(db: Session = Depends(get_db)):
    return {"data": build_admin_stats(db)}
