from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from .. import schemas
from ..services.reports import ReportRangeError, build_report

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=schemas.DataEnvelope[schemas.ReportSummary])
def report_summary(
    range_key: str = Query("30d", alias="range"),
    db: Session = Depends(get_db),
):
    try:
        report = build_report(db, range_key)
    except ReportRangeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"data": report}
