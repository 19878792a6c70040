from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from ..models.subnet import Subnet
from ..schemas.measurement import MeasurementCreate, MeasurementAck, DailyMeasurementOut
from ..dependencies import get_db
from ..services.measurement_service import record_measurement, get_success_rate

router = APIRouter()

@router.post("/{subnet}/measurement", response_model=MeasurementAck)
def create_measurement(subnet: Subnet, payload: MeasurementCreate, db: Session = Depends(get_db)):
    record_measurement(db, subnet, payload.retrievalSucceeded)
    return {"success": True}


@router.get("/{subnet}/retrieval-success-rate", response_model=list[DailyMeasurementOut])
def retrieval_success_rate(
    subnet: Subnet,
    from_day: date | None = Query(None, alias="from"),
    to_day: date | None = Query(None, alias="to"),
    db: Session = Depends(get_db)
):
    """
    Daily total/successful counters between from and to (inclusive)
    Both default to today
    """
    return get_success_rate(db, subnet, from_day=from_day, to_day=to_day)
