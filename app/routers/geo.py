from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from ..schemas.measurement import GeoMeasurementCreate, GeoStatsRow, MeasurementAck
from ..dependencies import get_db
from ..services.measurement_service import record_geo_measurement, get_geo_stats

router = APIRouter()

@router.post("/measurement", response_model=MeasurementAck)
def create_geo_measurement(payload: GeoMeasurementCreate, db: Session = Depends(get_db)):
    """Record a geo-filecoin check: bumps the daily counter and stores the detail row"""
    record_geo_measurement(db, payload)
    return {"success": True}


@router.get("/stats", response_model=list[GeoStatsRow])
def geo_stats(
    continent: str | None = None,
    miner_id: str | None = Query(None, alias="minerId"),
    days: int = Query(7, ge=1, le=90),
    db: Session = Depends(get_db)
):
    """
    Aggregated geo-filecoin results for the last `days` days
    days: 1..90, defaults to 7
    """
    return get_geo_stats(db, continent=continent, miner_id=miner_id, days=days)
