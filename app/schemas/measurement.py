from pydantic import BaseModel
from datetime import date

class MeasurementCreate(BaseModel):
    retrievalSucceeded: bool


class Location(BaseModel):
    continent: str | None = None
    country: str | None = None
    city: str | None = None


class GeoMeasurementCreate(MeasurementCreate):
    """Geo-filecoin check result - everything except the outcome is optional"""
    location: Location | None = None
    minerId: str | None = None
    latency: float | None = None
    ttfb: float | None = None
    throughput: float | None = None


class MeasurementAck(BaseModel):
    success: bool = True


class DailyMeasurementOut(BaseModel):
    day: date
    # Counters are sent as decimal strings so 64-bit values survive JSON number parsing
    total: str
    successful: str


class GeoStatsRow(BaseModel):
    day: date
    # Same 64-bit encoding as the daily counters
    total_checks: str
    successful_checks: str
    success_rate: float
    continent: str | None = None
    country: str | None = None
    avg_latency: float | None = None
    avg_ttfb: float | None = None
    miner_id: str | None = None
