from sqlalchemy.orm import Session
from sqlalchemy import func, and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from datetime import date, timedelta
import logging
from ..config import settings, GEO_STATS_COUNT_SOURCES
from ..models.subnet import Subnet
from ..models.daily_measurement import DailyMeasurement
from ..models.geo_measurement import GeoMeasurement
from ..schemas.measurement import GeoMeasurementCreate
from ..utils import dates

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE support
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _upsert_daily(db: Session, subnet: Subnet, succeeded: bool, day: date):
    """
    Add one attempt to the (subnet, day) counter row in a single statement.
    The increment happens inside the database so concurrent requests can't lose updates.
    """
    dialect = db.get_bind().dialect.name
    insert = _UPSERT_INSERTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"Upsert is not supported for database dialect '{dialect}'")

    increment = 1 if succeeded else 0
    stmt = insert(DailyMeasurement).values(
        subnet=subnet.value,
        day=day,
        total=1,
        successful=increment,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[DailyMeasurement.subnet, DailyMeasurement.day],
        set_={
            "total": DailyMeasurement.total + 1,
            "successful": DailyMeasurement.successful + increment,
        },
    )
    db.execute(stmt)


def record_measurement(db: Session, subnet: Subnet, retrieval_succeeded: bool):
    day = dates.today()
    try:
        _upsert_daily(db, subnet, retrieval_succeeded, day)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Failed to record measurement for {subnet.value} on {day}")
        raise

    logger.debug(f"Recorded {subnet.value} measurement for {day} (succeeded={retrieval_succeeded})")


def get_success_rate(db: Session, subnet: Subnet, from_day: date | None = None, to_day: date | None = None):
    """
    Daily counters for a subnet between from_day and to_day (inclusive), oldest first.
    Both bounds default to today, so no arguments means "today only".
    """
    today = dates.today()
    from_day = from_day or today
    to_day = to_day or today

    rows = db.query(DailyMeasurement).filter(
        DailyMeasurement.subnet == subnet.value,
        DailyMeasurement.day >= from_day,
        DailyMeasurement.day <= to_day
    ).order_by(DailyMeasurement.day.asc()).all()

    return [
        {
            "day": row.day,
            "total": str(row.total),
            "successful": str(row.successful),
        }
        for row in rows
    ]


def record_geo_measurement(db: Session, payload: GeoMeasurementCreate):
    """
    Count a geo-filecoin check and store its detail row.
    Both writes share one transaction, a failure in either leaves no trace.
    """
    day = dates.today()
    location = payload.location
    succeeded = payload.retrievalSucceeded

    try:
        _upsert_daily(db, Subnet.GEO_FILECOIN, succeeded, day)
        db.add(GeoMeasurement(
            subnet=Subnet.GEO_FILECOIN.value,
            day=day,
            successful=1 if succeeded else 0,
            continent=location.continent if location else None,
            country=location.country if location else None,
            city=location.city if location else None,
            latency=payload.latency,
            ttfb=payload.ttfb,
            throughput=payload.throughput,
            miner_id=payload.minerId,
        ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Error saving geo measurement for {day} (miner={payload.minerId})")
        raise

    logger.debug(
        f"Recorded geo measurement for {day}: succeeded={succeeded}, "
        f"continent={location.continent if location else None}, miner={payload.minerId}"
    )


def _success_rate(successful: int, total: int) -> float:
    if not total:
        return 0
    return round(successful / total * 100, 1)


def get_geo_stats(
    db: Session,
    continent: str | None = None,
    miner_id: str | None = None,
    days: int = 7,
    count_source: str | None = None,
):
    """
    Geo-filecoin results grouped by day, continent, country and miner.

    count_source picks what total_checks / successful_checks mean:
    "detail" counts the geo rows in each group, "daily" reports the
    subnet-wide counters of that day next to the geo breakdown.
    """
    count_source = count_source or settings.GEO_STATS_COUNT_SOURCE
    if count_source not in GEO_STATS_COUNT_SOURCES:
        raise ValueError(f"Unknown geo stats count source '{count_source}'")

    since = dates.today() - timedelta(days=days)

    columns = [
        GeoMeasurement.day,
        GeoMeasurement.continent,
        GeoMeasurement.country,
        GeoMeasurement.miner_id,
        func.avg(GeoMeasurement.latency).label("avg_latency"),
        func.avg(GeoMeasurement.ttfb).label("avg_ttfb"),
    ]
    if count_source == "daily":
        columns += [
            func.max(DailyMeasurement.total).label("total_checks"),
            func.max(DailyMeasurement.successful).label("successful_checks"),
        ]
    else:
        columns += [
            func.count(GeoMeasurement.id).label("total_checks"),
            func.sum(GeoMeasurement.successful).label("successful_checks"),
        ]

    query = db.query(*columns)
    if count_source == "daily":
        query = query.outerjoin(
            DailyMeasurement,
            and_(
                DailyMeasurement.subnet == GeoMeasurement.subnet,
                DailyMeasurement.day == GeoMeasurement.day
            )
        )

    query = query.filter(
        GeoMeasurement.subnet == Subnet.GEO_FILECOIN.value,
        GeoMeasurement.day >= since
    )
    if continent:
        query = query.filter(GeoMeasurement.continent == continent)
    if miner_id:
        query = query.filter(GeoMeasurement.miner_id == miner_id)

    rows = query.group_by(
        GeoMeasurement.day,
        GeoMeasurement.continent,
        GeoMeasurement.country,
        GeoMeasurement.miner_id
    ).order_by(
        GeoMeasurement.day.desc(),
        GeoMeasurement.continent.asc(),
        GeoMeasurement.miner_id.asc()
    ).all()

    stats = []
    for row in rows:
        total = int(row.total_checks or 0)
        successful = int(row.successful_checks or 0)
        stats.append({
            "day": row.day,
            "total_checks": str(total),
            "successful_checks": str(successful),
            "success_rate": _success_rate(successful, total),
            "continent": row.continent,
            "country": row.country,
            "avg_latency": float(row.avg_latency) if row.avg_latency is not None else None,
            "avg_ttfb": float(row.avg_ttfb) if row.avg_ttfb is not None else None,
            "miner_id": row.miner_id,
        })

    logger.debug(f"Geo stats since {since} ({count_source}): {len(stats)} groups")
    return stats
