from sqlalchemy import Column, Integer, SmallInteger, String, Date, Float, Index
from ..database import Base

class GeoMeasurement(Base):
    __tablename__ = "geo_measurements"
    __table_args__ = (
        Index("ix_geo_measurements_subnet_day", "subnet", "day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    subnet = Column(String, nullable=False, default="geo-filecoin")
    day = Column(Date, nullable=False)
    successful = Column(SmallInteger, nullable=False)  # 0 / 1

    # Location and performance fields stay NULL when the checker did not report them
    continent = Column(String, nullable=True)
    country = Column(String, nullable=True)
    city = Column(String, nullable=True)
    latency = Column(Float, nullable=True)
    ttfb = Column(Float, nullable=True)  # time to first byte
    throughput = Column(Float, nullable=True)
    miner_id = Column(String, nullable=True)
