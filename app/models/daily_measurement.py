from sqlalchemy import Column, String, Date, BigInteger
from ..database import Base

class DailyMeasurement(Base):
    __tablename__ = "daily_measurements"

    subnet = Column(String, primary_key=True)  # walrus / arweave / geo-filecoin
    day = Column(Date, primary_key=True)
    total = Column(BigInteger, nullable=False, default=0)
    successful = Column(BigInteger, nullable=False, default=0)  # never above total
