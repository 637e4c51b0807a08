from sqlalchemy import Column, DateTime, Float, Integer, String, func
from app.core.database import Base

class DailyElectricity(Base):
    __tablename__ = "daily_electricity_table"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String, nullable=False, server_default=func.current_date())
    electricity = Column(Float, nullable=False)
    # delta against the previous day's reading, supplied by the caller
    diff = Column(Float, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now())
