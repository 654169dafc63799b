# backend/app/models/weather_record.py
from sqlalchemy import Column, Integer, String, BigInteger, Text, ForeignKey

from backend.app.db.session import Base

class WeatherRecord(Base):
    __tablename__ = "weathers" # One row per forecasted day

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(BigInteger, nullable=False) # Cache timestamp shared by the whole batch (epoch ms)
    forecast = Column(Text, nullable=True) # Provider's daily summary
    time = Column(String(50), nullable=True) # Calendar date, e.g. 'Tue Jan 15 2019'
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)

    def __repr__(self):
        return f"<WeatherRecord(id={self.id}, location_id={self.location_id}, time='{self.time}')>"
