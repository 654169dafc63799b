# backend/app/models/event_record.py
from sqlalchemy import Column, Integer, String, BigInteger, Text, ForeignKey

from backend.app.db.session import Base

class EventRecord(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(BigInteger, nullable=False)
    link = Column(Text, nullable=True)
    name = Column(Text, nullable=True)
    event_date = Column(String(50), nullable=True)
    summary = Column(Text, nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)

    def __repr__(self):
        return f"<EventRecord(id={self.id}, location_id={self.location_id}, name='{self.name}')>"
