# backend/app/models/business_record.py
from sqlalchemy import Column, Integer, String, BigInteger, Float, Text, ForeignKey

from backend.app.db.session import Base

class BusinessRecord(Base):
    __tablename__ = "yelps" # Businesses come from Yelp

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(BigInteger, nullable=False)
    name = Column(String(255), nullable=True)
    image_url = Column(Text, nullable=True)
    price = Column(String(10), nullable=True) # e.g. '$$'
    rating = Column(Float, nullable=True)
    url = Column(Text, nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)

    def __repr__(self):
        return f"<BusinessRecord(id={self.id}, location_id={self.location_id}, name='{self.name}')>"
