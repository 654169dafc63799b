# backend/app/models/location.py
from sqlalchemy import Column, Integer, String, BigInteger, Numeric

from backend.app.db.session import Base

class Location(Base):
    __tablename__ = "locations" # Root entity every cached resource points at

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(BigInteger, nullable=False) # Epoch milliseconds when first geocoded
    latitude = Column(Numeric(10, 7), nullable=False)
    longitude = Column(Numeric(10, 7), nullable=False)
    search_query = Column(String(255), nullable=False, unique=True, index=True) # Raw text the user searched for
    formatted_query = Column(String(255), nullable=True) # Address as the geocoder formatted it

    def __repr__(self):
        return (
            f"<Location(id={self.id}, search_query='{self.search_query}', "
            f"lat={self.latitude}, lon={self.longitude})>"
        )
