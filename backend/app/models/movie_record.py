# backend/app/models/movie_record.py
from sqlalchemy import Column, Integer, String, BigInteger, Float, Text, ForeignKey

from backend.app.db.session import Base

class MovieRecord(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(BigInteger, nullable=False)
    title = Column(String(255), nullable=True)
    overview = Column(Text, nullable=True)
    average_votes = Column(Float, nullable=True)
    total_votes = Column(Integer, nullable=True)
    image_url = Column(Text, nullable=True) # Poster URL built from the provider's poster_path
    popularity = Column(Float, nullable=True)
    released_on = Column(String(50), nullable=True) # Kept as the provider's textual date
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)

    def __repr__(self):
        return f"<MovieRecord(id={self.id}, location_id={self.location_id}, title='{self.title}')>"
