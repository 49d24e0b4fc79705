"""Location model."""

from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship

from .base import Base

class Location(Base):
    """
    A place events happen in.

    Fields:
        id: Unique identifier (auto-generated)
        name: Display name of the place (e.g. 'Grünerløkka')
        city: City used for filtering and metadata aggregation
        region: County or region (optional)
        latitude/longitude: Coordinates (optional)
    """
    __tablename__ = 'locations'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    region = Column(String(100))
    latitude = Column(Float)
    longitude = Column(Float)

    events = relationship('Event', back_populates='location')

    def __str__(self) -> str:
        return f"Location(name={self.name}, city={self.city})"
