"""Event type taxonomy model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base

class EventType(Base):
    """
    Classification entry for events (konsert, workshop, festival, ...).

    Reference data: rows are seeded once and never modified by the API.
    """
    __tablename__ = 'event_types'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True)
    description = Column(Text)
    icon = Column(String(50))
    color = Column(String(20))

    events = relationship('Event', back_populates='event_type')

    def __str__(self) -> str:
        return f"EventType(slug={self.slug})"
