"""Event model definition."""

import uuid
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Boolean, Numeric, ForeignKey,
    CheckConstraint, Index, text
)
from sqlalchemy.orm import relationship

from .base import Base
from ..config.settings import SEARCH_LANGUAGE
from ..utils.timezone import ensure_oslo_timezone, now_oslo

def search_document(language: str, table: str = None) -> str:
    """Postgres tsvector over title and description, optionally qualified by a table alias."""
    prefix = f"{table}." if table else ""
    return (
        f"to_tsvector('{language}', "
        f"coalesce({prefix}title, '') || ' ' || coalesce({prefix}description, ''))"
    )

class EventStatus(str, Enum):
    """Moderation status of an event."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

class Event(Base):
    """
    Event model representing a publicly listed happening.

    Only events that are approved and not cancelled are visible through the
    public listing and detail endpoints.

    Fields:
        id: Unique identifier (UUID string)
        slug: Unique human-readable identifier used in URLs
        title: Event title
        description: Event description (optional)
        start_date: When the event starts
        end_date: When the event ends (optional)
        event_type_id: Reference to the event type (optional)
        location_id: Reference to the location (optional)
        venue_name/venue_address: Venue details (optional)
        original_url: Page the event was found on (optional)
        ticket_url: Where to buy tickets (optional)
        image_url: Cover image (optional)
        organizer_name/organizer_url: Organizer details (optional)
        price_min/price_max/currency: Pricing, informational when is_free is set
        is_free: Whether the event is free
        capacity: Maximum number of attendees (optional)
        status: Moderation status ('pending', 'approved', 'rejected')
        is_cancelled: Whether the event has been cancelled
        is_featured: Featured events are listed first
        source: Where the event came from ('manual', 'ai', ...)
        submitted_by: Id of the submitting user (optional)
        created_at: When the event was created in our database
        published_at: When the event was approved (optional)
    """
    __tablename__ = 'events'
    __table_args__ = (
        CheckConstraint(
            'price_min IS NULL OR price_max IS NULL OR price_max >= price_min',
            name='ck_events_price_range'
        ),
        Index('ix_events_listing', 'status', 'is_cancelled', 'start_date'),
        # Full-text search on Postgres; must match the expression used by the search filter
        Index(
            'ix_events_search',
            text(search_document(SEARCH_LANGUAGE)),
            postgresql_using='gin'
        ).ddl_if(dialect='postgresql'),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    slug = Column(String(120), nullable=False, unique=True)
    title = Column(String(300), nullable=False)
    description = Column(Text)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True))

    event_type_id = Column(Integer, ForeignKey('event_types.id'))
    location_id = Column(Integer, ForeignKey('locations.id'))
    venue_name = Column(String(200))
    venue_address = Column(String(300))

    original_url = Column(Text)
    ticket_url = Column(Text)
    image_url = Column(Text)
    organizer_name = Column(String(200))
    organizer_url = Column(Text)

    price_min = Column(Numeric(10, 2, asdecimal=False))
    price_max = Column(Numeric(10, 2, asdecimal=False))
    currency = Column(String(3), nullable=False, default='NOK')
    is_free = Column(Boolean, nullable=False, default=False)
    capacity = Column(Integer)

    status = Column(String(20), nullable=False, default=EventStatus.PENDING.value)
    is_cancelled = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)

    source = Column(String(50), nullable=False, default='manual')
    submitted_by = Column(String(36), ForeignKey('users.id'))
    created_at = Column(DateTime(timezone=True), default=now_oslo)
    published_at = Column(DateTime(timezone=True))

    event_type = relationship('EventType', back_populates='events')
    location = relationship('Location', back_populates='events')

    def __init__(self, **kwargs):
        """Initialize Event with the given attributes."""
        # Ensure timezone-aware datetimes
        for field in ('start_date', 'end_date', 'created_at', 'published_at'):
            if kwargs.get(field) is not None:
                kwargs[field] = ensure_oslo_timezone(kwargs[field])
        if isinstance(kwargs.get('status'), EventStatus):
            kwargs['status'] = kwargs['status'].value

        super().__init__(**kwargs)

    def __str__(self) -> str:
        """String representation."""
        return f"Event(slug={self.slug}, start_date={self.start_date}, status={self.status})"
