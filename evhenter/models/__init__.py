"""Models package initialization."""

from .base import Base
from .event import Event, EventStatus
from .event_type import EventType
from .location import Location
from .user import User

__all__ = ['Base', 'Event', 'EventStatus', 'EventType', 'Location', 'User']
