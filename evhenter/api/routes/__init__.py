"""Routes package initialization."""

from . import (
    ai,
    events,
    health,
    submissions,
    users
)

__all__ = [
    'ai',
    'events',
    'health',
    'submissions',
    'users'
]
