"""Errors raised by the event query engine."""

from ..db import DatabaseError

class ValidationError(ValueError):
    """Malformed request parameters. Reported to the caller as a client error."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field

class QueryError(DatabaseError):
    """The store failed while answering a query."""
    pass

class NotFoundError(LookupError):
    """A single-event lookup matched no visible event."""

    def __init__(self, identifier: str):
        super().__init__(f"No event found with ID or slug: {identifier}")
        self.identifier = identifier
