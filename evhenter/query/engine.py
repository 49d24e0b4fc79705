"""Event search: filters in, one page of events out."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from ..config.settings import FEATURED_EVENTS_LIMIT
from .composer import compose_response
from .executor import get_cities_with_counts, get_event_types, run_query
from .filters import FilterDescriptor, normalize_filters
from .pagination import paginate
from .predicate import build_predicate

logger = logging.getLogger(__name__)

def load_metadata(session: Session, now: datetime) -> Dict[str, Any]:
    """Event types and cities with upcoming events, independent of any filter."""
    return {
        'eventTypes': get_event_types(session),
        'cities': get_cities_with_counts(session, now),
    }

def run_search(
    session: Session,
    descriptor: FilterDescriptor,
    now: datetime,
    dialect: Optional[str] = None
) -> Dict[str, Any]:
    """
    Execute a search for an already normalized descriptor.

    Args:
        session: Open database session
        descriptor: Normalized filters and pagination
        now: Request time, the default lower bound on start dates
        dialect: SQL dialect name; read from the session's bind when omitted

    Returns:
        Dict: The response envelope (see ``compose_response``)
    """
    dialect = dialect or session.get_bind().dialect.name
    predicate = build_predicate(descriptor, now, dialect=dialect)

    events, total = run_query(session, predicate, descriptor.page, descriptor.limit)
    pagination = paginate(total, descriptor.page, descriptor.limit)

    metadata = load_metadata(session, now) if descriptor.page == 1 else None

    logger.debug(
        f"Search matched {total} events (page {descriptor.page}, {len(events)} returned)"
    )
    return compose_response(events, pagination, descriptor, metadata)

def search_events(
    session: Session,
    params: Mapping[str, Any],
    now: datetime
) -> Dict[str, Any]:
    """
    Normalize raw query parameters and run the search.

    Raises:
        ValidationError: If a date parameter is malformed
        QueryError: If the store fails
    """
    return run_search(session, normalize_filters(params), now)

def featured_events(
    session: Session,
    now: datetime,
    limit: int = FEATURED_EVENTS_LIMIT
) -> List[Dict[str, Any]]:
    """Upcoming featured events, through the same path as the filtered listing."""
    descriptor = FilterDescriptor(page=1, limit=limit, featured_only=True)
    dialect = session.get_bind().dialect.name
    events, _ = run_query(
        session, build_predicate(descriptor, now, dialect=dialect), 1, limit
    )
    return events
