"""Query execution against the event store.

Every function takes an open SQLAlchemy session; acquiring and releasing it
is the caller's job (see ``Database.session``). Store failures are raised as
QueryError and never retried here.
"""

import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy import String, and_, cast, false, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import SLOW_QUERY_SECONDS
from ..models import Event, EventStatus, EventType, Location
from ..utils.timezone import ensure_oslo_timezone
from .errors import NotFoundError, QueryError
from .predicate import Predicate

logger = logging.getLogger(__name__)

# Aliases referenced by the predicate templates
event_t = Event.__table__.alias('e')
type_t = EventType.__table__.alias('et')
location_t = Location.__table__.alias('l')

EVENTS_JOIN = (
    event_t.outerjoin(type_t, event_t.c.event_type_id == type_t.c.id)
     .outerjoin(location_t, event_t.c.location_id == location_t.c.id)
)

LIST_COLUMNS = (
    event_t.c.id,
    event_t.c.title,
    event_t.c.slug,
    event_t.c.description,
    event_t.c.start_date,
    event_t.c.end_date,
    event_t.c.venue_name,
    event_t.c.venue_address,
    event_t.c.original_url,
    event_t.c.ticket_url,
    event_t.c.image_url,
    event_t.c.organizer_name,
    event_t.c.price_min,
    event_t.c.price_max,
    event_t.c.currency,
    event_t.c.is_free,
    event_t.c.is_featured,
    type_t.c.name.label('event_type'),
    type_t.c.slug.label('event_type_slug'),
    type_t.c.icon.label('event_type_icon'),
    type_t.c.color.label('event_type_color'),
    location_t.c.name.label('location_name'),
    location_t.c.city,
    location_t.c.region,
    location_t.c.latitude,
    location_t.c.longitude,
    event_t.c.created_at,
)

DETAIL_COLUMNS = LIST_COLUMNS + (
    event_t.c.organizer_url,
    event_t.c.capacity,
    event_t.c.published_at,
)

# Featured first, then soonest; id keeps ties deterministic across pages
LIST_ORDER = (event_t.c.is_featured.desc(), event_t.c.start_date.asc(), event_t.c.id.asc())

_DATETIME_FIELDS = ('start_date', 'end_date', 'created_at', 'published_at')

def _flatten(row) -> Dict[str, Any]:
    """Convert a result row into the public event shape."""
    event = dict(row._mapping)
    # SQLite hands back naive datetimes
    for field in _DATETIME_FIELDS:
        if event.get(field) is not None:
            event[field] = ensure_oslo_timezone(event[field])
    return event

def _execute(session: Session, statement, description: str):
    """Run a statement, logging slow queries and wrapping store errors."""
    start = time.perf_counter()
    try:
        result = session.execute(statement)
    except SQLAlchemyError as e:
        logger.error(f"Query failed ({description}): {e}")
        raise QueryError(f"Failed to {description}: {e}") from e
    duration = time.perf_counter() - start
    if duration > SLOW_QUERY_SECONDS:
        logger.warning(f"Slow query detected ({description}): {duration:.2f}s")
    return result

def count_events(session: Session, predicate: Predicate) -> int:
    """Number of events matching ``predicate``."""
    statement = (
        select(func.count(event_t.c.id))
        .select_from(EVENTS_JOIN)
        .where(predicate.to_sql())
    )
    return int(_execute(session, statement, "count events").scalar_one())

def fetch_events(
    session: Session,
    predicate: Predicate,
    page: int,
    limit: int
) -> List[Dict[str, Any]]:
    """One page of events matching ``predicate``, joined with type and location."""
    paged = predicate.paginated(limit, (page - 1) * limit)
    statement = (
        select(*LIST_COLUMNS)
        .select_from(EVENTS_JOIN)
        .where(paged.to_sql())
        .order_by(*LIST_ORDER)
        .limit(paged.limit)
        .offset(paged.offset)
    )
    result = _execute(session, statement, "fetch events")
    return [_flatten(row) for row in result]

def run_query(
    session: Session,
    predicate: Predicate,
    page: int,
    limit: int
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Count and fetch with the same predicate on the same session.

    Returns:
        Tuple of (events on the requested page, total matching events)
    """
    total = count_events(session, predicate)
    events = fetch_events(session, predicate, page, limit)
    return events, total

def get_event_by_identifier(session: Session, identifier: str) -> Dict[str, Any]:
    """
    Get a single visible event by id or slug.

    Raises:
        NotFoundError: If no approved, non-cancelled event matches
        QueryError: If the store fails
    """
    statement = (
        select(*DETAIL_COLUMNS)
        .select_from(EVENTS_JOIN)
        .where(
            or_(cast(event_t.c.id, String) == identifier, event_t.c.slug == identifier),
            event_t.c.status == EventStatus.APPROVED.value,
            event_t.c.is_cancelled == false(),
        )
    )
    row = _execute(session, statement, "fetch event").first()
    if row is None:
        raise NotFoundError(identifier)
    return _flatten(row)

def get_event_types(session: Session) -> List[Dict[str, Any]]:
    """All event types ordered by name."""
    statement = select(
        type_t.c.id, type_t.c.name, type_t.c.slug, type_t.c.description, type_t.c.icon, type_t.c.color
    ).order_by(type_t.c.name.asc())
    return [dict(row._mapping) for row in _execute(session, statement, "list event types")]

def get_cities_with_counts(session: Session, now: datetime) -> List[Dict[str, Any]]:
    """
    Cities with at least one upcoming visible event.

    Returns:
        List of ``{'city', 'event_count'}`` ordered by count descending, then city name
    """
    event_count = func.count(event_t.c.id)
    upcoming = and_(
        event_t.c.location_id == location_t.c.id,
        event_t.c.status == EventStatus.APPROVED.value,
        event_t.c.is_cancelled == false(),
        event_t.c.start_date >= ensure_oslo_timezone(now),
    )
    statement = (
        select(location_t.c.city, event_count.label('event_count'))
        .select_from(location_t.outerjoin(event_t, upcoming))
        .group_by(location_t.c.city)
        .having(event_count > 0)
        .order_by(event_count.desc(), location_t.c.city.asc())
    )
    return [
        {'city': row.city, 'event_count': int(row.event_count)}
        for row in _execute(session, statement, "count events per city")
    ]
