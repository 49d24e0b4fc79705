"""Event listing and detail routes."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ...config.settings import DETAIL_CACHE_CONTROL, LIST_CACHE_CONTROL
from ...db import Database
from ...query import (
    featured_events,
    get_cities_with_counts,
    get_event_by_identifier,
    get_event_types,
    search_events,
)
from ..dependencies import get_database, get_now

router = APIRouter(tags=["events"])

@router.get("/events")
def list_events(
    response: Response,
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Events per page (default 24, max 100)"),
    city: Optional[str] = Query(None, description="Filter by city, e.g. 'Oslo'"),
    type: Optional[str] = Query(None, description="Filter by event type slug, e.g. 'konsert'"),
    start_date: Optional[str] = Query(None, alias="startDate", description="Only events starting at or after (ISO 8601)"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Only events starting at or before (ISO 8601)"),
    search: Optional[str] = Query(None, description="Full-text search in title and description"),
    featured: Optional[str] = Query(None, description="'true' for featured events only"),
    database: Database = Depends(get_database),
    now: datetime = Depends(get_now)
):
    """
    List upcoming approved events with filtering and pagination.

    Parameters are taken as plain strings and normalized by the query
    engine, so out-of-range pagination is clamped instead of rejected.
    """
    params = {
        'page': page,
        'limit': limit,
        'city': city,
        'type': type,
        'startDate': start_date,
        'endDate': end_date,
        'search': search,
        'featured': featured,
    }
    with database.session() as session:
        result = search_events(session, params, now)

    response.headers['Cache-Control'] = LIST_CACHE_CONTROL
    return result

@router.get("/events/featured")
def list_featured_events(
    response: Response,
    database: Database = Depends(get_database),
    now: datetime = Depends(get_now)
):
    """Upcoming featured events."""
    with database.session() as session:
        events = featured_events(session, now)

    response.headers['Cache-Control'] = LIST_CACHE_CONTROL
    return {"success": True, "data": events}

@router.get("/events/{identifier}")
def get_event(
    identifier: str,
    response: Response,
    database: Database = Depends(get_database)
):
    """Get a single event by id or slug."""
    with database.session() as session:
        event = get_event_by_identifier(session, identifier)

    response.headers['Cache-Control'] = DETAIL_CACHE_CONTROL
    return {"success": True, "data": event}

@router.get("/event-types")
def list_event_types(database: Database = Depends(get_database)):
    """All event types."""
    with database.session() as session:
        return {"success": True, "data": get_event_types(session)}

@router.get("/cities")
def list_cities(
    database: Database = Depends(get_database),
    now: datetime = Depends(get_now)
):
    """Cities with upcoming events and their event counts."""
    with database.session() as session:
        return {"success": True, "data": get_cities_with_counts(session, now)}
