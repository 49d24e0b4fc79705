"""Event submission routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ...db import Database
from ...models import Event, EventStatus, EventType, Location
from ...utils.slug import unique_slug
from ..auth import Identity, require_identity
from ..dependencies import get_database
from ..schemas import EventSubmission

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])

def _resolve_event_type(session: Session, slug: Optional[str]) -> Optional[EventType]:
    if not slug:
        return None
    event_type = session.scalars(select(EventType).where(EventType.slug == slug)).first()
    if event_type is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown event type: {slug}"
        )
    return event_type

def _resolve_location(session: Session, city: Optional[str]) -> Optional[Location]:
    """Existing location for ``city`` (case-insensitive), created if missing."""
    if not city:
        return None
    city = city.strip()
    location = session.scalars(
        select(Location)
        .where(func.lower(Location.city) == city.lower())
        .order_by(Location.id)
    ).first()
    if location is None:
        location = Location(name=city, city=city)
        session.add(location)
        logger.info(f"Created location for new city '{city}'")
    return location

@router.post("/events", status_code=status.HTTP_201_CREATED)
def submit_event(
    submission: EventSubmission,
    identity: Identity = Depends(require_identity),
    database: Database = Depends(get_database)
):
    """
    Submit an event for moderation.

    The event is stored as pending and does not appear in listings until it
    has been approved.
    """
    fields = submission.model_dump(exclude={'event_type', 'city'})

    with database.session() as session:
        event = Event(
            **fields,
            slug=unique_slug(submission.title),
            event_type=_resolve_event_type(session, submission.event_type),
            location=_resolve_location(session, submission.city),
            status=EventStatus.PENDING,
            source='manual',
            submitted_by=identity.id,
        )
        session.add(event)
        session.flush()
        created = {
            'id': event.id,
            'slug': event.slug,
            'status': event.status,
            'created_at': event.created_at,
        }

    logger.info(f"Event '{submission.title}' submitted by {identity.id} as {created['slug']}")
    return {"success": True, "message": "Event submitted for review", "data": created}
