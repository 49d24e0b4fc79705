"""Seed reference data (event types and locations), optionally with sample events.

Usage:
    python -m evhenter.db.seed
    python -m evhenter.db.seed --with-samples
"""

import argparse
import logging
from datetime import timedelta
from typing import Dict

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config.environment import IS_PRODUCTION_ENVIRONMENT
from ..models import Event, EventStatus, EventType, Location
from ..utils.logging_config import setup_logging
from ..utils.slug import unique_slug
from ..utils.timezone import now_oslo
from .db_core import Database, db

logger = logging.getLogger(__name__)

EVENT_TYPES = [
    # (name, slug, icon, color)
    ('Konsert', 'konsert', '🎵', '#E91E63'),
    ('Workshop', 'workshop', '🛠️', '#3F51B5'),
    ('Festival', 'festival', '🎪', '#FF9800'),
    ('Teater', 'teater', '🎭', '#9C27B0'),
    ('Sport', 'sport', '⚽', '#4CAF50'),
    ('Mat og drikke', 'mat-drikke', '🍽️', '#795548'),
    ('Kunst', 'kunst', '🎨', '#00BCD4'),
    ('Nettverking', 'nettverking', '🤝', '#607D8B'),
    ('Marked', 'marked', '🛍️', '#8BC34A'),
    ('Konferanse', 'konferanse', '🎤', '#2196F3'),
]

LOCATIONS = [
    # (name, city, region, latitude, longitude)
    ('Oslo sentrum', 'Oslo', 'Oslo', 59.9139, 10.7522),
    ('Bergen sentrum', 'Bergen', 'Vestland', 60.3913, 5.3221),
    ('Trondheim sentrum', 'Trondheim', 'Trøndelag', 63.4305, 10.3951),
    ('Stavanger sentrum', 'Stavanger', 'Rogaland', 58.9700, 5.7331),
    ('Tromsø sentrum', 'Tromsø', 'Troms', 69.6492, 18.9553),
]

def seed_reference_data(session: Session) -> None:
    """Insert missing event types and locations."""
    existing_types = set(session.scalars(select(EventType.slug)))
    for name, slug, icon, color in EVENT_TYPES:
        if slug not in existing_types:
            session.add(EventType(name=name, slug=slug, icon=icon, color=color))

    existing_cities = set(session.scalars(select(Location.city)))
    for name, city, region, latitude, longitude in LOCATIONS:
        if city not in existing_cities:
            session.add(Location(
                name=name, city=city, region=region,
                latitude=latitude, longitude=longitude
            ))
    session.flush()

def seed_sample_events(session: Session) -> int:
    """Insert a handful of approved upcoming events for local development."""
    types: Dict[str, int] = {t.slug: t.id for t in session.scalars(select(EventType))}
    cities: Dict[str, int] = {loc.city: loc.id for loc in session.scalars(select(Location))}
    now = now_oslo().replace(minute=0, second=0, microsecond=0)

    samples = [
        dict(title='Oslo Jazz Festival', event_type_id=types['konsert'],
             location_id=cities['Oslo'], venue_name='Flere scener i Oslo',
             start_date=now + timedelta(days=3, hours=2), end_date=now + timedelta(days=10),
             price_min=350, price_max=1200, is_featured=True),
        dict(title='Workshop: Introduksjon til maskinlæring', event_type_id=types['workshop'],
             location_id=cities['Oslo'], venue_name='Teknologihuset',
             start_date=now + timedelta(days=5), is_free=True, capacity=30),
        dict(title='Samarbeid med startups', event_type_id=types['nettverking'],
             location_id=cities['Bergen'], venue_name='Startuplab',
             start_date=now + timedelta(days=7), is_free=True),
        dict(title='Julemarked på Torget', event_type_id=types['marked'],
             location_id=cities['Trondheim'], start_date=now + timedelta(days=14), is_free=True),
    ]
    for sample in samples:
        session.add(Event(
            slug=unique_slug(sample['title']),
            status=EventStatus.APPROVED,
            published_at=now,
            source='seed',
            **sample
        ))
    return len(samples)

def main(database: Database = db) -> None:
    parser = argparse.ArgumentParser(description="Seed the events database")
    parser.add_argument('--with-samples', action='store_true', help="Also insert sample events")
    args = parser.parse_args()

    setup_logging()
    database.init_db()
    with database.session() as session:
        seed_reference_data(session)
        logger.info("Reference data seeded")
        if args.with_samples:
            if IS_PRODUCTION_ENVIRONMENT:
                parser.error("refusing to insert sample events in production")
            count = seed_sample_events(session)
            logger.info(f"Inserted {count} sample events")

if __name__ == '__main__':
    main()
