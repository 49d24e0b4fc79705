"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from evhenter.api.app import app
from evhenter.api.auth import sign_token
from evhenter.api.dependencies import get_database, get_now
from evhenter.config.auth import AuthConfig
from evhenter.db import Database, DatabaseConfig
from evhenter.models import Event, EventStatus, EventType, Location, User
from evhenter.utils.slug import unique_slug
from evhenter.utils.timezone import OSLO_TZ

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=OSLO_TZ)

@pytest.fixture
def now():
    return NOW

@pytest.fixture
def database():
    """In-memory SQLite database with all tables created."""
    database = Database(DatabaseConfig(url="sqlite://"))
    database.init_db()
    try:
        yield database
    finally:
        database.dispose()

@pytest.fixture
def session(database):
    with database.session() as session:
        yield session

@pytest.fixture
def reference_data(database):
    """Two event types and three locations. Returns their ids by slug/city."""
    with database.session() as session:
        types = [
            EventType(name='Konsert', slug='konsert', icon='🎵', color='#E91E63'),
            EventType(name='Workshop', slug='workshop', icon='🛠️', color='#3F51B5'),
        ]
        locations = [
            Location(name='Oslo sentrum', city='Oslo', region='Oslo', latitude=59.91, longitude=10.75),
            Location(name='Bergen sentrum', city='Bergen', region='Vestland'),
            Location(name='Trondheim sentrum', city='Trondheim', region='Trøndelag'),
        ]
        session.add_all(types + locations)
        session.flush()
        return {
            'types': {t.slug: t.id for t in types},
            'cities': {loc.city: loc.id for loc in locations},
        }

@pytest.fixture
def add_event(database, reference_data):
    """Factory inserting an event; defaults to an approved event tomorrow in Oslo."""
    def _add_event(
        title: str,
        start: Optional[datetime] = None,
        city: Optional[str] = 'Oslo',
        event_type: Optional[str] = 'konsert',
        featured: bool = False,
        status: EventStatus = EventStatus.APPROVED,
        cancelled: bool = False,
        description: Optional[str] = None,
        **fields
    ) -> str:
        with database.session() as session:
            event = Event(
                title=title,
                slug=fields.pop('slug', None) or unique_slug(title),
                description=description,
                start_date=start or NOW + timedelta(days=1),
                location_id=reference_data['cities'][city] if city else None,
                event_type_id=reference_data['types'][event_type] if event_type else None,
                is_featured=featured,
                status=status,
                is_cancelled=cancelled,
                **fields
            )
            session.add(event)
            session.flush()
            return event.id
    return _add_event

@pytest.fixture
def client(database, now):
    """TestClient wired to the test database and a fixed clock."""
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_now] = lambda: now
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def user(database):
    with database.session() as session:
        user = User(email='kari@example.no', name='Kari Nordmann')
        session.add(user)
        session.flush()
        return user.id

@pytest.fixture
def auth_headers(user):
    token = sign_token(user, AuthConfig())
    return {'Authorization': f'Bearer {token}'}
