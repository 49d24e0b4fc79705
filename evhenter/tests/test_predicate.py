"""Tests for predicate construction."""

from datetime import datetime

import pytest
from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex

from evhenter.config.settings import SEARCH_LANGUAGE
from evhenter.models import Event
from evhenter.models.event import search_document
from evhenter.query import FilterDescriptor, build_predicate
from evhenter.utils.timezone import OSLO_TZ

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=OSLO_TZ)

def test_visibility_conditions_come_first():
    predicate = build_predicate(FilterDescriptor(), NOW)
    assert predicate.conditions == (
        "e.status = :p0",
        "e.is_cancelled = :p1",
        "e.start_date >= :p2",
    )
    assert predicate.params == ('approved', False, NOW)

def test_start_date_replaces_now():
    start = datetime(2026, 12, 1, tzinfo=OSLO_TZ)
    predicate = build_predicate(FilterDescriptor(start_date=start), NOW)
    assert predicate.params[2] == start

def test_optional_filters_keep_fixed_order():
    end = datetime(2026, 12, 31, tzinfo=OSLO_TZ)
    descriptor = FilterDescriptor(
        city='Oslo', event_type='konsert', end_date=end, featured_only=True, search='jazz'
    )
    predicate = build_predicate(descriptor, NOW, dialect='postgresql')

    assert predicate.conditions[3] == "lower(l.city) = lower(:p3)"
    assert predicate.conditions[4] == "et.slug = :p4"
    assert predicate.conditions[5] == "e.start_date <= :p5"
    assert predicate.conditions[6] == "e.is_featured = :p6"
    assert "plainto_tsquery('norwegian', :p7)" in predicate.conditions[7]
    assert predicate.params[3:] == ('Oslo', 'konsert', end, True, 'jazz')

def test_caller_values_are_never_interpolated():
    hostile = "x'); DROP TABLE events; --"
    predicate = build_predicate(FilterDescriptor(city=hostile, search=hostile), NOW)
    assert all(hostile not in condition for condition in predicate.conditions)
    assert hostile in predicate.params

def test_like_search_on_other_dialects():
    predicate = build_predicate(FilterDescriptor(search='50%_Off'), NOW, dialect='sqlite')
    assert "LIKE :p3" in predicate.conditions[3]
    assert predicate.params[3] == '%50\\%\\_off%'

def test_invalid_search_language_rejected():
    with pytest.raises(ValueError):
        build_predicate(FilterDescriptor(search='jazz'), NOW, search_language="english'; --")

def test_building_twice_is_identical():
    descriptor = FilterDescriptor(city='Bergen', search='marked')
    assert build_predicate(descriptor, NOW) == build_predicate(descriptor, NOW)

def test_paginated_shares_filter_part():
    predicate = build_predicate(FilterDescriptor(city='Oslo'), NOW)
    paged = predicate.paginated(24, 48)

    assert paged.conditions == predicate.conditions
    assert paged.params == predicate.params + (24, 48)
    assert paged.filter == predicate
    assert (paged.limit, paged.offset) == (24, 48)
    assert str(paged.to_sql()) == str(predicate.to_sql())

def test_search_index_matches_search_expression():
    index = next(i for i in Event.__table__.indexes if i.name == 'ix_events_search')
    ddl = str(CreateIndex(index).compile(dialect=postgresql.dialect()))

    assert 'USING gin' in ddl
    assert search_document(SEARCH_LANGUAGE) in ddl
    predicate = build_predicate(FilterDescriptor(search='jazz'), NOW, dialect='postgresql')
    assert search_document(SEARCH_LANGUAGE, 'e') in predicate.conditions[3]

def test_search_index_not_created_on_sqlite(database):
    index_names = {i['name'] for i in inspect(database.engine).get_indexes('events')}

    assert 'ix_events_search' not in index_names
    assert 'ix_events_listing' in index_names
