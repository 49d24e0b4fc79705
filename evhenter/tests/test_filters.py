"""Tests for query parameter normalization."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from evhenter.query import ValidationError, normalize_filters
from evhenter.query.filters import parse_timestamp
from evhenter.utils.timezone import OSLO_TZ

def test_defaults():
    descriptor = normalize_filters({})
    assert descriptor.page == 1
    assert descriptor.limit == 24
    assert descriptor.offset == 0
    assert descriptor.city is None
    assert descriptor.event_type is None
    assert descriptor.start_date is None
    assert descriptor.end_date is None
    assert descriptor.search is None
    assert descriptor.featured_only is False

@pytest.mark.parametrize("raw, expected", [
    ('500', 100),
    ('0', 1),
    ('-3', 1),
    ('abc', 24),
    ('12px', 12),
    (' 7', 7),
    ('', 24),
])
def test_limit_is_clamped(raw, expected):
    assert normalize_filters({'limit': raw}).limit == expected

@pytest.mark.parametrize("raw, expected", [('0', 1), ('-2', 1), ('x', 1), ('4', 4)])
def test_page_is_clamped(raw, expected):
    assert normalize_filters({'page': raw}).page == expected

def test_offset():
    assert normalize_filters({'page': '3', 'limit': '10'}).offset == 20

@pytest.mark.parametrize("value", ['', '   ', 'null', 'undefined', 'None'])
def test_empty_strings_are_absent(value):
    descriptor = normalize_filters({'city': value, 'type': value, 'search': value})
    assert descriptor.city is None
    assert descriptor.event_type is None
    assert descriptor.search is None

def test_strings_are_trimmed():
    descriptor = normalize_filters({'city': '  Oslo ', 'type': 'konsert', 'search': ' jazz '})
    assert descriptor.city == 'Oslo'
    assert descriptor.event_type == 'konsert'
    assert descriptor.search == 'jazz'

@pytest.mark.parametrize("value, expected", [('true', True), ('false', False), ('1', False), (None, False)])
def test_featured_only_on_literal_true(value, expected):
    assert normalize_filters({'featured': value}).featured_only is expected

def test_dates_are_parsed_in_oslo_time():
    descriptor = normalize_filters({'startDate': '2026-10-20', 'endDate': '2026-10-21T18:00:00Z'})
    assert descriptor.start_date == datetime(2026, 10, 20, tzinfo=OSLO_TZ)
    assert descriptor.start_date.tzinfo == OSLO_TZ
    # 18:00 UTC is 20:00 in Oslo during summer time
    assert descriptor.end_date == datetime(2026, 10, 21, 20, 0, tzinfo=OSLO_TZ)

def test_invalid_date_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        normalize_filters({'startDate': 'not-a-date'})
    assert exc_info.value.field == 'startDate'
    assert 'startDate' in exc_info.value.message

def test_parse_timestamp_absent():
    assert parse_timestamp(None, 'endDate') is None
    assert parse_timestamp('null', 'endDate') is None

def test_descriptor_is_immutable():
    descriptor = normalize_filters({})
    with pytest.raises(FrozenInstanceError):
        descriptor.page = 2

def test_huge_page_is_capped_to_a_storable_offset():
    descriptor = normalize_filters({'page': '100000000000000000000', 'limit': '24'})
    assert descriptor.page == (2 ** 63 - 1) // 24
    assert descriptor.offset < 2 ** 63

@pytest.mark.parametrize("value", ['9999-12-31T23:59:59+00:00', '0001-01-01T00:00:00+14:00'])
def test_date_out_of_range_in_oslo_time_is_rejected(value):
    with pytest.raises(ValidationError) as exc_info:
        normalize_filters({'endDate': value})
    assert exc_info.value.field == 'endDate'
