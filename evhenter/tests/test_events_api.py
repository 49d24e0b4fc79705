"""Tests for the public event endpoints."""

from datetime import timedelta

from evhenter.models import EventStatus

def test_list_events(client, add_event, now):
    add_event('Featured', start=now + timedelta(days=3), featured=True)
    add_event('Soon', start=now + timedelta(days=1))
    add_event('Later', start=now + timedelta(days=2))

    response = client.get("/api/events", params={'limit': 2})

    assert response.status_code == 200
    assert response.headers['cache-control'] == 's-maxage=300, stale-while-revalidate=600'
    body = response.json()
    assert [event['title'] for event in body['data']] == ['Featured', 'Soon']
    assert body['pagination'] == {
        'page': 1, 'limit': 2, 'total': 3, 'totalPages': 2, 'hasMore': True
    }
    assert body['filters'] == {
        'city': None, 'eventType': None, 'startDate': None,
        'endDate': None, 'search': None, 'featured': False,
    }
    assert body['metadata']['cities'] == [{'city': 'Oslo', 'event_count': 3}]

def test_list_events_empty(client, reference_data):
    response = client.get("/api/events")

    assert response.status_code == 200
    body = response.json()
    assert body['data'] == []
    assert body['pagination']['totalPages'] == 0
    assert body['metadata']['cities'] == []

def test_out_of_range_pagination_is_clamped(client, reference_data):
    response = client.get("/api/events", params={'page': '-1', 'limit': '1000'})

    assert response.status_code == 200
    assert response.json()['pagination']['page'] == 1
    assert response.json()['pagination']['limit'] == 100

def test_filters_are_echoed(client, add_event):
    add_event('Oslo Jazz', city='Oslo')
    response = client.get("/api/events", params={
        'city': 'Oslo', 'type': 'konsert', 'search': 'jazz',
        'startDate': '2026-10-18', 'featured': 'false',
    })

    assert response.status_code == 200
    filters = response.json()['filters']
    assert filters['city'] == 'Oslo'
    assert filters['eventType'] == 'konsert'
    assert filters['search'] == 'jazz'
    assert filters['startDate'] == '2026-10-18T00:00:00+02:00'
    assert filters['featured'] is False
    assert response.json()['pagination']['total'] == 1

def test_invalid_date_returns_400(client, reference_data):
    response = client.get("/api/events", params={'startDate': 'tomorrow'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Validation error'
    assert 'startDate' in response.json()['message']

def test_featured_endpoint(client, add_event):
    add_event('Featured', featured=True)
    add_event('Plain')

    response = client.get("/api/events/featured")

    assert response.status_code == 200
    assert [event['title'] for event in response.json()['data']] == ['Featured']

def test_get_event_by_slug(client, add_event):
    add_event('Jazz på Blå', slug='jazz-pa-bla-1a2b3c')

    response = client.get("/api/events/jazz-pa-bla-1a2b3c")

    assert response.status_code == 200
    assert response.headers['cache-control'] == 's-maxage=600, stale-while-revalidate=1200'
    assert response.json()['data']['title'] == 'Jazz på Blå'

def test_get_event_by_id(client, add_event):
    event_id = add_event('Foredrag')

    response = client.get(f"/api/events/{event_id}")

    assert response.status_code == 200
    assert response.json()['data']['id'] == event_id

def test_get_pending_event_is_404(client, add_event):
    event_id = add_event('Venter', status=EventStatus.PENDING)

    response = client.get(f"/api/events/{event_id}")

    assert response.status_code == 404
    assert response.json() == {
        'error': 'Event not found',
        'message': f'No event found with ID or slug: {event_id}',
    }

def test_event_types(client, reference_data):
    response = client.get("/api/event-types")

    assert response.status_code == 200
    assert [t['slug'] for t in response.json()['data']] == ['konsert', 'workshop']

def test_cities(client, add_event):
    add_event('A', city='Bergen')
    add_event('B', city='Bergen')
    add_event('C', city='Oslo')

    response = client.get("/api/cities")

    assert response.status_code == 200
    assert response.json()['data'] == [
        {'city': 'Bergen', 'event_count': 2},
        {'city': 'Oslo', 'event_count': 1},
    ]

def test_huge_page_returns_empty_page(client, add_event):
    add_event('Only event')

    response = client.get("/api/events", params={'page': '100000000000000000000'})

    assert response.status_code == 200
    body = response.json()
    assert body['data'] == []
    assert body['pagination']['total'] == 1
    assert body['pagination']['hasMore'] is False
    assert body['metadata'] is None

def test_end_date_at_edge_of_calendar_returns_400(client, reference_data):
    response = client.get("/api/events", params={'endDate': '9999-12-31T23:59:59+00:00'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Validation error'
    assert 'endDate' in response.json()['message']
