"""Event query and pagination engine."""

from .errors import ValidationError, QueryError, NotFoundError
from .filters import FilterDescriptor, normalize_filters
from .predicate import Predicate, PagedPredicate, build_predicate
from .pagination import Pagination, paginate
from .composer import compose_response
from .executor import (
    count_events,
    fetch_events,
    run_query,
    get_event_by_identifier,
    get_event_types,
    get_cities_with_counts
)
from .engine import search_events, run_search, featured_events

__all__ = [
    'ValidationError',
    'QueryError',
    'NotFoundError',
    'FilterDescriptor',
    'normalize_filters',
    'Predicate',
    'PagedPredicate',
    'build_predicate',
    'Pagination',
    'paginate',
    'compose_response',
    'count_events',
    'fetch_events',
    'run_query',
    'get_event_by_identifier',
    'get_event_types',
    'get_cities_with_counts',
    'search_events',
    'run_search',
    'featured_events',
]
