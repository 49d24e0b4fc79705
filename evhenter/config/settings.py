"""Application settings for the event listing endpoints."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401  (loads .env)

# Pagination
DEFAULT_PAGE_LIMIT = 24
MAX_PAGE_LIMIT = 100
FEATURED_EVENTS_LIMIT = 6

# Postgres text search configuration used for the free-text filter
SEARCH_LANGUAGE = os.environ.get('SEARCH_LANGUAGE', 'norwegian')

# Queries slower than this are logged as warnings
SLOW_QUERY_SECONDS = float(os.environ.get('SLOW_QUERY_SECONDS', '1.0'))

# Cache hints for listing and detail responses
LIST_CACHE_CONTROL = 's-maxage=300, stale-while-revalidate=600'
DETAIL_CACHE_CONTROL = 's-maxage=600, stale-while-revalidate=1200'

API_VERSION = "1.0.0"
