"""Response envelope for the event listing endpoint."""

from typing import Any, Dict, List, Optional

from .filters import FilterDescriptor
from .pagination import Pagination

def echo_filters(descriptor: FilterDescriptor) -> Dict[str, Any]:
    """The filters as actually applied, not as received."""
    return {
        'city': descriptor.city,
        'eventType': descriptor.event_type,
        'startDate': descriptor.start_date.isoformat() if descriptor.start_date else None,
        'endDate': descriptor.end_date.isoformat() if descriptor.end_date else None,
        'search': descriptor.search,
        'featured': descriptor.featured_only,
    }

def compose_response(
    events: List[Dict[str, Any]],
    pagination: Pagination,
    descriptor: FilterDescriptor,
    metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Assemble the listing response.

    ``metadata`` carries the event types and cities for the filter dropdowns.
    It is only loaded for the first page; later pages always report ``None``
    here, whatever the caller passes.
    """
    return {
        'success': True,
        'data': events,
        'pagination': pagination.to_dict(),
        'filters': echo_filters(descriptor),
        'metadata': metadata if pagination.page == 1 else None,
    }
