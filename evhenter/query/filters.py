"""Parsing of raw listing query parameters into a FilterDescriptor."""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..config.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..utils.timezone import ensure_oslo_timezone
from .errors import ValidationError

# Values some clients send instead of leaving a parameter out
_NULL_TOKENS = {'null', 'undefined', 'none'}

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')

# Largest offset the store accepts (signed 64-bit)
MAX_OFFSET = 2 ** 63 - 1

@dataclass(frozen=True)
class FilterDescriptor:
    """Normalized listing request: pagination plus optional filters."""
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT
    city: Optional[str] = None
    event_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    search: Optional[str] = None
    featured_only: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

def _parse_int(value: Any, default: int) -> int:
    """Leading integer of ``value`` ("3", " 12px", "-4"), or ``default``."""
    if value is None or isinstance(value, bool):
        return default
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default

def _clean_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() in _NULL_TOKENS:
        return None
    return value

def parse_timestamp(value: Any, field: str) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime. Returns None when absent."""
    if isinstance(value, datetime):
        value = value.isoformat()
    text = _clean_string(value)
    if text is None:
        return None
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        return ensure_oslo_timezone(datetime.fromisoformat(text))
    except (ValueError, OverflowError) as e:
        # OverflowError: in range as written, out of range once moved to Oslo time
        raise ValidationError(f"invalid date for {field}: {value!r}", field=field) from e

def normalize_filters(params: Mapping[str, Any]) -> FilterDescriptor:
    """
    Build a FilterDescriptor from raw query parameters.

    Pagination values never fail: bad or missing values fall back to defaults
    and are clamped into range. Pages are capped so the row offset fits in a
    64-bit integer. Dates are the only parameters that can be rejected.

    Args:
        params: Query parameters as received (``page``, ``limit``, ``city``,
            ``type``, ``startDate``, ``endDate``, ``search``, ``featured``)

    Raises:
        ValidationError: If ``startDate`` or ``endDate`` is present but unparseable
    """
    limit = min(MAX_PAGE_LIMIT, max(1, _parse_int(params.get('limit'), DEFAULT_PAGE_LIMIT)))
    page = min(max(1, _parse_int(params.get('page'), 1)), MAX_OFFSET // limit)

    return FilterDescriptor(
        page=page,
        limit=limit,
        city=_clean_string(params.get('city')),
        event_type=_clean_string(params.get('type')),
        start_date=parse_timestamp(params.get('startDate'), 'startDate'),
        end_date=parse_timestamp(params.get('endDate'), 'endDate'),
        search=_clean_string(params.get('search')),
        featured_only=params.get('featured') == 'true',
    )
