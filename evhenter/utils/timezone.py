"""Timezone helpers.

All timestamps handled by the service are expressed in Europe/Oslo. SQLite
drops the offset when storing, so values must be normalized before they are
written or bound as query parameters.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

OSLO_TZ = ZoneInfo('Europe/Oslo')

def now_oslo() -> datetime:
    """Current time in Oslo."""
    return datetime.now(OSLO_TZ)

def ensure_oslo_timezone(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` in Oslo time. Naive datetimes are assumed to already be Oslo local time."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=OSLO_TZ)
    return value.astimezone(OSLO_TZ)
