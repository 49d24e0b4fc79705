"""Page metadata for listing responses."""

import math
from dataclasses import dataclass
from typing import Dict, Any

@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the API."""
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'totalPages': self.total_pages,
            'hasMore': self.has_more,
        }

def paginate(total: int, page: int, limit: int) -> Pagination:
    """Derive page count and has-more from a total. ``page`` and ``limit`` are at least 1."""
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
        has_more=page * limit < total,
    )
