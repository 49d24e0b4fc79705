"""Tests for page metadata."""

import pytest

from evhenter.query import paginate

@pytest.mark.parametrize("total, page, limit, total_pages, has_more", [
    (0, 1, 24, 0, False),
    (3, 1, 2, 2, True),
    (3, 2, 2, 2, False),
    (24, 1, 24, 1, False),
    (25, 1, 24, 2, True),
    (5, 9, 2, 3, False),
])
def test_paginate(total, page, limit, total_pages, has_more):
    pagination = paginate(total, page, limit)
    assert pagination.total_pages == total_pages
    assert pagination.has_more is has_more

def test_to_dict_uses_api_keys():
    assert paginate(3, 1, 2).to_dict() == {
        'page': 1,
        'limit': 2,
        'total': 3,
        'totalPages': 2,
        'hasMore': True,
    }
