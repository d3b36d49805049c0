"""
Page slicing for fully sorted result lists.
"""
import math
from typing import List, Sequence, Tuple

from search.dtos import PaginationInfo

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


def normalize_page(value) -> int:
    """1-based page number; malformed or < 1 values become 1"""
    try:
        page = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PAGE
    return page if page >= 1 else DEFAULT_PAGE


def normalize_limit(value, default: int = DEFAULT_LIMIT) -> int:
    """Page size; malformed or < 1 values become the default"""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return limit if limit >= 1 else default


def paginate(items: Sequence, page: int, limit: int) -> Tuple[List, PaginationInfo]:
    """
    Returns the [ (page-1)*limit, page*limit ) slice of items and the pagination
    info describing the whole list. An out-of-range page yields an empty slice.
    An empty list still reports one page.
    """
    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / limit))

    start_index = (page - 1) * limit
    end_index = page * limit

    info = PaginationInfo(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        limit=limit,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
    return list(items[start_index:end_index]), info
