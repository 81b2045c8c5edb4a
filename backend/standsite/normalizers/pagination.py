# standsite/normalizers/pagination.py
from typing import Any, Callable, Dict, List

from standsite.utils.pagination import page_meta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    key: str,
    page: int,
    limit: int,
    total: int,
) -> Dict[str, Any]:
    """
    Offset-paginated list response.

    ``key`` names the list ("events", "data", ...); the paging fields sit
    next to it: total, page, limit, has_more, total_pages.
    """
    response: Dict[str, Any] = {
        key: [normalize_fn(item) for item in items],
    }
    response.update(page_meta(total, page, limit))
    return response
