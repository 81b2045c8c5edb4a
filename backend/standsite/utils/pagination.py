# standsite/utils/pagination.py
from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import request

from standsite.errors import ValidationError


def page_args(default_limit: int = 10, max_limit: int = 100) -> Tuple[int, int]:
    """
    Read ``page`` / ``limit`` query parameters (1-based page).

    Non-numeric or non-positive values are a 400, not a silent default.
    """
    try:
        page = int(request.args.get("page", 1))
        limit = int(request.args.get("limit", default_limit))
    except (TypeError, ValueError):
        raise ValidationError("page and limit must be integers")

    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive")

    return page, min(limit, max_limit)


def page_meta(total: int, page: int, limit: int) -> Dict[str, Any]:
    offset = (page - 1) * limit
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "has_more": total > offset + limit,
        "total_pages": (total + limit - 1) // limit,
    }
