"""
Response Envelopes.

Every endpoint answers with the same JSON envelope so that clients can branch on
``status`` without looking at the HTTP code:

- success: ``{status, statusCode, message, data, timestamp}``
- error: ``{status, statusCode, message, [details], timestamp}``
- paginated: ``{status, statusCode, data, pagination, timestamp}``
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence

from storefront_api.core.clock import utc_timestamp


def success(data: Any, message: str = "Success", status_code: int = 200) -> Dict[str, Any]:
    return {
        "status": True,
        "statusCode": status_code,
        "message": message,
        "data": data,
        "timestamp": utc_timestamp(),
    }


def error(message: str = "Error", status_code: int = 500, details: Optional[Any] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "status": False,
        "statusCode": status_code,
        "message": message,
    }
    if details:
        body["details"] = details
    body["timestamp"] = utc_timestamp()
    return body


def paginated(data: Sequence[Any], page: int = 1, limit: int = 10, total: int = 0) -> Dict[str, Any]:
    """Wrap one page of results together with its pagination metadata.

    Args:
        data: Items on the current page
        page: 1-based page number
        limit: Page size
        total: Number of items across all pages
    """
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "status": True,
        "statusCode": 200,
        "data": list(data),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": total_pages,
            "hasNext": page < total_pages,
            "hasPrev": page > 1,
        },
        "timestamp": utc_timestamp(),
    }


def paginate(items: Sequence[Any], page: int, limit: int) -> Dict[str, Any]:
    """Slice ``items`` to the requested page and wrap it with :func:`paginated`."""
    start = (page - 1) * limit
    return paginated(items[start : start + limit], page, limit, len(items))
