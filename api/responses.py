"""
Standardized API response helpers.
Every successful endpoint returns ``{success, message?, data?, pagination?}``.
"""

from math import ceil
from typing import Any, List, Optional


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """Create a standardized success response"""
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def paginated_response(
    items: List[Any],
    total: int,
    page: int,
    limit: int,
    message: Optional[str] = None,
) -> dict:
    """Create a standardized paginated response"""
    body = success_response(items, message)
    body["data"] = items
    body["pagination"] = {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": ceil(total / limit) if limit else 0,
    }
    return body
