"""Offset pagination envelope shared by paginated listings."""

import math
from typing import Any


def page_meta(total: int, page: int, limit: int) -> dict[str, int]:
    return {
        "totalItems": total,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "currentPage": page,
        "pageSize": limit,
    }


def page_envelope(data: list[Any], total: int, page: int, limit: int) -> dict[str, Any]:
    return {"data": data, "meta": page_meta(total, page, limit)}
