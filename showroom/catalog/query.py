from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Sequence


def contains_ci(text: str) -> Dict[str, Any]:
    """Case-insensitive substring match (user input is regex-escaped)."""
    return {"$regex": re.escape(text.strip()), "$options": "i"}


def any_field_contains(fields: Sequence[str], text: str) -> Dict[str, Any]:
    return {"$or": [{f: contains_ci(text)} for f in fields]}


def price_range(min_price: float | None, max_price: float | None) -> Dict[str, Any] | None:
    rng: Dict[str, Any] = {}
    if min_price is not None:
        rng["$gte"] = float(min_price)
    if max_price is not None:
        rng["$lte"] = float(max_price)
    return rng or None


def page_meta(*, total: int, page: int, limit: int, count: int) -> Dict[str, Any]:
    return {
        "count": count,
        "total": total,
        "totalPages": int(math.ceil(total / limit)) if limit else 0,
        "currentPage": page,
    }


def group_counts(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Aggregation `{_id, count}` rows, ordered by count desc then key."""
    out = [{"_id": r.get("_id"), "count": int(r.get("count") or 0)} for r in rows]
    out.sort(key=lambda r: (-r["count"], str(r["_id"])))
    return out
