"""
Helpers shared by the catalog routers
"""
from typing import Any, Dict, Optional

CATALOG_STATUSES = ("active", "archived")


def lenient_int(value: Optional[str]) -> Optional[int]:
    """Parse a query value as an int; anything unparsable counts as absent."""
    if value is None or not value.strip():
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def list_query(
    page: Optional[str],
    page_size: Optional[str],
    q: Optional[str],
    status: Optional[str],
) -> Dict[str, Any]:
    return {
        "page": lenient_int(page),
        "page_size": lenient_int(page_size),
        "search": q or None,
        "status": status if status in CATALOG_STATUSES else None,
    }
