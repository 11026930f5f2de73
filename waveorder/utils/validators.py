"""
Input normalization utilities for storefront query parameters
"""
from typing import List, Optional, Tuple


def normalize_paging(
    page: Optional[int],
    limit: Optional[int],
    default_limit: int,
    max_limit: int,
    max_page: Optional[int] = None,
) -> Tuple[int, int]:
    """Clamp page to 1..max_page and limit to 1..max_limit (non-positive -> default)."""
    p = page if page and page > 0 else 1
    if max_page is not None:
        p = min(p, max_page)
    size = limit if limit and limit > 0 else default_limit
    return p, min(size, max_limit)


def parse_id_list(raw: Optional[str], max_items: Optional[int] = None) -> List[str]:
    """Split a comma-separated id list, dropping blanks and duplicates.

    Only the first ``max_items`` distinct ids are kept when a cap is given.
    """
    if not raw:
        return []
    ids = list(dict.fromkeys(part.strip() for part in raw.split(",") if part.strip()))
    return ids if max_items is None else ids[:max_items]
