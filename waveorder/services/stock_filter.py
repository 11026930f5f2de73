"""
Stock-aware post-filter and pagination total estimator.

Variant stock cannot be filtered in the product query, so the fetched page
is re-filtered here. The store's count does not see that re-check, so the
total reported to the storefront is corrected with a three-tier estimate:

1. page 1, rows fetched, all of them dropped -> 0
2. page 1 with fewer kept rows than the limit -> the kept count is exact
3. otherwise -> the store count scaled by this page's keep ratio

Tier 3 is an approximation: totals on later pages can drift if stock
changes between requests.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence

from waveorder.services.catalog_records import ProductRecord


@dataclass(frozen=True)
class PageEstimate:
    products: List[ProductRecord]
    total: int
    total_pages: int
    has_more: bool


def is_purchasable(product: ProductRecord) -> bool:
    """Untracked products always sell; tracked ones need stock somewhere."""
    if not product.track_inventory:
        return True
    if product.variants:
        return any(variant.stock > 0 for variant in product.variants)
    return product.stock > 0


def estimate_total(fetched: int, kept: int, total_count: int, page: int, limit: int) -> int:
    if page == 1 and fetched > 0 and kept == 0:
        return 0
    if page == 1 and kept < limit:
        return kept

    drop_ratio = (fetched - kept) / fetched if fetched else 0.0
    # half-up, not banker's rounding
    return math.floor(total_count * (1 - drop_ratio) + 0.5)


def filter_and_estimate(
    rows: Sequence[ProductRecord],
    total_count: int,
    page: int,
    limit: int,
) -> PageEstimate:
    kept = [row for row in rows if is_purchasable(row)]
    total = estimate_total(len(rows), len(kept), total_count, page, limit)

    skip = (page - 1) * limit
    return PageEstimate(
        products=kept,
        total=total,
        total_pages=max(1, math.ceil(total / limit)),
        has_more=len(kept) == limit and total > skip + limit,
    )
