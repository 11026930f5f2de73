"""
Storefront catalog service.

Serves one page of a storefront's product listing: resolves the store,
expands category and search filters, fetches the page and the matching
count concurrently, prices every product and variant, and corrects the
pagination totals for variant stock.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from waveorder.config import get_settings
from waveorder.errors import StoreNotFoundError
from waveorder.models.business import Business
from waveorder.services.catalog_query import (
    CatalogQueryParams,
    CatalogScope,
    CompiledProductQuery,
    compile_product_query,
)
from waveorder.services.catalog_records import ProductRecord
from waveorder.services.category_expansion import CategoryExpander
from waveorder.services.pricing import effective_price
from waveorder.services.search_variants import SearchVariantExpander, search_variant_expander
from waveorder.services.stock_filter import filter_and_estimate

settings = get_settings()
logger = logging.getLogger(__name__)

ALBANIAN_LANGUAGES = {"al", "sq"}


@dataclass
class CatalogPage:
    products: List[Dict[str, Any]]
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


async def find_active_business(session: AsyncSession, slug: str) -> Business:
    """Active, fully onboarded business for ``slug``, else StoreNotFoundError."""
    result = await session.execute(
        select(Business).where(
            Business.slug == slug,
            Business.is_active == True,
            Business.setup_wizard_completed == True,
        )
    )
    business = result.scalar_one_or_none()
    if not business:
        raise StoreNotFoundError(slug)
    return business


def storefront_language(business: Business) -> str:
    return business.storefront_language or business.language or "en"


def scope_business_ids(business: Business) -> List[str]:
    """The store itself first, then any connected marketplace businesses."""
    return list(dict.fromkeys([business.id, *business.connected_business_ids]))


def resolve_description(product: ProductRecord, language: str, use_fallback: bool) -> Optional[str]:
    if use_fallback:
        return product.description or product.description_al or ""
    if language in ALBANIAN_LANGUAGES:
        return product.description_al or product.description
    return product.description_en or product.description


class StorefrontCatalogService:
    def __init__(
        self,
        session_factory: async_sessionmaker,
        search_expander: Optional[SearchVariantExpander] = None,
        description_fallback_slugs: Optional[Sequence[str]] = None,
        min_listed_price: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._session_factory = session_factory
        self.category_expander = CategoryExpander(session_factory)
        self.search_expander = search_expander or search_variant_expander
        self.description_fallback_slugs = set(
            settings.DESCRIPTION_FALLBACK_SLUGS
            if description_fallback_slugs is None
            else description_fallback_slugs
        )
        self.min_listed_price = (
            settings.MIN_LISTED_PRICE if min_listed_price is None else min_listed_price
        )
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def get_business(self, slug: str) -> Business:
        async with self._session_factory() as session:
            return await find_active_business(session, slug)

    async def _fetch_page(self, query: CompiledProductQuery) -> List[ProductRecord]:
        async with self._session_factory() as session:
            result = await session.execute(query.select_page())
            return [ProductRecord.model_validate(row) for row in result.scalars().all()]

    async def _count(self, query: CompiledProductQuery) -> int:
        async with self._session_factory() as session:
            result = await session.execute(query.select_count())
            return result.scalar() or 0

    async def list_products(self, business: Business, params: CatalogQueryParams) -> CatalogPage:
        business_ids = scope_business_ids(business)
        language = storefront_language(business)

        category_ids = await self.category_expander.expand(params.category_ids, business_ids)
        search_variants = self.search_expander.expand(params.search, language)

        query = compile_product_query(
            params,
            CatalogScope(
                business_ids=business_ids,
                hide_products_without_photos=bool(business.hide_products_without_photos),
            ),
            category_ids,
            search_variants,
            self.min_listed_price,
        )

        rows, total_count = await asyncio.gather(self._fetch_page(query), self._count(query))
        estimate = filter_and_estimate(rows, total_count, params.page, params.limit)

        logger.debug(
            f"{business.slug}: page {params.page} fetched {len(rows)}, kept {len(estimate.products)}, "
            f"count {total_count} -> total {estimate.total} (sort {query.sort_key})"
        )

        now = self._clock()
        use_fallback = business.slug in self.description_fallback_slugs
        return CatalogPage(
            products=[
                self._present(product, language, use_fallback, now)
                for product in estimate.products
            ],
            page=params.page,
            limit=params.limit,
            total=estimate.total,
            total_pages=estimate.total_pages,
            has_more=estimate.has_more,
        )

    def _present(
        self,
        product: ProductRecord,
        language: str,
        use_fallback: bool,
        now: datetime,
    ) -> Dict[str, Any]:
        pricing = effective_price(
            product.price,
            product.original_price,
            product.sale_start_date,
            product.sale_end_date,
            now,
        )

        variants = []
        for variant in product.variants:
            variant_pricing = effective_price(
                variant.price,
                variant.original_price,
                variant.sale_start_date,
                variant.sale_end_date,
                now,
            )
            variants.append({
                "id": variant.id,
                "name": variant.name,
                "price": variant_pricing.effective,
                "original_price": variant_pricing.effective_original,
                "stock": variant.stock,
                "sku": variant.sku,
                "meta": variant.variant_metadata,
                "sale_start_date": variant.sale_start_date,
                "sale_end_date": variant.sale_end_date,
            })

        return {
            "id": product.id,
            "name": product.name,
            "description": resolve_description(product, language, use_fallback),
            "description_al": product.description_al,
            "description_en": product.description_en,
            "images": product.image_urls,
            "price": pricing.effective,
            "original_price": pricing.effective_original,
            "sku": product.sku,
            "stock": product.stock,
            "track_inventory": product.track_inventory,
            "featured": product.featured,
            "meta_title": product.meta_title,
            "meta_description": product.meta_description,
            "category_id": product.category_id,
            "collection_ids": product.collection_ids,
            "group_ids": product.group_ids,
            "brand_id": product.brand_id,
            "variants": variants,
            "modifiers": [modifier.model_dump() for modifier in product.modifiers],
        }
