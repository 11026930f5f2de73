"""
Public storefront API - store profile and product listing by slug
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from waveorder.database import get_db, get_session_factory
from waveorder.errors import InternalServerError, StoreNotFoundError
from waveorder.models.category import Category
from waveorder.services import store_hours
from waveorder.services.catalog_query import CatalogQueryParams
from waveorder.services.catalog_service import StorefrontCatalogService, find_active_business
from waveorder.services.system_events import SystemEventLogger, get_system_event_logger
from waveorder.utils.helpers import request_log_fields

logger = logging.getLogger(__name__)
router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class VariantResponse(CamelModel):
    id: str
    name: str
    price: float
    original_price: Optional[float] = None
    stock: int
    sku: Optional[str] = None
    meta: Optional[Any] = Field(None, alias="metadata")
    sale_start_date: Optional[datetime] = None
    sale_end_date: Optional[datetime] = None


class ModifierResponse(CamelModel):
    id: str
    name: str
    price: float
    required: bool


class ProductResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    description_al: Optional[str] = None
    description_en: Optional[str] = None
    images: List[str] = []
    price: float
    original_price: Optional[float] = None
    sku: Optional[str] = None
    stock: int
    track_inventory: bool
    featured: bool = False
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    category_id: Optional[str] = None
    collection_ids: List[str] = []
    group_ids: List[str] = []
    brand_id: Optional[str] = None
    variants: List[VariantResponse] = []
    modifiers: List[ModifierResponse] = []


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class ProductListResponse(CamelModel):
    products: List[ProductResponse]
    pagination: PaginationResponse


class StoreCategoryResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[str] = None
    sort_order: int = 0

    class Config:
        from_attributes = True


class StoreProfileResponse(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    logo: Optional[str] = None
    cover_image: Optional[str] = None
    business_type: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    whatsapp_number: Optional[str] = None
    primary_color: Optional[str] = None
    currency: str
    timezone: str
    language: str
    storefront_language: Optional[str] = None
    delivery_fee: float = 0
    minimum_order: float = 0
    delivery_enabled: bool = True
    pickup_enabled: bool = False
    dine_in_enabled: bool = False
    business_hours: Optional[List[Dict[str, Any]]] = None
    is_open: bool
    next_open_time: Optional[str] = None
    opening_hours_schema: Optional[str] = None
    categories: List[StoreCategoryResponse] = []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _log_failure(
    events: SystemEventLogger,
    request: Request,
    error: Exception,
    context: Dict[str, Any],
) -> None:
    not_found = isinstance(error, StoreNotFoundError)
    await events.log(
        "storefront_not_found" if not_found else "storefront_error",
        "warning" if not_found else "error",
        slug=context.get("slug"),
        business_id=context.get("business_id"),
        status_code=404 if not_found else 500,
        error_message=str(error) or error.__class__.__name__,
        context={k: v for k, v in context.items() if v is not None},
        **request_log_fields(request),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/{slug}", response_model=StoreProfileResponse)
async def get_store_profile(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    events: SystemEventLogger = Depends(get_system_event_logger),
):
    """Store profile, active categories and opening-hours status."""
    context: Dict[str, Any] = {"slug": slug}
    try:
        business = await find_active_business(db, slug)
        context["business_id"] = business.id

        result = await db.execute(
            select(Category)
            .where(Category.business_id == business.id, Category.is_active == True)
            .order_by(Category.sort_order, Category.name)
        )
        categories = result.scalars().all()

        open_now = store_hours.is_open(business.business_hours, business.timezone)
        return StoreProfileResponse(
            id=business.id,
            name=business.name,
            slug=business.slug,
            description=business.description,
            logo=business.logo,
            cover_image=business.cover_image,
            business_type=business.business_type,
            phone=business.phone,
            email=business.email,
            address=business.address,
            whatsapp_number=business.whatsapp_number,
            primary_color=business.primary_color,
            currency=business.currency,
            timezone=business.timezone,
            language=business.language,
            storefront_language=business.storefront_language,
            delivery_fee=business.delivery_fee or 0,
            minimum_order=business.minimum_order or 0,
            delivery_enabled=bool(business.delivery_enabled),
            pickup_enabled=bool(business.pickup_enabled),
            dine_in_enabled=bool(business.dine_in_enabled),
            business_hours=business.business_hours if isinstance(business.business_hours, list) else None,
            is_open=open_now,
            next_open_time=None if open_now else store_hours.next_open_time(
                business.business_hours, business.timezone
            ),
            opening_hours_schema=store_hours.opening_hours_schema(business.business_hours),
            categories=[StoreCategoryResponse.model_validate(c) for c in categories],
        )
    except StoreNotFoundError as e:
        await _log_failure(events, request, e, context)
        raise
    except Exception as e:
        logger.exception(f"Store profile failed for {slug}")
        await _log_failure(events, request, e, context)
        raise InternalServerError(context) from e


@router.get("/{slug}/products", response_model=ProductListResponse)
async def list_storefront_products(
    slug: str,
    request: Request,
    category_id: Optional[str] = Query(None, alias="categoryId"),
    search: Optional[str] = Query(None),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    price_min: Optional[float] = Query(None, alias="priceMin"),
    price_max: Optional[float] = Query(None, alias="priceMax"),
    collections: Optional[str] = Query(None),
    groups: Optional[str] = Query(None),
    brands: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    events: SystemEventLogger = Depends(get_system_event_logger),
):
    """Paginated, filtered, stock-aware product listing for a storefront."""
    context: Dict[str, Any] = {"slug": slug, "search": search, "category_id": category_id}
    service = StorefrontCatalogService(session_factory)
    try:
        business = await service.get_business(slug)
        context["business_id"] = business.id

        params = CatalogQueryParams.from_query(
            category_id=category_id,
            search=search,
            page=page,
            limit=limit,
            price_min=price_min,
            price_max=price_max,
            collections=collections,
            groups=groups,
            brands=brands,
            sort_by=sort_by,
        )
        result = await service.list_products(business, params)

        return ProductListResponse(
            products=[ProductResponse(**product) for product in result.products],
            pagination=PaginationResponse(
                page=result.page,
                limit=result.limit,
                total=result.total,
                total_pages=result.total_pages,
                has_more=result.has_more,
            ),
        )
    except StoreNotFoundError as e:
        await _log_failure(events, request, e, context)
        raise
    except Exception as e:
        logger.exception(f"Storefront products failed for {slug}")
        await _log_failure(events, request, e, context)
        raise InternalServerError(context) from e
