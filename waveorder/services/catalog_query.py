"""
Filter/sort compiler for storefront product listings.

Turns raw storefront query parameters into the SQLAlchemy conditions,
ordering and offset/limit used to fetch one page of products plus the
matching count.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from sqlalchemy import and_, or_, select, func
from sqlalchemy.orm import selectinload

from waveorder.config import get_settings
from waveorder.models.product import Product, Collection, ProductGroup
from waveorder.utils.validators import normalize_paging, parse_id_list

settings = get_settings()

DEFAULT_SORT = "stock-desc"

SORT_ORDERS = {
    "name-asc": Product.name.asc(),
    "name-desc": Product.name.desc(),
    "price-asc": Product.price.asc(),
    "price-desc": Product.price.desc(),
    "stock-desc": Product.stock.desc(),
}

SEARCH_FIELDS = (
    Product.name,
    Product.description,
    Product.description_al,
    Product.description_en,
)


@dataclass
class CatalogQueryParams:
    category_ids: List[str] = field(default_factory=list)
    search: str = ""
    page: int = 1
    limit: int = 50
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    collection_ids: List[str] = field(default_factory=list)
    group_ids: List[str] = field(default_factory=list)
    brand_ids: List[str] = field(default_factory=list)
    sort_by: Optional[str] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        price_min: Optional[float] = None,
        price_max: Optional[float] = None,
        collections: Optional[str] = None,
        groups: Optional[str] = None,
        brands: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> "CatalogQueryParams":
        """Build params from raw query-string values ("all" means no category)."""
        page, limit = normalize_paging(
            page, limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE, settings.MAX_PAGE
        )
        max_ids = settings.MAX_FILTER_IDS
        return cls(
            category_ids=[] if category_id == "all" else parse_id_list(category_id, max_ids),
            search=search or "",
            page=page,
            limit=limit,
            price_min=price_min,
            price_max=price_max,
            collection_ids=parse_id_list(collections, max_ids),
            group_ids=parse_id_list(groups, max_ids),
            brand_ids=parse_id_list(brands, max_ids),
            sort_by=sort_by,
        )


@dataclass
class CatalogScope:
    business_ids: List[str]
    hide_products_without_photos: bool = False


@dataclass
class CompiledProductQuery:
    conditions: List[Any]
    order_by: List[Any]
    sort_key: str
    skip: int
    limit: int

    def select_page(self):
        return (
            select(Product)
            .options(
                selectinload(Product.images),
                selectinload(Product.variants),
                selectinload(Product.modifiers),
                selectinload(Product.collections),
                selectinload(Product.groups),
            )
            .where(*self.conditions)
            .order_by(*self.order_by)
            .offset(self.skip)
            .limit(self.limit)
        )

    def select_count(self):
        return select(func.count()).select_from(Product).where(*self.conditions)


def resolve_sort_key(sort_by: Optional[str]) -> str:
    return sort_by if sort_by in SORT_ORDERS else DEFAULT_SORT


def stock_visibility_clause():
    """Untracked products, or tracked products with stock on hand."""
    return or_(
        Product.track_inventory == False,
        and_(Product.track_inventory == True, Product.stock > 0),
    )


def search_clause(variants: Iterable[str]):
    # SQLite lower() folds ASCII only, so terms are folded here
    folded = sorted({variant.lower() for variant in variants})
    return or_(
        *(
            column.icontains(variant, autoescape=True)
            for variant in folded
            for column in SEARCH_FIELDS
        )
    )


def compile_product_query(
    params: CatalogQueryParams,
    scope: CatalogScope,
    category_ids: List[str],
    search_variants: Iterable[str] = (),
    min_listed_price: Optional[float] = None,
) -> CompiledProductQuery:
    """Compile the listing predicate.

    ``category_ids`` is the already-expanded category filter set and
    ``search_variants`` the expanded search term; both may be empty.
    """
    price_floor = settings.MIN_LISTED_PRICE if min_listed_price is None else min_listed_price

    lower_bound = price_floor
    if params.price_min is not None:
        lower_bound = max(params.price_min, price_floor)

    conditions = [
        Product.business_id.in_(scope.business_ids),
        Product.is_active == True,
        Product.price >= lower_bound,
    ]
    if params.price_max is not None:
        conditions.append(Product.price <= params.price_max)

    if scope.hide_products_without_photos:
        conditions.append(Product.images.any())

    if category_ids:
        conditions.append(Product.category_id.in_(category_ids))

    if params.collection_ids:
        conditions.append(Product.collections.any(Collection.id.in_(params.collection_ids)))
    if params.group_ids:
        conditions.append(Product.groups.any(ProductGroup.id.in_(params.group_ids)))
    if params.brand_ids:
        conditions.append(Product.brand_id.in_(params.brand_ids))

    # Search must not widen the stock gate, so both go in as one clause
    variants = set(search_variants)
    if variants:
        conditions.append(and_(stock_visibility_clause(), search_clause(variants)))
    else:
        conditions.append(stock_visibility_clause())

    sort_key = resolve_sort_key(params.sort_by)
    return CompiledProductQuery(
        conditions=conditions,
        order_by=[SORT_ORDERS[sort_key], Product.id.asc()],
        sort_key=sort_key,
        skip=params.skip,
        limit=params.limit,
    )
