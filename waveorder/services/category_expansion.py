"""
Category expansion for storefront filters.

A parent category expands to itself plus its active children, so products
attached directly to the parent stay visible next to the children's.
"""
import asyncio
import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from waveorder.models.category import Category

logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class CategoryExpander:
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def _fetch_category(self, category_id: str, business_ids: Sequence[str]) -> Optional[tuple]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Category.id, Category.parent_id).where(
                    Category.id == category_id,
                    Category.business_id.in_(business_ids),
                    Category.is_active == True,
                )
            )
            return result.first()

    async def _fetch_child_ids(self, category_id: str) -> List[str]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Category.id)
                .where(
                    Category.parent_id == category_id,
                    Category.id != category_id,
                    Category.is_active == True,
                )
                .order_by(Category.sort_order, Category.name)
            )
            return list(result.scalars().all())

    async def _expand_one(self, category_id: str, business_ids: Sequence[str]) -> List[str]:
        category, child_ids = await asyncio.gather(
            self._fetch_category(category_id, business_ids),
            self._fetch_child_ids(category_id),
        )
        if child_ids:
            return [category_id, *child_ids]
        if category is None:
            # Unresolved ids are still filtered on rather than dropped
            logger.debug(f"Category {category_id} not found for businesses {list(business_ids)}")
        return [category_id]

    async def expand(self, category_ids: Sequence[str], business_ids: Sequence[str]) -> List[str]:
        """Return the flattened, deduplicated category filter set."""
        if not category_ids:
            return []

        try:
            expanded = await asyncio.gather(
                *(self._expand_one(category_id, business_ids) for category_id in category_ids)
            )
        except Exception as e:
            logger.warning(f"Category expansion failed, filtering on {list(category_ids)} unexpanded: {e}")
            return _dedupe(category_ids)

        return _dedupe(category_id for group in expanded for category_id in group)
