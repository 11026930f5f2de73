"""
Storefront catalog service tests - description localization, store scope
and injected clock
"""
from datetime import timedelta

import pytest

from waveorder.errors import StoreNotFoundError
from waveorder.services.catalog_query import CatalogQueryParams
from waveorder.services.catalog_records import ProductRecord
from waveorder.services.catalog_service import (
    StorefrontCatalogService, resolve_description, scope_business_ids, storefront_language,
)


def _record(**kwargs):
    return ProductRecord(id="p", business_id="b", name="p", price=1, **kwargs)


class TestResolveDescription:

    def test_albanian_storefront_prefers_albanian(self):
        product = _record(description="Plate", description_al="Pjatë")
        assert resolve_description(product, "sq", use_fallback=False) == "Pjatë"
        assert resolve_description(product, "al", use_fallback=False) == "Pjatë"

    def test_albanian_storefront_without_translation(self):
        product = _record(description="Plate")
        assert resolve_description(product, "sq", use_fallback=False) == "Plate"

    def test_english_storefront_prefers_english(self):
        product = _record(description="Pjatë", description_en="Plate")
        assert resolve_description(product, "en", use_fallback=False) == "Plate"

    def test_fallback_slug(self):
        assert resolve_description(_record(description_al="Pjatë"), "en", use_fallback=True) == "Pjatë"
        assert resolve_description(_record(description="Plate", description_al="Pjatë"), "sq", True) == "Plate"
        assert resolve_description(_record(), "en", use_fallback=True) == ""


async def test_scope_includes_connected_businesses(session_factory, seed_data):
    service = StorefrontCatalogService(session_factory)
    casa = await service.get_business("casa")
    assert scope_business_ids(casa) == ["biz-casa", "biz-partner"]
    assert storefront_language(casa) == "sq"


async def test_unknown_store(session_factory, seed_data):
    service = StorefrontCatalogService(session_factory)
    with pytest.raises(StoreNotFoundError):
        await service.get_business("draft")


async def test_configured_fallback_slug(session_factory, seed_data):
    service = StorefrontCatalogService(session_factory, description_fallback_slugs=["casa"])
    casa = await service.get_business("casa")
    page = await service.list_products(casa, CatalogQueryParams(category_ids=["cat-plates"]))
    assert page.products[0]["description"] == "Porcelain plate"


async def test_clock_drives_sale_pricing(session_factory, seed_data):
    after_sale = seed_data["now"] + timedelta(days=3)
    service = StorefrontCatalogService(session_factory, clock=lambda: after_sale)
    casa = await service.get_business("casa")
    page = await service.list_products(casa, CatalogQueryParams(category_ids=["cat-plates"]))
    plate = page.products[0]
    assert plate["price"] == 15
    assert plate["original_price"] is None


async def test_partner_store_lists_only_its_own_products(session_factory, seed_data):
    service = StorefrontCatalogService(session_factory)
    partner = await service.get_business("partner")
    page = await service.list_products(partner, CatalogQueryParams())
    assert [p["id"] for p in page.products] == ["p-tepsi"]
    assert page.total == 1
