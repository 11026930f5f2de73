"""
Test fixtures - file-backed SQLite database + storefront HTTP client.

A file database (not :memory:) lets concurrent lookups open their own
connections and still see the same data.
"""
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from waveorder.database import Base, get_db, get_session_factory
from waveorder.main import app
from waveorder.models import (
    Business, Category, Product, ProductImage, ProductVariant, ProductModifier,
    Collection, ProductGroup, Brand,
)
from waveorder.services.system_events import get_system_event_logger


class RecordingEventLogger:
    """Stands in for SystemEventLogger and keeps events in memory"""

    def __init__(self):
        self.events = []

    async def log(self, log_type, severity="info", **fields):
        self.events.append({"log_type": log_type, "severity": severity, **fields})


class BrokenSessionFactory:
    """Session factory whose sessions can never be opened"""

    def __call__(self, *args, **kwargs):
        raise RuntimeError("database unavailable")


@pytest_asyncio.fixture()
async def session_factory(tmp_path):
    """Create a fresh SQLite database file for each test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def event_log():
    return RecordingEventLogger()


@pytest.fixture()
def broken_session_factory():
    return BrokenSessionFactory()


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """Insert a storefront with a connected partner and an unrelated store.

    casa (language sq, connected to partner)
      categories: kitchen -> [plates, cutlery, archived(inactive)], decor
      products:
        plate   12 (was 15, sale running)  stock 5  tracked   image, brand vb, summer
        spoon   10 (was 14, sale ended)    stock 3  tracked   gifts
        mug      8                         stock 0  untracked summer, 2 variants, 2 modifiers
        vase    30                         stock 1  tracked   gifts, all variants sold out
        card     0.005                              untracked
        dish    25                         stock 0  tracked
        glass   18  inactive
    partner: tepsi 20 untracked
    other:   plastic plate 5 untracked (not connected)
    """
    now = datetime.now(timezone.utc)

    casa = Business(
        id="biz-casa", slug="casa", name="Casa", language="sq",
        is_active=True, setup_wizard_completed=True,
        connected_businesses=["biz-partner"],
    )
    partner = Business(
        id="biz-partner", slug="partner", name="Partner", language="sq",
        is_active=True, setup_wizard_completed=True,
    )
    other = Business(
        id="biz-other", slug="other", name="Other", language="en",
        is_active=True, setup_wizard_completed=True,
    )
    draft = Business(
        id="biz-draft", slug="draft", name="Draft", is_active=True, setup_wizard_completed=False,
    )
    db_session.add_all([casa, partner, other, draft])
    await db_session.flush()

    kitchen = Category(id="cat-kitchen", business_id="biz-casa", name="Kuzhina", sort_order=1)
    decor = Category(id="cat-decor", business_id="biz-casa", name="Dekor", sort_order=2)
    db_session.add_all([kitchen, decor])
    await db_session.flush()
    plates = Category(id="cat-plates", business_id="biz-casa", parent_id="cat-kitchen", name="Pjata", sort_order=1)
    cutlery = Category(id="cat-cutlery", business_id="biz-casa", parent_id="cat-kitchen", name="Lugë", sort_order=2)
    archived = Category(
        id="cat-archived", business_id="biz-casa", parent_id="cat-kitchen", name="Arkiv", is_active=False,
    )
    summer = Collection(id="col-summer", business_id="biz-casa", name="Summer")
    gifts = ProductGroup(id="grp-gifts", business_id="biz-casa", name="Gifts")
    vb = Brand(id="brand-vb", business_id="biz-casa", name="Villeroy & Boch")
    db_session.add_all([plates, cutlery, archived, summer, gifts, vb])
    await db_session.flush()

    plate = Product(
        id="p-plate", business_id="biz-casa", category_id="cat-plates", brand_id="brand-vb",
        name="Pjatë porcelani", description="Porcelain plate",
        description_al="Pjatë e bardhë porcelani", description_en="White porcelain plate",
        price=12, original_price=15,
        sale_start_date=now - timedelta(days=1), sale_end_date=now + timedelta(days=1),
        stock=5, track_inventory=True, sku="PL-27",
        images=[ProductImage(url="https://cdn.example.com/plate.jpg")],
        collections=[summer],
    )
    spoon = Product(
        id="p-spoon", business_id="biz-casa", category_id="cat-cutlery",
        name="Lugë çaji", description="Tea spoon",
        price=10, original_price=14,
        sale_start_date=now - timedelta(days=10), sale_end_date=now - timedelta(days=1),
        stock=3, track_inventory=True,
        groups=[gifts],
    )
    mug = Product(
        id="p-mug", business_id="biz-casa", category_id="cat-kitchen",
        name="Filxhan", description="Mug",
        price=8, stock=0, track_inventory=False,
        collections=[summer],
        variants=[
            ProductVariant(
                id="v-mug-large", name="Large", price=9, original_price=11, stock=0,
                sale_start_date=now - timedelta(hours=1), variant_metadata={"volume": "400ml"},
            ),
            ProductVariant(id="v-mug-small", name="Small", price=7, original_price=6, stock=0),
        ],
        modifiers=[
            ProductModifier(id="m-lid", name="Lid", price=1.5, required=False),
            ProductModifier(id="m-gift", name="Gift wrap", price=0.5, required=False),
        ],
    )
    vase = Product(
        id="p-vase", business_id="biz-casa", category_id="cat-decor",
        name="Vazo", price=30, stock=1, track_inventory=True,
        groups=[gifts],
        variants=[
            ProductVariant(id="v-vase-s", name="S", price=30, stock=0),
            ProductVariant(id="v-vase-l", name="L", price=40, stock=0),
        ],
    )
    card = Product(
        id="p-card", business_id="biz-casa", category_id="cat-decor",
        name="Kartolinë", price=0.005, track_inventory=False,
    )
    dish = Product(
        id="p-dish", business_id="biz-casa", category_id="cat-kitchen",
        name="Tavë", price=25, stock=0, track_inventory=True,
    )
    glass = Product(
        id="p-glass", business_id="biz-casa", category_id="cat-kitchen",
        name="Gotë", price=18, stock=10, track_inventory=True, is_active=False,
    )
    tepsi = Product(
        id="p-tepsi", business_id="biz-partner", name="Tepsi", price=20, track_inventory=False,
    )
    plastic = Product(
        id="p-plastic", business_id="biz-other", name="Pjatë plastike", price=5, track_inventory=False,
    )
    db_session.add_all([plate, spoon, mug, vase, card, dish, glass, tepsi, plastic])
    await db_session.commit()

    return {"casa": casa, "partner": partner, "other": other, "now": now}


@pytest_asyncio.fixture()
async def client(session_factory, event_log):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_system_event_logger] = lambda: event_log

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def broken_client(broken_session_factory, event_log):
    """Client whose database is unreachable"""
    app.dependency_overrides[get_session_factory] = lambda: broken_session_factory
    app.dependency_overrides[get_system_event_logger] = lambda: event_log

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
