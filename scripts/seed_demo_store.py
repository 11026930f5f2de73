"""
Seed a demo storefront: a business with a category tree, products,
variants and modifiers. Safe to re-run; skips if the slug already exists.
"""
import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from waveorder.database import engine, Base, AsyncSessionLocal
from waveorder.models import (
    Business, Category, Product, ProductImage, ProductVariant, ProductModifier, Brand,
)

DEMO_SLUG = "demo-home"


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Business).where(Business.slug == DEMO_SLUG))
        if result.scalar_one_or_none():
            print(f"Store '{DEMO_SLUG}' already exists, nothing to do.")
            return

        business = Business(
            slug=DEMO_SLUG,
            name="Demo Home & Kitchen",
            language="sq",
            currency="ALL",
            timezone="Europe/Tirane",
            whatsapp_number="+355690000000",
            is_active=True,
            setup_wizard_completed=True,
            business_hours=[
                {"day": day, "open": "09:00", "close": "20:00", "closed": False}
                for day in ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
            ] + [{"day": "sunday", "open": "00:00", "close": "00:00", "closed": True}],
        )
        session.add(business)
        await session.flush()

        kitchen = Category(business_id=business.id, name="Kuzhina", sort_order=1)
        session.add(kitchen)
        await session.flush()
        plates = Category(business_id=business.id, parent_id=kitchen.id, name="Pjata", sort_order=1)
        cutlery = Category(business_id=business.id, parent_id=kitchen.id, name="Lugë e pirunj", sort_order=2)
        brand = Brand(business_id=business.id, name="Villeroy & Boch")
        session.add_all([plates, cutlery, brand])
        await session.flush()

        now = datetime.now(timezone.utc)
        plate = Product(
            business_id=business.id,
            category_id=plates.id,
            brand_id=brand.id,
            name="Pjatë porcelani",
            description_al="Pjatë e bardhë porcelani, 27 cm",
            description_en="White porcelain plate, 27 cm",
            price=1200,
            original_price=1500,
            sale_start_date=now - timedelta(days=1),
            sale_end_date=now + timedelta(days=14),
            stock=0,
            track_inventory=True,
            images=[ProductImage(url="https://cdn.example.com/plate.jpg")],
            variants=[
                ProductVariant(name="27 cm", price=1200, stock=8),
                ProductVariant(name="21 cm", price=900, stock=0),
            ],
        )
        spoon = Product(
            business_id=business.id,
            category_id=cutlery.id,
            name="Lugë çaji",
            description_al="Set me 6 lugë çaji",
            price=800,
            stock=25,
            track_inventory=True,
        )
        coffee = Product(
            business_id=business.id,
            category_id=kitchen.id,
            name="Kafe ekspres",
            price=150,
            track_inventory=False,
            modifiers=[
                ProductModifier(name="Qumësht", price=0),
                ProductModifier(name="Dopio", price=50),
            ],
        )
        session.add_all([plate, spoon, coffee])
        await session.commit()

    print(f"Seeded demo store '{DEMO_SLUG}'.")


if __name__ == "__main__":
    asyncio.run(seed())
