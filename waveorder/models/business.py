"""
Business (storefront tenant) model
"""
import uuid

from sqlalchemy import Column, String, Boolean, Float, Text, JSON, DateTime, func
from waveorder.database import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(String, primary_key=True, default=lambda: uuid.uuid4().hex)
    slug = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    logo = Column(String, nullable=True)
    cover_image = Column(String, nullable=True)
    business_type = Column(String, nullable=True)  # RESTAURANT, SALON, RETAIL, ...

    # Contact
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    whatsapp_number = Column(String, nullable=True)

    # Branding / locale
    primary_color = Column(String, nullable=True)
    currency = Column(String, nullable=False, default="EUR")
    timezone = Column(String, nullable=False, default="Europe/Tirane")
    language = Column(String, nullable=False, default="en")
    storefront_language = Column(String, nullable=True)

    # Ordering options
    delivery_fee = Column(Float, nullable=False, default=0)
    minimum_order = Column(Float, nullable=False, default=0)
    delivery_enabled = Column(Boolean, default=True)
    pickup_enabled = Column(Boolean, default=False)
    dine_in_enabled = Column(Boolean, default=False)

    # [{"day": "monday", "open": "09:00", "close": "17:00", "closed": false}, ...]
    business_hours = Column(JSON, nullable=True)

    # Marketplace grouping: ids of businesses whose products are listed here too
    connected_businesses = Column(JSON, nullable=True)
    hide_products_without_photos = Column(Boolean, default=False)

    # Status
    is_active = Column(Boolean, default=True)
    setup_wizard_completed = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def connected_business_ids(self) -> list[str]:
        if not isinstance(self.connected_businesses, list):
            return []
        return [str(b) for b in self.connected_businesses if b]
