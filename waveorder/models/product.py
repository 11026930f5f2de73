"""
Product catalog models: products, their images, variants and modifiers,
plus the collection / group / brand taxonomies used by storefront filters.
"""
import uuid

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, Text, DateTime, JSON, ForeignKey, Table,
)
from sqlalchemy.orm import relationship
from waveorder.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


product_collections = Table(
    "product_collections",
    Base.metadata,
    Column("product_id", String, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("collection_id", String, ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True),
)

product_groups = Table(
    "product_groups",
    Base.metadata,
    Column("product_id", String, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", String, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
)


class Collection(Base):
    __tablename__ = "collections"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)


class ProductGroup(Base):
    __tablename__ = "groups"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)


class Brand(Base):
    __tablename__ = "brands"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=_new_id)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False, index=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=True, index=True)
    brand_id = Column(String, ForeignKey("brands.id"), nullable=True, index=True)

    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    description_al = Column(Text, nullable=True)  # Albanian
    description_en = Column(Text, nullable=True)  # English

    # Pricing
    price = Column(Float, nullable=False, default=0)
    original_price = Column(Float, nullable=True)  # "was" price during a sale
    sale_start_date = Column(DateTime(timezone=True), nullable=True)
    sale_end_date = Column(DateTime(timezone=True), nullable=True)

    # Inventory
    sku = Column(String, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    track_inventory = Column(Boolean, nullable=False, default=True)

    # SEO / merchandising
    featured = Column(Boolean, default=False)
    meta_title = Column(String, nullable=True)
    meta_description = Column(String, nullable=True)

    is_active = Column(Boolean, default=True)

    # Relationships
    images = relationship(
        "ProductImage", order_by="ProductImage.sort_order",
        cascade="all, delete-orphan",
    )
    variants = relationship(
        "ProductVariant", back_populates="product", order_by="ProductVariant.price",
        cascade="all, delete-orphan",
    )
    modifiers = relationship(
        "ProductModifier", back_populates="product", order_by="ProductModifier.price",
        cascade="all, delete-orphan",
    )
    collections = relationship("Collection", secondary=product_collections)
    groups = relationship("ProductGroup", secondary=product_groups)

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in self.images]

    @property
    def collection_ids(self) -> list[str]:
        return [c.id for c in self.collections]

    @property
    def group_ids(self) -> list[str]:
        return [g.id for g in self.groups]


class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)


class ProductVariant(Base):
    __tablename__ = "product_variants"

    id = Column(String, primary_key=True, default=_new_id)
    product_id = Column(String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)
    original_price = Column(Float, nullable=True)
    sale_start_date = Column(DateTime(timezone=True), nullable=True)
    sale_end_date = Column(DateTime(timezone=True), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    sku = Column(String, nullable=True)
    # "metadata" is reserved on declarative classes
    variant_metadata = Column("metadata", JSON, nullable=True)

    product = relationship("Product", back_populates="variants")


class ProductModifier(Base):
    __tablename__ = "product_modifiers"

    id = Column(String, primary_key=True, default=_new_id)
    product_id = Column(String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)
    required = Column(Boolean, default=False)

    product = relationship("Product", back_populates="modifiers")
