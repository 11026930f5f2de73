"""
Typed catalog records.

ORM rows are validated into these models as soon as they leave the
session, so pricing and stock filtering only ever see well-formed data.
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class VariantRecord(BaseModel):
    id: str
    name: str
    price: float
    original_price: Optional[float] = None
    sale_start_date: Optional[datetime] = None
    sale_end_date: Optional[datetime] = None
    stock: int = 0
    sku: Optional[str] = None
    variant_metadata: Optional[Any] = None

    class Config:
        from_attributes = True


class ModifierRecord(BaseModel):
    id: str
    name: str
    price: float
    required: bool = False

    class Config:
        from_attributes = True


class ProductRecord(BaseModel):
    id: str
    business_id: str
    name: str
    description: Optional[str] = None
    description_al: Optional[str] = None
    description_en: Optional[str] = None
    image_urls: List[str] = Field(default_factory=list)
    price: float
    original_price: Optional[float] = None
    sale_start_date: Optional[datetime] = None
    sale_end_date: Optional[datetime] = None
    sku: Optional[str] = None
    stock: int = 0
    track_inventory: bool = True
    featured: bool = False
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    category_id: Optional[str] = None
    collection_ids: List[str] = Field(default_factory=list)
    group_ids: List[str] = Field(default_factory=list)
    brand_id: Optional[str] = None
    variants: List[VariantRecord] = Field(default_factory=list)
    modifiers: List[ModifierRecord] = Field(default_factory=list)

    class Config:
        from_attributes = True
