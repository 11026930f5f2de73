from waveorder.models.business import Business
from waveorder.models.category import Category
from waveorder.models.product import (
    Product,
    ProductImage,
    ProductVariant,
    ProductModifier,
    Collection,
    ProductGroup,
    Brand,
)
from waveorder.models.system_log import SystemLog

__all__ = [
    "Business",
    "Category",
    "Product",
    "ProductImage",
    "ProductVariant",
    "ProductModifier",
    "Collection",
    "ProductGroup",
    "Brand",
    "SystemLog",
]
