"""
Database models package.

This package contains the SQLAlchemy ORM models of the catalog store the
importer writes to.
"""

from .base import Base, BaseModel
from .store import Store
from .eav_attribute import AttributeSet, EavAttribute
from .product_entity import (
    ProductEntity,
    ProductEntityVarchar,
    ProductEntityInt,
    ProductEntityDecimal,
    ProductEntityText,
    ProductEntityDatetime,
)
from .category import CategoryEntity, CategoryUrlKey, CategoryProduct
from .url_rewrite import UrlRewrite

__all__ = [
    "Base",
    "BaseModel",
    "Store",
    "AttributeSet",
    "EavAttribute",
    "ProductEntity",
    "ProductEntityVarchar",
    "ProductEntityInt",
    "ProductEntityDecimal",
    "ProductEntityText",
    "ProductEntityDatetime",
    "CategoryEntity",
    "CategoryUrlKey",
    "CategoryProduct",
    "UrlRewrite",
]
