"""
Product entity and attribute value models.

ProductEntity is the core row of a product; every other attribute lives in
a value table chosen by the attribute's backend type, with one row per
(entity, attribute, store view).
"""

from sqlalchemy import (
    Column,
    Integer,
    SmallInteger,
    String,
    Text,
    Numeric,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import declared_attr

from ..utils.constants import DECIMAL_PRECISION, DECIMAL_SCALE
from .base import BaseModel


class ProductEntity(BaseModel):
    """
    Core product row.

    Attributes:
        entity_id: Internal product id, assigned on insert
        attribute_set_id: Attribute set the product was created with
        type_id: Product type ("simple")
        sku: Natural key, unique across the store
        has_options: Flag, always 0 for imported simple products
        required_options: Flag, always 0 for imported simple products
    """

    __tablename__ = "catalog_product_entity"

    entity_id = Column(Integer, primary_key=True, autoincrement=True)
    attribute_set_id = Column(
        Integer, ForeignKey("eav_attribute_set.attribute_set_id"), nullable=False
    )
    type_id = Column(String(32), nullable=False, default="simple")
    sku = Column(String(64), nullable=False, unique=True)
    has_options = Column(SmallInteger, nullable=False, default=0)
    required_options = Column(SmallInteger, nullable=False, default=0)


class ProductValueMixin:
    """Columns shared by every product attribute value table."""

    value_id = Column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def attribute_id(cls):
        return Column(Integer, ForeignKey("eav_attribute.attribute_id"), nullable=False)

    @declared_attr
    def store_id(cls):
        return Column(Integer, ForeignKey("store.store_id"), nullable=False, default=0)

    @declared_attr
    def entity_id(cls):
        return Column(
            Integer,
            ForeignKey("catalog_product_entity.entity_id", ondelete="CASCADE"),
            nullable=False,
        )

    @declared_attr
    def __table_args__(cls):
        # The attribute writer upserts on this key
        return (
            UniqueConstraint(
                "entity_id", "attribute_id", "store_id", name=f"uq_{cls.__tablename__}_key"
            ),
            Index(f"idx_{cls.__tablename__}_attribute", "attribute_id"),
        )


class ProductEntityVarchar(ProductValueMixin, BaseModel):
    """Short text values (name, url_key, ...)."""

    __tablename__ = "catalog_product_entity_varchar"

    value = Column(String(255), nullable=True)


class ProductEntityInt(ProductValueMixin, BaseModel):
    """Integer values (status, visibility, ...)."""

    __tablename__ = "catalog_product_entity_int"

    value = Column(Integer, nullable=True)


class ProductEntityDecimal(ProductValueMixin, BaseModel):
    """Decimal values (price, weight, ...)."""

    __tablename__ = "catalog_product_entity_decimal"

    value = Column(Numeric(DECIMAL_PRECISION, DECIMAL_SCALE), nullable=True)


class ProductEntityText(ProductValueMixin, BaseModel):
    """Long text values (description, ...)."""

    __tablename__ = "catalog_product_entity_text"

    value = Column(Text, nullable=True)


class ProductEntityDatetime(ProductValueMixin, BaseModel):
    """Date/time values (news_from_date, ...)."""

    __tablename__ = "catalog_product_entity_datetime"

    value = Column(DateTime, nullable=True)
