"""
Attribute catalog models.

EavAttribute describes a product attribute and the backend type that
decides which value table holds its values. AttributeSet names a group of
attributes a product is created with.
"""

from sqlalchemy import Column, Integer, String, Index, UniqueConstraint

from .base import BaseModel


class AttributeSet(BaseModel):
    """Named attribute set (e.g., "Default")."""

    __tablename__ = "eav_attribute_set"

    attribute_set_id = Column(Integer, primary_key=True, autoincrement=True)
    attribute_set_name = Column(String(255), nullable=False, unique=True)


class EavAttribute(BaseModel):
    """
    Attribute definition.

    Attributes:
        attribute_id: Numeric attribute id written to the value tables
        entity_type_code: Entity the attribute belongs to ("catalog_product")
        attribute_code: Attribute name as used on import records
        backend_type: "static" for entity columns, otherwise the value table suffix
    """

    __tablename__ = "eav_attribute"

    attribute_id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type_code = Column(String(50), nullable=False)
    attribute_code = Column(String(255), nullable=False)
    backend_type = Column(String(8), nullable=False, default="static")

    __table_args__ = (
        UniqueConstraint("entity_type_code", "attribute_code", name="uq_eav_attribute_code"),
        Index("idx_eav_attribute_entity_type", "entity_type_code"),
    )
