"""
Category models.

Categories form a tree; `path` stores the ids from the root down to the
category itself, joined by "/" (e.g., "1/3/4"). Url keys are kept per store
view, store view 0 holding the default.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, Index

from .base import BaseModel


class CategoryEntity(BaseModel):
    """
    Category node.

    Attributes:
        entity_id: Category id
        parent_id: Parent category id (0 for the tree root)
        path: Ancestor ids from the root to this category, "/"-joined
        name: Category name, used to resolve name paths on import
    """

    __tablename__ = "catalog_category_entity"

    entity_id = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column(Integer, nullable=False, default=0)
    path = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    @property
    def path_ids(self):
        """Ancestor ids as integers, root first."""
        return [int(part) for part in self.path.split("/") if part]


class CategoryUrlKey(BaseModel):
    """Url key of a category in one store view."""

    __tablename__ = "catalog_category_url_key"

    url_key_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(
        Integer,
        ForeignKey("catalog_category_entity.entity_id", ondelete="CASCADE"),
        nullable=False,
    )
    store_id = Column(Integer, ForeignKey("store.store_id"), nullable=False, default=0)
    url_key = Column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("category_id", "store_id", name="uq_category_url_key_store"),
    )


class CategoryProduct(BaseModel):
    """Link between a category and a product."""

    __tablename__ = "catalog_category_product"

    link_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(
        Integer,
        ForeignKey("catalog_category_entity.entity_id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id = Column(
        Integer,
        ForeignKey("catalog_product_entity.entity_id", ondelete="CASCADE"),
        nullable=False,
    )
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("category_id", "product_id", name="uq_category_product"),
        Index("idx_category_product_product", "product_id"),
    )
