"""
Store model for the configured store views.

Store view 0 is the admin/global view: values stored under it apply to
every store view that has no value of its own.
"""

from sqlalchemy import Column, Integer, String, Boolean

from .base import BaseModel


class Store(BaseModel):
    """
    Store view of the catalog.

    Attributes:
        store_id: Numeric store view id (0 = global)
        code: Unique store view code (e.g., "default", "nl")
        name: Display name
        is_active: Inactive store views still receive imported data
    """

    __tablename__ = "store"

    store_id = Column(Integer, primary_key=True, autoincrement=False)
    code = Column(String(32), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
