"""
Base model class for all store tables.

The catalog store keeps its own primary key names (entity_id, value_id,
store_id, ...), so models declare their keys themselves instead of sharing
an id column.
"""

from typing import Any, Dict

from sqlalchemy import inspect
from sqlalchemy.orm import declarative_base

# Create the declarative base for all models
Base = declarative_base()


class BaseModel(Base):
    """Abstract base model with common helpers."""

    __abstract__ = True

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Returns:
            Dictionary of column name to value
        """
        result = {}
        for attr in inspect(self).mapper.column_attrs:
            result[attr.columns[0].name] = getattr(self, attr.key)
        return result

    def __repr__(self) -> str:
        """
        String representation of model instance.

        Returns:
            String like "ClassName(entity_id=1)"
        """
        class_name = self.__class__.__name__
        mapper = inspect(self).mapper
        keys = [
            f"{column.name}={getattr(self, mapper.get_property_by_column(column).key)!r}"
            for column in mapper.primary_key
        ]
        return f"{class_name}({', '.join(keys)})"
