"""Bulk import of simple products into a catalog store."""

from .services import (
    BatchResult,
    CatalogMetadata,
    ImportConfig,
    Reference,
    References,
    SimpleProduct,
    load_catalog_metadata,
    store_simple_products,
)

__version__ = "0.1.0"

__all__ = [
    "BatchResult",
    "CatalogMetadata",
    "ImportConfig",
    "Reference",
    "References",
    "SimpleProduct",
    "load_catalog_metadata",
    "store_simple_products",
]
