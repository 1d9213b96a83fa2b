"""Services package - Import engine of the product catalog store.

Architecture:
- Services: Stateless functions and small classes, one per import stage
- Transactions: One session per batch, owned by product_storage_service
- Exceptions: Batch-level failures via the ServiceError hierarchy;
  record-level failures are recorded on the records themselves
- Metadata: Immutable CatalogMetadata snapshot passed to every stage

Service Modules:
- product_storage_service: Batch coordinator, the public entry point
- reference_resolver: Names to ids
- validator: Attribute-level checks
- partition_service: Existing-sku lookup, insert/update split
- entity_writer: Core product rows
- url_rewrite_service: Generated request paths
- attribute_writer: Attribute value tables
- category_link_writer: Product-category links

Infrastructure:
- database: Engine and session management
- bulk_statements: Dialect specific multi-row INSERT statements
- metadata_service: Catalog snapshot and its loader
- exceptions: Service layer exception classes
- logging_utils: Structured operation logging
"""

from .dto import BatchResult, ImportConfig, Reference, References, SimpleProduct
from .exceptions import (
    MetaDataError,
    ProductImportError,
    ServiceError,
    UnsupportedDialectError,
)
from .metadata_service import AttributeInfo, CatalogMetadata, CategoryInfo, load_catalog_metadata
from .product_storage_service import store_simple_products
from .reference_resolver import ReferenceResolver
from .validator import Validator

__all__ = [
    "BatchResult",
    "ImportConfig",
    "Reference",
    "References",
    "SimpleProduct",
    "MetaDataError",
    "ProductImportError",
    "ServiceError",
    "UnsupportedDialectError",
    "AttributeInfo",
    "CatalogMetadata",
    "CategoryInfo",
    "load_catalog_metadata",
    "store_simple_products",
    "ReferenceResolver",
    "Validator",
]
