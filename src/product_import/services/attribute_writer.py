"""
Attribute Writer - Bulk upsert of attribute values into their value tables.

One statement per attribute. Attributes are processed in the order of the
metadata snapshot, not in the order they occur in the data.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from ..utils.constants import DATETIME_FORMATS
from .bulk_statements import bulk_upsert
from .dto import SimpleProduct
from .exceptions import ProductImportError
from .logging_utils import get_service_logger
from .metadata_service import AttributeInfo, CatalogMetadata

logger = get_service_logger(__name__)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"not a date or datetime: {value!r}")


def convert_value(backend_type: str, value: Any) -> Any:
    """Convert a validated record value to the Python type of its value column."""
    if backend_type == "int":
        return int(value)
    if backend_type == "decimal":
        return Decimal(str(value).strip())
    if backend_type == "datetime":
        return _to_datetime(value)
    return str(value)


def insert_attribute_values(
    session: Session, attribute_info: AttributeInfo, products: List[SimpleProduct]
) -> None:
    """
    Upsert one attribute's values for all records that carry it.

    Rows are keyed on (entity_id, attribute_id, store_id); an existing value
    is overwritten, and of two records with the same key the later one wins.

    Args:
        session: Database session (the batch transaction)
        attribute_info: The attribute and its value table
        products: Records carrying a value for the attribute

    Raises:
        ProductImportError: If a record has no id yet
    """
    code = attribute_info.attribute_code
    rows: Dict[Tuple[int, int], Dict] = {}

    for product in products:
        if product.id is None:
            raise ProductImportError(f"product {product.sku} has no id when writing {code}")

        rows[(product.id, product.store_view_id)] = {
            "entity_id": product.id,
            "attribute_id": attribute_info.attribute_id,
            "store_id": product.store_view_id,
            "value": convert_value(attribute_info.backend_type, product.get_value(code)),
        }

    bulk_upsert(
        session,
        attribute_info.table_name,
        list(rows.values()),
        key_columns=["entity_id", "attribute_id", "store_id"],
        update_columns=["value"],
    )


def write_attribute_values(
    session: Session,
    metadata: CatalogMetadata,
    products_by_attribute: Dict[str, List[SimpleProduct]],
) -> List[str]:
    """
    Write every catalog attribute that occurs in the batch.

    Args:
        session: Database session (the batch transaction)
        metadata: Catalog snapshot; its attribute order is the processing order
        products_by_attribute: Buckets built by partition_products

    Returns:
        Codes of the attributes written, in the order they were written
    """
    written = []
    for code, attribute_info in metadata.product_eav_attribute_info.items():
        products = products_by_attribute.get(code)
        if not products:
            continue
        insert_attribute_values(session, attribute_info, products)
        written.append(code)

    logger.debug(f"Wrote attribute values for {len(written)} attributes")
    return written
