"""
Entity Writer - Bulk insert and update of core product rows.

Inserts assign new entity ids; the ids are read back by sku and written
onto every record, including records that share a sku with an earlier one
(the same product submitted once per store view).
"""

from typing import Dict, List

from sqlalchemy.orm import Session

from ..utils.constants import PRODUCT_TYPE_SIMPLE
from .bulk_statements import bulk_insert, bulk_upsert
from .dto import SimpleProduct
from .exceptions import ProductImportError
from .logging_utils import get_service_logger
from .metadata_service import CatalogMetadata
from .partition_service import fetch_existing_skus

logger = get_service_logger(__name__)


def _entity_row(product: SimpleProduct) -> Dict:
    return {
        "attribute_set_id": product.attribute_set_id,
        "type_id": PRODUCT_TYPE_SIMPLE,
        "sku": product.sku,
        # TODO: derive has_options/required_options once custom options are imported
        "has_options": 0,
        "required_options": 0,
    }


def insert_main_table(
    session: Session, metadata: CatalogMetadata, products: List[SimpleProduct]
) -> None:
    """
    Insert new product rows and assign the generated ids.

    Only the first record of each sku is inserted.

    Args:
        session: Database session (the batch transaction)
        metadata: Catalog snapshot
        products: Records whose sku does not exist yet

    Raises:
        ProductImportError: If an inserted sku cannot be read back
    """
    if not products:
        return

    rows_by_sku: Dict[str, Dict] = {}
    for product in products:
        if product.sku not in rows_by_sku:
            rows_by_sku[product.sku] = _entity_row(product)

    bulk_insert(session, metadata.product_entity_table, list(rows_by_sku.values()))

    sku_to_id = fetch_existing_skus(session, metadata, rows_by_sku.keys())

    for product in products:
        if product.sku not in sku_to_id:
            raise ProductImportError(f"inserted product could not be read back: {product.sku}")
        product.id = sku_to_id[product.sku]

    logger.debug(f"Inserted {len(rows_by_sku)} products for {len(products)} records")


def update_main_table(
    session: Session, metadata: CatalogMetadata, products: List[SimpleProduct]
) -> None:
    """
    Overwrite attribute set and option flags of existing product rows.

    Args:
        session: Database session (the batch transaction)
        metadata: Catalog snapshot
        products: Records with an id assigned by partitioning
    """
    if not products:
        return

    # One row per id: PostgreSQL refuses to update a row twice in one statement
    rows_by_id: Dict[int, Dict] = {}
    for product in products:
        row = _entity_row(product)
        row["entity_id"] = product.id
        rows_by_id[product.id] = row

    bulk_upsert(
        session,
        metadata.product_entity_table,
        list(rows_by_id.values()),
        key_columns=["entity_id"],
        update_columns=["attribute_set_id", "has_options", "required_options"],
    )

    logger.debug(f"Updated {len(rows_by_id)} products for {len(products)} records")
