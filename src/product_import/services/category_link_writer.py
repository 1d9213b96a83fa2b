"""
Category Link Writer - Bulk insert of product-category associations.

Neither an existing link nor a category id that does not exist is an
error. MySQL drops both with INSERT IGNORE; on other dialects links to
missing categories are filtered out first, because ON CONFLICT DO NOTHING
does not cover foreign key violations.
"""

from typing import Dict, Iterable, List, Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from .bulk_statements import MYSQL_DIALECTS, bulk_insert_ignore, get_dialect_name, get_table
from .dto import SimpleProduct
from .logging_utils import get_service_logger
from .metadata_service import CatalogMetadata

logger = get_service_logger(__name__)


def _existing_category_ids(
    session: Session, metadata: CatalogMetadata, category_ids: Set[int]
) -> Set[int]:
    table = get_table(metadata.category_entity_table)
    stmt = select(table.c.entity_id).where(table.c.entity_id.in_(sorted(category_ids)))
    return set(session.execute(stmt).scalars())


def insert_category_links(
    session: Session, metadata: CatalogMetadata, products: Iterable[SimpleProduct]
) -> int:
    """
    Link records to their categories.

    Args:
        session: Database session (the batch transaction)
        metadata: Catalog snapshot
        products: Persisted records; records without an id are skipped

    Returns:
        Number of links offered to the store
    """
    rows: List[Dict] = []
    for product in products:
        if product.id is None:
            continue
        for category_id in product.category_ids:
            rows.append({"category_id": category_id, "product_id": product.id, "position": 0})

    if not rows:
        return 0

    if get_dialect_name(session) not in MYSQL_DIALECTS:
        existing = _existing_category_ids(session, metadata, {row["category_id"] for row in rows})
        dangling = len(rows)
        rows = [row for row in rows if row["category_id"] in existing]
        dangling -= len(rows)
        if dangling:
            logger.debug(f"Skipped {dangling} links to categories that do not exist")

    bulk_insert_ignore(session, metadata.category_product_table, rows)
    return len(rows)
