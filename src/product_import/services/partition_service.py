"""
Partition Service - Existing-key lookup and insert/update partitioning.

Usage:
    sku_to_id = fetch_existing_skus(session, metadata, [p.sku for p in products])
    partition = partition_products(products, sku_to_id)
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from .bulk_statements import get_table
from .dto import SimpleProduct
from .metadata_service import CatalogMetadata


@dataclass
class BatchPartition:
    """
    Records of a batch that passed resolution and validation.

    Attributes:
        insert_products: Records whose sku is new to the store
        update_products: Records whose sku exists; id already assigned
        products_by_attribute: Records by the name of each non-null value they carry
        products: All records that will be persisted, in batch order
    """

    insert_products: List[SimpleProduct] = field(default_factory=list)
    update_products: List[SimpleProduct] = field(default_factory=list)
    products_by_attribute: Dict[str, List[SimpleProduct]] = field(default_factory=dict)
    products: List[SimpleProduct] = field(default_factory=list)


def fetch_existing_skus(
    session: Session, metadata: CatalogMetadata, skus: Iterable[str]
) -> Dict[str, int]:
    """
    Return a sku => id map for every sku already present in the store.

    Args:
        session: Database session (the batch transaction)
        metadata: Catalog snapshot naming the product entity table
        skus: Skus to look up; duplicates and None are ignored

    Returns:
        Dict of existing sku to entity id; empty without querying when skus is empty
    """
    unique_skus = {sku for sku in skus if sku is not None}
    if not unique_skus:
        return {}

    table = get_table(metadata.product_entity_table)
    stmt = select(table.c.sku, table.c.entity_id).where(table.c.sku.in_(sorted(unique_skus)))
    return {sku: entity_id for sku, entity_id in session.execute(stmt)}


def partition_products(
    products: Iterable[SimpleProduct], sku_to_id: Dict[str, int]
) -> BatchPartition:
    """
    Split the records that are still ok into inserts and updates.

    Records with an existing sku get the existing id assigned. Every ok
    record is also added to a bucket per attribute it carries a value for.

    Args:
        products: Records after resolution and validation
        sku_to_id: Result of fetch_existing_skus for the batch

    Returns:
        BatchPartition
    """
    partition = BatchPartition()

    for product in products:
        if not product.ok:
            continue

        if product.sku in sku_to_id:
            product.id = sku_to_id[product.sku]
            partition.update_products.append(product)
        else:
            partition.insert_products.append(product)
        partition.products.append(product)

        for attribute_code in product.present_attributes():
            partition.products_by_attribute.setdefault(attribute_code, []).append(product)

    return partition
