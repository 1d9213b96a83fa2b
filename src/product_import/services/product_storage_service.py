"""
Product Storage Service - Imports a batch of simple products in one transaction.

The batch is all or nothing. Records that fail reference resolution or
validation are left out and reported, the rest of the batch is written.
But when anything goes wrong while writing, the whole transaction is rolled
back and every record of the batch is reported failed, including records
that were valid on their own.

Usage:
    from product_import.services.product_storage_service import store_simple_products

    def report(product):
        if not product.ok:
            print(product.sku, product.errors)

    result = store_simple_products(
        products,
        ImportConfig(result_callbacks=[report]),
        metadata,
    )
    print(result.get_summary())
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from . import database
from .attribute_writer import write_attribute_values
from .category_link_writer import insert_category_links
from .dto import BatchResult, ImportConfig, SimpleProduct
from .entity_writer import insert_main_table, update_main_table
from .exceptions import ProductImportError
from .logging_utils import get_service_logger, log_operation
from .metadata_service import CatalogMetadata
from .partition_service import BatchPartition, fetch_existing_skus, partition_products
from .reference_resolver import ReferenceResolver
from .url_rewrite_service import insert_url_rewrites
from .validator import Validator

logger = get_service_logger(__name__)


def store_simple_products(
    products: List[SimpleProduct],
    config: ImportConfig,
    metadata: CatalogMetadata,
    resolver: Optional[ReferenceResolver] = None,
    validator: Optional[Validator] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> BatchResult:
    """
    Import a batch of products.

    Every record is mutated in place: ids are assigned, and failures set
    ok=False and append to errors. When the batch is rolled back, records
    that were new to the store lose their id again; records of existing
    products keep theirs. After the batch is committed or rolled
    back, each result callback is called once per record (callbacks in
    order, then records in order).

    Args:
        products: Non-empty batch of records
        config: Batch options (dry run, result callbacks)
        metadata: Catalog snapshot for the duration of the batch
        resolver: Reference resolver; defaults to ReferenceResolver(metadata)
        validator: Validator; defaults to Validator(metadata)
        session_factory: Callable returning a new Session; defaults to database.get_session

    Returns:
        BatchResult with counts of the batch

    Raises:
        ProductImportError: If the batch is empty
    """
    if not products:
        raise ProductImportError("A batch needs at least one product")

    if resolver is None:
        resolver = ReferenceResolver(metadata)
    if validator is None:
        validator = Validator(metadata)
    if session_factory is None:
        session_factory = database.get_session

    result = BatchResult(total=len(products), dry_run=config.dry_run)

    partition = None
    session = session_factory()
    try:
        partition = _prepare_batch(session, products, config, metadata, resolver, validator)

        if config.dry_run:
            session.rollback()
        else:
            _write_batch(session, metadata, partition)
            session.commit()

        result.inserted = len(partition.insert_products)
        result.updated = len(partition.update_products)

    except Exception as e:
        _rollback_quietly(session)

        # Rows inserted by this batch are gone
        if partition is not None:
            for product in partition.insert_products:
                product.id = None

        message = str(e)
        result.error = message
        for product in products:
            product.add_error(message)

        log_operation(
            logger,
            operation="store_simple_products",
            outcome="rolled_back",
            level=logging.ERROR,
            batch_size=len(products),
            error=message,
        )
    finally:
        session.close()

    result.failed = sum(1 for product in products if not product.ok)

    if result.error is None:
        log_operation(
            logger,
            operation="store_simple_products",
            outcome="dry_run" if config.dry_run else "success",
            batch_size=len(products),
            inserted=result.inserted,
            updated=result.updated,
            failed=result.failed,
        )

    for callback in config.result_callbacks:
        for product in products:
            callback(product)

    return result


def _prepare_batch(
    session: Session,
    products: List[SimpleProduct],
    config: ImportConfig,
    metadata: CatalogMetadata,
    resolver: ReferenceResolver,
    validator: Validator,
) -> BatchPartition:
    """Look up existing skus, then resolve, validate and partition every record."""
    # State as of transaction start; not re-checked during the batch
    sku_to_id = fetch_existing_skus(session, metadata, [product.sku for product in products])

    for product in products:
        resolver.resolve_ids(product, config)
        validator.validate(product)

    return partition_products(products, sku_to_id)


def _write_batch(session: Session, metadata: CatalogMetadata, partition: BatchPartition) -> None:
    """Write the partitioned batch inside the open transaction."""
    insert_main_table(session, metadata, partition.insert_products)
    update_main_table(session, metadata, partition.update_products)

    insert_url_rewrites(session, metadata, partition.products)

    write_attribute_values(session, metadata, partition.products_by_attribute)

    insert_category_links(session, metadata, partition.products)


def _rollback_quietly(session: Session) -> None:
    """Roll back; a failing rollback is logged and discarded so the original error is kept."""
    try:
        session.rollback()
    except Exception as e:
        logger.warning(f"Rollback failed: {e}")
