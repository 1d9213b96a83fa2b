"""
URL Rewrite Service - Generates request paths for imported products.

For every store view a product is visible in, a product with url key
"boot" in category Root/Men/Shoes gets:

    boot.html             -> catalog/product/view/id/12
    men/boot.html         -> catalog/product/view/id/12/category/3
    men/shoes/boot.html   -> catalog/product/view/id/12/category/4

The root category does not contribute to paths. Category url keys are taken
from the store view, falling back to the default (store view 0) key.

Rows are inserted collision-tolerant: a request path that already exists
in a store view is left alone. This happens when a store-view record
follows its global record in the same batch, or when a batch is repeated.
"""

import json
from typing import Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from ..utils.constants import (
    GLOBAL_STORE_VIEW_ID,
    PRODUCT_CATEGORY_TARGET_PATH,
    PRODUCT_TARGET_PATH,
    URL_REWRITE_ENTITY_TYPE,
)
from .bulk_statements import bulk_insert_ignore
from .dto import SimpleProduct
from .exceptions import MetaDataError
from .logging_utils import get_service_logger
from .metadata_service import CatalogMetadata

logger = get_service_logger(__name__)


def get_store_ids(metadata: CatalogMetadata, product: SimpleProduct) -> Tuple[int, ...]:
    """Store views a record's paths are generated for."""
    if product.store_view_id == GLOBAL_STORE_VIEW_ID:
        return metadata.non_global_store_view_ids
    return (product.store_view_id,)


def _rewrite_row(
    product: SimpleProduct, request_path: str, target_path: str, store_id: int, rewrite_metadata=None
) -> Dict:
    return {
        "entity_type": URL_REWRITE_ENTITY_TYPE,
        "entity_id": product.id,
        "request_path": request_path,
        "target_path": target_path,
        "redirect_type": 0,
        "store_id": store_id,
        "is_autogenerated": 1,
        "metadata": rewrite_metadata,
    }


def _category_rows(
    metadata: CatalogMetadata, product: SimpleProduct, short_url: str, store_id: int
) -> List[Dict]:
    rows = []
    for category_id in product.category_ids:
        category = metadata.all_category_info.get(category_id)
        if category is None:
            continue

        prefix = ""
        for ancestor_id in category.path[1:]:
            ancestor = metadata.all_category_info.get(ancestor_id)
            if ancestor is None:
                raise MetaDataError(f"ancestor {ancestor_id} of category {category_id} is unknown")

            prefix += ancestor.get_url_key(store_id) + "/"
            target_path = PRODUCT_CATEGORY_TARGET_PATH.format(
                product_id=product.id, category_id=ancestor_id
            )
            rows.append(
                _rewrite_row(
                    product,
                    prefix + short_url,
                    target_path,
                    store_id,
                    json.dumps({"category_id": str(ancestor_id)}),
                )
            )
    return rows


def generate_url_rewrites(
    metadata: CatalogMetadata, products: Iterable[SimpleProduct]
) -> List[Dict]:
    """
    Build the url_rewrite rows for a set of records.

    Records without a url key or without an id are skipped. Category ids
    unknown to the metadata snapshot are skipped.

    Args:
        metadata: Catalog snapshot
        products: Persisted records

    Returns:
        Row dictionaries for the url rewrite table

    Raises:
        MetaDataError: If a category's ancestor is missing or has no url key
    """
    rows = []
    for product in products:
        if not product.url_key or product.id is None:
            continue

        short_url = product.url_key + metadata.product_url_suffix

        for store_id in get_store_ids(metadata, product):
            rows.append(
                _rewrite_row(
                    product,
                    short_url,
                    PRODUCT_TARGET_PATH.format(product_id=product.id),
                    store_id,
                )
            )
            rows.extend(_category_rows(metadata, product, short_url, store_id))

    return rows


def insert_url_rewrites(
    session: Session, metadata: CatalogMetadata, products: Iterable[SimpleProduct]
) -> int:
    """
    Generate and insert url rewrites, ignoring request paths that already exist.

    Returns:
        Number of rows generated (not all of them need to be new)
    """
    rows = generate_url_rewrites(metadata, products)
    if rows:
        bulk_insert_ignore(session, metadata.url_rewrite_table, rows)
        logger.debug(f"Generated {len(rows)} url rewrites")
    return len(rows)
