"""
Metadata Service - Immutable catalog snapshot used during an import.

The snapshot describes which attributes can be imported and where their
values are stored, which store views exist, and the category tree with the
url keys of each category. It is loaded once, before a batch, and passed
explicitly to every component; nothing mutates it mid-import.

Usage:
    from product_import.services.database import session_scope
    from product_import.services.metadata_service import load_catalog_metadata

    with session_scope() as session:
        metadata = load_catalog_metadata(session)
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from ..models import AttributeSet, CategoryEntity, CategoryUrlKey, EavAttribute, Store
from ..utils.config import get_config
from ..utils.constants import (
    CATEGORY_ENTITY_TABLE,
    CATEGORY_PRODUCT_TABLE,
    DEFAULT_PRODUCT_URL_SUFFIX,
    GLOBAL_STORE_VIEW_ID,
    PRODUCT_ENTITY_TABLE,
    PRODUCT_ENTITY_TYPE_CODE,
    URL_REWRITE_TABLE,
    VALUE_TABLES,
)
from .exceptions import MetaDataError
from .logging_utils import get_service_logger

logger = get_service_logger(__name__)


def _frozen(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class AttributeInfo:
    """Where the values of one product attribute are stored."""

    attribute_code: str
    attribute_id: int
    backend_type: str
    table_name: str


@dataclass(frozen=True)
class CategoryInfo:
    """
    One category node.

    Attributes:
        category_id: Category id
        path: Ancestor ids from the root down to this category (inclusive)
        url_keys: Url key by store view id; store view 0 holds the default
    """

    category_id: int
    path: Tuple[int, ...]
    url_keys: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "url_keys", _frozen(self.url_keys))

    def get_url_key(self, store_id: int) -> str:
        """Url key for a store view, falling back to the default key."""
        if store_id in self.url_keys:
            return self.url_keys[store_id]
        if GLOBAL_STORE_VIEW_ID in self.url_keys:
            return self.url_keys[GLOBAL_STORE_VIEW_ID]
        raise MetaDataError(f"category {self.category_id} has no default url key")


@dataclass(frozen=True)
class CatalogMetadata:
    """
    Read-only snapshot of the catalog.

    Attributes:
        product_eav_attribute_info: Importable attributes by code, in processing order
        store_view_map: Store view id by code, including the global view 0
        all_category_info: Category nodes by id
        attribute_set_map: Attribute set id by name
        category_path_map: Category id by name path ("Root/Men/Shoes")
        product_url_suffix: Appended to a url key to form a request path
    """

    product_eav_attribute_info: Mapping[str, AttributeInfo] = field(default_factory=dict)
    store_view_map: Mapping[str, int] = field(default_factory=dict)
    all_category_info: Mapping[int, CategoryInfo] = field(default_factory=dict)
    attribute_set_map: Mapping[str, int] = field(default_factory=dict)
    category_path_map: Mapping[str, int] = field(default_factory=dict)
    product_url_suffix: str = DEFAULT_PRODUCT_URL_SUFFIX
    product_entity_table: str = PRODUCT_ENTITY_TABLE
    url_rewrite_table: str = URL_REWRITE_TABLE
    category_entity_table: str = CATEGORY_ENTITY_TABLE
    category_product_table: str = CATEGORY_PRODUCT_TABLE

    def __post_init__(self):
        for name in (
            "product_eav_attribute_info",
            "store_view_map",
            "all_category_info",
            "attribute_set_map",
            "category_path_map",
        ):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @property
    def store_view_ids(self) -> Tuple[int, ...]:
        """All configured store view ids, ascending, including 0."""
        return tuple(sorted(set(self.store_view_map.values())))

    @property
    def non_global_store_view_ids(self) -> Tuple[int, ...]:
        """Store view ids a store-wide record expands to."""
        return tuple(store_id for store_id in self.store_view_ids if store_id != GLOBAL_STORE_VIEW_ID)


def load_catalog_metadata(session: Session, url_suffix: Optional[str] = None) -> CatalogMetadata:
    """
    Build a CatalogMetadata snapshot from the store tables.

    Args:
        session: Database session
        url_suffix: Product url suffix; defaults to the configured suffix

    Returns:
        CatalogMetadata snapshot

    Raises:
        MetaDataError: If a category path cannot be parsed or names a missing ancestor
    """
    if url_suffix is None:
        url_suffix = get_config().product_url_suffix

    store_view_map = {store.code: store.store_id for store in session.query(Store).all()}

    attribute_set_map = {
        attribute_set.attribute_set_name: attribute_set.attribute_set_id
        for attribute_set in session.query(AttributeSet).all()
    }

    attributes = (
        session.query(EavAttribute)
        .filter(EavAttribute.entity_type_code == PRODUCT_ENTITY_TYPE_CODE)
        .filter(EavAttribute.backend_type.in_(list(VALUE_TABLES)))
        .order_by(EavAttribute.attribute_code)
        .all()
    )
    attribute_info = {
        attribute.attribute_code: AttributeInfo(
            attribute_code=attribute.attribute_code,
            attribute_id=attribute.attribute_id,
            backend_type=attribute.backend_type,
            table_name=VALUE_TABLES[attribute.backend_type],
        )
        for attribute in attributes
    }

    url_keys: Dict[int, Dict[int, str]] = {}
    for row in session.query(CategoryUrlKey).all():
        url_keys.setdefault(row.category_id, {})[row.store_id] = row.url_key

    categories = session.query(CategoryEntity).all()
    names = {category.entity_id: category.name for category in categories}

    category_info = {}
    category_path_map = {}
    for category in categories:
        try:
            path = tuple(category.path_ids)
        except ValueError as e:
            raise MetaDataError(
                f"category {category.entity_id} has an invalid path '{category.path}'"
            ) from e

        missing = [ancestor_id for ancestor_id in path if ancestor_id not in names]
        if missing:
            raise MetaDataError(
                f"category {category.entity_id} has unknown ancestors {missing}"
            )

        category_info[category.entity_id] = CategoryInfo(
            category_id=category.entity_id,
            path=path,
            url_keys=url_keys.get(category.entity_id, {}),
        )
        name_path = "/".join(names[ancestor_id] for ancestor_id in path)
        category_path_map[name_path] = category.entity_id

    metadata = CatalogMetadata(
        product_eav_attribute_info=attribute_info,
        store_view_map=store_view_map,
        all_category_info=category_info,
        attribute_set_map=attribute_set_map,
        category_path_map=category_path_map,
        product_url_suffix=url_suffix,
    )

    logger.debug(
        f"Loaded catalog metadata: {len(attribute_info)} attributes, "
        f"{len(store_view_map)} store views, {len(category_info)} categories"
    )

    return metadata
