"""
Reference Resolver - Replaces symbolic references on import records with ids.

Records may name their attribute set, store view and categories instead of
carrying numeric ids:

    SimpleProduct(
        sku="boot-001",
        attribute_set_id=Reference("Default"),
        store_view_id=Reference("nl"),
        category_ids=References(["Root/Men/Shoes"]),
    )

Names are looked up in the CatalogMetadata snapshot. A name that does not
resolve fails the record (add_error); resolution continues with the next
reference so that all problems of a record are reported at once.
"""

from typing import List, Optional

from .dto import ImportConfig, Reference, References, SimpleProduct
from .metadata_service import CatalogMetadata


class ReferenceResolver:
    """Resolves Reference/References markers against a metadata snapshot."""

    def __init__(self, metadata: CatalogMetadata):
        self.metadata = metadata

    def resolve_ids(self, product: SimpleProduct, config: Optional[ImportConfig] = None) -> None:
        """
        Replace all references on a record with ids, in place.

        Args:
            product: Record to resolve
            config: Batch options (unused by the default resolver)
        """
        if isinstance(product.attribute_set_id, Reference):
            name = product.attribute_set_id.name
            if name in self.metadata.attribute_set_map:
                product.attribute_set_id = self.metadata.attribute_set_map[name]
            else:
                product.add_error(f"attribute set name not found: {name}")

        if isinstance(product.store_view_id, Reference):
            code = product.store_view_id.name
            if code in self.metadata.store_view_map:
                product.store_view_id = self.metadata.store_view_map[code]
            else:
                product.add_error(f"store view code not found: {code}")

        if isinstance(product.category_ids, References):
            product.category_ids = self._resolve_categories(product, product.category_ids)

    def _resolve_categories(self, product: SimpleProduct, references: References) -> List[int]:
        category_ids = []
        for name_path in references:
            category_id = self.metadata.category_path_map.get(name_path.strip("/"))
            if category_id is None:
                product.add_error(f"category not found: {name_path}")
                continue
            if category_id not in category_ids:
                category_ids.append(category_id)
        return category_ids
