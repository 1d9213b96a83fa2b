"""
Tests for reference resolution.
"""

from product_import.services.dto import Reference, References, SimpleProduct
from product_import.services.reference_resolver import ReferenceResolver


class TestResolveIds:
    """Tests for ReferenceResolver.resolve_ids()."""

    def test_resolves_all_references(self, catalog):
        product = SimpleProduct(
            sku="A",
            attribute_set_id=Reference("Bags"),
            store_view_id=Reference("nl"),
            category_ids=References(["Root/Men/Shoes", "/Root/Women/"]),
        )

        ReferenceResolver(catalog).resolve_ids(product)

        assert product.ok
        assert product.attribute_set_id == 9
        assert product.store_view_id == 2
        assert product.category_ids == [4, 5]

    def test_plain_ids_are_untouched(self, catalog):
        product = SimpleProduct(sku="A", attribute_set_id=4, store_view_id=1, category_ids=[3])

        ReferenceResolver(catalog).resolve_ids(product)

        assert (product.attribute_set_id, product.store_view_id, product.category_ids) == (4, 1, [3])

    def test_duplicate_category_paths_collapse(self, catalog):
        product = SimpleProduct(sku="A", category_ids=References(["Root/Men", "Root/Men"]))

        ReferenceResolver(catalog).resolve_ids(product)

        assert product.category_ids == [3]

    def test_unresolved_names_fail_the_record(self, catalog):
        """Every unresolved name is reported; resolved ones are kept."""
        product = SimpleProduct(
            sku="A",
            attribute_set_id=Reference("Shoes"),
            store_view_id=Reference("de"),
            category_ids=References(["Root/Kids", "Root/Women"]),
        )

        ReferenceResolver(catalog).resolve_ids(product)

        assert not product.ok
        assert product.errors == [
            "attribute set name not found: Shoes",
            "store view code not found: de",
            "category not found: Root/Kids",
        ]
        assert product.category_ids == [5]
