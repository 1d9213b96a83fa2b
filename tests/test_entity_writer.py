"""
Tests for the Entity Writer.
"""

import pytest

from product_import.models import ProductEntity
from product_import.services.dto import SimpleProduct
from product_import.services.entity_writer import insert_main_table, update_main_table
from product_import.services.exceptions import ProductImportError


class TestInsertMainTable:
    """Tests for insert_main_table()."""

    def test_assigns_ids_to_duplicates(self, test_db, catalog):
        """The first record of a sku is inserted; every record gets the id."""
        session = test_db()
        first = SimpleProduct(sku="A", attribute_set_id=4)
        duplicate = SimpleProduct(sku="A", attribute_set_id=9, store_view_id=1)
        other = SimpleProduct(sku="C", attribute_set_id=4)

        insert_main_table(session, catalog, [first, duplicate, other])
        session.commit()

        rows = session.query(ProductEntity).order_by(ProductEntity.sku).all()
        assert [row.sku for row in rows] == ["A", "C"]
        assert rows[0].attribute_set_id == 4
        assert rows[0].has_options == 0
        assert rows[0].required_options == 0
        assert first.id == duplicate.id == rows[0].entity_id
        assert other.id == rows[1].entity_id

    def test_no_products_is_a_no_op(self, catalog):
        """Nothing to insert, no statement."""
        insert_main_table(None, catalog, [])

    def test_unreadable_sku_raises(self, test_db, catalog, monkeypatch):
        """A sku that cannot be read back after the insert is a batch error."""
        from product_import.services import entity_writer

        monkeypatch.setattr(entity_writer, "fetch_existing_skus", lambda *args: {})
        session = test_db()

        with pytest.raises(ProductImportError, match="could not be read back"):
            insert_main_table(session, catalog, [SimpleProduct(sku="A", attribute_set_id=4)])
        session.rollback()


class TestUpdateMainTable:
    """Tests for update_main_table()."""

    def test_overwrites_attribute_set(self, test_db, catalog, existing_product):
        """The attribute set is overwritten; id and sku stay."""
        session = test_db()
        product = SimpleProduct(sku="B", attribute_set_id=9, id=7)

        update_main_table(session, catalog, [product])
        session.commit()
        session.expunge_all()

        row = session.query(ProductEntity).filter_by(entity_id=7).one()
        assert row.attribute_set_id == 9
        assert row.sku == "B"
        assert session.query(ProductEntity).count() == 1

    def test_same_id_twice(self, test_db, catalog, existing_product):
        """Two records of one existing product do not conflict."""
        session = test_db()
        records = [
            SimpleProduct(sku="B", attribute_set_id=4, id=7),
            SimpleProduct(sku="B", attribute_set_id=9, id=7, store_view_id=2),
        ]

        update_main_table(session, catalog, records)
        session.commit()
        session.expunge_all()

        assert session.query(ProductEntity).filter_by(entity_id=7).one().attribute_set_id == 9
