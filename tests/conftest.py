"""Pytest configuration and fixtures for import engine tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

from product_import.models import (
    AttributeSet,
    Base,
    CategoryEntity,
    CategoryUrlKey,
    EavAttribute,
    ProductEntity,
    Store,
)
from product_import.services import database as db_module
from product_import.services.metadata_service import load_catalog_metadata


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Points the global session factory at it
    4. Drops all tables after the test completes
    """
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    original_get_session_factory = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session_factory


@pytest.fixture(scope="function")
def catalog(test_db):
    """Seed store views, attributes and a category tree; return the metadata snapshot.

    Creates:
    - Store views: admin (0), default (1), nl (2)
    - Attribute sets: Default (4), Bags (9)
    - Attributes: name, url_key (varchar), price (decimal), status (int),
      description (text), news_from_date (datetime), sku (static)
    - Categories:
      - Root (1)
        - Men (3)        url keys: men, nl: heren
          - Shoes (4)    url key: shoes
        - Women (5)      url key: women
    """
    session = test_db()

    session.add_all(
        [
            Store(store_id=0, code="admin", name="Admin"),
            Store(store_id=1, code="default", name="Default Store View"),
            Store(store_id=2, code="nl", name="Nederlands"),
            AttributeSet(attribute_set_id=4, attribute_set_name="Default"),
            AttributeSet(attribute_set_id=9, attribute_set_name="Bags"),
        ]
    )

    for attribute_id, code, backend_type in [
        (73, "name", "varchar"),
        (74, "sku", "static"),
        (75, "description", "text"),
        (77, "price", "decimal"),
        (94, "news_from_date", "datetime"),
        (97, "status", "int"),
        (121, "url_key", "varchar"),
    ]:
        session.add(
            EavAttribute(
                attribute_id=attribute_id,
                entity_type_code="catalog_product",
                attribute_code=code,
                backend_type=backend_type,
            )
        )

    session.add_all(
        [
            CategoryEntity(entity_id=1, parent_id=0, path="1", name="Root"),
            CategoryEntity(entity_id=3, parent_id=1, path="1/3", name="Men"),
            CategoryEntity(entity_id=4, parent_id=3, path="1/3/4", name="Shoes"),
            CategoryEntity(entity_id=5, parent_id=1, path="1/5", name="Women"),
        ]
    )
    session.flush()

    session.add_all(
        [
            CategoryUrlKey(category_id=1, store_id=0, url_key="root"),
            CategoryUrlKey(category_id=3, store_id=0, url_key="men"),
            CategoryUrlKey(category_id=3, store_id=2, url_key="heren"),
            CategoryUrlKey(category_id=4, store_id=0, url_key="shoes"),
            CategoryUrlKey(category_id=5, store_id=0, url_key="women"),
        ]
    )
    session.commit()

    return load_catalog_metadata(session, url_suffix=".html")


@pytest.fixture(scope="function")
def existing_product(test_db, catalog):
    """Provide a product that is already in the store: sku 'B', id 7."""
    session = test_db()
    session.add(ProductEntity(entity_id=7, attribute_set_id=4, type_id="simple", sku="B"))
    session.commit()
    return 7
