"""
Tests for record validation.
"""

from datetime import date
from decimal import Decimal

import pytest

from product_import.services.dto import Reference, SimpleProduct
from product_import.services.validator import Validator


@pytest.fixture
def validate(catalog):
    """Validate a record and return its errors."""
    validator = Validator(catalog)

    def _validate(product):
        validator.validate(product)
        return product.errors

    return _validate


class TestCoreFields:
    """Tests for the fixed record fields."""

    def test_valid_record(self, validate):
        product = SimpleProduct(
            sku="boot-001",
            attribute_set_id=4,
            store_view_id=2,
            url_key="leather-boot-2",
            category_ids=[3, 4],
        )
        assert validate(product) == []
        assert product.ok

    def test_sku(self, validate):
        assert validate(SimpleProduct(sku="", attribute_set_id=4)) == ["missing sku"]
        assert validate(SimpleProduct(sku="x" * 65, attribute_set_id=4)) == [
            "sku has more than 64 characters: " + "x" * 65
        ]

    def test_attribute_set(self, validate):
        assert validate(SimpleProduct(sku="A")) == ["missing attribute set id"]
        assert validate(SimpleProduct(sku="A", attribute_set_id=5)) == ["attribute set id not found: 5"]
        assert validate(SimpleProduct(sku="A", attribute_set_id="4")) == [
            "attribute set id is not an integer: '4'"
        ]

    def test_unresolved_reference_is_not_reported_twice(self, validate):
        """The resolver already reported it."""
        assert validate(SimpleProduct(sku="A", attribute_set_id=Reference("Nope"))) == []

    def test_store_view(self, validate):
        assert validate(SimpleProduct(sku="A", attribute_set_id=4, store_view_id=8)) == [
            "store view id not found: 8"
        ]

    def test_url_key(self, validate):
        for url_key in ("Boot", "boot--1", "boot.html", "-boot"):
            product = SimpleProduct(sku="A", attribute_set_id=4, url_key=url_key)
            assert validate(product) == [f"url key contains invalid characters: {url_key}"]

    def test_category_ids(self, validate):
        product = SimpleProduct(sku="A", attribute_set_id=4, category_ids=[3, "4"])
        assert validate(product) == ["category id is not an integer: '4'"]


class TestAttributes:
    """Tests for sparse attribute values."""

    def _errors(self, validate, **attributes):
        return validate(SimpleProduct(sku="A", attribute_set_id=4, attributes=attributes))

    def test_valid_values(self, validate):
        errors = self._errors(
            validate,
            name="Boot",
            status="1",
            price="89.95",
            news_from_date=date(2024, 3, 1),
            description=None,
        )
        assert errors == []

    def test_unknown_attribute(self, validate):
        assert self._errors(validate, colour="red") == ["unknown attribute: colour"]

    def test_type_mismatches(self, validate):
        errors = self._errors(
            validate,
            name="x" * 256,
            status="on",
            price="cheap",
            news_from_date="March 1st",
        )
        assert errors == [
            "name has more than 255 characters",
            "status is not an integer: 'on'",
            "price is not a decimal number: 'cheap'",
            "news_from_date is not a date or datetime: 'March 1st'",
        ]

    def test_impossible_dates(self, validate):
        """Dates must exist on the calendar, not just look like dates."""
        assert self._errors(validate, news_from_date="2024-02-30") == [
            "news_from_date is not a date or datetime: '2024-02-30'"
        ]
        assert self._errors(validate, news_from_date="2024-03-01 25:00:00") == [
            "news_from_date is not a date or datetime: '2024-03-01 25:00:00'"
        ]
        assert self._errors(validate, news_from_date="2024-02-29 23:59:59") == []

    def test_int_range(self, validate):
        """Int values must fit the signed 32-bit value column."""
        assert self._errors(validate, status="99999999999999999999") == [
            "status is out of range: '99999999999999999999'"
        ]
        assert self._errors(validate, status=-(2**31) - 1) == [f"status is out of range: {-(2**31) - 1!r}"]
        assert self._errors(validate, status=2**31 - 1) == []

    def test_non_finite_decimals(self, validate):
        """NaN and infinities are not storable numbers."""
        for value in ("NaN", "Infinity", "-inf", float("nan"), Decimal("Infinity")):
            assert self._errors(validate, price=value) == [f"price is not a decimal number: {value!r}"]

    def test_decimal_range(self, validate):
        """Decimal values must fit Numeric(20, 6)."""
        assert self._errors(validate, price="100000000000000") == [
            "price is out of range: '100000000000000'"
        ]
        assert self._errors(validate, price="99999999999999.99") == []

    def test_errors_accumulate(self, validate):
        product = SimpleProduct(sku="", attributes={"colour": "red"})
        assert validate(product) == [
            "missing sku",
            "missing attribute set id",
            "unknown attribute: colour",
        ]
        assert not product.ok
