"""
Validator - Attribute-level checks on import records.

Runs after reference resolution. Every violation is recorded on the record
with add_error(); the validator never raises for bad data, so one bad
record does not stop the batch.

Usage:
    validator = Validator(metadata)
    validator.validate(product)
    if not product.ok:
        print(product.errors)
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..utils.constants import (
    DATETIME_FORMATS,
    DECIMAL_PRECISION,
    DECIMAL_SCALE,
    GLOBAL_STORE_VIEW_ID,
    INT_MAX_VALUE,
    INT_MIN_VALUE,
    SKU_MAX_LENGTH,
    VARCHAR_MAX_LENGTH,
)
from .dto import CORE_FIELDS, Reference, SimpleProduct
from .metadata_service import CatalogMetadata

# Lowercase words separated by single hyphens
URL_KEY_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Largest magnitude the decimal value column holds, exclusive
DECIMAL_MAX_ABS = Decimal(10) ** (DECIMAL_PRECISION - DECIMAL_SCALE)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        return int(value)
    return None


def _as_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    # NaN and infinities cannot be stored
    if not number.is_finite():
        return None
    return number


def _is_datetime(value: Any) -> bool:
    if isinstance(value, (datetime, date)):
        return True
    if not isinstance(value, str):
        return False
    for fmt in DATETIME_FORMATS:
        try:
            datetime.strptime(value, fmt)
        except ValueError:
            continue
        return True
    return False


class Validator:
    """Checks records against the catalog snapshot."""

    def __init__(self, metadata: CatalogMetadata):
        self.metadata = metadata

    def validate(self, product: SimpleProduct) -> None:
        """
        Check all fields of a record; failures are appended to product.errors.

        Args:
            product: Record to check (after reference resolution)
        """
        self._validate_core(product)

        for code, value in product.attributes.items():
            if value is None or code in CORE_FIELDS:
                continue
            message = self._check_attribute(code, value)
            if message:
                product.add_error(message)

    def _validate_core(self, product: SimpleProduct) -> None:
        sku = product.sku
        if not isinstance(sku, str) or not sku.strip():
            product.add_error("missing sku")
        elif len(sku) > SKU_MAX_LENGTH:
            product.add_error(f"sku has more than {SKU_MAX_LENGTH} characters: {sku}")

        # A Reference that failed to resolve has already been reported
        if product.attribute_set_id is None:
            product.add_error("missing attribute set id")
        elif isinstance(product.attribute_set_id, bool) or not isinstance(product.attribute_set_id, int):
            if not isinstance(product.attribute_set_id, Reference):
                product.add_error(f"attribute set id is not an integer: {product.attribute_set_id!r}")
        elif product.attribute_set_id not in self.metadata.attribute_set_map.values():
            product.add_error(f"attribute set id not found: {product.attribute_set_id}")

        store_view_id = product.store_view_id
        if isinstance(store_view_id, bool) or not isinstance(store_view_id, int):
            if not isinstance(store_view_id, Reference):
                product.add_error(f"store view id is not an integer: {store_view_id!r}")
        elif store_view_id != GLOBAL_STORE_VIEW_ID and store_view_id not in self.metadata.store_view_ids:
            product.add_error(f"store view id not found: {store_view_id}")

        if product.url_key is not None and not URL_KEY_PATTERN.match(product.url_key):
            product.add_error(f"url key contains invalid characters: {product.url_key}")

        if isinstance(product.category_ids, list):
            for category_id in product.category_ids:
                if isinstance(category_id, bool) or not isinstance(category_id, int):
                    product.add_error(f"category id is not an integer: {category_id!r}")

    def _check_attribute(self, code: str, value: Any) -> Optional[str]:
        info = self.metadata.product_eav_attribute_info.get(code)
        if info is None:
            return f"unknown attribute: {code}"

        backend_type = info.backend_type
        if backend_type == "varchar":
            if len(str(value)) > VARCHAR_MAX_LENGTH:
                return f"{code} has more than {VARCHAR_MAX_LENGTH} characters"
        elif backend_type == "int":
            number = _as_int(value)
            if number is None:
                return f"{code} is not an integer: {value!r}"
            if not INT_MIN_VALUE <= number <= INT_MAX_VALUE:
                return f"{code} is out of range: {value!r}"
        elif backend_type == "decimal":
            number = _as_decimal(value)
            if number is None:
                return f"{code} is not a decimal number: {value!r}"
            if abs(number) >= DECIMAL_MAX_ABS:
                return f"{code} is out of range: {value!r}"
        elif backend_type == "datetime":
            if not _is_datetime(value):
                return f"{code} is not a date or datetime: {value!r}"
        return None
