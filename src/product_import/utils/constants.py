"""
Constants for the product import engine.

This module defines system-wide constants including:
- Database file name
- Default table names of the catalog store
- URL rewrite generation constants
- Attribute backend types
"""

from typing import Dict, List

# ============================================================================
# Database
# ============================================================================

DATABASE_FILENAME = "product_import.db"

# ============================================================================
# Store Tables
# ============================================================================

PRODUCT_ENTITY_TABLE = "catalog_product_entity"
URL_REWRITE_TABLE = "url_rewrite"
CATEGORY_ENTITY_TABLE = "catalog_category_entity"
CATEGORY_PRODUCT_TABLE = "catalog_category_product"

# Store view 0 holds the values that apply to every store view
GLOBAL_STORE_VIEW_ID = 0

# ============================================================================
# Product Entity
# ============================================================================

PRODUCT_TYPE_SIMPLE = "simple"
SKU_MAX_LENGTH = 64

# ============================================================================
# URL Rewrites
# ============================================================================

DEFAULT_PRODUCT_URL_SUFFIX = ".html"
URL_REWRITE_ENTITY_TYPE = "product"
PRODUCT_TARGET_PATH = "catalog/product/view/id/{product_id}"
PRODUCT_CATEGORY_TARGET_PATH = "catalog/product/view/id/{product_id}/category/{category_id}"

# ============================================================================
# Attributes
# ============================================================================

# Backend types that are stored in a dedicated value table
VALUE_BACKEND_TYPES: List[str] = [
    "varchar",
    "int",
    "decimal",
    "text",
    "datetime",
]

VALUE_TABLES: Dict[str, str] = {
    backend_type: f"{PRODUCT_ENTITY_TABLE}_{backend_type}" for backend_type in VALUE_BACKEND_TYPES
}

VARCHAR_MAX_LENGTH = 255

# Range of the int value column (signed 32 bit)
INT_MIN_VALUE = -(2**31)
INT_MAX_VALUE = 2**31 - 1

# Numeric(20, 6) of the decimal value column
DECIMAL_PRECISION = 20
DECIMAL_SCALE = 6

# Accepted string forms of datetime values
DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d")

PRODUCT_ENTITY_TYPE_CODE = "catalog_product"
