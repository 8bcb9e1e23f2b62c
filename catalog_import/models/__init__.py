"""
Data models for the import pipeline.

This module contains pure data classes with no business logic.
"""

from .catalog_row import (
    CATALOG_COLUMNS,
    CATALOG_ROW_WIDTH,
    SHOPIFY_FIELDNAMES,
    VARIANT_SKU_INDEX,
    CatalogRow,
)
from .config import (
    UNSET_COLUMN,
    CatalogDefaults,
    ColumnMapping,
    ContentStrategy,
    DuplicateHandling,
    ImportConfig,
    KeywordRule,
    RuleKind,
)
from .cursor import DEFAULT_BATCH_SIZE, FIRST_DATA_ROW, BatchCursor
from .product import Product

__all__ = [
    'Product',
    'CatalogRow',
    'CATALOG_COLUMNS',
    'CATALOG_ROW_WIDTH',
    'SHOPIFY_FIELDNAMES',
    'VARIANT_SKU_INDEX',
    'BatchCursor',
    'DEFAULT_BATCH_SIZE',
    'FIRST_DATA_ROW',
    'ImportConfig',
    'ColumnMapping',
    'KeywordRule',
    'RuleKind',
    'ContentStrategy',
    'DuplicateHandling',
    'CatalogDefaults',
    'UNSET_COLUMN',
]
