"""
Product extraction from vendor rows.

Modules:
    product_extractor - ProductExtractor (rows -> products, skip counts)
    rules - RuleEngine (category, type, tag and publish rules)
    utils - Cell access and numeric coercion helpers
"""

from .product_extractor import (
    UNPARSEABLE_NUMERIC,
    ExtractionResult,
    ProductExtractor,
    SkipReason,
)
from .rules import RuleEngine, is_excluded, match_all, match_first
from .utils import column_letter, column_value, parse_decimal, parse_int

__all__ = [
    # Extraction
    'ProductExtractor',
    'ExtractionResult',
    'SkipReason',
    'UNPARSEABLE_NUMERIC',
    # Rules
    'RuleEngine',
    'match_first',
    'match_all',
    'is_excluded',
    # Utilities
    'column_value',
    'column_letter',
    'parse_decimal',
    'parse_int',
]
