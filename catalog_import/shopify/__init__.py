"""
Shopify catalog output.

Modules:
    row_builder - Product to 39-column catalog row conversion
    csv_exporter - CSV catalog target (append, duplicate index, replace)
"""

from ..models import SHOPIFY_FIELDNAMES
from .csv_exporter import CsvCatalogSink
from .row_builder import CatalogRowBuilder, format_bool

__all__ = [
    'CatalogRowBuilder',
    'CsvCatalogSink',
    'SHOPIFY_FIELDNAMES',
    'format_bool',
]
