"""
Product Extractor

Converts raw source rows into validated Product records.

Rows are never fatal: a malformed numeric cell falls back to its default
and a row that cannot become a Product is skipped and counted by reason.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import AbstractSet, Any, Dict, Iterable, Sequence

from ..models import ImportConfig, Product
from .utils import cell_text, column_value, parse_decimal, parse_int

logger = logging.getLogger(__name__)

# Header labels that mark a header row repeated inside the data range
HEADER_TITLE_LABEL = 'Title'
HEADER_SKU_LABEL = 'SKU'

_ZERO = Decimal('0')


class SkipReason(Enum):
    """Why a source row produced no Product."""
    MISSING_TITLE = "missing_title"
    MISSING_SKU = "missing_sku"
    HEADER_ECHO = "header_echo"
    DUPLICATE_SKU = "duplicate_sku"
    NON_POSITIVE_PRICE = "non_positive_price"


# Counted separately: the row is kept, the field defaults to 0
UNPARSEABLE_NUMERIC = "unparseable_numeric"


@dataclass
class ExtractionResult:
    """Products keyed by SKU plus per-reason skip counts."""
    products: Dict[str, Product] = field(default_factory=dict)
    skipped: Counter = field(default_factory=Counter)
    warnings: Counter = field(default_factory=Counter)

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())


class ProductExtractor:
    """
    Extracts products from rows using the configured column mapping.

    Usage:
        extractor = ProductExtractor(config)
        result = extractor.extract(rows, duplicate_index=existing_skus)
        for sku, product in result.products.items():
            ...
    """

    def __init__(self, config: ImportConfig):
        """
        Initialize the extractor.

        Args:
            config: Import configuration (column mapping, duplicate policy,
                default quantity)
        """
        self.columns = config.column_mapping
        self.skip_duplicates = config.duplicate_handling.skips_existing
        self.default_quantity = config.default_quantity_when_missing

    def extract(
        self,
        rows: Iterable[Sequence[Any]],
        duplicate_index: AbstractSet[str] = frozenset(),
        has_header: bool = False
    ) -> ExtractionResult:
        """
        Extract products from rows.

        Args:
            rows: Source rows as ordered cell values
            duplicate_index: Trimmed SKUs already present in the target
            has_header: Skip the first row (full-sheet mode). Batch windows
                are pre-sliced and pass False.

        Returns:
            ExtractionResult; a SKU repeated within ``rows`` keeps the
            last row's values
        """
        result = ExtractionResult()

        for position, row in enumerate(rows):
            if has_header and position == 0:
                continue

            reason = self._extract_row(row, duplicate_index, result)
            if reason is not None:
                result.skipped[reason] += 1

        return result

    def _extract_row(
        self,
        row: Sequence[Any],
        duplicate_index: AbstractSet[str],
        result: ExtractionResult
    ) -> SkipReason | None:
        """Extract one row into ``result``; return the skip reason if it was skipped."""
        title = cell_text(column_value(row, self.columns.title))
        sku = cell_text(column_value(row, self.columns.sku))

        if not title:
            return SkipReason.MISSING_TITLE
        if not sku:
            return SkipReason.MISSING_SKU
        if title == HEADER_TITLE_LABEL or sku == HEADER_SKU_LABEL:
            return SkipReason.HEADER_ECHO

        if self.skip_duplicates and sku in duplicate_index:
            logger.debug("Skipping duplicate product: %s", sku)
            return SkipReason.DUPLICATE_SKU

        price = parse_decimal(column_value(row, self.columns.price)) or _ZERO
        if price <= 0:
            logger.debug("Skipping product with invalid price: %s", sku)
            return SkipReason.NON_POSITIVE_PRICE

        quantity = parse_int(column_value(row, self.columns.quantity))
        if quantity is None:
            quantity = self.default_quantity

        product = Product(
            sku=sku,
            title=title,
            price=price,
            cost=self._optional_decimal(row, self.columns.cost, 'cost', sku, result),
            quantity=quantity,
            weight=self._optional_decimal(row, self.columns.weight, 'weight', sku, result),
            description=cell_text(column_value(row, self.columns.description)),
        )

        if sku in result.products:
            logger.debug("SKU %s repeated in batch, keeping later row", sku)
        result.products[sku] = product
        return None

    @staticmethod
    def _optional_decimal(
        row: Sequence[Any],
        column_index: int,
        field_name: str,
        sku: str,
        result: ExtractionResult
    ) -> Decimal:
        """Parse an optional numeric field, defaulting to 0."""
        raw = column_value(row, column_index)
        value = parse_decimal(raw)
        if value is None:
            if raw != '':
                logger.debug("Unparseable %s %r for %s, using 0", field_name, raw, sku)
                result.warnings[UNPARSEABLE_NUMERIC] += 1
            return _ZERO
        return value
