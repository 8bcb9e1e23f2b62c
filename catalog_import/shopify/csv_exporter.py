"""
Shopify CSV Exporter

Catalog sink that appends rows to a Shopify product CSV (39-column
standard template). Used as the write side of batch imports.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from typing import FrozenSet, Iterable, List, Sequence

from ..common.csv_utils import configure_csv
from ..models import CATALOG_ROW_WIDTH, SHOPIFY_FIELDNAMES, VARIANT_SKU_INDEX

logger = logging.getLogger(__name__)

# Configure CSV for large fields
configure_csv()


class CsvCatalogSink:
    """
    Appends catalog rows to a CSV target.

    A fresh target gets the header row on open. Each ``append_rows`` call
    is one append operation; ``flush`` pushes it to disk before the next
    batch starts.

    Usage:
        with CsvCatalogSink("output/shopify_products.csv") as sink:
            existing = sink.existing_skus()
            sink.append_rows(rows)
            sink.flush()
    """

    def __init__(self, output_path: str, replace_existing: bool = False):
        """
        Initialize the sink.

        Args:
            output_path: Output CSV file path
            replace_existing: Drop existing rows whose SKU is re-imported
                (duplicate action "replace") instead of keeping both
        """
        self.output_path = output_path
        self.replace_existing = replace_existing
        self.fieldnames = SHOPIFY_FIELDNAMES
        self._file = None
        self._writer = None

    def __enter__(self) -> "CsvCatalogSink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Open the target for appending, writing the header for a new file."""
        os.makedirs(os.path.dirname(self.output_path) or '.', exist_ok=True)
        is_new = not os.path.exists(self.output_path) or os.path.getsize(self.output_path) == 0

        self._file = open(self.output_path, 'a', newline='', encoding='utf-8')
        self._writer = csv.writer(self._file)

        if is_new:
            self._writer.writerow(self.fieldnames)
            self._file.flush()
            logger.info("Initialized catalog target with %d columns: %s",
                        len(self.fieldnames), self.output_path)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None

    def existing_skus(self) -> FrozenSet[str]:
        """Load trimmed Variant SKUs already in the target (the duplicate index)."""
        skus = set()
        if not os.path.exists(self.output_path):
            return frozenset()

        with open(self.output_path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.reader(f)
            next(reader, None)
            for row in reader:
                if len(row) > VARIANT_SKU_INDEX:
                    sku = row[VARIANT_SKU_INDEX].strip()
                    if sku:
                        skus.add(sku)

        logger.info("Found %d existing SKUs for duplicate checking", len(skus))
        return frozenset(skus)

    def append_rows(self, rows: Sequence[Sequence]) -> int:
        """
        Append catalog rows in one operation.

        Args:
            rows: Catalog rows (39 fields each)

        Returns:
            Number of rows written

        Raises:
            ValueError: If a row does not have exactly 39 fields
            OSError: If the target cannot be written
        """
        if self._writer is None:
            raise OSError(f"Catalog target is not open: {self.output_path}")

        for row in rows:
            if len(row) != CATALOG_ROW_WIDTH:
                raise ValueError(
                    f"Catalog row must have {CATALOG_ROW_WIDTH} fields (got {len(row)})"
                )

        if self.replace_existing:
            self._drop_skus({str(row[VARIANT_SKU_INDEX]).strip() for row in rows})

        self._writer.writerows(rows)
        return len(rows)

    def flush(self) -> None:
        """Commit appended rows to disk."""
        if self._file is not None:
            self._file.flush()
            os.fsync(self._file.fileno())

    def _drop_skus(self, skus: Iterable[str]) -> None:
        """Rewrite the target without rows for the given SKUs."""
        skus = set(skus)
        if not skus:
            return

        self._file.flush()
        kept: List[List[str]] = []
        dropped = 0
        with open(self.output_path, 'r', encoding='utf-8', newline='') as f:
            for index, row in enumerate(csv.reader(f)):
                if index > 0 and len(row) > VARIANT_SKU_INDEX and row[VARIANT_SKU_INDEX].strip() in skus:
                    dropped += 1
                    continue
                kept.append(row)

        if not dropped:
            return

        directory = os.path.dirname(os.path.abspath(self.output_path))
        self.close()
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.csv')
            try:
                with os.fdopen(fd, 'w', newline='', encoding='utf-8') as tmp:
                    csv.writer(tmp).writerows(kept)
                os.replace(tmp_path, self.output_path)
            except OSError:
                os.unlink(tmp_path)
                raise
        finally:
            self.open()

        logger.info("Replaced %d existing rows", dropped)
