"""
Batch Coordinator

Drives a vendor import window by window:

    fetch rows -> extract products -> build catalog rows -> append + flush

Features:
- Bounded memory: only one window of source rows is held at a time
- Failures stop at a window boundary with the last committed cursor
- Resume from a saved cursor without reprocessing committed windows
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import AbstractSet, Any, Callable, Iterator, Optional, Sequence, Set, Tuple

from ..exceptions import BatchWriteError, SourceNotFoundError
from ..extraction.product_extractor import ProductExtractor
from ..models import FIRST_DATA_ROW, BatchCursor, ImportConfig
from ..shopify.row_builder import CatalogRowBuilder
from ..sources.base import CatalogSink, RowSource
from ..validation.import_tracker import ImportTracker

logger = logging.getLogger(__name__)


class BatchState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    TRANSFORMING = "transforming"
    WRITING = "writing"
    COMPLETED = "completed"
    FAILED = "failed"


def iter_windows(total_row_count: int, batch_size: int, next_row: int = FIRST_DATA_ROW) -> Iterator[Tuple[int, int]]:
    """
    Partition data rows into consecutive windows.

    Args:
        total_row_count: Number of data rows (header excluded)
        batch_size: Rows per window
        next_row: First sheet row to process

    Yields:
        (start_row, end_row) pairs, inclusive; the last may be shorter
    """
    last_row = total_row_count + 1
    for start_row in range(max(next_row, FIRST_DATA_ROW), last_row + 1, batch_size):
        yield start_row, min(start_row + batch_size - 1, last_row)


class BatchCoordinator:
    """
    Windowed, resumable import of one vendor source.

    Usage:
        coordinator = BatchCoordinator(config)
        try:
            total = coordinator.run(source.row_count(), source, sink,
                                    duplicate_index=sink.existing_skus(),
                                    on_commit=store.save)
        except BatchWriteError as e:
            store.save(e.cursor)   # rerun resumes at e.cursor.next_row
    """

    def __init__(
        self,
        config: ImportConfig,
        extractor: Optional[ProductExtractor] = None,
        builder: Optional[CatalogRowBuilder] = None,
        tracker: Optional[ImportTracker] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            config: Import configuration
            extractor: Product extractor (built from config if None)
            builder: Catalog row builder (built from config if None)
            tracker: Run tracker (new one if None)
        """
        self.config = config
        self.extractor = extractor or ProductExtractor(config)
        self.builder = builder or CatalogRowBuilder(config)
        self.tracker = tracker or ImportTracker()
        self.state = BatchState.IDLE
        self.cursor: Optional[BatchCursor] = None

    def run(
        self,
        total_row_count: int,
        source: Optional[RowSource],
        sink: CatalogSink,
        duplicate_index: AbstractSet[str] = frozenset(),
        cursor: Optional[BatchCursor] = None,
        batch_size: Optional[int] = None,
        on_commit: Optional[Callable[[BatchCursor], None]] = None,
    ) -> int:
        """
        Import all data rows of a source.

        Args:
            total_row_count: Number of data rows in the source
            source: Row source (None means the source is missing)
            sink: Catalog target
            duplicate_index: Trimmed SKUs already in the target
            cursor: Saved cursor to resume from (fresh run if None)
            batch_size: Rows per window (config.batch_size if None)
            on_commit: Called with the new cursor after each committed window

        Returns:
            Total imported row count, including rows imported before
            ``cursor`` was saved

        Raises:
            SourceNotFoundError: If ``source`` is None (nothing is written)
            BatchWriteError: If appending or flushing a window fails
        """
        if source is None:
            self.state = BatchState.FAILED
            missing = self.config.source or "<unset>"
            self.tracker.record_source_missing(missing)
            raise SourceNotFoundError(missing)

        batch_size = batch_size or self.config.batch_size
        if cursor is None:
            cursor = BatchCursor(batch_size=batch_size)
        else:
            logger.info("Resuming from row %d (%d rows already imported)",
                        cursor.next_row, cursor.total_imported)
        self.cursor = cursor
        self.state = BatchState.RUNNING

        # SKUs committed by earlier windows of this run count as existing
        known_skus = set(duplicate_index)

        logger.info("Processing %d rows in batches of %d", total_row_count, batch_size)

        for start_row, end_row in iter_windows(total_row_count, batch_size, cursor.next_row):
            written = self._process_window(start_row, end_row, source, sink, known_skus)

            self.cursor = self.cursor.advance(end_row, written)
            if on_commit is not None:
                on_commit(self.cursor)

        self.state = BatchState.COMPLETED
        logger.info("Import complete: %d rows imported", self.cursor.total_imported)
        return self.cursor.total_imported

    def _process_window(
        self,
        start_row: int,
        end_row: int,
        source: RowSource,
        sink: CatalogSink,
        known_skus: Set[str],
    ) -> int:
        """Run one window through the pipeline; return rows written."""
        self.state = BatchState.FETCHING
        rows = source.read_rows(start_row, end_row - start_row + 1)

        self.state = BatchState.EXTRACTING
        extraction = self.extractor.extract(rows, known_skus)

        written = 0
        if extraction.products:
            self.state = BatchState.TRANSFORMING
            catalog_rows = self.builder.build_all(extraction.products)

            self.state = BatchState.WRITING
            written = self._write(catalog_rows, sink, start_row)
            known_skus.update(extraction.products)

        self.tracker.record_window(len(rows), extraction, written)
        logger.info("Batch rows %d-%d: +%d products, %d skipped",
                    start_row, end_row, written, extraction.skipped_total)
        self.state = BatchState.RUNNING
        return written

    def _write(self, catalog_rows: Sequence[Sequence[Any]], sink: CatalogSink, start_row: int) -> int:
        """Append and flush one window's rows, failing with the last good cursor."""
        try:
            sink.append_rows(catalog_rows)
            sink.flush()
        except Exception as e:
            self.state = BatchState.FAILED
            self.tracker.record_write_failure(start_row, self.cursor.next_row)
            logger.error("Write failed for batch starting at row %d: %s", start_row, e)
            raise BatchWriteError(self.cursor, start_row, str(e)) from e
        return len(catalog_rows)

    def run_single_pass(
        self,
        rows: Sequence[Sequence[Any]],
        sink: CatalogSink,
        duplicate_index: AbstractSet[str] = frozenset(),
    ) -> int:
        """
        Import a whole sheet (header row included) in one append.

        For small sources that fit in memory. No cursor is kept: a failed
        write raises BatchWriteError with an empty cursor.

        Returns:
            Number of rows imported
        """
        self.cursor = BatchCursor(batch_size=max(len(rows) - 1, 1))
        self.state = BatchState.EXTRACTING
        extraction = self.extractor.extract(rows, duplicate_index, has_header=True)

        written = 0
        if extraction.products:
            self.state = BatchState.TRANSFORMING
            catalog_rows = self.builder.build_all(extraction.products)
            self.state = BatchState.WRITING
            written = self._write(catalog_rows, sink, FIRST_DATA_ROW)

        self.tracker.record_window(max(len(rows) - 1, 0), extraction, written)
        self.cursor = self.cursor.advance(len(rows), written) if len(rows) > 1 else self.cursor
        self.state = BatchState.COMPLETED
        return written
