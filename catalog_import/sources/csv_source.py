"""
CSV Row Source

Reads vendor product rows from a CSV export one window at a time.
"""

from __future__ import annotations

import csv
import logging
import os
from itertools import islice
from typing import Any, List, Optional, Sequence

from ..common.csv_utils import DEFAULT_ENCODING, configure_csv, count_rows
from ..exceptions import SourceNotFoundError

logger = logging.getLogger(__name__)

configure_csv()


class CsvRowSource:
    """
    Windowed reader over a CSV file.

    Only the requested rows are held in memory. Consecutive windows
    continue from the open file position; a window that starts before
    the current position reopens the file.

    Usage:
        with CsvRowSource("data/vendor.csv") as source:
            total = source.row_count()
            rows = source.read_rows(2, 50)
    """

    def __init__(self, path: str, encoding: str = DEFAULT_ENCODING):
        """
        Initialize the source.

        Args:
            path: Path to the CSV file

        Raises:
            SourceNotFoundError: If the file does not exist
        """
        if not os.path.isfile(path):
            raise SourceNotFoundError(path)

        self.path = path
        self.encoding = encoding
        self._file = None
        self._reader = None
        self._next_row = 1
        self._row_count: Optional[int] = None

    def __enter__(self) -> "CsvRowSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._reader = None
            self._next_row = 1

    def row_count(self) -> int:
        """Number of data rows (excluding header)."""
        if self._row_count is None:
            self._row_count = count_rows(self.path, self.encoding)
        return self._row_count

    def header(self) -> List[Any]:
        rows = self.read_rows(1, 1)
        return list(rows[0]) if rows else []

    def read_rows(self, start_row: int, count: int) -> List[Sequence[Any]]:
        """
        Read a window of rows.

        Args:
            start_row: 1-based sheet row to start at (2 = first data row)
            count: Maximum number of rows to return

        Returns:
            List of rows (shorter than ``count`` at end of file)
        """
        if start_row < 1 or count <= 0:
            return []

        if self._reader is None or start_row < self._next_row:
            self.close()
            self._file = open(self.path, 'r', encoding=self.encoding, newline='')
            self._reader = csv.reader(self._file)

        # Skip forward to the window start
        skip = start_row - self._next_row
        if skip:
            for _ in islice(self._reader, skip):
                pass

        rows = list(islice(self._reader, count))
        self._next_row = start_row + len(rows)
        logger.debug("Read rows %d-%d from %s", start_row, start_row + len(rows) - 1, self.path)
        return rows
