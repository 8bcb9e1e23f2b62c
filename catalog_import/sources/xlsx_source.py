"""
Excel Row Source

Reads vendor product rows from an .xlsx workbook one window at a time.
The workbook is opened read-only so rows are streamed, never loaded
as a whole sheet.
"""

from __future__ import annotations

import logging
import os
from typing import Any, List, Optional, Sequence

from openpyxl import load_workbook

from ..exceptions import SourceNotFoundError

logger = logging.getLogger(__name__)


class XlsxRowSource:
    """
    Windowed reader over one worksheet of an .xlsx file.

    Usage:
        with XlsxRowSource("data/vendor.xlsx", sheet="VendorOrder") as source:
            rows = source.read_rows(2, 50)
    """

    def __init__(self, path: str, sheet: Optional[str] = None):
        """
        Initialize the source.

        Args:
            path: Path to the workbook
            sheet: Worksheet name (active sheet if None)

        Raises:
            SourceNotFoundError: If the file or the worksheet does not exist
        """
        if not os.path.isfile(path):
            raise SourceNotFoundError(path)

        self.path = path
        self._workbook = load_workbook(path, read_only=True, data_only=True)

        if sheet is None:
            self._sheet = self._workbook.active
        elif sheet in self._workbook.sheetnames:
            self._sheet = self._workbook[sheet]
        else:
            self._workbook.close()
            raise SourceNotFoundError(f"{path}#{sheet}")

        self.sheet_name = self._sheet.title

    def __enter__(self) -> "XlsxRowSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._workbook.close()

    def row_count(self) -> int:
        """Number of data rows (excluding header)."""
        max_row = self._sheet.max_row or 0
        return max(max_row - 1, 0)

    def read_rows(self, start_row: int, count: int) -> List[Sequence[Any]]:
        """
        Read a window of rows.

        Args:
            start_row: 1-based sheet row to start at (2 = first data row)
            count: Maximum number of rows to return

        Returns:
            List of row tuples (empty cells are None)
        """
        if start_row < 1 or count <= 0:
            return []

        rows = [
            tuple(row)
            for row in self._sheet.iter_rows(
                min_row=start_row,
                max_row=start_row + count - 1,
                values_only=True,
            )
        ]
        logger.debug("Read rows %d-%d from %s[%s]", start_row, start_row + len(rows) - 1,
                     self.path, self.sheet_name)
        return rows
