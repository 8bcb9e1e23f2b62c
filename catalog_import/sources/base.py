"""
Source and sink interfaces consumed by the batch pipeline.

Sheet rows are 1-based; row 1 is the header.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence


class RowSource(Protocol):
    """Row-oriented source data (a vendor sheet or CSV export)."""

    def row_count(self) -> int:
        """Number of data rows, excluding the header."""
        ...

    def read_rows(self, start_row: int, count: int) -> List[Sequence[Any]]:
        """Return up to ``count`` rows starting at sheet row ``start_row``."""
        ...


class CatalogSink(Protocol):
    """Append-only catalog target."""

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> int:
        ...

    def flush(self) -> None:
        ...
