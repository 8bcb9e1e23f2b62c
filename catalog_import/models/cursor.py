"""
Batch cursor model.

Progress marker for windowed imports. Sheet rows are 1-based and row 1
is the header, so the first data row is 2.
"""

from dataclasses import dataclass, replace

FIRST_DATA_ROW = 2
DEFAULT_BATCH_SIZE = 50


@dataclass(frozen=True)
class BatchCursor:
    """
    Position of a batch run.

    ``last_row_processed`` is the end row of the last window whose rows
    were written and flushed; ``total_imported`` counts catalog rows
    written up to and including that window.
    """

    start_row: int = FIRST_DATA_ROW
    batch_size: int = DEFAULT_BATCH_SIZE
    last_row_processed: int = FIRST_DATA_ROW - 1
    total_imported: int = 0

    def __post_init__(self):
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be > 0 (got {self.batch_size})")
        if self.start_row < FIRST_DATA_ROW:
            raise ValueError(f"start_row must be >= {FIRST_DATA_ROW} (got {self.start_row})")
        if self.last_row_processed < self.start_row - 1:
            raise ValueError("last_row_processed cannot precede start_row")

    @property
    def next_row(self) -> int:
        """First row that has not been committed yet."""
        return self.last_row_processed + 1

    def advance(self, end_row: int, imported: int) -> "BatchCursor":
        """Return the cursor after committing a window ending at ``end_row``."""
        return replace(
            self,
            last_row_processed=end_row,
            total_imported=self.total_imported + imported,
        )

    def to_dict(self) -> dict:
        return {
            "start_row": self.start_row,
            "batch_size": self.batch_size,
            "last_row_processed": self.last_row_processed,
            "total_imported": self.total_imported,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BatchCursor":
        return cls(
            start_row=int(data.get("start_row", FIRST_DATA_ROW)),
            batch_size=int(data.get("batch_size", DEFAULT_BATCH_SIZE)),
            last_row_processed=int(data.get("last_row_processed", FIRST_DATA_ROW - 1)),
            total_imported=int(data.get("total_imported", 0)),
        )
