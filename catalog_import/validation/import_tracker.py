"""
ImportTracker

Tracks per-window counts across a batch import and renders the run
summary shown to the user.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..extraction.product_extractor import ExtractionResult


class ImportTracker:
    """
    Aggregate counters for one import run.

    Usage::

        tracker = ImportTracker()
        # inside the batch loop:
        tracker.record_window(len(rows), extraction, written)
        # after the loop (or on failure):
        print(tracker.summary_message())
    """

    def __init__(self) -> None:
        self.windows: int = 0
        self.rows_read: int = 0
        self.imported: int = 0
        self.skipped: Counter = Counter()
        self.warnings: Counter = Counter()

        # Failure state (at most one per run)
        self.source_missing: Optional[str] = None
        self.failed_row: Optional[int] = None
        self.resume_row: Optional[int] = None

    # ── Public API ────────────────────────────────────────────────────────────

    def record_window(
        self,
        rows_read: int,
        extraction: "ExtractionResult",
        written: int
    ) -> None:
        """Record a committed window."""
        self.windows += 1
        self.rows_read += rows_read
        self.imported += written
        for reason, count in extraction.skipped.items():
            self.skipped[reason.value] += count
        self.warnings.update(extraction.warnings)

    def record_source_missing(self, source: str) -> None:
        self.source_missing = source

    def record_write_failure(self, failed_row: int, resume_row: int) -> None:
        self.failed_row = failed_row
        self.resume_row = resume_row

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def summary_message(self, total_imported: Optional[int] = None) -> str:
        """
        One-line outcome of the run.

        Distinguishes a missing source, a failed write (with the row to
        resume from), and a normal completion with skip counts.

        Args:
            total_imported: Imported count including earlier resumed
                invocations (defaults to this run's count)
        """
        if self.source_missing is not None:
            return f"Source not found: {self.source_missing}. Nothing was imported."

        if self.failed_row is not None:
            return (
                f"Write failed at row {self.failed_row}; "
                f"rerun with --resume to continue from row {self.resume_row}."
            )

        imported = self.imported if total_imported is None else total_imported
        message = f"Imported {imported} rows"
        if self.skipped_total:
            reasons = ", ".join(f"{reason}: {count}" for reason, count in self._top_reasons())
            message += f"; skipped {self.skipped_total} rows ({reasons})"
        else:
            message += "; skipped 0 rows"
        return message + "."

    def print_final_report(self) -> None:
        """Print a full report table at the end of the run."""
        print("\n" + "=" * 60)
        print("Import Summary")
        print("=" * 60)
        print(f"  Windows committed: {self.windows}")
        print(f"  Rows read:         {self.rows_read}")
        print(f"  Rows imported:     {self.imported}")
        print(f"  Rows skipped:      {self.skipped_total}")

        if self.skipped:
            print("\n  Skipped by reason:")
            for reason, count in self._top_reasons():
                print(f"    {reason:<22} {count:>6}")

        if self.warnings:
            print("\n  Warnings:")
            for warning, count in sorted(self.warnings.items(), key=lambda x: -x[1]):
                print(f"    {warning:<22} {count:>6}")

        print("\n  " + self.summary_message())
        print("=" * 60)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _top_reasons(self) -> list[tuple[str, int]]:
        return sorted(self.skipped.items(), key=lambda x: (-x[1], x[0]))
