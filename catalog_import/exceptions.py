"""
Custom exception classes for the import pipeline.

Only conditions that abort a run are exceptions. Per-row problems are
recorded as ``SkipReason`` counts and never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .models import BatchCursor


class CatalogImportError(Exception):
    """
    Base exception for all import errors.

    Attributes:
        code: Error code (e.g., "SOURCE_NOT_FOUND")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a serializable error payload."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigError(CatalogImportError):
    """Vendor profile is missing a key or holds an invalid value."""

    def __init__(self, message: str, key: str = ""):
        super().__init__(
            code="INVALID_CONFIG",
            message=message,
            details={"key": key} if key else None,
        )


class SourceNotFoundError(CatalogImportError):
    """Source data is absent. Raised before anything is written."""

    def __init__(self, source: str):
        super().__init__(
            code="SOURCE_NOT_FOUND",
            message=f"Source '{source}' not found",
            details={"source": source},
        )
        self.source = source


class BatchWriteError(CatalogImportError):
    """
    Writing one batch window to the sink failed.

    The run stops, but ``cursor`` holds the last window that was fully
    committed, so the next invocation resumes at ``cursor.next_row``.
    """

    def __init__(self, cursor: "BatchCursor", failed_row: int, reason: str = ""):
        message = f"Write failed at row {failed_row}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            code="BATCH_WRITE_FAILED",
            message=message,
            details={
                "failed_row": failed_row,
                "last_row_processed": cursor.last_row_processed,
                "total_imported": cursor.total_imported,
            },
        )
        self.cursor = cursor
        self.failed_row = failed_row
