"""
Checkpoint Store

Persists the batch cursor between invocations so an interrupted import
resumes after the last committed window instead of starting over.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Optional

from ..models import BatchCursor

logger = logging.getLogger(__name__)


class CheckpointStore:
    """JSON file holding the cursor of an unfinished run."""

    def __init__(self, state_file: str):
        """
        Initialize the store.

        Args:
            state_file: Path of the JSON checkpoint file
        """
        self.state_file = state_file

    def load(self, source: str = "") -> Optional[BatchCursor]:
        """
        Load the saved cursor for resume.

        Args:
            source: Source the run reads from. A checkpoint recorded for
                a different source is ignored.

        Returns:
            Saved cursor, or None when there is nothing to resume
        """
        if not os.path.exists(self.state_file):
            return None

        try:
            with open(self.state_file, "r", encoding="utf-8") as f:
                state = json.load(f)
            cursor = BatchCursor.from_dict(state.get("cursor", {}))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load checkpoint %s: %s", self.state_file, e)
            return None

        saved_source = state.get("source", "")
        if source and saved_source and saved_source != source:
            logger.warning("Ignoring checkpoint for a different source (%s)", saved_source)
            return None

        logger.info("Loaded checkpoint: last row=%d, imported=%d",
                    cursor.last_row_processed, cursor.total_imported)
        return cursor

    def save(self, cursor: BatchCursor, source: str = "") -> None:
        """Save the cursor after a committed window."""
        state = {
            "source": source,
            "cursor": cursor.to_dict(),
            "last_updated": datetime.now().isoformat(),
        }
        os.makedirs(os.path.dirname(self.state_file) or ".", exist_ok=True)
        tmp_file = f"{self.state_file}.tmp"
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2, ensure_ascii=False)
        os.replace(tmp_file, self.state_file)

    def clear(self) -> None:
        """Remove the checkpoint after a completed run."""
        if os.path.exists(self.state_file):
            os.remove(self.state_file)
