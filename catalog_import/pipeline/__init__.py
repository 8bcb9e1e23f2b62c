"""
Batch import pipeline.

Modules:
    batch_coordinator - BatchCoordinator (windowed, resumable import)
    checkpoint - CheckpointStore (cursor persistence between runs)
"""

from .batch_coordinator import BatchCoordinator, BatchState, iter_windows
from .checkpoint import CheckpointStore

__all__ = [
    'BatchCoordinator',
    'BatchState',
    'iter_windows',
    'CheckpointStore',
]
