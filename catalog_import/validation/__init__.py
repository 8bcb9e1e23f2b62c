"""
Run tracking for batch imports.

Modules:
    import_tracker - ImportTracker (per-window counts, run summary)
"""

from .import_tracker import ImportTracker

__all__ = ['ImportTracker']
