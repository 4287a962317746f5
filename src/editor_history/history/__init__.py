"""Snapshot value type and the undo/redo history built on it."""

from .snapshot import EditorSnapshot
from .timeline import SnapshotHistory
from .validation import SnapshotValidationError, clamp_cursor, ensure_cursor

__all__ = [
    "EditorSnapshot",
    "SnapshotHistory",
    "SnapshotValidationError",
    "clamp_cursor",
    "ensure_cursor",
]
