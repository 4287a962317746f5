"""Opt-in cursor checks for snapshots."""

from __future__ import annotations

from .snapshot import EditorSnapshot


class SnapshotValidationError(ValueError):
    """Raised when a snapshot's cursor falls outside its content."""

    def __init__(self, message: str, *, snapshot: EditorSnapshot | None = None) -> None:
        super().__init__(message)
        self.snapshot = snapshot


def ensure_cursor(snapshot: EditorSnapshot) -> EditorSnapshot:
    position = snapshot.cursor_position
    if position < 0 or position > len(snapshot.content):
        raise SnapshotValidationError(
            f"Cursor {position} out of range for {len(snapshot.content)} chars",
            snapshot=snapshot,
        )
    return snapshot


def clamp_cursor(snapshot: EditorSnapshot) -> EditorSnapshot:
    bounded = min(max(snapshot.cursor_position, 0), len(snapshot.content))
    if bounded == snapshot.cursor_position:
        return snapshot
    return snapshot.with_changes(cursor_position=bounded)
