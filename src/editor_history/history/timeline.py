"""Linear undo/redo history over editor snapshots."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from editor_history.runtime import telemetry

from .snapshot import EditorSnapshot


class SnapshotHistory:
    """Cursor-addressed log of snapshots with truncate-on-branch saves.

    ``cursor`` points at the current entry and is ``-1`` only while the
    history is empty. Saving after one or more undos drops everything past
    the cursor before appending, so redo never resurrects an abandoned
    branch. Not safe for concurrent callers; the owner serializes access.
    """

    def __init__(
        self,
        max_entries: Optional[int] = None,
        *,
        logger_name: Optional[str] = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be a positive integer or None")
        self.max_entries = max_entries
        self._entries: List[EditorSnapshot] = []
        self._cursor: int = -1
        self._logger_name = logger_name or "editor_history.history"

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> Tuple[EditorSnapshot, ...]:
        return tuple(self._entries)

    @property
    def current(self) -> Optional[EditorSnapshot]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    @property
    def undo_depth(self) -> int:
        return max(self._cursor, 0)

    @property
    def redo_depth(self) -> int:
        return len(self._entries) - 1 - self._cursor

    def save(self, snapshot: EditorSnapshot) -> None:
        if self.can_redo:
            dropped = len(self._entries) - (self._cursor + 1)
            del self._entries[self._cursor + 1 :]
            self._record("history.truncate", dropped=dropped)
        self._entries.append(snapshot)
        if self.max_entries is not None and len(self._entries) > self.max_entries:
            evicted = len(self._entries) - self.max_entries
            del self._entries[:evicted]
            self._record("history.evict", evicted=evicted)
        self._cursor = len(self._entries) - 1
        self._record("history.save")

    def undo(self) -> Optional[EditorSnapshot]:
        if not self.can_undo:
            self._record("history.undo.noop", level="debug")
            return None
        self._cursor -= 1
        self._record("history.undo")
        return self._entries[self._cursor]

    def redo(self) -> Optional[EditorSnapshot]:
        if not self.can_redo:
            self._record("history.redo.noop", level="debug")
            return None
        self._cursor += 1
        self._record("history.redo")
        return self._entries[self._cursor]

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = -1
        self._record("history.clear")

    def serialize(self) -> Dict[str, Any]:
        return {
            "cursor": self._cursor,
            "max_entries": self.max_entries,
            "entries": [entry.to_dict() for entry in self._entries],
        }

    @classmethod
    def load(
        cls, data: Mapping[str, Any], *, logger_name: Optional[str] = None
    ) -> "SnapshotHistory":
        entries = [EditorSnapshot.from_dict(item) for item in data.get("entries", ())]
        cursor = int(data.get("cursor", len(entries) - 1))
        if not -1 <= cursor <= len(entries) - 1 or (cursor == -1) != (not entries):
            raise ValueError(
                f"cursor {cursor} is inconsistent with {len(entries)} entries"
            )
        history = cls(data.get("max_entries"), logger_name=logger_name)
        if history.max_entries is not None and len(entries) > history.max_entries:
            raise ValueError(
                f"{len(entries)} entries exceed max_entries={history.max_entries}"
            )
        history._entries = entries
        history._cursor = cursor
        return history

    def _record(self, name: str, *, level: str = "info", **extra: Any) -> None:
        telemetry.record_event(
            name,
            level=level,
            data={"cursor": self._cursor, "length": len(self._entries), **extra},
            logger_name=self._logger_name,
        )


__all__ = ["SnapshotHistory"]
