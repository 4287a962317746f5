"""Editing session that owns the current snapshot and its history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Dict, Optional

from editor_history.history import (
    EditorSnapshot,
    SnapshotHistory,
    clamp_cursor,
    ensure_cursor,
)
from editor_history.runtime import telemetry

from .config import SessionConfig

_CURSOR_POLICIES: Dict[str, Callable[[EditorSnapshot], EditorSnapshot]] = {
    "none": lambda snapshot: snapshot,
    "strict": ensure_cursor,
    "clamp": clamp_cursor,
}


@dataclass(frozen=True, slots=True)
class SessionView:
    name: str
    state: EditorSnapshot
    cursor: int
    length: int
    can_undo: bool
    can_redo: bool


class EditorSession:
    """Caller side of the history API.

    The session derives new snapshots from ``state``, commits them with
    ``SnapshotHistory.save`` and adopts whatever ``undo``/``redo`` hand back.
    The history never writes into the session on its own.
    """

    def __init__(
        self,
        initial: Optional[EditorSnapshot] = None,
        *,
        config: Optional[SessionConfig] = None,
        history: Optional[SnapshotHistory] = None,
    ) -> None:
        self.config = config if config is not None else SessionConfig()
        self.history = history if history is not None else SnapshotHistory(
            self.config.max_entries, logger_name="editor_history.history"
        )
        self.logger = telemetry.get_logger("editor_history.editor")
        self._apply_policy = _CURSOR_POLICIES[self.config.cursor_policy]
        if initial is None and self.history.current is not None:
            self.state = self.history.current
        else:
            if initial is None:
                initial = EditorSnapshot.initial()
            self.state = self._apply_policy(initial)
            self.history.save(self.state)

    @property
    def name(self) -> str:
        return self.config.name

    def stage(
        self,
        *,
        content: Optional[str] = None,
        cursor_position: Optional[int] = None,
        unsaved_changes: Optional[bool] = None,
    ) -> EditorSnapshot:
        """Derive and adopt a new state without recording it."""

        if unsaved_changes is None and content is not None:
            if content != self.state.content:
                unsaved_changes = True
        derived = self.state.with_changes(
            content=content,
            cursor_position=cursor_position,
            unsaved_changes=unsaved_changes,
        )
        self.state = self._apply_policy(derived)
        return self.state

    def commit(self) -> EditorSnapshot:
        self.history.save(self.state)
        return self.state

    def edit(
        self,
        *,
        content: Optional[str] = None,
        cursor_position: Optional[int] = None,
        unsaved_changes: Optional[bool] = None,
    ) -> EditorSnapshot:
        with self.transaction("edit"):
            self.stage(
                content=content,
                cursor_position=cursor_position,
                unsaved_changes=unsaved_changes,
            )
        return self.state

    def mark_saved(self) -> EditorSnapshot:
        with self.transaction("mark_saved"):
            self.stage(unsaved_changes=False)
        return self.state

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.state = snapshot
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.state = snapshot
        return True

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def view(self) -> SessionView:
        return SessionView(
            name=self.name,
            state=self.state,
            cursor=self.history.cursor,
            length=len(self.history),
            can_undo=self.history.can_undo,
            can_redo=self.history.can_redo,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Groups staged changes into a single history entry.

    On a clean exit the session's state is committed once, unless it equals
    the history's current entry (nothing staged, a no-op change, or a nested
    ``edit`` that already committed). If the block raises, the
    pre-transaction state is restored and the exception propagates.
    """

    def __init__(self, session: EditorSession, label: str) -> None:
        self.session = session
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before: Optional[EditorSnapshot] = None

    def __enter__(self) -> "Transaction":
        self._before = self.session.state
        self._span_cm = telemetry.span(
            name=f"session::{self.label}",
            component=True,
            metadata={"session": self.session.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            if self._before is not None:
                self.session.state = self._before
        elif self.session.state != self.session.history.current:
            self.session.commit()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["EditorSession", "SessionView", "Transaction"]
