"""Framework-free bridge between an EditorSession and Textual widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from editor_history.editor import EditorSession, SessionView


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HistoryUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_editor: Callable[[SessionView], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter:
    """Turns named UI actions into session calls and refreshes the host."""

    def __init__(self, session: EditorSession, hooks: HistoryUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._actions: Dict[str, Callable[..., str]] = {
            "edit": self._edit,
            "undo": self._undo,
            "redo": self._redo,
            "save": self._save,
        }
        self._refresh()

    def handle_action(self, name: str, **payload: Any) -> SessionView:
        handler = self._actions.get(name)
        if handler is None:
            raise KeyError(f"Unknown action '{name}'")
        self._log_state("action ->", action=name, **payload)
        status = handler(**payload)
        self.hooks.update_status(status)
        self._refresh()
        view = self.session.view()
        self._log_state("result <-", status=status)
        return view

    def sync_text(self, text: str, cursor: Optional[int] = None) -> bool:
        """Record a host-side edit if it differs from the current state."""

        state = self.session.state
        position = state.cursor_position if cursor is None else cursor
        if text == state.content and position == state.cursor_position:
            return False
        self.handle_action("edit", content=text, cursor_position=position)
        return True

    def _edit(
        self,
        *,
        content: Optional[str] = None,
        cursor_position: Optional[int] = None,
    ) -> str:
        self.session.edit(content=content, cursor_position=cursor_position)
        return "edited"

    def _undo(self) -> str:
        return "undo" if self.session.undo() else "nothing to undo"

    def _redo(self) -> str:
        return "redo" if self.session.redo() else "nothing to redo"

    def _save(self) -> str:
        self.session.mark_saved()
        return "saved"

    def _refresh(self) -> None:
        self.hooks.update_editor(self.session.view())

    def _log_state(self, prefix: str, **fields: object) -> None:
        view = self.session.view()
        snapshot: Dict[str, object] = {
            "session": view.name,
            "cursor": view.cursor,
            "length": view.length,
            "dirty": view.state.unsaved_changes,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


Location = Tuple[int, int]  # (row, column)


def offset_for_location(text: str, location: Location) -> int:
    lines = text.split("\n")
    row, col = location
    row = min(max(row, 0), len(lines) - 1)
    offset = sum(len(line) + 1 for line in lines[:row])  # newline
    return offset + min(max(col, 0), len(lines[row]))


def location_for_offset(text: str, offset: int) -> Location:
    lines = text.split("\n")
    running = 0
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, max(offset - running, 0))
        running += len(line) + 1
    return (len(lines) - 1, len(lines[-1]))


__all__ = [
    "HistoryUIHooks",
    "TextualHistoryAdapter",
    "location_for_offset",
    "offset_for_location",
]
