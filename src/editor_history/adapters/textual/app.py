"""Executable Textual app that drives an EditorSession."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editor_history.adapters.textual.app"
    ) from exc

from editor_history.editor import (
    CURSOR_POLICIES,
    EditorSession,
    SessionConfig,
    SessionView,
)
from editor_history.history import EditorSnapshot

from .controller import (
    HistoryUIHooks,
    TextualHistoryAdapter,
    location_for_offset,
    offset_for_location,
)


class EditorHistoryApp(App[None]):
    """Single-buffer editor whose undo/redo goes through SnapshotHistory."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    # TextArea binds ctrl+z/ctrl+y itself; these must win.
    BINDINGS = [
        Binding("ctrl+z", "history_undo", "Undo", priority=True),
        Binding("ctrl+y", "history_redo", "Redo", priority=True),
        Binding("ctrl+s", "history_save", "Save", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualHistoryAdapter | None = None
        self._editor: TextArea | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="editor-area"):
            self._editor = TextArea(self.session.state.content, id="editor")
            yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = HistoryUIHooks(
            update_editor=self._update_editor,
            update_status=self._update_status,
            log=self.log.info,
        )
        self.adapter = TextualHistoryAdapter(self.session, hooks)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if not self.adapter:
            return
        text = event.text_area.text
        if text == self.session.state.content:
            return
        offset = offset_for_location(text, event.text_area.cursor_location)
        self.adapter.sync_text(text, offset)

    def action_history_undo(self) -> None:
        if self.adapter:
            self.adapter.handle_action("undo")

    def action_history_redo(self) -> None:
        if self.adapter:
            self.adapter.handle_action("redo")

    def action_history_save(self) -> None:
        if self.adapter:
            self.adapter.handle_action("save")

    def _update_editor(self, view: SessionView) -> None:
        if self._editor is not None and self._editor.text != view.state.content:
            self._editor.load_text(view.state.content)
            self._editor.move_cursor(
                location_for_offset(view.state.content, view.state.cursor_position)
            )
        marker = "*" if view.state.unsaved_changes else ""
        self.sub_title = f"{view.name}{marker} [{view.cursor + 1}/{view.length}]"

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = SessionConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Run the editor-history Textual demo."
    )
    parser.add_argument("--text", default="", help="Initial buffer content")
    parser.add_argument(
        "--max-entries",
        type=_positive_int,
        default=defaults.max_entries,
        help="Keep at most this many snapshots (default: unbounded)",
    )
    parser.add_argument(
        "--cursor-policy",
        choices=CURSOR_POLICIES,
        default=defaults.cursor_policy,
        help="How out-of-range cursors are handled (default: none)",
    )
    parser.add_argument("--name", default=defaults.name, help="Session name")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = SessionConfig(
        max_entries=args.max_entries,
        cursor_policy=args.cursor_policy,
        name=args.name,
    )
    session = EditorSession(EditorSnapshot.initial(args.text), config=config)
    EditorHistoryApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
