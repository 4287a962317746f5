"""Editing session wiring a current snapshot to its undo/redo history."""

from .config import CURSOR_POLICIES, SessionConfig
from .session import EditorSession, SessionView, Transaction

__all__ = [
    "CURSOR_POLICIES",
    "EditorSession",
    "SessionConfig",
    "SessionView",
    "Transaction",
]
