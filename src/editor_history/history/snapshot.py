"""Immutable point-in-time editor state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True, slots=True)
class EditorSnapshot:
    """Content, cursor offset, and dirty flag captured at one moment.

    Snapshots never change after construction. ``with_changes`` is the only
    way to "edit" one and it always hands back a fresh instance, so the same
    snapshot can sit in several history slots and in the caller's current
    state at once without copying.
    """

    content: str
    cursor_position: int
    unsaved_changes: bool

    @classmethod
    def initial(cls, content: str = "", cursor_position: int = 0) -> "EditorSnapshot":
        return cls(
            content=content, cursor_position=cursor_position, unsaved_changes=False
        )

    def with_changes(
        self,
        *,
        content: Optional[str] = None,
        cursor_position: Optional[int] = None,
        unsaved_changes: Optional[bool] = None,
    ) -> "EditorSnapshot":
        """Return a copy with the supplied fields overridden.

        ``None`` means "keep the current value"; falsy values such as ``0``,
        ``""`` or ``False`` are applied as real overrides.
        """

        overrides: Dict[str, Any] = {}
        if content is not None:
            overrides["content"] = content
        if cursor_position is not None:
            overrides["cursor_position"] = cursor_position
        if unsaved_changes is not None:
            overrides["unsaved_changes"] = unsaved_changes
        return replace(self, **overrides)

    def describe(self) -> str:
        return "\n".join(
            (
                f"Content: {self.content}",
                f"Cursor Position: {self.cursor_position}",
                f"Unsaved Changes: {self.unsaved_changes}",
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "cursor_position": self.cursor_position,
            "unsaved_changes": self.unsaved_changes,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EditorSnapshot":
        try:
            return cls(
                content=data["content"],
                cursor_position=data["cursor_position"],
                unsaved_changes=data["unsaved_changes"],
            )
        except KeyError as exc:
            raise ValueError(f"Snapshot data missing field {exc}") from exc
