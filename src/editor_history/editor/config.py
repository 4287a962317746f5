"""Session configuration and environment loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "EDITOR_HISTORY_"
CURSOR_POLICIES = ("none", "strict", "clamp")


def _env_int(
    environ: Mapping[str, str], key: str, fallback: Optional[int]
) -> Optional[int]:
    value = environ.get(key)
    if value is None or not value.strip():
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(slots=True)
class SessionConfig:
    """Knobs for an ``EditorSession``.

    ``max_entries`` of ``None`` keeps every snapshot. ``cursor_policy``
    decides what happens to out-of-range cursors on edit: ``"none"`` stores
    them untouched, ``"strict"`` raises, ``"clamp"`` pulls them into range.
    """

    max_entries: Optional[int] = None
    cursor_policy: str = "none"
    name: str = "default"

    def __post_init__(self) -> None:
        if self.cursor_policy not in CURSOR_POLICIES:
            raise ValueError(
                f"Unknown cursor policy '{self.cursor_policy}'; "
                f"expected one of {', '.join(CURSOR_POLICIES)}"
            )
        if self.max_entries is not None and self.max_entries < 1:
            raise ValueError("max_entries must be a positive integer or None")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionConfig":
        env = os.environ if environ is None else environ
        max_entries = _env_int(env, f"{ENV_PREFIX}MAX_ENTRIES", None)
        if max_entries is not None and max_entries <= 0:
            max_entries = None
        return cls(
            max_entries=max_entries,
            cursor_policy=(env.get(f"{ENV_PREFIX}CURSOR_POLICY") or "none").lower(),
            name=env.get(f"{ENV_PREFIX}SESSION_NAME") or "default",
        )
