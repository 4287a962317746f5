"""Linear undo/redo history over immutable editor snapshots."""

__all__ = [
    "adapters",
    "editor",
    "history",
    "runtime",
]

__version__ = "0.1.0"
