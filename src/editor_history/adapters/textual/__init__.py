"""Textual front-end for editor sessions."""

from .controller import (
    HistoryUIHooks,
    TextualHistoryAdapter,
    location_for_offset,
    offset_for_location,
)

__all__ = [
    "HistoryUIHooks",
    "TextualHistoryAdapter",
    "location_for_offset",
    "offset_for_location",
]
