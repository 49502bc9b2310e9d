"""Editable text buffer, snapshot history, and edit events."""

from .editable import EditableBuffer, Transaction
from .events import BufferEvent, EventBus, EventKind, EventListener
from .history import HistoryConfigError, HistoryLimits, SnapshotHistory
from .validation import clamp_position, clamp_span, deletable_span

__all__ = [
    "EditableBuffer",
    "Transaction",
    "BufferEvent",
    "EventBus",
    "EventKind",
    "EventListener",
    "HistoryConfigError",
    "HistoryLimits",
    "SnapshotHistory",
    "clamp_position",
    "clamp_span",
    "deletable_span",
]
