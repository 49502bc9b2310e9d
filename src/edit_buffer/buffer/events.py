"""Structured events describing buffer edits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class EventKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"
    CLEAR = "clear"
    UPPER_CASE = "upper_case"
    LOWER_CASE = "lower_case"
    UNDO = "undo"


@dataclass(frozen=True, slots=True)
class BufferEvent:
    """What a single buffer operation changed.

    ``text`` carries the inserted, deleted, or replacement text depending on
    ``kind``; ``previous_text`` is only set for replacements. ``length`` is
    the content length after the operation was applied.
    """

    kind: EventKind
    length: int
    position: Optional[int] = None
    text: str = ""
    previous_text: str = ""

    def describe(self) -> str:
        if self.kind is EventKind.INSERT:
            return f"Inserted '{self.text}' at position {self.position}"
        if self.kind is EventKind.DELETE:
            return f"Deleted '{self.text}' from position {self.position}"
        if self.kind is EventKind.REPLACE:
            return (
                f"Replaced '{self.previous_text}' with '{self.text}' "
                f"at position {self.position}"
            )
        if self.kind is EventKind.CLEAR:
            return "Content cleared"
        if self.kind is EventKind.UPPER_CASE:
            return "Converted to uppercase"
        if self.kind is EventKind.LOWER_CASE:
            return "Converted to lowercase"
        return "Undo performed"

    def as_payload(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "position": self.position,
            "text": self.text,
            "previous_text": self.previous_text,
            "length": self.length,
        }


EventListener = Callable[[BufferEvent], None]


class EventBus:
    """Fan-out of buffer events to subscribed listeners, in subscription order."""

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: BufferEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
