"""Editable text buffer with snapshot-based undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from edit_buffer.runtime import telemetry
from edit_buffer.runtime.telemetry import SpanHandle

from .events import BufferEvent, EventBus, EventKind
from .history import HistoryLimits, SnapshotHistory
from .validation import clamp_position, clamp_span, deletable_span, replaceable_start


class EditableBuffer:
    """Owns the live text and a bounded stack of prior snapshots.

    Every mutation pushes the pre-mutation text onto the history before the
    content changes; ``undo`` pops that snapshot back. The snapshot captured
    at construction is the floor and is never popped. Out-of-range positions
    are clamped or turn the call into a no-op instead of raising.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        limits: Optional[HistoryLimits] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.name = name
        self.bus = bus or EventBus()
        self._content = text
        self._history = SnapshotHistory(text, limits=limits)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        limits: Optional[HistoryLimits] = None,
        bus: Optional[EventBus] = None,
    ) -> "EditableBuffer":
        return cls(text, name=name, limits=limits, bus=bus)

    @property
    def content(self) -> str:
        return self._content

    def get_length(self) -> int:
        return len(self._content)

    def __len__(self) -> int:
        return len(self._content)

    def __str__(self) -> str:
        return self._content

    def __repr__(self) -> str:
        return (
            f"EditableBuffer(name={self.name!r}, length={len(self._content)}, "
            f"history={len(self._history)})"
        )

    def history_size(self) -> int:
        return len(self._history)

    def history_snapshots(self) -> tuple[str, ...]:
        return self._history.snapshots()

    def insert_text(self, text: str, position: int) -> None:
        with Transaction(self, EventKind.INSERT) as tx:
            position = clamp_position(self._content, position)
            tx.capture()
            self._content = self._content[:position] + text + self._content[position:]
            tx.commit(position=position, text=text)

    def delete_text(self, start: int, length: int) -> None:
        with Transaction(self, EventKind.DELETE) as tx:
            count = deletable_span(self._content, start, length)
            if count is None:
                tx.skip("out_of_range")
                return
            removed = self._content[start : start + count]
            tx.capture()
            self._content = self._content[:start] + self._content[start + count :]
            tx.commit(position=start, text=removed)

    def replace_text(self, new_text: str, start: int, length: int) -> None:
        with Transaction(self, EventKind.REPLACE) as tx:
            if not replaceable_start(self._content, start):
                tx.skip("out_of_range")
                return
            count = clamp_span(self._content, start, length)
            old_text = self._content[start : start + count]
            tx.capture()
            self._content = (
                self._content[:start] + new_text + self._content[start + count :]
            )
            tx.commit(position=start, text=new_text, previous_text=old_text)

    def clear(self) -> None:
        with Transaction(self, EventKind.CLEAR) as tx:
            tx.capture()
            self._content = ""
            tx.commit()

    def to_upper_case(self) -> None:
        with Transaction(self, EventKind.UPPER_CASE) as tx:
            tx.capture()
            self._content = self._content.upper()
            tx.commit()

    def to_lower_case(self) -> None:
        with Transaction(self, EventKind.LOWER_CASE) as tx:
            tx.capture()
            self._content = self._content.lower()
            tx.commit()

    def can_undo(self) -> bool:
        return len(self._history) > 1

    def undo(self) -> None:
        """Restore the text that preceded the latest mutation.

        Silent when only the baseline snapshot is left; check ``can_undo``
        first to tell the two cases apart.
        """

        if not self.can_undo():
            return
        with Transaction(self, EventKind.UNDO) as tx:
            self._content = self._history.pop()
            tx.commit()


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer operation in a telemetry span and publishes its event."""

    def __init__(self, buffer: EditableBuffer, kind: EventKind) -> None:
        self.buffer = buffer
        self.kind = kind
        self.event: Optional[BufferEvent] = None
        self._span_cm: Optional[ContextManager[SpanHandle]] = None
        self._handle: Optional[SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.kind.value}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def capture(self) -> None:
        history = self.buffer._history
        if history.push(self.buffer._content):
            telemetry.record_event(
                "buffer.history_compacted",
                level="debug",
                data={"buffer": self.buffer.name, "retained": len(history)},
            )

    def skip(self, reason: str) -> None:
        if self._handle is not None:
            self._handle.skip(reason)

    def commit(
        self, *, position: Optional[int] = None, text: str = "", previous_text: str = ""
    ) -> BufferEvent:
        event = BufferEvent(
            kind=self.kind,
            length=len(self.buffer._content),
            position=position,
            text=text,
            previous_text=previous_text,
        )
        self.event = event
        telemetry.record_event(
            f"buffer.{self.kind.value}",
            data={"buffer": self.buffer.name, **event.as_payload()},
        )
        self.buffer.bus.emit(event)
        return event

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
