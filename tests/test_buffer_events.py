from __future__ import annotations

from typing import List

import pytest

from edit_buffer.buffer import BufferEvent, EditableBuffer, EventBus, EventKind


def make_recorded(text: str = "") -> tuple[EditableBuffer, List[BufferEvent]]:
    events: List[BufferEvent] = []
    buffer = EditableBuffer(text, name="events")
    buffer.bus.subscribe(events.append)
    return buffer, events


def test_insert_emits_position_and_text() -> None:
    buffer, events = make_recorded("hello")

    buffer.insert_text(" world", 5)

    assert events == [
        BufferEvent(kind=EventKind.INSERT, length=11, position=5, text=" world")
    ]
    assert events[0].describe() == "Inserted ' world' at position 5"


def test_insert_event_reports_clamped_position() -> None:
    buffer, events = make_recorded("ab")

    buffer.insert_text("c", 40)

    assert events[0].position == 2


def test_delete_emits_removed_text() -> None:
    buffer, events = make_recorded("hello")

    buffer.delete_text(1, 10)

    assert events[0].kind is EventKind.DELETE
    assert events[0].text == "ello"
    assert events[0].describe() == "Deleted 'ello' from position 1"


def test_noop_operations_emit_nothing() -> None:
    buffer, events = make_recorded("abc")

    buffer.delete_text(3, 1)
    buffer.replace_text("x", 7, 1)
    buffer.undo()

    assert events == []


def test_replace_emits_old_and_new_text() -> None:
    buffer, events = make_recorded("abcdef")

    buffer.replace_text("XY", 2, 2)

    event = events[0]
    assert event.kind is EventKind.REPLACE
    assert event.previous_text == "cd"
    assert event.text == "XY"
    assert event.describe() == "Replaced 'cd' with 'XY' at position 2"


@pytest.mark.parametrize(
    ("operation", "kind", "message"),
    [
        ("clear", EventKind.CLEAR, "Content cleared"),
        ("to_upper_case", EventKind.UPPER_CASE, "Converted to uppercase"),
        ("to_lower_case", EventKind.LOWER_CASE, "Converted to lowercase"),
    ],
)
def test_whole_content_operations_emit_events(
    operation: str, kind: EventKind, message: str
) -> None:
    buffer, events = make_recorded("Text")

    getattr(buffer, operation)()

    assert [event.kind for event in events] == [kind]
    assert events[0].describe() == message


def test_undo_emits_event_with_restored_length() -> None:
    buffer, events = make_recorded("abc")
    buffer.clear()

    buffer.undo()

    assert events[-1].kind is EventKind.UNDO
    assert events[-1].length == 3
    assert events[-1].describe() == "Undo performed"


def test_unsubscribed_listener_stops_receiving() -> None:
    bus = EventBus()
    received: List[BufferEvent] = []
    bus.subscribe(received.append)
    buffer = EditableBuffer("x", bus=bus)

    buffer.clear()
    bus.unsubscribe(received.append)
    buffer.undo()

    assert [event.kind for event in received] == [EventKind.CLEAR]


def test_listener_errors_propagate() -> None:
    buffer = EditableBuffer("x")

    def explode(event: BufferEvent) -> None:
        raise RuntimeError(f"listener failed on {event.kind.value}")

    buffer.bus.subscribe(explode)

    with pytest.raises(RuntimeError):
        buffer.clear()


def test_event_payload_is_flat() -> None:
    event = BufferEvent(kind=EventKind.DELETE, length=2, position=0, text="a")

    assert event.as_payload() == {
        "kind": "delete",
        "position": 0,
        "text": "a",
        "previous_text": "",
        "length": 2,
    }


def test_unsubscribe_unknown_listener_is_ignored() -> None:
    bus = EventBus()
    received: List[BufferEvent] = []
    bus.subscribe(received.append)

    bus.unsubscribe(print)
    EditableBuffer("x", bus=bus).clear()

    assert len(received) == 1


def test_from_text_accepts_shared_bus() -> None:
    bus = EventBus()
    received: List[BufferEvent] = []
    bus.subscribe(received.append)
    buffer = EditableBuffer.from_text("abc", name="shared", bus=bus)

    buffer.to_upper_case()

    assert buffer.bus is bus
    assert [event.kind for event in received] == [EventKind.UPPER_CASE]
