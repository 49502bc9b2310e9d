"""Command objects wrapping individual buffer edits."""

from __future__ import annotations

from typing import Optional, Protocol

from edit_buffer.buffer import (
    EditableBuffer,
    clamp_position,
    clamp_span,
    deletable_span,
)


class EditCommand(Protocol):
    """Contract every command dispatched through ``CommandManager`` follows."""

    @property
    def description(self) -> str:
        ...

    def execute(self) -> None:
        ...

    def undo(self) -> None:
        ...


class InsertTextCommand:
    def __init__(self, buffer: EditableBuffer, text: str, position: int) -> None:
        self.buffer = buffer
        self.text = text
        self.position = position
        self._applied_at: Optional[int] = None

    @property
    def description(self) -> str:
        return f"Insert '{self.text}' at position {self.position}"

    def execute(self) -> None:
        self._applied_at = clamp_position(self.buffer.content, self.position)
        self.buffer.insert_text(self.text, self._applied_at)

    def undo(self) -> None:
        if self._applied_at is None or not self.text:
            return
        self.buffer.delete_text(self._applied_at, len(self.text))


class DeleteTextCommand:
    def __init__(self, buffer: EditableBuffer, start: int, length: int) -> None:
        self.buffer = buffer
        self.start = start
        self.length = length
        self.deleted_text = ""
        self._executed = False

    @property
    def description(self) -> str:
        if self._executed:
            count = len(self.deleted_text)
        else:
            count = deletable_span(self.buffer.content, self.start, self.length) or 0
        return f"Delete {count} characters from position {self.start}"

    def execute(self) -> None:
        content = self.buffer.content
        count = deletable_span(content, self.start, self.length)
        self.deleted_text = content[self.start : self.start + count] if count else ""
        self._executed = True
        self.buffer.delete_text(self.start, self.length)

    def undo(self) -> None:
        if self.deleted_text:
            self.buffer.insert_text(self.deleted_text, self.start)


class ReplaceTextCommand:
    def __init__(
        self, buffer: EditableBuffer, new_text: str, start: int, length: int
    ) -> None:
        self.buffer = buffer
        self.new_text = new_text
        self.start = start
        self.length = length
        self.old_text: Optional[str] = None

    @property
    def description(self) -> str:
        return f"Replace text at position {self.start} with '{self.new_text}'"

    def execute(self) -> None:
        content = self.buffer.content
        self.old_text = None
        if 0 <= self.start <= len(content):
            count = clamp_span(content, self.start, self.length)
            self.old_text = content[self.start : self.start + count]
        self.buffer.replace_text(self.new_text, self.start, self.length)

    def undo(self) -> None:
        if self.old_text is None:
            return
        self.buffer.replace_text(self.old_text, self.start, len(self.new_text))


class _WholeContentCommand:
    """Base for commands that rewrite the entire content in one step."""

    label = "content"

    def __init__(self, buffer: EditableBuffer) -> None:
        self.buffer = buffer
        self.previous_content: Optional[str] = None

    @property
    def description(self) -> str:
        return self.label

    def execute(self) -> None:
        self.previous_content = self.buffer.content
        self.apply()

    def apply(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def undo(self) -> None:
        if self.previous_content is None:
            return
        self.buffer.replace_text(self.previous_content, 0, self.buffer.get_length())


class ClearCommand(_WholeContentCommand):
    label = "Clear all content"

    def apply(self) -> None:
        self.buffer.clear()


class UpperCaseCommand(_WholeContentCommand):
    label = "Convert to uppercase"

    def apply(self) -> None:
        self.buffer.to_upper_case()


class LowerCaseCommand(_WholeContentCommand):
    label = "Convert to lowercase"

    def apply(self) -> None:
        self.buffer.to_lower_case()


__all__ = [
    "EditCommand",
    "InsertTextCommand",
    "DeleteTextCommand",
    "ReplaceTextCommand",
    "ClearCommand",
    "UpperCaseCommand",
    "LowerCaseCommand",
]
