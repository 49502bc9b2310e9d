"""Invoker that executes commands and keeps a bounded undo list."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from edit_buffer.buffer import HistoryConfigError
from edit_buffer.runtime.telemetry import record_event, span

from .models import EditCommand


class CommandManager:
    """Runs ``EditCommand`` objects and undoes them newest first.

    When more than ``max_history`` commands have run, only the most recent
    ``max_history // 2`` stay undoable.
    """

    def __init__(self, max_history: int = 50, *, logger_name: str | None = None) -> None:
        if max_history < 2:
            raise HistoryConfigError(f"max_history must be >= 2, got {max_history}")
        self.max_history = max_history
        self._executed: Deque[EditCommand] = deque()
        self._logger_name = logger_name

    def execute(self, command: EditCommand) -> None:
        with span(
            "commands::execute",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command": command.description},
        ):
            command.execute()
            self._executed.append(command)
            if len(self._executed) > self.max_history:
                keep = self.max_history // 2
                while len(self._executed) > keep:
                    self._executed.popleft()
            record_event(
                "commands.executed",
                data={"command": command.description, "depth": len(self._executed)},
                logger_name=self._logger_name,
            )

    def can_undo(self) -> bool:
        return bool(self._executed)

    def undo(self) -> Optional[EditCommand]:
        """Undo the newest command and return it, or ``None`` if there is none."""

        if not self._executed:
            record_event(
                "commands.nothing_to_undo", level="debug", logger_name=self._logger_name
            )
            return None

        command = self._executed.pop()
        with span(
            "commands::undo",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command": command.description},
        ):
            try:
                command.undo()
            except Exception:
                self._executed.append(command)
                raise
        record_event(
            "commands.undone",
            data={"command": command.description},
            logger_name=self._logger_name,
        )
        return command

    def executed_count(self) -> int:
        return len(self._executed)

    def history(self) -> list[str]:
        return [
            f"[{index}] {command.description}"
            for index, command in enumerate(self._executed, start=1)
        ]

    def clear_history(self) -> None:
        self._executed.clear()
        record_event("commands.history_cleared", logger_name=self._logger_name)
