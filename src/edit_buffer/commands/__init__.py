"""Command objects and the invoker that dispatches them to a buffer."""

from .manager import CommandManager
from .models import (
    ClearCommand,
    DeleteTextCommand,
    EditCommand,
    InsertTextCommand,
    LowerCaseCommand,
    ReplaceTextCommand,
    UpperCaseCommand,
)

__all__ = [
    "CommandManager",
    "EditCommand",
    "InsertTextCommand",
    "DeleteTextCommand",
    "ReplaceTextCommand",
    "ClearCommand",
    "UpperCaseCommand",
    "LowerCaseCommand",
]
