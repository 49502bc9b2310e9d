"""In-memory editable text buffer with bounded snapshot undo."""

__all__ = [
    "buffer",
    "commands",
    "runtime",
]

__version__ = "0.1.0"
