"""Positional argument clamping shared by buffer operations."""

from __future__ import annotations

from typing import Optional


def clamp_position(content: str, position: int) -> int:
    """Pin ``position`` into ``[0, len(content)]``."""

    return max(0, min(position, len(content)))


def clamp_span(content: str, start: int, length: int) -> int:
    """Return how many characters from ``start`` can actually be removed."""

    return max(0, min(length, len(content) - start))


def deletable_span(content: str, start: int, length: int) -> Optional[int]:
    """Return the clamped length for a delete, or ``None`` when it is a no-op."""

    if start < 0 or start >= len(content) or length <= 0:
        return None
    return clamp_span(content, start, length)


def replaceable_start(content: str, start: int) -> bool:
    # start == len(content) is an append; anything outside is rejected
    return 0 <= start <= len(content)
