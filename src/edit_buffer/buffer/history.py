"""Bounded snapshot history backing buffer undo."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional


class HistoryConfigError(ValueError):
    """Raised when history retention limits are inconsistent."""

    def __init__(self, message: str, *, limits: Optional[HistoryLimits] = None) -> None:
        super().__init__(message)
        self.limits = limits


@dataclass(frozen=True, slots=True)
class HistoryLimits:
    """Retention thresholds for ``SnapshotHistory``.

    Once the history grows past ``high_water`` entries it is cut back to the
    ``low_water`` most recent ones. The cap is amortized: a single push may
    briefly hold ``high_water + 1`` entries before compaction runs.
    """

    high_water: int = 50
    low_water: int = 25

    def __post_init__(self) -> None:
        if self.low_water < 1 or self.low_water >= self.high_water:
            raise HistoryConfigError(
                f"low_water must be in [1, {self.high_water}), got {self.low_water}",
                limits=self,
            )


class SnapshotHistory:
    """Most-recent-last stack of full content snapshots."""

    def __init__(self, baseline: str, *, limits: Optional[HistoryLimits] = None) -> None:
        self.limits = limits or HistoryLimits()
        self._snapshots: Deque[str] = deque([baseline])
        self.compactions = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    def push(self, snapshot: str) -> bool:
        """Append ``snapshot`` and compact; return ``True`` if compaction ran."""

        self._snapshots.append(snapshot)
        return self.compact()

    def pop(self) -> str:
        return self._snapshots.pop()

    def peek(self) -> str:
        return self._snapshots[-1]

    def compact(self) -> bool:
        if len(self._snapshots) <= self.limits.high_water:
            return False
        while len(self._snapshots) > self.limits.low_water:
            self._snapshots.popleft()
        self.compactions += 1
        return True

    def snapshots(self) -> tuple[str, ...]:
        """Return the retained snapshots, oldest first, as an immutable copy."""

        return tuple(self._snapshots)
