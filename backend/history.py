"""In-memory recent-analysis history.

Holds at most `capacity` completed analyses, most recent first; adding past
capacity evicts the oldest. Nothing is persisted.
"""

import threading
from collections import deque

from config import HISTORY_CAPACITY
from models import HistoryEntry, Score, SignalSet


class RecentHistory:
    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def add(self, signals: SignalSet, score: Score) -> HistoryEntry:
        entry = HistoryEntry(signals=signals, score=score)
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def get(self, index: int) -> HistoryEntry | None:
        """Entry at `index` (0 is most recent), or None if out of range."""
        with self._lock:
            if 0 <= index < len(self._entries):
                return self._entries[index]
        return None

    def entries(self) -> list[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
