"""Bounded, most-recent-first log of finished pipeline runs."""

import threading
from typing import List, Optional

from .config import config
from .logging_utils import get_logger
from .models import HistoryEntry


class RunHistory:
    """Keeps the last ``limit`` history entries in memory.

    Entries are only ever prepended or evicted; nothing is updated or
    deleted individually.
    """

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit if limit is not None else config.SWARM_HISTORY_LIMIT
        if self.limit < 1:
            raise ValueError("History limit must be at least 1")
        self.logger = get_logger(__name__)
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    def record(self, entry: HistoryEntry) -> None:
        """Prepend an entry, evicting the oldest beyond the limit."""
        with self._lock:
            self._entries = [entry] + self._entries[: self.limit - 1]
        self.logger.debug(
            "Run recorded in history",
            extra={"pipeline": entry.pipeline_label, "size": len(self._entries)}
        )

    def list(self) -> List[HistoryEntry]:
        """Entries, most recent first."""
        with self._lock:
            return list(self._entries)

    def latest(self) -> Optional[HistoryEntry]:
        with self._lock:
            return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]
