"""
Query History - Bounded record of executed editor queries.
"""
import threading
from collections import deque
from itertools import islice
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..config.user_preferences import UserPreferences, get_preferences
from ..constants import HISTORY_MAX_ENTRIES

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """One executed query."""
    sql: str
    cost_time: float     # milliseconds
    executed_at: str = field(default_factory=lambda: datetime.now().isoformat())


class QueryHistory:
    """Most recent queries first, oldest entries dropped past max_entries."""

    def __init__(self, max_entries: int = HISTORY_MAX_ENTRIES):
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @classmethod
    def from_preferences(cls, preferences: Optional[UserPreferences] = None) -> "QueryHistory":
        """
        Create a history sized by the 'history_size' preference.

        The history follows later changes of the preference.
        """
        preferences = preferences or get_preferences()
        history = cls(max_entries=preferences.get("history_size", HISTORY_MAX_ENTRIES))
        preferences.register_observer("history_size", history.resize)
        return history

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    def resize(self, max_entries: int) -> None:
        """Change the bound, keeping the most recent entries."""
        with self._lock:
            self._entries = deque(islice(self._entries, max_entries), maxlen=max_entries)
        logger.debug(f"History size set to {max_entries}")

    def record(self, sql: str, cost_time: float) -> HistoryEntry:
        entry = HistoryEntry(sql=sql, cost_time=cost_time)
        with self._lock:
            self._entries.appendleft(entry)
        logger.debug(f"History recorded ({cost_time:.0f} ms): {sql[:60]}")
        return entry

    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
