"""
Bounded in-session history of successful analyses.
"""
import threading
import logging
from collections import deque
from typing import Dict, List, Optional

from insightai.models.insight import ContextType, HistoryItem

logger = logging.getLogger("insightai.services.history")

DEFAULT_CAPACITY = 20


class HistoryStore:
    """
    Newest-first log of HistoryItems holding at most ``capacity`` entries.

    Insertion order is the only ordering. All operations share one lock.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._items: deque = deque(maxlen=capacity)

    def record(self, item: HistoryItem) -> None:
        """Prepend an item, evicting the oldest beyond capacity."""
        with self._lock:
            evicted = len(self._items) == self.capacity
            self._items.appendleft(item)
        if evicted:
            logger.debug("History full, oldest item evicted")

    def all(self) -> List[HistoryItem]:
        with self._lock:
            return list(self._items)

    def get(self, item_id: str) -> Optional[HistoryItem]:
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
        logger.info("History cleared")

    def stats(self) -> Dict[ContextType, int]:
        """Count items per model-assigned context."""
        counts = {context: 0 for context in ContextType}
        with self._lock:
            for item in self._items:
                counts[item.response.context] += 1
        return counts

    def __len__(self):
        with self._lock:
            return len(self._items)
