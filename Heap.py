# Heap.py
from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


# -------------------------
# Scored candidate
# -------------------------

@dataclass
class ScoredItem:
    """
    A match candidate produced during a single autocomplete call.
    `order` is the discovery index, assigned by the selector on offer.
    """
    word: str
    frequency: Number = 0
    order: int = 0


# -------------------------
# Bounded Top-K selector
# -------------------------

class TopKSelector:
    """
    Keeps the K highest-frequency items out of a stream, backed by a bounded min-heap.

    A candidate only displaces the current minimum when its frequency is strictly
    greater, so on a tie at the boundary the item seen first stays.
    """

    def __init__(self, k: int) -> None:
        self.k = max(0, math.ceil(k))
        # min-heap of (frequency, -order, item); newest of the tied minimums sits on top
        self._heap: List[Tuple[Number, int, ScoredItem]] = []
        self._seen = 0

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def peek_minimum(self) -> Optional[ScoredItem]:
        """Return the retained item with the smallest frequency, or None if empty."""
        return self._heap[0][2] if self._heap else None

    def offer(self, item: ScoredItem) -> bool:
        """
        Offer a candidate. Returns True if it was retained.
        """
        item.order = self._seen
        self._seen += 1
        if self.k == 0:
            return False

        entry = (item.frequency, -item.order, item)
        if len(self._heap) < self.k:
            heapq.heappush(self._heap, entry)
            return True

        if item.frequency > self._heap[0][0]:
            evicted = heapq.heapreplace(self._heap, entry)
            logger.debug("Evicted '%s' (%s) for '%s' (%s)",
                         evicted[2].word, evicted[0], item.word, item.frequency)
            return True
        return False

    def pop_minimum(self) -> Optional[ScoredItem]:
        """Remove and return the minimum item, or None if empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def drain_sorted(self) -> List[ScoredItem]:
        """
        Empty the selector, returning its items by frequency descending.
        Equal frequencies keep discovery order.
        """
        items = [entry[2] for entry in self._heap]
        self._heap = []
        items.sort(key=lambda it: (-it.frequency, it.order))
        return items
