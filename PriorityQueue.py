# PriorityQueue.py
from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from Heap import Number
from Utilities import coerce_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueueEntry:
    request: Any
    priority: Number
    sequence: int


class PriorityQueue:
    """
    Stable max-priority queue for pending requests.

    Highest priority is served first; equal priorities are served in
    arrival order (FIFO).
    """

    def __init__(self) -> None:
        # (-priority, sequence, entry); sequence is unique so entries are never compared
        self._heap: List[Tuple[Number, int, QueueEntry]] = []
        self._seq = 0

    def enqueue(self, request: Any, priority: Any = 0) -> QueueEntry:
        entry = QueueEntry(request=request, priority=coerce_number(priority), sequence=self._seq)
        self._seq += 1
        heapq.heappush(self._heap, (-entry.priority, entry.sequence, entry))
        logger.debug("Enqueued seq=%d priority=%s", entry.sequence, entry.priority)
        return entry

    def dequeue(self) -> Optional[QueueEntry]:
        """Remove and return the next entry, or None if the queue is empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Optional[QueueEntry]:
        return self._heap[0][2] if self._heap else None

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap
