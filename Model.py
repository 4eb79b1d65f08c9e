# Model.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from Heap import Number
from PriorityQueue import PriorityQueue, QueueEntry
from Trie import Trie
from Utilities import LoadFile

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5


def _try_init_redis() -> Optional[object]:
    """
    Create a Redis client if REDIS_HOST is set and the server answers.
    Returns a client-like object implementing .get/.set or None.
    """
    host = os.getenv("REDIS_HOST")
    if not host:
        return None
    try:
        import redis

        port = int(os.getenv("REDIS_PORT", "6379"))
        db = int(os.getenv("REDIS_DB", "0"))
        client = redis.Redis(host=host, port=port, db=db, decode_responses=True)
        # quick ping
        client.ping()
        logger.info("Connected to Redis at %s:%d db=%d", host, port, db)
        return client
    except Exception as exc:
        logger.warning("Redis unavailable (%s). Proceeding without cache.", exc)
        return None


@dataclass
class AutocompleteRequest:
    """A queued lookup. `k` falls back to the model's top_k when None."""
    prefix: str
    k: Optional[int] = None
    type: str = "autocomplete"
    callback: Optional[Callable[[List[str]], None]] = field(default=None, repr=False, compare=False)


@dataclass
class DispatchResult:
    request: AutocompleteRequest
    priority: Number
    results: List[str]


class Model:
    """
    High-level model wrapping a Trie and a request PriorityQueue.

    Features:
    - Construction from word list files (supports `word` or `word<TAB>score`)
    - Construction from in-memory (word, frequency) pairs
    - Top-K autocomplete, directly or through prioritized requests
    - Optional Redis caching (configured via REDIS_* env vars)
    """

    def __init__(self, cache: Optional[object] = None, top_k: int = DEFAULT_TOP_K) -> None:
        self._cache = cache if cache is not None else _try_init_redis()
        self.trie = Trie(cache=self._cache)
        self.queue = PriorityQueue()
        self.top_k = top_k

    # -----------------------
    # Build / load
    # -----------------------

    def construct(self, filename: str) -> int:
        """
        Populate the trie from a file.

        Supported line formats:
          - 'word'
          - 'word\\t<score>'
        Returns number of entries added.
        """
        added = self.trie.bulk_add(LoadFile(filename))
        logger.info("Constructed trie with %d entries from %s", added, filename)
        return added

    def seed(self, pairs: Iterable[Tuple[str, Number]]) -> int:
        added = self.trie.bulk_add(pairs)
        logger.info("Seeded trie with %d entries", added)
        return added

    # -----------------------
    # Queries
    # -----------------------

    def list(self, prefix: str, k: Optional[int] = None) -> List[str]:
        """Top-k completions for `prefix`, most frequent first."""
        return self.trie.autocomplete(prefix, self.top_k if k is None else k)

    def contains(self, word: str) -> bool:
        return self.trie.contains(word)

    # -----------------------
    # Request queue
    # -----------------------

    @property
    def pending(self) -> int:
        return self.queue.size()

    def submit(self, request: Union[AutocompleteRequest, str], priority: Any = 0) -> QueueEntry:
        """Queue a request (a bare string is taken as a prefix)."""
        if isinstance(request, str):
            request = AutocompleteRequest(prefix=request)
        return self.queue.enqueue(request, priority)

    def dispatch_one(self) -> Optional[DispatchResult]:
        """
        Serve the highest-priority pending request.
        Results go to the request's callback (if any) and are returned.
        """
        entry = self.queue.dequeue()
        if entry is None:
            return None

        request: AutocompleteRequest = entry.request
        if request.type != "autocomplete":
            logger.warning("Unsupported request type '%s' (seq=%d)", request.type, entry.sequence)
            results: List[str] = []
        else:
            results = self.list(request.prefix, request.k)
        logger.debug("priority=%s, prefix='%s' -> %s", entry.priority, request.prefix, results)

        if request.callback is not None:
            request.callback(results)
        return DispatchResult(request=request, priority=entry.priority, results=results)

    def dispatch(self) -> List[DispatchResult]:
        """Drain the queue, returning results in the order requests were served."""
        served: List[DispatchResult] = []
        while not self.queue.is_empty():
            result = self.dispatch_one()
            if result is not None:
                served.append(result)
        return served
