# Trie.py
from __future__ import annotations

import json
import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from Heap import Number, ScoredItem, TopKSelector
from Utilities import coerce_number

logger = logging.getLogger(__name__)

# -------------------------
# Public types / interfaces
# -------------------------

CacheLike = object
# Any object implementing .get(key: str) -> Optional[str] and .set(key: str, value: str, ex: Optional[int]) -> None
# (e.g., redis-py client). We use JSON-encoded payloads (UTF-8 strings).

CACHE_TTL_SECONDS = 300


# -------------------------
# Trie Node
# -------------------------

@dataclass
class TrieNode:
    """
    One character position in the vocabulary.
    `children` keeps first-insertion order, which fixes enumeration order.
    """
    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    is_terminal: bool = False
    frequency: Number = 0  # accumulated; meaningful only when terminal


# -------------------------
# Trie
# -------------------------

class Trie:
    """
    Prefix tree over a weighted vocabulary with top-K autocomplete.
    """

    def __init__(self, cache: Optional[CacheLike] = None) -> None:
        """
        cache: object with .get(key)->str|None and .set(key, value, ex=ttl_seconds)->None
        """
        self.root = TrieNode()
        self._cache = cache
        self._word_count = 0
        # keeps tries that share one cache client from reading each other's entries
        self._namespace = uuid.uuid4().hex
        # bumped on every insert so cached results never outlive a mutation
        self._generation = 0

    # --- Mutation ---

    def insert(self, word: str, frequency: Number = 1) -> None:
        """
        Index `word`, adding `frequency` to whatever it has accumulated so far.
        Non-numeric frequencies count as 0, negatives are clamped to 0.
        """
        amount = max(coerce_number(frequency), 0)
        node = self.root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = TrieNode()
                node.children[ch] = child
            node = child

        if not node.is_terminal:
            node.is_terminal = True
            self._word_count += 1
        node.frequency += amount
        self._generation += 1

    def bulk_add(self, words: Iterable[Tuple[str, Number]]) -> int:
        """
        Insert many words: iterable of (word, frequency). Returns how many were inserted.
        """
        added = 0
        for word, freq in words:
            self.insert(word, freq)
            added += 1
        return added

    # --- Queries ---

    def __len__(self) -> int:
        return self._word_count

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def contains(self, word: str) -> bool:
        """Return True if the exact word is indexed."""
        node = self._get_node(word)
        return node is not None and node.is_terminal

    def frequency(self, word: str) -> Number:
        """Accumulated frequency of an indexed word, 0 if absent."""
        node = self._get_node(word)
        if node is None or not node.is_terminal:
            return 0
        return node.frequency

    def autocomplete(self, prefix: str, k: int = 5) -> List[str]:
        """
        Return up to k words starting with `prefix`, most frequent first.
        """
        return [word for word, _freq in self.autocomplete_with_scores(prefix, k)]

    def autocomplete_with_scores(self, prefix: str, k: int = 5) -> List[Tuple[str, Number]]:
        """
        Return top-k (word, frequency) completions for a given prefix.
        Uses a bounded min-heap (k) and a pre-order DFS over the prefix subtree.
        A fractional k is rounded up.
        """
        k = coerce_number(k)
        if k <= 0:
            return []
        k = math.ceil(k)

        cache_key = None
        if self._cache is not None:
            cache_key = f"ac:{self._namespace}:{self._generation}:{k}:{prefix}"
            try:
                cached = self._cache.get(cache_key)
                if cached:
                    return [(w, f) for w, f in json.loads(cached)]
            except Exception:
                logger.debug("Cache get failed for key=%s", cache_key)

        node = self._get_node(prefix)
        if node is None:
            return []

        selector = TopKSelector(k)
        self._collect_top_k(node, prefix, selector)
        out = [(item.word, item.frequency) for item in selector.drain_sorted()]

        if cache_key is not None:
            try:
                self._cache.set(cache_key, json.dumps(out), ex=CACHE_TTL_SECONDS)
            except Exception:
                logger.debug("Cache set failed for key=%s", cache_key)
        return out

    # --- Internal helpers ---

    def _get_node(self, prefix: str) -> Optional[TrieNode]:
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    @staticmethod
    def _collect_top_k(start: TrieNode, prefix: str, selector: TopKSelector) -> None:
        """
        Iterative pre-order DFS from `start`, offering every terminal word to `selector`.
        Children are visited in insertion order.
        """
        stack: List[Tuple[TrieNode, str]] = [(start, prefix)]
        visited = 0
        while stack:
            node, word = stack.pop()
            visited += 1
            if node.is_terminal:
                selector.offer(ScoredItem(word, node.frequency))
            # reversed so the first-inserted child is popped first
            for ch, child in reversed(list(node.children.items())):
                stack.append((child, word + ch))
        logger.debug("Visited %d nodes below prefix='%s'", visited, prefix)
