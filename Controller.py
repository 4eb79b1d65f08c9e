# Controller.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO, Tuple

from Model import Model

DEFAULT_FILE = os.getenv("WORDS_FILE")
DEFAULT_TOP_K = int(os.getenv("TOP_K", "5"))

SEED_VOCABULARY: List[Tuple[str, int]] = [
    ("apple", 10),
    ("application", 5),
    ("banana", 3),
    ("book", 8),
    ("binary", 1),
    ("bee", 7),
    ("bat", 4),
    ("ball", 2),
]

DEMO_REQUESTS: List[Tuple[str, int]] = [
    ("b", 0),
    ("app", 0),
    ("bi", 1),
    ("ba", 0),
]

logger = logging.getLogger(__name__)


class Controller:
    """
    Wires up the Model with a vocabulary source and drives lookups from the command line.
    """

    def __init__(self, filename: Optional[str] = None, *, top_k: int = DEFAULT_TOP_K,
                 model: Optional[Model] = None) -> None:
        self.filename = filename
        self.model = model if model is not None else Model(top_k=top_k)
        self.model.top_k = top_k

    def construct(self) -> int:
        """Build the trie from the configured file, or from the seed vocabulary."""
        if self.filename:
            logger.info("Building trie from %s ...", self.filename)
            return self.model.construct(self.filename)
        return self.model.seed(SEED_VOCABULARY)

    def contains(self, word: str) -> bool:
        return self.model.contains(word)

    def suggestions(self, prefix: str, *, k: Optional[int] = None) -> List[str]:
        return self.model.list(prefix, k)

    def run_queue(self, requests: List[Tuple[str, float]], out: Optional[TextIO] = None) -> None:
        """Queue (prefix, priority) pairs and print them as they are served."""
        out = out or sys.stdout
        for prefix, priority in requests:
            self.model.submit(prefix, priority)
        for served in self.model.dispatch():
            out.write(f'priority={served.priority}, prefix="{served.request.prefix}" -> {served.results}\n')

    def run_demo(self, out: Optional[TextIO] = None) -> None:
        out = out or sys.stdout
        out.write("Autocomplete check:\n")
        for prefix in ("app", "b"):
            out.write(f"{prefix:<4}-> {self.suggestions(prefix)}\n")
        out.write("Serving queue by priority:\n")
        self.run_queue(DEMO_REQUESTS, out)


def _parse_request(value: str) -> Tuple[str, float]:
    """
    'prefix' or 'prefix:priority'. The text after the last colon is only a
    priority when it is numeric, so 'a:b' is the prefix 'a:b' at priority 0.
    """
    prefix, sep, priority = value.rpartition(":")
    if sep:
        try:
            return prefix, float(priority)
        except ValueError:
            pass
    return value, 0


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Trie autocomplete with prioritized requests")
    p.add_argument("requests", nargs="*", type=_parse_request, metavar="PREFIX[:PRIORITY]",
                   help="Prefixes to queue and serve; runs the demo when omitted")
    p.add_argument("-f", "--file", default=DEFAULT_FILE, help="Word list file (word or word<TAB>frequency)")
    p.add_argument("-k", "--top-k", type=int, default=DEFAULT_TOP_K, help="Top-K suggestions")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    app = Controller(args.file, top_k=args.top_k)
    try:
        app.construct()
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    if args.requests:
        app.run_queue(args.requests)
    else:
        app.run_demo()
    return 0


if __name__ == "__main__":
    sys.exit(main())
