# Utilities.py
from __future__ import annotations

import logging
import math
import os
from typing import Any, Generator, Tuple, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


def coerce_number(value: Any, default: Number = 0) -> Number:
    """
    Coerce a frequency or priority to a number.

    Booleans count as 0/1, numeric strings are parsed, and anything
    non-numeric (None, NaN, garbage) falls back to `default`.
    Integral floats come back as int.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default

    if isinstance(number, float):
        if math.isnan(number):
            return default
        if number.is_integer():
            return int(number)
    return number


def LoadFile(filename: str, *, encoding: str = "utf-8") -> Generator[Tuple[str, int], None, None]:
    """
    Lazily read a word file line by line.

    Args:
        filename: Path to the file to read. Lines are `word` or `word<TAB>score`;
                  a missing or invalid score defaults to 1.
        encoding: File encoding (undecodable bytes are replaced).

    Yields:
        (str, int): (word, score) tuples, blank lines skipped.
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"File not found: {filename}")

    logger.debug("Loading file: %s", filename)

    with open(filename, "r", encoding=encoding, errors="replace") as buf:
        for raw_line in buf:
            line = raw_line.strip()
            if not line:
                continue

            if "\t" in line:
                word, score_s = line.split("\t", 1)
                try:
                    score = int(score_s.strip())
                except ValueError:
                    logger.debug("Invalid score %r for '%s', using 1", score_s, word)
                    score = 1
                yield word.strip(), score
            else:
                yield line, 1
