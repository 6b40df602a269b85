"""
Pagination helpers shared by the song endpoints and service.
"""

import re
from typing import List, Optional


DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

# SQLite integers are signed 64-bit.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(value: Optional[str], default: int) -> int:
    """Parse ``value`` as an integer, returning ``default`` on failure.

    Query parameters such as ``limit`` and ``offset`` arrive as raw
    strings.  A missing, non‑numeric or out‑of‑range value never fails
    the request; the default is used instead.
    """
    if value is None or not _INTEGER_RE.fullmatch(value):
        return default
    number = int(value)
    if not fits_int64(number):
        return default
    return number


def fits_int64(number: int) -> bool:
    """Return whether ``number`` can be bound as a SQLite integer."""
    return INT64_MIN <= number <= INT64_MAX


def split_verses(text: str) -> List[str]:
    """Split lyric text into verses on newline boundaries.

    Empty text yields a single empty verse, and blank lines are kept
    as empty verses.
    """
    return text.split("\n")


def paginate(items: List[str], page: int, per_page: int) -> List[str]:
    """Return the ``page``‑th slice (1‑based) of ``per_page`` items."""
    if page < 1 or per_page < 1:
        raise ValueError("page and per_page must be positive")
    start = (page - 1) * per_page
    return items[start:start + per_page]
