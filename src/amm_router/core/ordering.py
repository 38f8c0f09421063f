"""
Ordering utilities: bounded best-first lists with stable tie-breaking.

Key behaviours:
- Items are ranked by a caller-supplied key (lower key is better).
- Insertion is stable: an item whose key equals an existing one goes after it,
  so earlier candidates win ties.
- A bounded list evicts its worst entry once it exceeds `max_size`.

Notes:
- Keys are plain tuples of integers/ExactFractions; no Decimal.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Callable, Iterable, List, Optional, TypeVar

from .exc import AmountDomainError

T = TypeVar("T")


def sorted_insert(
    items: List[T],
    item: T,
    *,
    max_size: int,
    key: Callable[[T], object],
) -> Optional[T]:
    """Insert `item` into the key-sorted list `items` in place.

    Returns the evicted item when the list would exceed `max_size` (which may
    be `item` itself if it ranks last), else None.
    """
    if max_size <= 0:
        raise AmountDomainError(f"max_size must be > 0, got {max_size}")
    if len(items) > max_size:
        raise AmountDomainError("list already exceeds max_size")

    k = key(item)
    if len(items) == max_size and not (k < key(items[-1])):
        # Not strictly better than the current worst: ties keep the earlier one.
        return item

    pos = bisect_right([key(x) for x in items], k)
    items.insert(pos, item)
    if len(items) > max_size:
        return items.pop()
    return None


def stable_sort_best_first(
    items: Iterable[T],
    *,
    key: Callable[[T], object],
) -> List[T]:
    """Stable sort ascending by key (best first).

    Python's built-in sort is stable, so items with equal keys retain their
    original insertion order.
    """
    return sorted(items, key=key)


__all__ = [
    "sorted_insert",
    "stable_sort_best_first",
]
