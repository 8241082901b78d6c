from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cache_set import CacheSet


class ReplacementPolicy(str, Enum):
    """Victim selection for a full set.

    FIFO     - evict the longest-resident line, whatever its access history.
    COUNTER  - evict the line with the fewest hits (lowest index on ties).
               The hit counter survives eviction, so a line that has never
               been hit stays the preferred victim until it scores a hit.
    LRU      - evict the line whose last fill or hit is the oldest.
    """

    FIFO = "fifo"
    COUNTER = "counter"
    LRU = "lru"

    def __str__(self) -> str:
        return self.value

    def on_hit(self, cache_set: CacheSet, index: int):
        line = cache_set.lines[index]
        if self is ReplacementPolicy.COUNTER:
            line.counter += 1
        elif self is ReplacementPolicy.LRU:
            line.counter = cache_set.clock

    def on_fill(self, cache_set: CacheSet, index: int):
        """Bookkeeping for a line that was empty before this miss."""
        if self is ReplacementPolicy.FIFO:
            cache_set.eviction_order.append(index)
        elif self is ReplacementPolicy.COUNTER:
            cache_set.lines[index].counter = 0
        else:
            cache_set.lines[index].counter = cache_set.clock

    def on_replace(self, cache_set: CacheSet, index: int):
        """Bookkeeping for a victim that now holds a new tag."""
        if self is ReplacementPolicy.FIFO:
            # The victim was at the front; it becomes the newest entry.
            cache_set.eviction_order.rotate(-1)
        elif self is ReplacementPolicy.LRU:
            cache_set.lines[index].counter = cache_set.clock

    def select_victim(self, cache_set: CacheSet) -> int:
        return _VICTIM_SELECTORS[self](cache_set)


def _oldest_inserted(cache_set: CacheSet) -> int:
    return cache_set.eviction_order[0]


def _lowest_counter(cache_set: CacheSet) -> int:
    lines = cache_set.lines
    # min() keeps the first of equal keys, so ties go to the lowest index.
    return min(range(len(lines)), key=lambda i: lines[i].counter)


_VICTIM_SELECTORS = {
    ReplacementPolicy.FIFO: _oldest_inserted,
    ReplacementPolicy.COUNTER: _lowest_counter,
    ReplacementPolicy.LRU: _lowest_counter,
}
