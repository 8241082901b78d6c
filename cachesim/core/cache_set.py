from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from .policy import ReplacementPolicy


@dataclass
class CacheLine:
    """A single slot in a cache set. `tag` is meaningful only while `in_use`."""
    tag: int = 0
    in_use: bool = False
    counter: int = 0


class ProbeOutcome(Enum):
    HIT = "hit"
    FILL = "fill"      # miss into a free line
    EVICT = "evict"    # miss that replaced a resident line

    @property
    def is_hit(self) -> bool:
        return self is ProbeOutcome.HIT


class CacheSet:
    """A fixed number of lines plus the per-set state the policy needs.

    `eviction_order` holds line indices, oldest first, and is only populated
    under FIFO. `clock` counts probes to this set and is used to stamp lines
    under LRU.
    """

    def __init__(self, associativity: int, policy: ReplacementPolicy):
        self.policy = policy
        self.lines: List[CacheLine] = [CacheLine() for _ in range(associativity)]
        self.eviction_order: Deque[int] = deque(maxlen=associativity)
        self.clock = 0

    def find_line(self, tag: int) -> Optional[int]:
        """Index of the in-use line holding `tag`, if any."""
        for index, line in enumerate(self.lines):
            if line.in_use and line.tag == tag:
                return index
        return None

    def find_free_line(self) -> Optional[int]:
        for index, line in enumerate(self.lines):
            if not line.in_use:
                return index
        return None

    def probe(self, tag: int) -> ProbeOutcome:
        """Looks up `tag`, installing it on a miss."""
        self.clock += 1

        index = self.find_line(tag)
        if index is not None:
            self.policy.on_hit(self, index)
            return ProbeOutcome.HIT

        index = self.find_free_line()
        if index is not None:
            line = self.lines[index]
            line.in_use = True
            line.tag = tag
            self.policy.on_fill(self, index)
            return ProbeOutcome.FILL

        index = self.policy.select_victim(self)
        self.lines[index].tag = tag
        self.policy.on_replace(self, index)
        return ProbeOutcome.EVICT

    def resident_tags(self) -> List[int]:
        return [line.tag for line in self.lines if line.in_use]
