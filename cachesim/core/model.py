from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List

from .address import AddressDecoder
from .cache_config import CacheConfig
from .cache_set import CacheSet, ProbeOutcome


@dataclass(frozen=True)
class AccessResult:
    address: int
    set_index: int
    tag: int
    outcome: ProbeOutcome

    @property
    def hit(self) -> bool:
        return self.outcome.is_hit


class CacheModel:
    """
    A single cache of configurable associativity.

    Associativity equal to the number of lines gives a fully associative
    cache, associativity 1 gives a direct mapped cache, and anything in
    between a set associative one. This class only decides hit or miss;
    it holds no data and has no notion of timing.
    """

    def __init__(self, config: CacheConfig):
        self.config = config
        self.decoder = AddressDecoder(config.line_size_bytes, config.num_sets)
        self.sets: List[CacheSet] = [CacheSet(config.associativity, config.policy)
                                     for _ in range(config.num_sets)]
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @property
    def probes(self) -> int:
        return self.hits + self.misses

    def access(self, address: int) -> AccessResult:
        """Probes the cache and returns the decoded outcome."""
        set_index, tag = self.decoder.decode(address)
        outcome = self.sets[set_index].probe(tag)

        if outcome.is_hit:
            self.hits += 1
        else:
            self.misses += 1
            if outcome is ProbeOutcome.EVICT:
                self.evictions += 1

        return AccessResult(address, set_index, tag, outcome)

    def probe(self, address: int) -> bool:
        """Returns True on a hit."""
        return self.access(address).hit

    def hit_rate(self) -> float | None:
        """Fraction of probes that hit, or None before the first probe."""
        if self.probes == 0:
            return None
        return self.hits / self.probes

    def miss_rate(self) -> float | None:
        if self.probes == 0:
            return None
        return self.misses / self.probes

    def get_stats(self) -> Dict[str, Any]:
        """Returns a dictionary of cache statistics."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "probes": self.probes,
            "hit_rate": self.hit_rate(),
            "miss_rate": self.miss_rate(),
        }
