from __future__ import annotations
import logging
import time
from typing import Any, Dict, Iterable, Tuple

from ..config import SimConfig
from ..core.model import CacheModel
from ..trace.reader import read_trace
from ..utils.logging import get_logger

logger = get_logger(__name__)


def simulate(model: CacheModel, addresses: Iterable[int]) -> CacheModel:
    """Feeds addresses through the model one at a time, in order."""
    debug = logger.isEnabledFor(logging.DEBUG)
    for address in addresses:
        result = model.access(address)
        if debug:
            logger.debug("Address: %#010x | Tag: %#x | Set: %d | %s",
                         address, result.tag, result.set_index, "Hit" if result.hit else "Miss")
    return model


def run(config: SimConfig) -> Tuple[CacheModel, Dict[str, Any]]:
    """
    Runs one trace through one cache.

    Configuration is validated before the trace is opened, so a bad geometry
    fails without touching the file system.
    """
    cache_config = config.cache_config()
    model = CacheModel(cache_config)
    trace = config.trace_path()

    logger.info("Simulating %s cache (%d bytes, %d-byte lines, %d-way, %s)",
                cache_config.organization_name, cache_config.cache_size_bytes,
                cache_config.line_size_bytes, cache_config.associativity, cache_config.policy)

    addresses = (record.address for record in read_trace(trace))
    start = time.perf_counter()
    simulate(model, addresses)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    stats = model.get_stats()
    stats.update(cache_config.to_dict())
    stats["trace"] = config.trace
    stats["elapsed_ms"] = elapsed_ms
    return model, stats
