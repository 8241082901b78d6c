from __future__ import annotations
from typing import Any, Dict, List

from ..config import SimConfig
from ..core.model import CacheModel
from ..trace.reader import load_addresses
from ..utils.logging import get_logger
from .simulator import simulate

logger = get_logger(__name__)


def default_associativities(total_lines: int) -> List[int]:
    """Every power of two from direct mapped up to fully associative."""
    values = []
    ways = 1
    while ways <= total_lines:
        values.append(ways)
        ways *= 2
    return values


def sweep(config: SimConfig) -> List[Dict[str, Any]]:
    """
    Runs the same trace through one independent cache per
    (associativity, policy) pair and returns a row of statistics for each.

    All geometries are validated up front so a bad grid fails before any
    simulation work is done.
    """
    total_lines = config.cache_config(associativity=1).total_lines
    associativities = config.sweep_associativities or default_associativities(total_lines)
    cache_configs = [config.cache_config(associativity=ways, policy=policy)
                     for ways in associativities
                     for policy in config.sweep_policies]

    addresses = load_addresses(config.trace_path())
    logger.info("Sweeping %d cache configurations over %d addresses", len(cache_configs), len(addresses))

    rows = []
    for cache_config in cache_configs:
        model = simulate(CacheModel(cache_config), addresses)
        row = cache_config.to_dict()
        row.update(model.get_stats())
        rows.append(row)
        logger.debug("%d-way %s: hit rate %s", cache_config.associativity, cache_config.policy, row["hit_rate"])
    return rows
