import pytest
from cachesim.config import SimConfig
from cachesim.core.cache_config import ConfigurationError
from cachesim.runtime.sweep import default_associativities, sweep


def test_default_associativities():
    assert default_associativities(1) == [1]
    assert default_associativities(8) == [1, 2, 4, 8]


def test_sweep_covers_every_pair(write_trace):
    addresses = [0x00, 0x20, 0x40, 0x00, 0x20, 0x40, 0x04]
    path = write_trace(addresses)
    config = SimConfig(trace=str(path), cache_size_bytes=32, line_size_bytes=4)

    rows = sweep(config)

    assert len(rows) == 4 * 3
    assert {(r["associativity"], r["policy"]) for r in rows} == {
        (ways, policy) for ways in (1, 2, 4, 8) for policy in ("fifo", "counter", "lru")
    }
    for row in rows:
        assert row["probes"] == len(addresses)
        assert row["hits"] + row["misses"] == len(addresses)


def test_sweep_shows_conflict_misses_disappear(write_trace):
    # Three blocks that all map to set 0 of an 8-line direct mapped cache
    path = write_trace([0x00, 0x20, 0x40] * 4)
    config = SimConfig(trace=str(path), cache_size_bytes=32, line_size_bytes=4,
                       sweep_associativities=[1, 8], sweep_policies=["fifo"])

    rows = {r["associativity"]: r for r in sweep(config)}

    assert rows[1]["organization"] == "direct-mapped"
    assert rows[1]["hits"] == 0
    assert rows[8]["organization"] == "fully-associative"
    assert rows[8]["misses"] == 3
    assert rows[8]["hits"] == 9


def test_sweep_validates_grid_before_reading_trace(tmp_path):
    config = SimConfig(trace=str(tmp_path / "missing.trace"), cache_size_bytes=32, line_size_bytes=4,
                       sweep_associativities=[1, 3])
    with pytest.raises(ConfigurationError):
        sweep(config)
