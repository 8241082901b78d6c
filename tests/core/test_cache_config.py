import pytest
from cachesim.core.cache_config import CacheConfig, ConfigurationError, is_power_of_two
from cachesim.core.policy import ReplacementPolicy


def test_derived_geometry():
    config = CacheConfig(cache_size_bytes=1024, line_size_bytes=64, associativity=2)
    assert config.total_lines == 16
    assert config.num_sets == 8
    assert config.offset_bits == 6
    assert config.index_bits == 3
    assert config.organization_name == "set-associative"
    assert config.policy is ReplacementPolicy.FIFO


def test_policy_accepts_string_values():
    assert CacheConfig(policy="counter").policy is ReplacementPolicy.COUNTER
    assert CacheConfig(policy="lru").policy is ReplacementPolicy.LRU


def test_policy_lookup_ignores_case():
    assert CacheConfig(policy="FIFO").policy is ReplacementPolicy.FIFO
    assert CacheConfig(policy="Lru").policy is ReplacementPolicy.LRU


def test_fully_associative_organization_uses_every_line():
    config = CacheConfig(cache_size_bytes=256, line_size_bytes=16, associativity=4,
                         organization="fully-associative")
    assert config.associativity == 16
    assert config.num_sets == 1
    assert config.index_bits == 0
    assert config.organization_name == "fully-associative"


def test_direct_mapped_organization_uses_one_way():
    config = CacheConfig(cache_size_bytes=256, line_size_bytes=16, associativity=4,
                         organization="direct-mapped")
    assert config.associativity == 1
    assert config.num_sets == 16
    assert config.organization_name == "direct-mapped"


def test_organization_name_follows_degenerate_associativity():
    assert CacheConfig(cache_size_bytes=64, line_size_bytes=8, associativity=8).organization_name == "fully-associative"
    assert CacheConfig(cache_size_bytes=64, line_size_bytes=8, associativity=1).organization_name == "direct-mapped"


def test_rejects_cache_size_not_power_of_two():
    with pytest.raises(ConfigurationError, match="Cache size must be a power of two"):
        CacheConfig(cache_size_bytes=100, line_size_bytes=4)


def test_rejects_associativity_three_for_eight_lines():
    with pytest.raises(ConfigurationError, match="Associativity"):
        CacheConfig(cache_size_bytes=32, line_size_bytes=4, associativity=3)


def test_rejects_associativity_that_does_not_divide_line_count():
    with pytest.raises(ConfigurationError, match="does not evenly divide"):
        CacheConfig(cache_size_bytes=32, line_size_bytes=4, associativity=16)


@pytest.mark.parametrize("kwargs, message", [
    (dict(line_size_bytes=48), "Line size must be a power of two"),
    (dict(cache_size_bytes=32, line_size_bytes=64), "larger than the cache size"),
    (dict(cache_size_bytes=1 << 33), "32-bit"),
    (dict(associativity=0), "Associativity must be a power of two"),
    (dict(policy="random"), "Unknown replacement policy"),
    (dict(organization="two-level"), "Unknown cache organization"),
    (dict(cache_size_bytes="32KB"), "cache_size_bytes must be an integer"),
    (dict(line_size_bytes=64.0), "line_size_bytes must be an integer"),
    (dict(associativity=True), "associativity must be an integer"),
])
def test_rejects_invalid_parameters(kwargs, message):
    with pytest.raises(ConfigurationError, match=message):
        CacheConfig(**kwargs)


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_is_power_of_two():
    assert [n for n in range(-2, 17) if is_power_of_two(n)] == [1, 2, 4, 8, 16]


def test_to_dict():
    config = CacheConfig(cache_size_bytes=8, line_size_bytes=4, policy="counter",
                         organization="fully-associative")
    assert config.to_dict() == {
        "cache_size_bytes": 8,
        "line_size_bytes": 4,
        "associativity": 2,
        "policy": "counter",
        "organization": "fully-associative",
        "total_lines": 2,
        "num_sets": 1,
    }
