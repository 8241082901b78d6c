from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

from .policy import ReplacementPolicy

Organization = Literal["fully-associative", "direct-mapped", "set-associative"]

ORGANIZATIONS = ("fully-associative", "direct-mapped", "set-associative")
ADDRESS_BITS = 32


class ConfigurationError(ValueError):
    """Raised when cache parameters cannot describe a valid cache."""


def is_power_of_two(n: int) -> bool:
    return (n > 0) and (n & (n - 1) == 0)


@dataclass
class CacheConfig:
    """Geometry and replacement policy of a single cache."""
    cache_size_bytes: int = 32 * 1024
    line_size_bytes: int = 64
    associativity: int = 1
    policy: ReplacementPolicy | str = ReplacementPolicy.FIFO
    organization: Organization | None = None

    # Derived properties
    total_lines: int = field(init=False)
    num_sets: int = field(init=False)

    def __post_init__(self):
        for name in ("cache_size_bytes", "line_size_bytes", "associativity"):
            value = getattr(self, name)
            # bool is an int subclass but never a size
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}.")

        if not is_power_of_two(self.cache_size_bytes):
            raise ConfigurationError(f"Cache size must be a power of two, got {self.cache_size_bytes}.")
        if self.cache_size_bytes > 1 << ADDRESS_BITS:
            raise ConfigurationError("Cache size cannot exceed the 32-bit address space.")
        if not is_power_of_two(self.line_size_bytes):
            raise ConfigurationError(f"Line size must be a power of two, got {self.line_size_bytes}.")
        if self.line_size_bytes > self.cache_size_bytes:
            raise ConfigurationError("Line size cannot be larger than the cache size.")

        try:
            if isinstance(self.policy, str):
                self.policy = self.policy.lower()
            self.policy = ReplacementPolicy(self.policy)
        except ValueError:
            choices = ", ".join(p.value for p in ReplacementPolicy)
            raise ConfigurationError(f"Unknown replacement policy '{self.policy}' (expected one of: {choices}).") from None

        self.total_lines = self.cache_size_bytes // self.line_size_bytes

        if self.organization == "fully-associative":
            self.associativity = self.total_lines
        elif self.organization == "direct-mapped":
            self.associativity = 1
        elif self.organization not in (None, "set-associative"):
            raise ConfigurationError(f"Unknown cache organization '{self.organization}'.")

        if not is_power_of_two(self.associativity):
            raise ConfigurationError(f"Associativity must be a power of two, got {self.associativity}.")
        if self.total_lines % self.associativity != 0:
            raise ConfigurationError(
                f"Associativity {self.associativity} does not evenly divide {self.total_lines} lines.")

        self.num_sets = self.total_lines // self.associativity

    @property
    def offset_bits(self) -> int:
        return self.line_size_bytes.bit_length() - 1

    @property
    def index_bits(self) -> int:
        return self.num_sets.bit_length() - 1

    @property
    def organization_name(self) -> str:
        """Name of the classic organization these parameters reproduce."""
        if self.num_sets == 1:
            return "fully-associative"
        if self.associativity == 1:
            return "direct-mapped"
        return "set-associative"

    def to_dict(self) -> dict:
        return {
            "cache_size_bytes": self.cache_size_bytes,
            "line_size_bytes": self.line_size_bytes,
            "associativity": self.associativity,
            "policy": self.policy.value,
            "organization": self.organization_name,
            "total_lines": self.total_lines,
            "num_sets": self.num_sets,
        }
