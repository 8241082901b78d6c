from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
import yaml
from pathlib import Path

from .core.cache_config import CacheConfig, ConfigurationError
from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SimConfig:
    """Cache simulator run configuration."""
    # Input trace
    trace: str = ""

    # Config file
    config_file: str = ""

    # Reporting
    report_dir: str = "out/default_run"
    log_level: str = "INFO"

    # Cache geometry and policy
    cache_size_bytes: int = 32 * 1024
    line_size_bytes: int = 64
    associativity: int = 1
    organization: str | None = None  # fully-associative, direct-mapped, set-associative
    policy: str = "fifo"  # fifo, counter, lru

    # Sweep parameters (empty associativity list = every power of two up to the line count)
    sweep_associativities: List[int] = field(default_factory=list)
    sweep_policies: List[str] = field(default_factory=lambda: ["fifo", "counter", "lru"])

    def cache_config(self, associativity: int | None = None, policy: str | None = None) -> CacheConfig:
        """Builds the validated cache geometry, optionally overriding associativity and policy."""
        if associativity is not None:
            return CacheConfig(
                cache_size_bytes=self.cache_size_bytes,
                line_size_bytes=self.line_size_bytes,
                associativity=associativity,
                policy=policy or self.policy,
            )
        return CacheConfig(
            cache_size_bytes=self.cache_size_bytes,
            line_size_bytes=self.line_size_bytes,
            associativity=self.associativity,
            policy=policy or self.policy,
            organization=self.organization,
        )

    def trace_path(self) -> str:
        """The trace file to read; fails before any simulation work when none is set."""
        if not self.trace:
            raise ConfigurationError("No trace file given (pass one on the command line or set 'trace' in the config file).")
        return self.trace

    def update_from_yaml(self, yaml_path: str):
        """Updates config fields from a YAML file."""
        with open(yaml_path, 'r') as f:
            yaml_config = yaml.safe_load(f) or {}
        for key, value in yaml_config.items():
            # A single sweep value may be written as a scalar
            if key in ("sweep_associativities", "sweep_policies") and not isinstance(value, list):
                value = [value]
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning("Ignoring unknown config key '%s' in %s", key, yaml_path)

    @classmethod
    def from_args(cls, args) -> SimConfig:
        """Factory method to create a SimConfig from parsed argparse arguments."""
        config = cls()

        # 1. Load from YAML config file if provided
        if hasattr(args, 'config') and args.config:
            config.config_file = args.config
            if Path(config.config_file).exists():
                config.update_from_yaml(config.config_file)
            else:
                logger.warning("Config file %s not found.", config.config_file)

        # 2. Override with command-line arguments
        arg_dict = vars(args)
        for key, value in arg_dict.items():
            if value is not None and hasattr(config, key):
                setattr(config, key, value)

        return config
