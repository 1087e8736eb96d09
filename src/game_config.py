"""
game configuration
"""
from dataclasses import dataclass, fields, asdict
from pathlib import Path

import yaml

from game_spawn import SPAWN_POLICIES


def _is_power_of_two(value):
    return value > 0 and value & (value - 1) == 0


@dataclass
class GameConfig:
    """settings for one game session"""

    size: int = 4
    base: int = 2  # value of a freshly spawned tile
    win: int = 2048
    spawn_policy: str = 'anywhere'  # or 'adjacent'
    start_tiles: int = 2
    double_probability: float = 0.0  # chance a spawn is 2 * base
    seed: object = None

    def __post_init__(self):
        """validate configuration"""
        for name in ('size', 'base', 'win', 'start_tiles'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if isinstance(self.double_probability, bool) or \
                not isinstance(self.double_probability, (int, float)):
            raise ValueError(
                f"double_probability must be a number, got {self.double_probability!r}")
        if not isinstance(self.spawn_policy, str):
            raise ValueError(f"spawn_policy must be a string, got {self.spawn_policy!r}")
        if self.size < 2:
            raise ValueError(f"size must be at least 2, got {self.size}")
        if not _is_power_of_two(self.base):
            raise ValueError(f"base must be a power of two, got {self.base}")
        if self.win <= self.base or self.win % self.base or not _is_power_of_two(self.win):
            raise ValueError(
                f"win must be a power of two above base {self.base}, got {self.win}")
        if self.spawn_policy not in SPAWN_POLICIES:
            raise ValueError(
                f"spawn_policy must be one of {SPAWN_POLICIES}, got {self.spawn_policy!r}")
        if not 1 <= self.start_tiles <= self.size * self.size:
            raise ValueError(f"start_tiles out of range: {self.start_tiles}")
        if not 0.0 <= self.double_probability <= 1.0:
            raise ValueError(
                f"double_probability must be within [0, 1], got {self.double_probability}")

    @classmethod
    def from_dict(cls, values):
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path):
        """load a config from a yaml mapping"""
        with Path(path).open('r', encoding='utf-8') as f:
            try:
                values = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: malformed yaml: {e}") from e
        if not isinstance(values, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return cls.from_dict(values)

    def replace(self, **overrides):
        """copy with the given (non-None) fields changed"""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**values)
