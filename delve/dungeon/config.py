import os
from dataclasses import dataclass
from typing import Optional

MIN_SIZE = 20
MAX_SIZE = 50
# Smallest grid where the goal's inward neighbour and diagonals stay interior
MIN_EXPANDABLE_SIZE = 5

_TRUTHY_OFF = {"0", "false", "no", ""}


def clamp_size(size) -> int:
    size = int(size)
    if size < MIN_SIZE:
        return MIN_SIZE
    if size > MAX_SIZE:
        return MAX_SIZE
    return size


@dataclass
class DungeonConfig:
    size: int = 30
    seed: Optional[int] = None
    walker_count: int = 2
    guard_count: int = 6
    # Share of the interior the walkers carve between them
    fill_ratio: float = 0.4
    # Per-walker step budget, in multiples of the interior area
    step_factor: int = 4
    connect_regions: bool = True
    enable_metrics: bool = True

    def __post_init__(self):
        self.size = clamp_size(self.size)
        if self.walker_count < 1:
            raise ValueError("walker_count must be at least 1")
        if self.guard_count < 0:
            raise ValueError("guard_count cannot be negative")
        if not 0 < self.fill_ratio <= 1:
            raise ValueError("fill_ratio must be in (0, 1]")
        if self.step_factor < 1:
            raise ValueError("step_factor must be at least 1")

    @classmethod
    def from_env(cls, **overrides) -> "DungeonConfig":
        """Build a config from ``DUNGEON_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        values = {}
        int_keys = {
            "DUNGEON_SIZE": "size",
            "DUNGEON_WALKER_COUNT": "walker_count",
            "DUNGEON_GUARD_COUNT": "guard_count",
            "DUNGEON_STEP_FACTOR": "step_factor",
        }
        bool_keys = {
            "DUNGEON_CONNECT_REGIONS": "connect_regions",
            "DUNGEON_ENABLE_GENERATION_METRICS": "enable_metrics",
        }
        for env_key, attr in int_keys.items():
            if env_key in os.environ:
                values[attr] = int(os.environ[env_key])
        for env_key, attr in bool_keys.items():
            if env_key in os.environ:
                values[attr] = os.environ[env_key].strip().lower() not in _TRUTHY_OFF
        if "DUNGEON_FILL_RATIO" in os.environ:
            values["fill_ratio"] = float(os.environ["DUNGEON_FILL_RATIO"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = ["DungeonConfig", "clamp_size", "MIN_SIZE", "MAX_SIZE", "MIN_EXPANDABLE_SIZE"]
