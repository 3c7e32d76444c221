"""Generation error taxonomy.

Out-of-range sizes are not errors (they are clamped). Everything here propagates
to the caller of ``generate``; the generator itself never retries.
"""
from __future__ import annotations


class DungeonGenerationError(Exception):
    """Base class for failures during a generation run."""


class DegenerateGridError(DungeonGenerationError):
    def __init__(self, size: int, minimum: int):
        self.size = size
        self.minimum = minimum
        super().__init__(f"grid size {size} too small for goal expansion (minimum {minimum})")


class NoQualifyingGuardSiteError(DungeonGenerationError):
    def __init__(self, goal, size: int):
        self.goal = goal
        self.size = size
        super().__init__(
            f"no floor tile at least {size // 2} cells from goal {goal} on either axis; re-run with a new seed"
        )


__all__ = ["DungeonGenerationError", "DegenerateGridError", "NoQualifyingGuardSiteError"]
