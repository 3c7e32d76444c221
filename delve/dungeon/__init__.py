"""Public dungeon package interface."""

from .cells import Cell
from .config import MAX_SIZE, MIN_SIZE, DungeonConfig, clamp_size
from .errors import DegenerateGridError, DungeonGenerationError, NoQualifyingGuardSiteError
from .grid import Grid
from .helpers import DungeonRandom
from .pipeline import DungeonGenerator, DungeonResult, generate
from .tiles import CellKind
from .walker import Walker

__all__ = [
    "Cell",
    "CellKind",
    "DungeonConfig",
    "DungeonGenerator",
    "DungeonRandom",
    "DungeonResult",
    "DungeonGenerationError",
    "DegenerateGridError",
    "NoQualifyingGuardSiteError",
    "Grid",
    "Walker",
    "generate",
    "clamp_size",
    "MIN_SIZE",
    "MAX_SIZE",
]
