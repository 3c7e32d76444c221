"""Random walker that carves floor through the grid interior.

A walker marks its current cell FLOOR, then steps to a uniformly chosen
orthogonal neighbour that is strictly inside the border ring. It stops once it
has newly carved ``carve_quota`` cells, or after ``max_steps`` moves, or when no
interior neighbour exists. The step budget makes termination unconditional.

Carving only ever turns NULL into FLOOR, so re-visiting a cell (by the same
walker or another one) changes nothing.
"""
from __future__ import annotations

import math

from .cells import Cell
from .grid import Grid
from .helpers import DungeonRandom
from .tiles import CellKind


def carve_quota_for(grid: Grid, fill_ratio: float, walker_count: int) -> int:
    return max(1, math.ceil(grid.interior_area * fill_ratio / walker_count))


def max_steps_for(grid: Grid, step_factor: int) -> int:
    return grid.interior_area * step_factor


def carve(cell: Cell) -> bool:
    """Turn an unassigned cell into floor. Returns True if the kind changed."""
    if cell.kind is CellKind.NULL:
        cell.kind = CellKind.FLOOR
        return True
    return False


class Walker:
    def __init__(self, start: Cell, grid: Grid, rng: DungeonRandom, *, carve_quota: int, max_steps: int):
        if not grid.is_interior_bounds(start.x, start.y):
            raise ValueError(f"walker must start inside the border ring, got {start.coords}")
        self.grid = grid
        self.rng = rng
        self.current = start
        self.start = start
        self.carve_quota = carve_quota
        self.max_steps = max_steps
        self.steps = 0
        self.carved = 0

    def step_options(self):
        return [n for n in self.grid.neighbors(self.current.x, self.current.y) if self.grid.is_interior_bounds(n.x, n.y)]

    @property
    def finished(self) -> bool:
        return self.carved >= self.carve_quota or self.steps >= self.max_steps

    def walk(self) -> int:
        while True:
            if carve(self.current):
                self.carved += 1
            if self.finished:
                break
            options = self.step_options()
            if not options:
                break
            self.current = self.rng.choice(options)
            self.steps += 1
        return self.carved

    def __repr__(self):
        return f"Walker(at={self.current.coords}, steps={self.steps}, carved={self.carved})"
