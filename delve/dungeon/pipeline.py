"""Pipeline orchestration for walker-carved dungeon generation.

Phases run in a fixed order; each one depends on the completed state of the
previous one:

    setup_cells -> network_neighbors -> determine_end_point -> spawn_walkers
    -> activate_walkers -> expand_end_point -> join_regions (optional)
    -> collect_floor_tiles -> spawn_guards

``generate`` is the public entry point. It returns a ``DungeonResult`` value and
never retries: on ``NoQualifyingGuardSiteError`` the caller re-invokes it with a
different seed.
"""
from __future__ import annotations

import dataclasses
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from delve.logging_utils import get_logger

from .cells import Cell, Coord2D
from .config import MIN_EXPANDABLE_SIZE, DungeonConfig, clamp_size
from .connectivity import join_regions
from .errors import DegenerateGridError, NoQualifyingGuardSiteError
from .grid import Grid
from .helpers import DungeonRandom, are_numbers_apart, as_random, filter_list
from .metrics import init_metrics
from .tiles import FLOOR_KINDS, CellKind
from .walker import Walker, carve_quota_for, max_steps_for

log = get_logger("delve.dungeon")


def ensure_expandable(grid: Grid) -> None:
    if grid.size < MIN_EXPANDABLE_SIZE:
        raise DegenerateGridError(grid.size, MIN_EXPANDABLE_SIZE)


@dataclass(frozen=True)
class DungeonResult:
    grid: Grid
    goal: Coord2D
    floor_tiles: Tuple[Cell, ...]
    guards: Tuple[Cell, ...]
    seed: int
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def goal_cell(self) -> Cell:
        return self.grid.cell(*self.goal)

    @property
    def spawn_points(self) -> List[Cell]:
        return self.grid.cells_of(CellKind.SPAWN)

    def is_within_grid(self, x: int, y: int) -> bool:
        return self.grid.is_within_grid(x, y)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "size": self.size,
            "goal": list(self.goal),
            "rows": self.grid.kind_rows(),
            "spawn_points": [list(c.coords) for c in self.spawn_points],
            "guards": [list(c.coords) for c in self.guards],
            "floor_tiles": [list(c.coords) for c in self.floor_tiles],
            "metrics": self.metrics,
        }


class DungeonGenerator:
    def __init__(self, config: DungeonConfig, rng: DungeonRandom):
        self.config = config
        self.rng = rng
        self.metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}
        self.grid: Optional[Grid] = None
        self.goal: Optional[Cell] = None
        self.walkers: List[Walker] = []
        self.floor_tiles: List[Cell] = []
        self.guards: List[Cell] = []

    @property
    def size(self) -> int:
        return self.grid.size

    def is_within_grid(self, x: int, y: int) -> bool:
        return self.grid.is_within_grid(x, y)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def setup_cells(self) -> Grid:
        grid = Grid.build(self.config.size)
        ensure_expandable(grid)
        self.grid = grid
        return grid

    def network_neighbors(self) -> None:
        self.grid.wire_neighbors()

    def determine_end_point(self) -> Cell:
        """Pick a non-corner border cell uniformly across the four edges."""
        n1 = self.rng.either(0, self.size - 1)
        n2 = self.rng.randint(1, self.size - 2)
        if self.rng.coin_flip():
            n1, n2 = n2, n1
        goal = self.grid.cell(n1, n2)
        goal.kind = CellKind.GOAL
        self.goal = goal
        return goal

    def spawn_walkers(self) -> List[Walker]:
        count = self.config.walker_count
        xs = self.rng.randints(1, self.size - 2, count)
        ys = self.rng.randints(1, self.size - 2, count)
        quota = carve_quota_for(self.grid, self.config.fill_ratio, count)
        budget = max_steps_for(self.grid, self.config.step_factor)
        self.walkers = [
            Walker(self.grid.cell(x, y), self.grid, self.rng, carve_quota=quota, max_steps=budget)
            for x, y in zip(xs, ys)
        ]
        return self.walkers

    def activate_walkers(self) -> int:
        carved = 0
        for i, walker in enumerate(self.walkers):
            carved += walker.walk()
            log.debug(event="walker_finished", walker=i, start=walker.start.coords, steps=walker.steps, carved=walker.carved)
        if self.config.enable_metrics:
            self.metrics["walkers"] = len(self.walkers)
            self.metrics["walker_steps"] = sum(w.steps for w in self.walkers)
            self.metrics["cells_carved"] = carved
        return carved

    def force_floor(self, x: int, y: int, spawn_point: bool = False) -> bool:
        if not self.is_within_grid(x, y):
            return False
        self.grid.cell(x, y).kind = CellKind.SPAWN if spawn_point else CellKind.FLOOR
        return True

    def expand_end_point(self) -> None:
        """Open the goal's surroundings: inward neighbour as spawn, diagonals as floor.

        Only strictly interior coordinates are forced, so for a border goal one
        orthogonal candidate survives and the outer ring stays intact.
        """
        x, y = self.goal.coords
        last = self.size - 1
        if y == 0 or y == last:
            self.force_floor(x, y - 1, True)
            self.force_floor(x, y + 1, True)
        if x == 0 or x == last:
            self.force_floor(x + 1, y, True)
            self.force_floor(x - 1, y, True)
        self.force_floor(x - 1, y + 1)
        self.force_floor(x + 1, y + 1)
        self.force_floor(x + 1, y - 1)
        self.force_floor(x - 1, y - 1)

    def join_regions(self) -> int:
        joined, carved = join_regions(self.grid, self.goal)
        if joined:
            log.debug(event="regions_joined", regions=joined, corridor_cells=carved)
        if self.config.enable_metrics:
            self.metrics["regions_joined"] = joined
            self.metrics["corridor_cells"] = carved
        return joined

    def collect_floor_tiles(self) -> List[Cell]:
        self.floor_tiles = [c for c in self.grid.iter_cells() if c.kind in FLOOR_KINDS]
        if self.config.enable_metrics:
            self.metrics["floor_tiles"] = len(self.floor_tiles)
            self.metrics["spawn_points"] = self.grid.count(CellKind.SPAWN)
        return self.floor_tiles

    def guard_candidates(self) -> List[Cell]:
        gx, gy = self.goal.coords
        half = self.size // 2
        return filter_list(
            self.floor_tiles,
            lambda c: are_numbers_apart(c.x, gx, half) or are_numbers_apart(c.y, gy, half),
        )

    def spawn_guards(self) -> List[Cell]:
        candidates = self.guard_candidates()
        if self.config.enable_metrics:
            self.metrics["guard_candidates"] = len(candidates)
        if not candidates:
            log.warn(event="guard_site_unavailable", seed=self.rng.seed, size=self.size, goal=self.goal.coords)
            raise NoQualifyingGuardSiteError(self.goal.coords, self.size)
        self.guards = [self.rng.choice(candidates) for _ in range(self.config.guard_count)]
        return self.guards

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------
    def run(self) -> DungeonResult:
        if self.config.enable_metrics:
            start = time.perf_counter()
            phase_times = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
                phase_times[label] = round((pe - ps) * 1000, 3)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        _phase("setup_cells", self.setup_cells)
        _phase("network_neighbors", self.network_neighbors)
        _phase("determine_end_point", self.determine_end_point)
        _phase("spawn_walkers", self.spawn_walkers)
        _phase("activate_walkers", self.activate_walkers)
        _phase("expand_end_point", self.expand_end_point)
        if self.config.connect_regions:
            _phase("join_regions", self.join_regions)
        _phase("collect_floor_tiles", self.collect_floor_tiles)
        _phase("spawn_guards", self.spawn_guards)

        if self.config.enable_metrics:
            self.metrics["runtime_ms"] = round((time.perf_counter() - start) * 1000, 3)
            self.metrics["phase_ms"] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.rng.seed,
            size=self.size,
            goal=self.goal.coords,
            floor_tiles=len(self.floor_tiles),
            runtime_ms=self.metrics.get("runtime_ms"),
        )
        return DungeonResult(
            grid=self.grid,
            goal=self.goal.coords,
            floor_tiles=tuple(self.floor_tiles),
            guards=tuple(self.guards),
            seed=self.rng.seed,
            metrics=self.metrics,
        )


def generate(size: Optional[int] = None, rng: "DungeonRandom | int | None" = None, *, config: Optional[DungeonConfig] = None) -> DungeonResult:
    """Generate one dungeon.

    Args:
        size: Requested grid size; clamped to [20, 50]. Defaults to ``config.size``.
        rng: A ``DungeonRandom``, an int seed, or None. When None, ``config.seed``
            is used if set, otherwise a fresh seed is drawn and recorded on the result.
        config: Tuning knobs (walker count, guard count, fill ratio...).

    Raises:
        NoQualifyingGuardSiteError: no floor tile is far enough from the goal.
        DegenerateGridError: the grid is too small for goal expansion.
    """
    config = config or DungeonConfig()
    if size is not None:
        clamped = clamp_size(size)
        if clamped != int(size):
            log.debug(event="size_clamped", requested=size, size=clamped)
        config = dataclasses.replace(config, size=clamped)
    if rng is None:
        rng = config.seed
    return DungeonGenerator(config, as_random(rng)).run()


__all__ = ["DungeonGenerator", "DungeonResult", "generate", "ensure_expandable"]
