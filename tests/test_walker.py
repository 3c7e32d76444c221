"""Random walker behaviour: carving, termination and confinement to the interior."""

import pytest

from delve.dungeon import CellKind, DungeonRandom, Grid, Walker
from delve.dungeon.connectivity import flood_walkable
from delve.dungeon.walker import carve, carve_quota_for, max_steps_for


@pytest.fixture
def grid():
    g = Grid.build(20)
    g.wire_neighbors()
    return g


def make_walker(grid, x=9, y=9, seed=4, quota=60, steps=2000):
    return Walker(grid.cell(x, y), grid, DungeonRandom(seed), carve_quota=quota, max_steps=steps)


def test_walker_must_start_inside_ring(grid):
    with pytest.raises(ValueError):
        make_walker(grid, x=0, y=5)
    with pytest.raises(ValueError):
        make_walker(grid, x=5, y=19)


def test_walk_stays_interior(grid):
    make_walker(grid).walk()
    for cell in grid.cells_of(CellKind.FLOOR):
        assert grid.is_interior_bounds(cell.x, cell.y), f"walker carved border cell {cell}"
    assert grid.count(CellKind.EDGE) == 20 * 20 - 18 * 18


def test_walk_stops_at_quota(grid):
    walker = make_walker(grid, quota=25, steps=10_000)
    carved = walker.walk()
    assert carved == 25
    assert walker.carved == 25
    assert grid.count(CellKind.FLOOR) == 25


def test_walk_stops_at_step_budget(grid):
    walker = make_walker(grid, quota=10_000, steps=40)
    walker.walk()
    assert walker.steps == 40
    assert 1 <= walker.carved <= 41


def test_zero_budget_carves_only_start(grid):
    walker = make_walker(grid, x=3, y=4, quota=10, steps=0)
    assert walker.walk() == 1
    assert grid.cells_of(CellKind.FLOOR) == [grid.cell(3, 4)]


def test_trail_is_connected(grid):
    walker = make_walker(grid, quota=80, steps=5000)
    walker.walk()
    reach = flood_walkable(grid, walker.start)
    assert len(reach) == grid.count(CellKind.FLOOR)


def test_walk_is_deterministic():
    rows = []
    for _ in range(2):
        g = Grid.build(24)
        g.wire_neighbors()
        make_walker(g, seed=1234).walk()
        rows.append(g.kind_rows())
    assert rows[0] == rows[1]


def test_carve_is_idempotent_and_monotone(grid):
    cell = grid.cell(5, 5)
    assert carve(cell) is True
    assert cell.kind is CellKind.FLOOR
    assert carve(cell) is False
    assert cell.kind is CellKind.FLOOR
    for kind in (CellKind.SPAWN, CellKind.GOAL, CellKind.EDGE):
        cell.kind = kind
        assert carve(cell) is False
        assert cell.kind is kind


def test_overlapping_walkers_share_cells(grid):
    first = make_walker(grid, seed=8, quota=40)
    first.walk()
    before = grid.count(CellKind.FLOOR)
    # Starting on an already carved cell does not count as new carving
    second = Walker(first.start, grid, DungeonRandom(8), carve_quota=40, max_steps=2000)
    second.walk()
    assert second.carved <= 40
    assert grid.count(CellKind.FLOOR) == before + second.carved


def test_quota_and_budget_formulas(grid):
    assert carve_quota_for(grid, 0.4, 2) == 65  # ceil(324 * 0.4 / 2)
    assert carve_quota_for(grid, 0.001, 8) == 1
    assert max_steps_for(grid, 4) == 1296
