"""Goal selection and the widening of its surroundings."""

import pytest

from delve.dungeon import CellKind


def _script(rng, *, either, randint, coin):
    rng.either = lambda a, b: either
    rng.randint = lambda lo, hi: randint
    rng.coin_flip = lambda: coin
    return rng


def test_goal_on_top_border(staged_generator):
    gen = staged_generator()
    _script(gen.rng, either=0, randint=7, coin=False)
    goal = gen.determine_end_point()
    assert goal.coords == (0, 7)
    assert goal.kind is CellKind.GOAL


def test_coin_flip_swaps_axes(staged_generator):
    gen = staged_generator()
    _script(gen.rng, either=19, randint=4, coin=True)
    assert gen.determine_end_point().coords == (4, 19)


def test_goal_never_in_corner(staged_generator):
    for seed in range(200):
        gen = staged_generator(seed=seed)
        x, y = gen.determine_end_point().coords
        assert x in (0, 19) or y in (0, 19)
        assert (x, y) not in {(0, 0), (0, 19), (19, 0), (19, 19)}
        assert gen.grid.count(CellKind.GOAL) == 1


def test_goal_reaches_all_four_edges(staged_generator):
    sides = set()
    for seed in range(200):
        x, y = staged_generator(seed=seed).determine_end_point().coords
        sides.add("top" if x == 0 else "bottom" if x == 19 else "left" if y == 0 else "right")
    assert sides == {"top", "bottom", "left", "right"}


def test_expansion_top_edge_scenario(staged_generator):
    gen = staged_generator()
    _script(gen.rng, either=0, randint=7, coin=False)
    gen.determine_end_point()
    gen.expand_end_point()
    cell = gen.grid.cell
    assert cell(1, 7).kind is CellKind.SPAWN
    assert cell(1, 6).kind is CellKind.FLOOR
    assert cell(1, 8).kind is CellKind.FLOOR
    # the border ring beside the goal is never forced
    assert cell(0, 6).kind is CellKind.EDGE
    assert cell(0, 8).kind is CellKind.EDGE
    assert gen.grid.count(CellKind.SPAWN) == 1


@pytest.mark.parametrize(
    "goal, spawn, floors",
    [
        ((19, 12), (18, 12), [(18, 11), (18, 13)]),
        ((5, 0), (5, 1), [(4, 1), (6, 1)]),
        ((9, 19), (9, 18), [(8, 18), (10, 18)]),
    ],
)
def test_expansion_other_edges(staged_generator, goal, spawn, floors):
    gen = staged_generator()
    gen.goal = gen.grid.cell(*goal)
    gen.goal.kind = CellKind.GOAL
    gen.expand_end_point()
    assert gen.grid.cell(*spawn).kind is CellKind.SPAWN
    for xy in floors:
        assert gen.grid.cell(*xy).kind is CellKind.FLOOR
    assert gen.grid.count(CellKind.SPAWN) == 1
    assert gen.grid.count(CellKind.FLOOR) == 2


def test_expansion_next_to_corner(staged_generator):
    gen = staged_generator()
    gen.goal = gen.grid.cell(0, 1)
    gen.goal.kind = CellKind.GOAL
    gen.expand_end_point()
    assert gen.grid.cell(1, 1).kind is CellKind.SPAWN
    assert gen.grid.cell(1, 2).kind is CellKind.FLOOR
    # (1, 0) is on the ring and must stay an edge
    assert gen.grid.cell(1, 0).kind is CellKind.EDGE


def test_expansion_overrides_carved_floor(staged_generator):
    gen = staged_generator()
    gen.grid.cell(1, 7).kind = CellKind.FLOOR
    gen.goal = gen.grid.cell(0, 7)
    gen.goal.kind = CellKind.GOAL
    gen.expand_end_point()
    assert gen.grid.cell(1, 7).kind is CellKind.SPAWN


def test_force_floor_skips_ring(staged_generator):
    gen = staged_generator()
    assert gen.force_floor(0, 3) is False
    assert gen.force_floor(-1, 3, True) is False
    assert gen.grid.cell(0, 3).kind is CellKind.EDGE
    assert gen.force_floor(3, 3, True) is True
    assert gen.grid.cell(3, 3).kind is CellKind.SPAWN


def test_walkers_spawn_inside_ring(staged_generator):
    for seed in range(30):
        gen = staged_generator(seed=seed, walker_count=3)
        gen.determine_end_point()
        walkers = gen.spawn_walkers()
        assert len(walkers) == 3
        for w in walkers:
            assert 1 <= w.start.x <= 18 and 1 <= w.start.y <= 18

