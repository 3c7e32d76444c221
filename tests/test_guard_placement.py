import pytest

from delve.dungeon import CellKind, DungeonRandom, NoQualifyingGuardSiteError


def _stage_top_goal(gen, y=7):
    gen.goal = gen.grid.cell(0, y)
    gen.goal.kind = CellKind.GOAL
    gen.expand_end_point()


def _floor(gen, coords):
    for x, y in coords:
        gen.grid.cell(x, y).kind = CellKind.FLOOR


def test_guards_only_on_far_floor(staged_generator):
    gen = staged_generator()
    _stage_top_goal(gen)
    _floor(gen, [(5, 5), (9, 7), (10, 7), (12, 3), (3, 18)])
    gen.collect_floor_tiles()
    gen.rng = DungeonRandom(5)
    guards = gen.spawn_guards()
    assert len(guards) == 6
    allowed = {(10, 7), (12, 3), (3, 18)}
    for g in guards:
        assert g.coords in allowed
        assert g.x >= 10 or abs(g.y - 7) >= 10
        assert g.kind in (CellKind.FLOOR, CellKind.SPAWN)


def test_guard_candidates_either_axis(staged_generator):
    gen = staged_generator()
    _stage_top_goal(gen, y=1)
    # near on x but 17 columns away on y
    _floor(gen, [(2, 18), (2, 5)])
    gen.collect_floor_tiles()
    assert [c.coords for c in gen.guard_candidates()] == [(2, 18)]


def test_guards_drawn_with_replacement(staged_generator):
    gen = staged_generator()
    _stage_top_goal(gen)
    _floor(gen, [(15, 15)])
    gen.collect_floor_tiles()
    guards = gen.spawn_guards()
    assert [g.coords for g in guards] == [(15, 15)] * 6


def test_no_qualifying_site_raises(staged_generator):
    gen = staged_generator()
    _stage_top_goal(gen)
    _floor(gen, [(2, 7), (3, 8), (9, 9)])
    gen.collect_floor_tiles()
    with pytest.raises(NoQualifyingGuardSiteError) as exc:
        gen.spawn_guards()
    assert exc.value.goal == (0, 7)
    assert exc.value.size == 20
    assert gen.guards == []


def test_guard_count_configurable(staged_generator):
    gen = staged_generator(guard_count=2)
    _stage_top_goal(gen)
    _floor(gen, [(15, 15), (16, 2)])
    gen.collect_floor_tiles()
    assert len(gen.spawn_guards()) == 2


def test_floor_tiles_row_major_with_spawn(staged_generator):
    gen = staged_generator()
    _stage_top_goal(gen)
    _floor(gen, [(12, 3), (4, 4)])
    tiles = gen.collect_floor_tiles()
    coords = [c.coords for c in tiles]
    assert coords == sorted(coords)
    assert (1, 7) in coords  # spawn counts as floor
    assert (0, 7) not in coords  # goal does not
    assert all(c.kind in (CellKind.FLOOR, CellKind.SPAWN) for c in tiles)
