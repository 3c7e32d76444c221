"""Flood fill and region bridging over walkable cells.

Two walkers started far apart (and the spawn pocket next to the goal) can leave
separate floor islands. ``join_regions`` links every island to the region that
contains the goal with the shortest corridor through interior cells.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from .cells import Cell
from .grid import Grid
from .tiles import CellKind, WALKABLE_KINDS


def flood_walkable(grid: Grid, start: Cell) -> Set[int]:
    """Indices of walkable cells 4-connected to ``start``."""
    if start.kind not in WALKABLE_KINDS:
        return set()
    first = grid.index(start.x, start.y)
    seen = {first}
    q = deque([start])
    while q:
        cur = q.popleft()
        for n in grid.neighbors(cur.x, cur.y):
            i = grid.index(n.x, n.y)
            if i not in seen and n.kind in WALKABLE_KINDS:
                seen.add(i)
                q.append(n)
    return seen


def walkable_regions(grid: Grid) -> List[Set[int]]:
    """All walkable components, ordered by their first cell in row-major order."""
    regions = []
    claimed: Set[int] = set()
    for cell in grid.iter_cells():
        i = grid.index(cell.x, cell.y)
        if i in claimed or cell.kind not in WALKABLE_KINDS:
            continue
        region = flood_walkable(grid, cell)
        claimed |= region
        regions.append(region)
    return regions


def _bridge_path(grid: Grid, region: Set[int], target: Set[int]) -> Optional[List[Cell]]:
    """Shortest interior path leaving ``region`` and touching ``target``.

    Multi-source BFS seeded with every cell of the region. Returns the cells
    strictly between the two regions (empty when they already touch) or None
    if the target cannot be reached through the interior.
    """
    parent: Dict[int, Optional[int]] = {i: None for i in region}
    q = deque(sorted(region))
    while q:
        i = q.popleft()
        cur = grid.cells[i]
        for n in grid.neighbors(cur.x, cur.y):
            ni = grid.index(n.x, n.y)
            if ni in parent:
                continue
            if ni in target:
                path = []
                step = i
                while step is not None and step not in region:
                    path.append(grid.cells[step])
                    step = parent[step]
                path.reverse()
                return path
            if not grid.is_interior_bounds(n.x, n.y):
                continue
            parent[ni] = i
            q.append(ni)
    return None


def join_regions(grid: Grid, anchor: Cell) -> Tuple[int, int]:
    """Connect every walkable region to the one containing ``anchor``.

    Returns ``(regions_joined, corridor_cells_carved)``.
    """
    main = flood_walkable(grid, anchor)
    joined = 0
    carved = 0
    for region in walkable_regions(grid):
        if region & main:
            continue
        path = _bridge_path(grid, region, main)
        if path is None:
            continue
        for cell in path:
            if cell.kind is CellKind.NULL:
                cell.kind = CellKind.FLOOR
                carved += 1
        joined += 1
        main = flood_walkable(grid, anchor)
    return joined, carved


def unreachable_floor(grid: Grid, anchor: Cell) -> List[Cell]:
    reach = flood_walkable(grid, anchor)
    return [c for c in grid.iter_cells() if c.kind in WALKABLE_KINDS and grid.index(c.x, c.y) not in reach]


__all__ = ["flood_walkable", "walkable_regions", "join_regions", "unreachable_floor"]
