"""Square cell grid with fixed orthogonal adjacency.

Cells live in a flat row-major list (``index = x * size + y``). Adjacency is a
list of neighbour index tuples computed once by ``wire_neighbors``; only cell
kinds change afterwards, never topology.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .cells import Cell, Coord2D
from .config import clamp_size
from .errors import DungeonGenerationError
from .helpers import is_edge_of_grid
from .tiles import CellKind

# up, down, left, right
ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    def __init__(self, size: int):
        self.size = size
        self.cells: List[Cell] = [
            Cell(x, y, CellKind.EDGE if is_edge_of_grid(x, y, size, size) else CellKind.NULL)
            for x in range(size)
            for y in range(size)
        ]
        self._adjacency: Optional[List[Tuple[int, ...]]] = None

    @classmethod
    def build(cls, size) -> "Grid":
        return cls(clamp_size(size))

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------
    def index(self, x: int, y: int) -> int:
        return x * self.size + y

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def is_interior_bounds(self, x: int, y: int) -> bool:
        return 0 < x < self.size - 1 and 0 < y < self.size - 1

    # Same ring-excluding predicate, under the name callers outside generation use
    is_within_grid = is_interior_bounds

    def wire_neighbors(self) -> None:
        adjacency = []
        for cell in self.cells:
            adjacency.append(
                tuple(
                    self.index(cell.x + dx, cell.y + dy)
                    for dx, dy in ORTHOGONAL
                    if self.in_bounds(cell.x + dx, cell.y + dy)
                )
            )
        self._adjacency = adjacency

    @property
    def wired(self) -> bool:
        return self._adjacency is not None

    def neighbors(self, x: int, y: int) -> List[Cell]:
        if self._adjacency is None:
            raise DungeonGenerationError("neighbors requested before wire_neighbors()")
        return [self.cells[i] for i in self._adjacency[self.index(x, y)]]

    def neighbor_coords(self, x: int, y: int) -> List[Coord2D]:
        return [c.coords for c in self.neighbors(x, y)]

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.size}x{self.size} grid")
        return self.cells[self.index(x, y)]

    def __getitem__(self, coords: Coord2D) -> Cell:
        return self.cell(*coords)

    def __len__(self) -> int:
        return len(self.cells)

    def iter_cells(self) -> Iterator[Cell]:
        """Row-major iteration."""
        return iter(self.cells)

    def count(self, kind: CellKind) -> int:
        return sum(1 for c in self.cells if c.kind is kind)

    def cells_of(self, *kinds: CellKind) -> List[Cell]:
        return [c for c in self.cells if c.kind in kinds]

    @property
    def interior_area(self) -> int:
        return max(0, self.size - 2) ** 2

    def kind_rows(self) -> List[str]:
        """One string of tile codes per row; cheap to compare and serialise."""
        n = self.size
        return ["".join(c.kind.char for c in self.cells[x * n:(x + 1) * n]) for x in range(n)]

    def describe(self, x: int, y: int) -> dict:
        cell = self.cell(x, y)
        return {
            "x": cell.x,
            "y": cell.y,
            "kind": cell.kind.value,
            "neighbors": [list(c) for c in self.neighbor_coords(x, y)],
        }

    def __repr__(self):
        return f"Grid(size={self.size})"
