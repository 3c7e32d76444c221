from typing import Tuple

from .tiles import CellKind

Coord2D = Tuple[int, int]


class Cell:
    """One grid position. ``x`` is the row, ``y`` the column."""

    __slots__ = ("x", "y", "kind")

    def __init__(self, x: int, y: int, kind: CellKind = CellKind.NULL):
        self.x = x
        self.y = y
        self.kind = kind

    @property
    def coords(self) -> Coord2D:
        return (self.x, self.y)

    def __repr__(self):
        return f"Cell({self.x}, {self.y}, {self.kind.value})"
