"""Cell kind enumeration and compact tile codes.

Kinds are a closed set; anything else is rejected by ``CellKind.parse``.
"""
from __future__ import annotations

from enum import Enum


class CellKind(str, Enum):
    EDGE = "edge"
    NULL = "null"
    FLOOR = "floor"
    WALL = "wall"
    SPAWN = "spawn"
    GOAL = "goal"

    @property
    def char(self) -> str:
        return _KIND_TO_CHAR[self]

    @classmethod
    def parse(cls, tag: "str | CellKind") -> "CellKind":
        """Accept an enum member, its value (``"floor"``) or its tile code (``"F"``)."""
        if isinstance(tag, CellKind):
            return tag
        if isinstance(tag, str):
            if tag in _CHAR_TO_KIND:
                return _CHAR_TO_KIND[tag]
            return cls(tag.lower())
        raise ValueError(f"unknown cell kind {tag!r}")


_KIND_TO_CHAR = {
    CellKind.EDGE: "E",
    CellKind.NULL: "N",
    CellKind.FLOOR: "F",
    CellKind.WALL: "W",
    CellKind.SPAWN: "S",
    CellKind.GOAL: "G",
}
_CHAR_TO_KIND = {v: k for k, v in _KIND_TO_CHAR.items()}

# Cells collected into the floor tile set (guards and renderer floor layer)
FLOOR_KINDS = frozenset({CellKind.FLOOR, CellKind.SPAWN})
# Cells a player can stand on, goal included
WALKABLE_KINDS = frozenset({CellKind.FLOOR, CellKind.SPAWN, CellKind.GOAL})

__all__ = ["CellKind", "FLOOR_KINDS", "WALKABLE_KINDS"]
