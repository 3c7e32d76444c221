"""Presentation adapter: turn a finished ``DungeonResult`` into render data.

Nothing here feeds back into generation. Sprite/layer choices and world
positions follow the scene draw rules: solid cells use the wall
sprite, floor and spawn cells the floor sprite, and the goal a door sprite on
the wall layer.
"""

from __future__ import annotations

from typing import Dict, Tuple

from colorama import Fore, Style

from delve.dungeon import CellKind, DungeonResult
from delve.dungeon.cells import Cell
from delve.dungeon.tiles import FLOOR_KINDS
from delve.utils.tile_compress import compress_tiles

CELL_SIZE = 2

ASCII_CHARS = {
    CellKind.EDGE: "#",
    CellKind.NULL: "#",
    CellKind.WALL: "#",
    CellKind.FLOOR: ".",
    CellKind.SPAWN: "@",
    CellKind.GOAL: ">",
}
GUARD_CHAR = "g"

_ASCII_COLORS = {
    "#": Fore.WHITE + Style.DIM,
    ".": Fore.YELLOW,
    "@": Fore.GREEN + Style.BRIGHT,
    ">": Fore.CYAN + Style.BRIGHT,
    GUARD_CHAR: Fore.RED + Style.BRIGHT,
}


def kind_to_layer(kind: CellKind) -> Tuple[str, str, str]:
    """Return ``(sprite, material, layer)`` for a cell kind."""
    if kind is CellKind.GOAL:
        return ("door", "floor", "wall")
    if kind in FLOOR_KINDS:
        return ("floor", "floor", "floor")
    return ("wall", "wall", "wall")


def world_position(x: int, y: int, size: int, cell_size: int = CELL_SIZE) -> Tuple[int, int, int]:
    x_base = -size + cell_size // 2
    y_base = size - cell_size // 2
    return (x_base + x * cell_size, y_base - y * cell_size, 0)


def draw_order(result: DungeonResult):
    """Cells in the order the renderer visits them (column-major)."""
    grid = result.grid
    for y in range(grid.size):
        for x in range(grid.size):
            yield grid.cell(x, y)


def player_start(result: DungeonResult) -> Cell | None:
    # The player is moved onto every spawn as it is drawn, so the last one wins
    start = None
    for cell in draw_order(result):
        if cell.kind is CellKind.SPAWN:
            start = cell
    return start


def render_records(result: DungeonResult, cell_size: int = CELL_SIZE):
    records = []
    for cell in draw_order(result):
        sprite, material, layer = kind_to_layer(cell.kind)
        records.append(
            {
                "x": cell.x,
                "y": cell.y,
                "sprite": sprite,
                "material": material,
                "layer": layer,
                "position": list(world_position(cell.x, cell.y, result.size, cell_size)),
            }
        )
    return records


def render_ascii(result: DungeonResult, color: bool = False) -> str:
    guards = {c.coords for c in result.guards}
    lines = []
    for row in range(result.size):
        chars = []
        for col in range(result.size):
            cell = result.grid.cell(row, col)
            ch = GUARD_CHAR if cell.coords in guards else ASCII_CHARS[cell.kind]
            if color:
                ch = f"{_ASCII_COLORS[ch]}{ch}{Style.RESET_ALL}"
            chars.append(ch)
        lines.append("".join(chars))
    return "\n".join(lines)


def result_payload(result: DungeonResult) -> Dict:
    """``DungeonResult.to_dict`` plus render data, with floor tiles compressed."""
    start = player_start(result)
    payload = result.to_dict()
    payload.update(
        {
            "legend": {k.char: k.value for k in CellKind},
            "player_start": list(start.coords) if start else None,
            "player_position": list(world_position(start.x, start.y, result.size)) if start else None,
            "floor_tiles": compress_tiles(c.coords for c in result.floor_tiles),
        }
    )
    return payload


__all__ = [
    "kind_to_layer",
    "world_position",
    "player_start",
    "render_records",
    "render_ascii",
    "result_payload",
]
