"""Compact encoding of tile coordinate lists for API payloads.

Format strategy:
  - Input: iterable of ``(x, y)`` pairs (unordered).
  - Coordinates are sorted, then x and y are delta-encoded separately and the
    result is prefixed with a ``D:`` marker.
  - If the delta form is not shorter than the plain ``x,y;x,y`` form, the plain
    form is returned instead.

Compressed grammar:
  D:x0,y0|dx1,dy1|dx2,dy2|...

Floor tile sets are dense runs along rows, so most deltas are ``0,1``.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

Coord = Tuple[int, int]


def encode_plain(coords: Iterable[Coord]) -> str:
    return ";".join(f"{x},{y}" for x, y in coords)


def compress_tiles(coords: Iterable[Coord]) -> str:
    """Return the shorter of the delta-encoded and plain representations.

    Args:
        coords: ``(x, y)`` integer pairs; duplicates are kept.

    Returns:
        String starting with ``D:`` or a plain semicolon separated list. Empty
        input yields an empty string.
    """
    ordered = sorted((int(x), int(y)) for x, y in coords)
    if not ordered:
        return ""
    raw = encode_plain(ordered)
    pieces = []
    prev_x, prev_y = None, None
    for x, y in ordered:
        if prev_x is None:
            pieces.append(f"{x},{y}")
        else:
            pieces.append(f"{x - prev_x},{y - prev_y}")
        prev_x, prev_y = x, y
    compressed = "D:" + "|".join(pieces)
    return compressed if len(compressed) < len(raw) else raw


def decompress_tiles(data: str) -> List[Coord]:
    """Inverse of :func:`compress_tiles`, accepting either representation.

    Raises:
        ValueError: malformed payload.
    """
    if not data:
        return []
    coords: List[Coord] = []
    if not data.startswith("D:"):
        for part in data.split(";"):
            if not part:
                continue
            x_s, y_s = part.split(",")
            coords.append((int(x_s), int(y_s)))
        return coords
    prev_x, prev_y = None, None
    for token in data[2:].split("|"):
        x_s, y_s = token.split(",")
        dx, dy = int(x_s), int(y_s)
        if prev_x is None:
            x, y = dx, dy
        else:
            x, y = prev_x + dx, prev_y + dy
        coords.append((x, y))
        prev_x, prev_y = x, y
    return coords


__all__ = ["compress_tiles", "decompress_tiles", "encode_plain"]
