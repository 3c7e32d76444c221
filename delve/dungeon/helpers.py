"""Seeded randomness and small predicates shared by the generation phases.

All randomness in a run flows through one ``DungeonRandom`` so a seed fully
determines the result. Ranges are inclusive on both ends.
"""
from __future__ import annotations

import random
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

SEED_MAX = 2**31 - 1


class DungeonRandom:
    def __init__(self, seed: Optional[int] = None):
        # 0 is a valid deterministic seed; None draws a fresh one
        if seed is None:
            seed = random.randint(0, SEED_MAX)
        self.seed = seed
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def randints(self, low: int, high: int, count: int) -> List[int]:
        return [self._rng.randint(low, high) for _ in range(count)]

    def coin_flip(self) -> bool:
        return self._rng.random() < 0.5

    def either(self, first: T, second: T) -> T:
        """Pick one of two endpoints uniformly."""
        return first if self.coin_flip() else second

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self._rng.randint(0, len(items) - 1)]

    def __repr__(self):
        return f"DungeonRandom(seed={self.seed})"


def as_random(rng: "DungeonRandom | int | None") -> DungeonRandom:
    if isinstance(rng, DungeonRandom):
        return rng
    if rng is None or isinstance(rng, int):
        return DungeonRandom(rng)
    raise TypeError(f"expected DungeonRandom, int seed or None, got {type(rng).__name__}")


def filter_list(items: Iterable[T], predicate: Callable[[T], bool]) -> List[T]:
    return [item for item in items if predicate(item)]


def are_numbers_apart(a: int, b: int, distance: int) -> bool:
    return abs(a - b) >= distance


def is_edge_of_grid(x: int, y: int, rows: int, cols: int) -> bool:
    return x == 0 or y == 0 or x == rows - 1 or y == cols - 1


__all__ = [
    "DungeonRandom",
    "as_random",
    "filter_list",
    "are_numbers_apart",
    "is_edge_of_grid",
]
