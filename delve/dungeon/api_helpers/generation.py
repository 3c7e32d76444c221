"""Caller-side generation helper shared by the HTTP routes and the CLI.

``generate`` never retries. Callers that must always produce a dungeon walk
forward through seeds until guard placement succeeds.
"""

from __future__ import annotations

from delve.dungeon import DungeonConfig, NoQualifyingGuardSiteError, generate
from delve.dungeon.helpers import SEED_MAX
from delve.logging_utils import get_logger

log = get_logger("delve.generation")

DEFAULT_ATTEMPTS = 5


def generate_with_reseed(size=None, seed: int | None = None, *, config: DungeonConfig | None = None, attempts: int = DEFAULT_ATTEMPTS):
    """Generate, re-invoking with ``seed + 1``, ``seed + 2``... on guard failure.

    The returned result records the seed that actually succeeded. The last
    ``NoQualifyingGuardSiteError`` is re-raised once attempts run out.
    """
    config = config or DungeonConfig()
    if seed is None:
        seed = config.seed
    last_error = None
    for attempt in range(max(1, attempts)):
        if seed is None or attempt == 0:
            current = seed
        else:
            current = (seed + attempt) % SEED_MAX
        try:
            return generate(size, current, config=config)
        except NoQualifyingGuardSiteError as exc:
            last_error = exc
            log.warn(event="dungeon_reseed", seed=current, attempt=attempt + 1, goal=exc.goal)
    raise last_error


__all__ = ["generate_with_reseed", "DEFAULT_ATTEMPTS"]
