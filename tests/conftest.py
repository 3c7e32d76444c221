import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.dungeon import DungeonConfig, DungeonGenerator, DungeonRandom  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "DUNGEON_DISABLE_CACHE": False, "DUNGEON_RESEED_ATTEMPTS": 10})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Generated results must not leak between tests through the route cache."""
    from delve.routes import dungeon_api

    with dungeon_api._dungeon_cache_lock:
        dungeon_api._dungeon_cache.clear()
    yield


@pytest.fixture(autouse=True)
def _isolate_dungeon_env(monkeypatch):
    for key in (
        "DUNGEON_SIZE",
        "DUNGEON_WALKER_COUNT",
        "DUNGEON_GUARD_COUNT",
        "DUNGEON_STEP_FACTOR",
        "DUNGEON_FILL_RATIO",
        "DUNGEON_CONNECT_REGIONS",
        "DUNGEON_ENABLE_GENERATION_METRICS",
        "DELVE_LOG_JSON",
        "DELVE_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def staged_generator():
    """Generator for a 20x20 grid with cells built and neighbours wired, nothing else run.

    Returns a factory so tests can script the RNG before later phases run.
    """

    def make(size=20, seed=1, **config):
        gen = DungeonGenerator(DungeonConfig(size=size, seed=seed, **config), DungeonRandom(seed))
        gen.setup_cells()
        gen.network_neighbors()
        return gen

    return make
