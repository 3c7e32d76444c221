"""
project: Delve
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Every route takes optional ``size`` and ``seed`` query parameters. Seeds may be
integers or arbitrary strings (hashed); a missing seed draws a random one that
is echoed back so the same dungeon can be requested again.
"""

import hashlib
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from delve.dungeon import DungeonConfig, NoQualifyingGuardSiteError
from delve.dungeon.api_helpers.generation import DEFAULT_ATTEMPTS, generate_with_reseed
from delve.dungeon.api_helpers.tiles import render_ascii, result_payload
from delve.dungeon.helpers import SEED_MAX
from delve.logging_utils import get_logger

log = get_logger("delve.api")

bp_dungeon = Blueprint("dungeon", __name__)

# Simple in-process cache (seed,size)->DungeonResult. Guarded by a lock because
# threaded servers may interleave requests.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return random.randint(0, SEED_MAX)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    s = str(payload_seed).strip()
    if not s:
        return random.randint(0, SEED_MAX)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _request_params():
    """Return (size, seed) from the query string; raises ValueError on a bad size."""
    raw_size = request.args.get("size")
    size = int(raw_size) if raw_size not in (None, "") else current_app.config["DUNGEON_DEFAULT_SIZE"]
    seed = _coerce_seed(request.args.get("seed"))
    return size, seed


def generate_for_request(size: int, seed: int):
    config = DungeonConfig.from_env(enable_metrics=current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS", True))
    attempts = int(current_app.config.get("DUNGEON_RESEED_ATTEMPTS", DEFAULT_ATTEMPTS))
    return generate_with_reseed(size, seed, config=config, attempts=attempts)


def get_cached_dungeon(seed: int, size: int):
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return generate_for_request(size, seed)
    key = (seed, size)
    with _dungeon_cache_lock:
        result = _dungeon_cache.get(key)
        if result is not None:
            return result
    result = generate_for_request(size, seed)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = result
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return result


def _load():
    """Resolve request params into a result, or an error response tuple."""
    try:
        size, seed = _request_params()
    except ValueError:
        return None, (jsonify({"error": "size must be an integer"}), 400)
    try:
        return get_cached_dungeon(seed, size), None
    except NoQualifyingGuardSiteError as exc:
        log.error(event="dungeon_generation_failed", seed=seed, size=size, error=str(exc))
        return None, (jsonify({"error": str(exc), "seed": seed}), 503)


@bp_dungeon.route("/api/dungeon/generate")
def dungeon_generate():
    """
    Generate (or fetch from cache) a dungeon.
    Response: result payload, see ``result_payload``.
    """
    result, error = _load()
    if error:
        return error
    return jsonify(result_payload(result))


@bp_dungeon.route("/api/dungeon/ascii")
def dungeon_ascii():
    result, error = _load()
    if error:
        return error
    return Response(render_ascii(result) + "\n", mimetype="text/plain")


@bp_dungeon.route("/api/dungeon/cell/<int:x>/<int:y>")
def dungeon_cell(x, y):
    """Describe one cell: kind, neighbours and whether it is inside the border ring."""
    result, error = _load()
    if error:
        return error
    if not result.grid.in_bounds(x, y):
        return jsonify({"error": "cell out of bounds", "size": result.size}), 404
    data = result.grid.describe(x, y)
    data["within_grid"] = result.is_within_grid(x, y)
    data["seed"] = result.seed
    return jsonify(data)
