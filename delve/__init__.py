"""
project: Delve
module: __init__.py
License: MIT

Flask application factory for the dungeon generation service.

Configuration is sourced from environment variables (optionally loaded from a
``.env`` file) with defaults suitable for local development. Generation itself
lives in ``delve.dungeon`` and has no dependency on the web layer.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so DUNGEON_* and DELVE_* variables can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def create_app(overrides: dict | None = None) -> Flask:
    """Build the Flask app and register the dungeon blueprint.

    ``overrides`` is applied last, so tests can tweak config without touching
    the environment.
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still serve requests; only file logging needs it
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DUNGEON_DEFAULT_SIZE=int(os.getenv("DUNGEON_SIZE", "30")),
        DUNGEON_RESEED_ATTEMPTS=int(os.getenv("DUNGEON_RESEED_ATTEMPTS", "5")),
        DUNGEON_DISABLE_CACHE=_env_flag("DUNGEON_DISABLE_CACHE"),
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
    )
    if overrides:
        app.config.update(overrides)

    from delve.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
