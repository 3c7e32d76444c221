"""Delve CLI entry point.

Provides subcommands for generating a dungeon to the terminal, inspecting a
single cell, and running the HTTP API server. Accepts configuration via flags
and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def _color_enabled(args) -> bool:
    if getattr(args, "no_color", False):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):  # pragma: no cover - detached streams
        return False


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve dungeon generator

    Carve a dungeon with random walkers and print it, inspect a cell, or run
    the HTTP API. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          DUNGEON_SIZE          Grid size, clamped to 20..50 (default: 30)
          DUNGEON_WALKER_COUNT  Number of carving walkers (default: 2)
          DUNGEON_GUARD_COUNT   Number of guards to place (default: 6)
          DUNGEON_FILL_RATIO    Share of the interior walkers carve (default: 0.4)
          HOST / PORT           Bind address for the API server (default: 0.0.0.0:5000)
          DELVE_LOG_LEVEL       debug | info | warn | error (default: info)

        Examples:
          # Print a random dungeon
          python run.py generate

          # Reproduce a dungeon and dump it as JSON
          python run.py generate --size 24 --seed 1234 --json

          # Describe a cell of that dungeon
          python run.py cell 1 7 --size 24 --seed 1234

          # Run the API on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delve",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Delve Dungeon Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_generation_flags(p):
        p.add_argument("--size", type=int, default=None, help="Grid size (default: env DUNGEON_SIZE or 30)")
        p.add_argument("--seed", type=int, default=None, help="RNG seed (default: random, printed)")
        p.add_argument(
            "--attempts",
            type=int,
            default=5,
            help="Seeds to try (seed, seed+1, ...) when guards cannot be placed (default: 5)",
        )

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon and print an ASCII map (or JSON payload).",
    )
    add_generation_flags(gen_parser)
    gen_parser.add_argument("--json", action="store_true", help="Print the JSON payload instead of a map")
    gen_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable ANSI colours")
    gen_parser.set_defaults(command="generate")

    cell_parser = subparsers.add_parser(
        "cell",
        help="Describe one cell of a generated dungeon",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    cell_parser.add_argument("x", type=int, help="Row")
    cell_parser.add_argument("y", type=int, help="Column")
    add_generation_flags(cell_parser)
    cell_parser.set_defaults(command="cell")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server exposing /api/dungeon/*",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _generate(args):
    from delve.dungeon import DungeonConfig
    from delve.dungeon.api_helpers.generation import generate_with_reseed

    config = DungeonConfig.from_env(size=args.size, seed=args.seed)
    return generate_with_reseed(config=config, attempts=args.attempts)


def cmd_generate(args) -> int:
    from delve.dungeon import NoQualifyingGuardSiteError
    from delve.dungeon.api_helpers.tiles import render_ascii, result_payload

    try:
        result = _generate(args)
    except NoQualifyingGuardSiteError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    if args.json:
        print(json.dumps(result_payload(result), indent=2))
        return 0
    color = _color_enabled(args)
    header = f"seed={result.seed} size={result.size} goal={result.goal} guards={len(result.guards)}"
    print(f"{Fore.CYAN}{header}{Style.RESET_ALL}" if color else header)
    print(render_ascii(result, color=color))
    return 0


def cmd_cell(args) -> int:
    from delve.dungeon import NoQualifyingGuardSiteError

    try:
        result = _generate(args)
    except NoQualifyingGuardSiteError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    if not result.grid.in_bounds(args.x, args.y):
        print(f"[ERROR] ({args.x}, {args.y}) outside {result.size}x{result.size} grid", file=sys.stderr)
        return 1
    data = result.grid.describe(args.x, args.y)
    data["within_grid"] = result.is_within_grid(args.x, args.y)
    data["seed"] = result.seed
    print(json.dumps(data))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return cmd_generate(args)
    if mode == "cell":
        return cmd_cell(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    from delve.logging_utils import log
    from delve.server import start_server

    log.info(event="startup", mode=mode, host=host, port=port, version=__version__)
    start_server(host=host, port=port, debug=debug)
    return 0


def cli():  # console_scripts entry point
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
