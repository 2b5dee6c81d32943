"""rhack levels CLI entry point.

Provides subcommands for printing a generated level and for running the JSON
level server. Accepts configuration via flags and environment variables, with
optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()
if _COLOR_ENABLED:  # pragma: no cover - environment dependent
    _color_init()

ROOT_DIR = Path(__file__).resolve().parent


def _load_version() -> str:
    try:
        return (ROOT_DIR / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    rhack level generator

    Print a procedurally generated dungeon level for a seed, or serve levels
    as JSON over HTTP. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                Bind address for the web server (default: 0.0.0.0)
          PORT                Port for the web server (default: 5000)
          DUNGEON_SEED        Seed used when none is given
          DUNGEON_MAKE_VAULT  0 disables vault reservation
          RHACK_LOG_LEVEL     debug | info | warn | error (default: info)

        Examples:
          # Print the level for seed 42
          python run.py generate --seed 42

          # Same level as JSON (rooms, doors, stairs, rows)
          python run.py generate --seed 42 --json

          # Run the server on a custom port
          python run.py server --port 8080

          # Load variables from .env then run the server
          python run.py --env-file .env server
        """
    )

    parser = argparse.ArgumentParser(
        prog="rhack",
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
        version=f"rhack levels {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a level and print its rows (or JSON)",
    )
    gen_parser.add_argument(
        "--seed",
        default=None,
        help="Integer or string seed (default: env DUNGEON_SEED or random)",
    )
    gen_parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the full level payload as JSON",
    )
    gen_parser.add_argument(
        "--no-vault",
        dest="no_vault",
        action="store_true",
        help="Do not reserve a vault",
    )
    gen_parser.set_defaults(command="generate")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the JSON level server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve /api/level and /api/level/metrics",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _generate(args) -> int:
    from rhack.dungeon import LevelConfig, generate_level, render_text
    from rhack.logging_utils import get_logger
    from rhack.routes.level_api import _coerce_seed

    raw_seed = args.seed if args.seed is not None else os.getenv("DUNGEON_SEED")
    seed = _coerce_seed(raw_seed)
    config = LevelConfig(make_vault=not args.no_vault)
    level = generate_level(seed=seed, config=config)
    get_logger("rhack.cli").info(event="level_generated", seed=level.seed, rooms=len(level.rooms), doors=len(level.doors))

    if args.as_json:
        print(json.dumps(level.to_dict(), indent=2))
        return 0

    header = f"seed={level.seed} rooms={len(level.rooms)} doors={len(level.doors)}"
    print(f"{Fore.CYAN}{header}{Style.RESET_ALL}" if _COLOR_ENABLED else header)
    print(render_text(level.grid))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from rhack import server

    title = f"{Fore.CYAN}{Style.BRIGHT}rhack level server{Style.RESET_ALL}" if _COLOR_ENABLED else "rhack level server"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    server.start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
