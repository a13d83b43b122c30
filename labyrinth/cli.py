"""
Labyrinth command line

    labyrinth daedalus   start the maze server
    labyrinth icarus     solve mazes served by a running daedalus

Flags override LABYRINTH_* environment settings.
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from labyrinth.config import get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # Flags shared by both commands, accepted after the command name.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--host", help="Server host")
    common.add_argument("--port", type=int, help="Server port")
    common.add_argument("--seed", type=int, help="Seed for the random source")
    common.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")

    parser = argparse.ArgumentParser(
        prog="labyrinth",
        description="Daedalus builds labyrinths, Icarus solves them in the dark.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    server = commands.add_parser(
        "daedalus",
        aliases=["deadalus", "server"],
        parents=[common],
        help="Start the labyrinth creator",
    )
    server.add_argument("--width", type=int, help="Maze width in rooms")
    server.add_argument("--height", type=int, help="Maze height in rooms")
    server.set_defaults(handler=run_server)

    client = commands.add_parser(
        "icarus",
        aliases=["client"],
        parents=[common],
        help="Start the labyrinth solver",
    )
    client.add_argument("--times", type=int, help="Number of mazes to solve")
    client.add_argument(
        "--local",
        action="store_true",
        help="Solve in-process instead of connecting to a server",
    )
    client.add_argument("--width", type=int, help="Maze width (with --local)")
    client.add_argument("--height", type=int, help="Maze height (with --local)")
    client.set_defaults(handler=run_client)

    return parser


def apply_overrides(args: argparse.Namespace) -> None:
    """Export flags as LABYRINTH_* variables and reload settings."""
    for name in ("host", "port", "seed", "log_level", "width", "height", "times"):
        value = getattr(args, name, None)
        if value is not None:
            os.environ[f"LABYRINTH_{name.upper()}"] = str(value)
    get_settings.cache_clear()


def run_server(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    # The server holds a single maze session, so it must stay single-process.
    uvicorn.run(
        "labyrinth.main:app",
        host=settings.host,
        port=settings.port,
        workers=1,
        log_level=settings.log_level.lower(),
    )
    return 0


def run_client(args: argparse.Namespace) -> int:
    from labyrinth.client.maze_client import LocalMazeClient, MazeClient, MazeClientError
    from labyrinth.client.runner import run_icarus
    from labyrinth.core.backtrack import ExplorationError
    from labyrinth.core.rng import create_random
    from labyrinth.services.maze_service import create_maze_service
    from labyrinth.services.scoreboard import Scoreboard

    settings = get_settings()
    rng = create_random(settings.seed)
    if args.local:
        connection = LocalMazeClient(create_maze_service(settings, Scoreboard(), rng))
    else:
        connection = MazeClient(settings.server_url, timeout=settings.request_timeout_seconds)

    try:
        results, summary = run_icarus(connection, settings.times, rng)
    except MazeClientError as e:
        logger.error(f"Lost contact with the labyrinth: {e}")
        return 1
    except ExplorationError as e:
        logger.critical(f"Maze is not solvable: {e}")
        return 2
    finally:
        connection.close()

    print(summary)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    from labyrinth.main import configure_logging

    args = build_parser().parse_args(argv)
    apply_overrides(args)
    configure_logging(get_settings().log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
