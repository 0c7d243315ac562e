"""Frugal CLI: serve an app or list its routes.

Entry point registered as ``frugal`` in ``pyproject.toml``::

    [project.scripts]
    frugal = "frugal.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``frugal`` command."""
    parser = argparse.ArgumentParser(
        prog="frugal",
        description="frugal: declarative controller routing for ASGI.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- frugal run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- frugal routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List installed routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from frugal.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from frugal.cli._routes import run_routes

        run_routes(args)
