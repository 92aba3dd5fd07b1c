"""Expressway CLI — route listing and a development server.

Entry point registered as ``expressway`` in ``pyproject.toml``::

    [project.scripts]
    expressway = "expressway.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``expressway`` command."""
    parser = argparse.ArgumentParser(
        prog="expressway",
        description="Expressway — Express-style routes and middleware over a REST host.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- expressway routes ------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "target",
        help="Import string of a Router or RestServer (e.g. myapp:router)",
    )

    # -- expressway run ---------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument(
        "target",
        help="Import string of a Router or RestServer (e.g. myapp:server)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from expressway.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from expressway.cli._run import run_server

        run_server(args)
