"""Iota CLI — inspect route files.

Entry point registered as ``iota`` in ``pyproject.toml``::

    [project.scripts]
    iota = "iota.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``iota`` command."""
    parser = argparse.ArgumentParser(
        prog="iota",
        description="Iota — a small MVC web framework.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- iota routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes in a route file")
    routes_parser.add_argument("file", help="Path to the route file")

    # -- iota match -------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Resolve a path against a route file")
    match_parser.add_argument("file", help="Path to the route file")
    match_parser.add_argument("path", help="Request path, optionally with a query string")
    match_parser.add_argument("--base-url", default="", help="Base URL prefix to strip")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from iota.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from iota.cli._routes import run_match

        run_match(args)
