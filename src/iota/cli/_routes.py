"""``iota routes`` and ``iota match`` — inspect a route file."""

import argparse
import sys

from iota.errors import RouteFileError
from iota.routing.router import Router
from iota.routing.sources import FileRoutes
from iota.routing.table import RouteTable


def _load(path: str) -> RouteTable:
    try:
        return FileRoutes(path).routes()
    except RouteFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, PATTERN and CONTROLLER for ``args.file``."""
    table = _load(args.file)
    if not table:
        print("No routes defined.")
        return

    rows = [(route.name, route.pattern, route.controller) for route in table.values()]
    max_name = max(4, *(len(r[0]) for r in rows))  # "NAME" header
    max_pattern = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

    fmt = f"{{:<{max_name}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("NAME", "PATTERN", "CONTROLLER"))
    sep_len = max_name + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))


def run_match(args: argparse.Namespace) -> None:
    """Resolve ``args.path`` and print the controller and captured variables.

    Exits with status 1 when no route matches.
    """
    router = Router(_load(args.file), base_url=args.base_url)
    match = router.match(args.path)
    if match is None:
        print(f"No route matches {args.path!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"route:      {match.route_name}")
    print(f"controller: {match.controller}")
    for name, value in match.variables.items():
        print(f"  {name} = {value}")
