"""Route sources — anything that can hand the router a ``RouteTable``.

A *source* has a single capability, ``routes()``. Two are provided:

- ``StaticRoutes`` wraps a literal mapping declared in code.
- ``FileRoutes`` reads a plain-text route file.

Route file format, one route per line, columns separated by whitespace::

    # name      pattern             controller
    home        /                   HomeController
    user        /users/:id          UserController
    /about      AboutController

Three columns give ``name pattern controller``; two columns give
``pattern controller`` and the pattern doubles as the route name. Comment
lines (first token starting with ``#``), blank lines and lines with a single
token are skipped. Extra columns are ignored.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from iota.errors import RouteFileError
from iota.routing.route import Route
from iota.routing.table import RouteTable

logger = logging.getLogger("iota.routing")


@runtime_checkable
class RouteSource(Protocol):
    """Something that can produce a route table."""

    def routes(self) -> RouteTable: ...


class StaticRoutes:
    """A route source backed by an in-code mapping."""

    __slots__ = ("_table",)

    def __init__(self, routes: Mapping[str, Any]) -> None:
        self._table = RouteTable.from_mapping(routes)

    def routes(self) -> RouteTable:
        return self._table


class FileRoutes:
    """A route source that reads a whitespace-separated route file.

    The file is read each time ``routes()`` is called, so callers normally
    call it once at startup and hand the table to the ``Router``.
    """

    __slots__ = ("path",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def routes(self) -> RouteTable:
        """Read the file and return its routes.

        Raises ``RouteFileError`` if the file cannot be opened.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"File '{self.path}' cannot be opened to read routes from."
            raise RouteFileError(msg) from exc

        routes: list[Route] = []
        seen: set[str] = set()
        for lineno, line in enumerate(text.splitlines(), start=1):
            route = parse_route_line(line)
            if route is None:
                if line.strip() and not line.lstrip().startswith("#"):
                    logger.debug("Skipping malformed route line %s:%d", self.path, lineno)
                continue
            if route.name in seen:
                logger.debug(
                    "Route %r redefined at %s:%d; keeping the first", route.name, self.path, lineno
                )
                continue
            seen.add(route.name)
            routes.append(route)
        return RouteTable(routes)


def parse_route_line(line: str) -> Route | None:
    """Parse one route file line, or return ``None`` if it should be skipped."""
    parts = line.split()
    if len(parts) < 2 or parts[0].startswith("#"):
        return None
    if len(parts) == 2:
        pattern, controller = parts
        return Route(name=pattern, pattern=pattern, controller=controller)
    name, pattern, controller = parts[:3]
    return Route(name=name, pattern=pattern, controller=controller)
