"""Immutable, ordered route table.

A ``RouteTable`` maps route names to ``Route`` objects in declaration order.
It is built once at startup and never mutated, so it can be shared across
threads and tasks without locks. To change routes, build a new table.

Two input shapes are accepted by ``RouteTable.from_mapping``::

    # Named routes
    {"home": {"route": "/", "controller": "Home"},
     "user": {"route": "/users/:id", "controller": "User"}}

    # Keyed by pattern (the pattern doubles as the route name)
    {"/": "Home", "/users/:id": "User"}
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from iota.errors import ConfigurationError
from iota.routing.route import Route


class RouteTable(Mapping[str, Route]):
    """Ordered mapping of route name -> ``Route``.

    Besides name lookup, keeps two derived indexes built at construction:
    exact static patterns (for the O(1) shortcut in ``Router.match``) and
    routes grouped by controller (for ``Router.url``).
    """

    __slots__ = ("_by_controller", "_routes", "_static")

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        by_name: dict[str, Route] = {}
        for route in routes:
            if route.name in by_name:
                msg = f"Duplicate route name {route.name!r}"
                raise ConfigurationError(msg)
            by_name[route.name] = route

        static: dict[str, Route] = {}
        by_controller: dict[str, list[Route]] = {}
        for route in by_name.values():
            # First declaration wins for both indexes
            if route.is_static:
                static.setdefault(route.pattern, route)
            by_controller.setdefault(route.controller, []).append(route)

        self._routes: Mapping[str, Route] = MappingProxyType(by_name)
        self._static: Mapping[str, Route] = MappingProxyType(static)
        self._by_controller: Mapping[str, tuple[Route, ...]] = MappingProxyType(
            {ctrl: tuple(rs) for ctrl, rs in by_controller.items()}
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RouteTable:
        """Build a table from either supported mapping shape (see module docs)."""
        routes: list[Route] = []
        for key, value in data.items():
            if isinstance(value, str):
                routes.append(Route(name=key, pattern=key, controller=value))
            elif isinstance(value, Mapping):
                try:
                    routes.append(
                        Route(name=key, pattern=value["route"], controller=value["controller"])
                    )
                except KeyError as exc:
                    msg = f"Route {key!r} is missing the {exc.args[0]!r} key"
                    raise ConfigurationError(msg) from None
            elif isinstance(value, Route):
                routes.append(value)
            else:
                msg = f"Route {key!r} must map to a controller name or a route definition"
                raise ConfigurationError(msg)
        return cls(routes)

    def __getitem__(self, name: str) -> Route:
        return self._routes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({list(self._routes.values())!r})"

    def static(self, path: str) -> Route | None:
        """Return the first static route whose pattern equals *path* verbatim."""
        return self._static.get(path)

    def for_controller(self, controller: str) -> tuple[Route, ...]:
        """Return every route targeting *controller*, in declaration order."""
        return self._by_controller.get(controller, ())

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Return the table in the named-routes mapping shape."""
        return {
            route.name: {"route": route.pattern, "controller": route.controller}
            for route in self._routes.values()
        }
