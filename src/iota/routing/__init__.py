"""Routing — named URL patterns resolved to controller identifiers.

Routes are loaded once at startup into an immutable ``RouteTable``. The
``Router`` matches request paths against it and builds URLs back out of it.
"""

from iota.routing.route import PatternMatch, Route, RouteMatch
from iota.routing.router import Router
from iota.routing.sources import FileRoutes, RouteSource, StaticRoutes
from iota.routing.table import RouteTable

__all__ = [
    "FileRoutes",
    "PatternMatch",
    "Route",
    "RouteMatch",
    "RouteSource",
    "RouteTable",
    "Router",
    "StaticRoutes",
]
