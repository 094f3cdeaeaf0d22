"""Router — resolve request paths to controllers and build URLs back.

Matching walks the whole route table and keeps the most specific match, so
routes may be declared in any order::

    router = Router({
        "/test/:v1/:v2": "Generic",
        "/test/static/:v1": "Specific",
    })
    request = RequestContext("/test/static/foo")
    router.route(request)     # "Specific"
    request.params            # {"v1": "foo"}

URL generation is the inverse::

    router.url("Specific", {"v1": "bar", "page": 2})   # "/test/static/bar?page=2"
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

from iota.context import request_var
from iota.errors import ConfigurationError, RouteNotFoundError
from iota.http.request import RequestContext
from iota.routing.matcher import match_pattern, split_path
from iota.routing.route import PatternMatch, Route, RouteMatch
from iota.routing.sources import RouteSource
from iota.routing.table import RouteTable

logger = logging.getLogger("iota.routing")

type RouteSpec = RouteTable | RouteSource | Mapping[str, Any]


def _as_table(routes: RouteSpec) -> RouteTable:
    if isinstance(routes, RouteTable):
        return routes
    if isinstance(routes, RouteSource):
        return routes.routes()
    return RouteTable.from_mapping(routes)


class Router:
    """Matches request paths against a route table.

    The table is immutable; replacing it (``router.routes = ...``) is the only
    way to change routes. ``base_url`` is stripped from incoming paths before
    matching and prepended to every generated URL.
    """

    __slots__ = ("_base_url", "_routes")

    def __init__(self, routes: RouteSpec, base_url: str = "") -> None:
        self._routes = _as_table(routes)
        self._base_url = base_url

    # -- Configuration --

    @property
    def routes(self) -> RouteTable:
        return self._routes

    @routes.setter
    def routes(self, routes: RouteSpec) -> None:
        self._routes = _as_table(routes)

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, url: str) -> None:
        self._base_url = url

    # -- Matching --

    def strip_base(self, path: str) -> str | None:
        """Remove the base URL from *path*, or return ``None`` if it is absent.

        The prefix must end on a segment boundary: with base ``/app``, the
        path ``/application`` is outside the application.
        """
        base = self._base_url
        if not base:
            return path
        if not path.startswith(base):
            return None
        rest = path[len(base) :]
        if rest and not rest.startswith("/") and not base.endswith("/"):
            return None
        return rest

    def match(self, path: str) -> RouteMatch | None:
        """Resolve *path* to a ``RouteMatch`` without touching any request state.

        The query string is ignored. Among several matching routes the one
        with the fewest variables wins; on a tie the first declared wins.
        """
        path = path.partition("?")[0]
        stripped = self.strip_base(path)
        if stripped is None:
            logger.debug("Path %r is outside base URL %r", path, self._base_url)
            return None

        static = self._routes.static(stripped)
        if static is not None:
            return RouteMatch(controller=static.controller, variables={}, route_name=static.name)

        segments = split_path(stripped)
        best: tuple[Route, PatternMatch] | None = None
        for route in self._routes.values():
            result = match_pattern(route.pattern, segments)
            if result is None:
                continue
            if best is None or result.variable_count < best[1].variable_count:
                best = (route, result)
                if result.variable_count == 0:
                    break

        if best is None:
            return None
        route, result = best
        return RouteMatch(
            controller=route.controller,
            variables=dict(result.variables),
            route_name=route.name,
        )

    def route(self, request: RequestContext) -> str | None:
        """Route *request* to a controller identifier.

        On success the captured variables are merged into ``request.params``
        (overwriting same-named query values) and ``request.matched_route`` is
        set to the route name.
        Returns ``None`` when nothing matches.
        """
        match = self.match(request.path)
        if match is None:
            logger.debug("No route matches %r", request.path)
            return None

        request.params.update(match.variables)
        request.matched_route = match.route_name
        logger.debug(
            "Routed %r to %s via route %r", request.path, match.controller, match.route_name
        )
        return match.controller

    # -- URL generation --

    def find(self, target: str, index: int = 0) -> Route:
        """Return the route for a route name or controller identifier.

        A route name selects exactly one route. A controller identifier may
        be targeted by several routes; *index* picks one in declaration
        order. Raises ``RouteNotFoundError`` when nothing fits.
        """
        named = self._routes.get(target)
        if named is not None and index == 0:
            return named

        candidates = self._routes.for_controller(target)
        if not candidates and named is None:
            raise RouteNotFoundError(target)
        if not 0 <= index < len(candidates):
            raise RouteNotFoundError(target, index, max(len(candidates), 1))
        return candidates[index]

    def url(
        self,
        target: str,
        params: Mapping[str, Any] | None = None,
        index: int = 0,
    ) -> str:
        """Build the URL for *target* (route name or controller identifier).

        Each ``:var`` segment is filled from *params*, percent-encoded so that
        it survives as exactly one path segment. Params not consumed by the
        pattern are appended as a query string, in mapping order. ``None`` values are dropped. *params* itself is not modified.

        ::

            router.url("User", {"id": "a b", "tab": "posts"})
            # "/users/a%20b?tab=posts"
        """
        route = self.find(target, index)
        remaining = {k: v for k, v in (params or {}).items() if v is not None}

        segments = []
        for seg in route.pattern.split("/"):
            if seg.startswith(":") and seg[1:] in remaining:
                segments.append(quote(str(remaining.pop(seg[1:])), safe=""))
            else:
                segments.append(seg)
        url = "/".join(segments)

        if remaining:
            url = f"{url}?{urlencode(remaining, doseq=True)}"
        return self._base_url + url

    def abs_url(
        self,
        target: str,
        params: Mapping[str, Any] | None = None,
        index: int = 0,
        *,
        https: bool | None = None,
        request: RequestContext | None = None,
    ) -> str:
        """Absolute version of ``url()``.

        Host comes from *request*, defaulting to the request being
        dispatched. The scheme follows that request's TLS state unless
        *https* forces it (``True`` -> https, ``False`` -> http).
        """
        if request is None:
            request = request_var.get(None)
        if request is None or not request.host:
            msg = "abs_url() needs a request with a host; pass request= or call during dispatch"
            raise ConfigurationError(msg)

        if https is None:
            https = request.https
        scheme = "https" if https else "http"
        return f"{scheme}://{request.host}{self.url(target, params, index)}"
