"""Tests for iota.routing.router — matching, base URL and URL generation."""

import pytest

from iota.context import request_var
from iota.errors import ConfigurationError, RouteNotFoundError
from iota.http.request import RequestContext
from iota.routing.router import Router
from iota.routing.sources import StaticRoutes
from iota.routing.table import RouteTable


def _route(router: Router, path: str) -> str | None:
    return router.route(RequestContext.from_target(path))


class TestConstruction:
    def test_takes_mapping(self) -> None:
        routes = {"/test": "TestController"}
        router = Router(routes)
        assert isinstance(router.routes, RouteTable)
        assert router.routes.to_dict() == {
            "/test": {"route": "/test", "controller": "TestController"}
        }

    def test_takes_route_source(self) -> None:
        router = Router(StaticRoutes({"/test": "TestController"}))
        assert "/test" in router.routes

    def test_replace_routes(self) -> None:
        router = Router({"/a": "A"})
        router.routes = {"/b": "B"}
        assert _route(router, "/a") is None
        assert _route(router, "/b") == "B"


class TestRoute:
    def test_static_route(self) -> None:
        router = Router({"/test": "TestController"})
        assert _route(router, "/test") == "TestController"

    def test_no_match(self) -> None:
        router = Router({"/test": "TestController"})
        assert _route(router, "/foobar") is None

    def test_route_with_vars(self) -> None:
        router = Router({"/test/:var1/:var2": "TestController"})
        assert _route(router, "/test/foo/bar") == "TestController"
        assert _route(router, "/baz") is None
        assert _route(router, "/test") is None

    def test_vars_stored_in_request(self) -> None:
        router = Router({"/test/:var1/:var2": "TestController"})
        request = RequestContext.from_target("/test/foo/bar")
        assert router.route(request) == "TestController"
        assert request.params == {"var1": "foo", "var2": "bar"}

    def test_route_vars_override_query(self) -> None:
        router = Router({"/test/:var1": "TestController"})
        request = RequestContext.from_target("/test/foo?var1=query&page=2")
        router.route(request)
        assert request.params == {"var1": "foo", "page": "2"}

    def test_query_string_ignored(self) -> None:
        router = Router({"/test": "TestController"})
        assert _route(router, "/test?x=1") == "TestController"

    def test_most_specific_wins(self) -> None:
        router = Router(
            {
                "/test/:var1/:var2": "TestController1",
                "/test/static/:var1": "TestController2",
            }
        )
        request = RequestContext.from_target("/test/static/foo")
        assert router.route(request) == "TestController2"
        assert request.params == {"var1": "foo"}

    def test_static_beats_variables(self) -> None:
        router = Router({"/:a/:b": "Generic", "/about/us": "About"})
        assert _route(router, "/about/us") == "About"

    def test_tie_first_declared_wins(self) -> None:
        router = Router({"/a/:x": "First", "/:y/b": "Second"})
        assert _route(router, "/a/b") == "First"
        router = Router({"/:y/b": "Second", "/a/:x": "First"})
        assert _route(router, "/a/b") == "Second"

    def test_matched_route_on_request(self) -> None:
        router = Router({"user": {"route": "/users/:id", "controller": "User"}})
        request = RequestContext.from_target("/users/5")
        assert request.matched_route is None
        router.route(request)
        assert request.matched_route == "user"

    def test_matched_route_not_shared(self) -> None:
        router = Router({"user": {"route": "/users/:id", "controller": "User"}, "/": "Home"})
        first = RequestContext.from_target("/users/5")
        second = RequestContext.from_target("/")
        router.route(first)
        router.route(second)
        assert first.matched_route == "user"
        assert second.matched_route == "/"

    def test_exact_static_pattern_precedes_walk(self) -> None:
        router = Router({"/test/": "Slashed", "/test": "Exact"})
        assert _route(router, "/test") == "Exact"
        assert _route(router, "/test/") == "Slashed"

    def test_match_has_no_side_effects(self) -> None:
        router = Router({"/users/:id": "User"})
        match = router.match("/users/5")
        assert match is not None
        assert match.controller == "User"
        assert match.variables == {"id": "5"}


class TestBaseUrl:
    @pytest.fixture
    def router(self) -> Router:
        return Router({"/static": "TestController1", "/:with/:vars": "TestController2"}, "/test")

    def test_matches_under_prefix(self, router: Router) -> None:
        assert _route(router, "/test/static") == "TestController1"
        assert _route(router, "/test/foo/bar") == "TestController2"

    def test_no_match_outside_prefix(self, router: Router) -> None:
        assert _route(router, "/static") is None
        assert _route(router, "/foo/bar") is None

    def test_prefix_needs_segment_boundary(self, router: Router) -> None:
        assert router.strip_base("/testing/static") is None
        assert router.strip_base("/test/static") == "/static"

    def test_url_prepends_prefix(self, router: Router) -> None:
        assert router.url("TestController1") == "/test/static"


class TestUrl:
    def test_recreates_url(self) -> None:
        router = Router({"/test/:var1/:var2": "TestController"})
        assert router.url("TestController", {"var1": "foo", "var2": "bar"}) == "/test/foo/bar"

    def test_leftovers_in_query_string(self) -> None:
        router = Router({"/test/:var1/:var2": "TestController"})
        url = router.url(
            "TestController", {"var1": "foo", "var2": "bar", "q": "p", "alpha": "omega"}
        )
        assert url == "/test/foo/bar?q=p&alpha=omega"

    def test_encodes_params(self) -> None:
        router = Router({"/test/:var1/:var2": "TestController"})
        url = router.url(
            "TestController",
            {"var1": "a path", "var2": 'a="b"', "q": "/here", "alpha": "there?"},
        )
        assert url == "/test/a%20path/a%3D%22b%22?q=%2Fhere&alpha=there%3F"

    def test_index_selects_route(self) -> None:
        router = Router(
            {
                "/resource": "TestController",
                "/alias": "TestController",
                "/shortcut": "TestController",
            }
        )
        assert router.url("TestController") == "/resource"
        assert router.url("TestController", None, 1) == "/alias"
        assert router.url("TestController", None, 2) == "/shortcut"

    def test_index_out_of_range(self) -> None:
        router = Router({"/resource": "TestController"})
        with pytest.raises(RouteNotFoundError, match="out of range"):
            router.url("TestController", None, 3)

    def test_unknown_target(self) -> None:
        router = Router({"/resource": "TestController"})
        with pytest.raises(RouteNotFoundError) as exc_info:
            router.url("Nope")
        assert isinstance(exc_info.value, LookupError)
        assert exc_info.value.target == "Nope"

    def test_by_route_name(self) -> None:
        router = Router(
            {
                "list": {"route": "/users", "controller": "User"},
                "show": {"route": "/users/:id", "controller": "User"},
            }
        )
        assert router.url("show", {"id": 3}) == "/users/3"
        assert router.url("User") == "/users"

    def test_params_not_mutated(self) -> None:
        router = Router({"/test/:id": "T"})
        params = {"id": "1", "q": "x"}
        router.url("T", params)
        assert params == {"id": "1", "q": "x"}

    def test_none_values_dropped(self) -> None:
        router = Router({"/search": "S"})
        assert router.url("S", {"q": "x", "page": None}) == "/search?q=x"

    def test_unfilled_variable_kept(self) -> None:
        router = Router({"/test/:id": "T"})
        assert router.url("T") == "/test/:id"

    def test_round_trip(self) -> None:
        router = Router({"/items/:cat/:id": "Item"})
        url = router.url("Item", {"cat": "books", "id": "42", "sort": "asc"})
        request = RequestContext.from_target(url)
        assert router.route(request) == "Item"
        assert request.params == {"cat": "books", "id": "42", "sort": "asc"}

    @pytest.mark.parametrize("value", ["a b", "50%", "a+b", "caf\u00e9", "x#y"])
    def test_round_trip_encoded_values(self, value: str) -> None:
        router = Router({"/items/:id": "Item"})
        url = router.url("Item", {"id": value, "q": value})
        request = RequestContext.from_target(url)
        assert router.route(request) == "Item"
        assert request.params == {"id": value, "q": value}

    def test_space_is_not_plus(self) -> None:
        router = Router({"/items/:id": "Item"})
        assert router.url("Item", {"id": "a b"}) == "/items/a%20b"


class TestAbsUrl:
    def test_explicit_request(self) -> None:
        router = Router({"/test/:v": "T"})
        request = RequestContext("/", host="example.com", https=True)
        assert router.abs_url("T", {"v": "x"}, request=request) == "https://example.com/test/x"

    def test_force_http(self) -> None:
        router = Router({"/test": "T"})
        request = RequestContext("/", host="example.com", https=True)
        assert router.abs_url("T", https=False, request=request) == "http://example.com/test"

    def test_current_request(self) -> None:
        router = Router({"/test": "T"})
        token = request_var.set(RequestContext("/", host="localhost:8000"))
        try:
            assert router.abs_url("T") == "http://localhost:8000/test"
        finally:
            request_var.reset(token)

    def test_no_request(self) -> None:
        router = Router({"/test": "T"})
        with pytest.raises(ConfigurationError):
            router.abs_url("T")
