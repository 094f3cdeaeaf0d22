"""Iota — a small MVC web framework.

Named URL patterns route requests to controller classes; controllers render
kida templates through escaped-by-default views; a search-criteria builder
turns form input into SQL WHERE fragments.

Basic usage::

    from iota import App, Controller

    app = App(routes={"/hello/:name": "Hello"})

    @app.controller("Hello")
    class Hello(Controller):
        def get(self) -> None:
            self.write(f"Hello, {self.params['name']}!")

Routing only::

    from iota import RequestContext, Router

    router = Router({"/users/:id": "UserController"})
    router.route(RequestContext("/users/42"))   # "UserController"
    router.url("UserController", {"id": 7})     # "/users/7"
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Controller",
    "ControllerRegistry",
    "Dispatcher",
    "IotaError",
    "RequestContext",
    "Response",
    "RouteNotFoundError",
    "Router",
    "SearchCriteria",
    "View",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import iota`` fast while providing a clean top-level API.
    """
    if name == "App":
        from iota.app import App

        return App

    if name == "AppConfig":
        from iota.config import AppConfig

        return AppConfig

    if name in ("Controller", "ControllerRegistry", "Dispatcher"):
        from iota import controller as _controller

        return getattr(_controller, name)

    if name == "RequestContext":
        from iota.http.request import RequestContext

        return RequestContext

    if name == "Response":
        from iota.http.response import Response

        return Response

    if name == "Router":
        from iota.routing.router import Router

        return Router

    if name == "SearchCriteria":
        from iota.search.criteria import SearchCriteria

        return SearchCriteria

    if name == "View":
        from iota.view.view import View

        return View

    if name == "get_request":
        from iota.context import get_request

        return get_request

    if name in ("ConfigurationError", "IotaError", "RouteNotFoundError"):
        from iota import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
