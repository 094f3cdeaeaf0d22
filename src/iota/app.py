"""Iota application class.

Wires the routing and dispatch pipeline to an ASGI server::

    from iota import App, AppConfig, Controller

    app = App(AppConfig(routes_file="routes.txt", template_dir="templates"))

    @app.controller()
    class HomeController(Controller):
        def get(self) -> None:
            view = app.view("home.html")
            view["title"] = "Welcome"
            self.render(view)

Run it with any ASGI server (``uvicorn module:app``).
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar
from urllib.parse import parse_qsl

from kida import Environment

from iota._internal.asgi import Receive, Scope, Send
from iota.config import AppConfig
from iota.controller.dispatcher import Callback, Dispatcher
from iota.controller.outcome import Dispatched, DispatchOutcome
from iota.controller.registry import ControllerRegistry
from iota.errors import ConfigurationError
from iota.http.request import RequestContext
from iota.http.response import Response
from iota.routing.router import RouteSpec, Router
from iota.routing.sources import FileRoutes
from iota.server.sender import send_response
from iota.view.environment import create_environment
from iota.view.view import View

logger = logging.getLogger("iota.server")

T = TypeVar("T", bound=Callable[..., Any])

_FORM_TYPE = "application/x-www-form-urlencoded"


class App:
    """The iota application.

    Holds one Router, one ControllerRegistry and one Dispatcher for the
    lifetime of the process. Routes are read once, at construction.
    """

    __slots__ = ("_controllers", "_dispatcher", "_env", "_router", "config")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        routes: RouteSpec | None = None,
        controllers: ControllerRegistry | None = None,
        env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        if routes is None:
            if self.config.routes_file is None:
                msg = "App needs routes=... or AppConfig.routes_file"
                raise ConfigurationError(msg)
            routes = FileRoutes(self.config.routes_file)

        self._router = Router(routes, base_url=self.config.base_url)
        self._controllers = controllers if controllers is not None else ControllerRegistry()
        self._dispatcher = Dispatcher(self._router, self._controllers)
        self._env = env

    # -- Components --

    @property
    def router(self) -> Router:
        return self._router

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def controllers(self) -> ControllerRegistry:
        return self._controllers

    @property
    def env(self) -> Environment:
        """The kida environment, created from config on first use."""
        if self._env is None:
            self._env = create_environment(self.config)
        return self._env

    # -- Setup --

    def controller(self, name: str | None = None) -> Callable[[T], T]:
        """Register a controller class (decorator). *name* defaults to the class name."""
        return self._controllers.controller(name)

    def handle_404_with(self, callback: Callback) -> None:
        self._dispatcher.handle_404_with(callback)

    def handle_405_with(self, callback: Callback) -> None:
        self._dispatcher.handle_405_with(callback)

    def view(self, template: str, data: Mapping[str, Any] | None = None) -> View:
        """Create a top-level view bound to this app's environment and router."""
        view = View(template, self.env, router=self._router)
        if data:
            view.update(data)
        return view

    # -- Request handling --

    def handle(self, request: RequestContext) -> Response:
        """Dispatch *request* and turn the outcome into a Response."""
        outcome = self._dispatcher.dispatch(request)
        return _to_response(outcome, request)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            msg = f"Unsupported ASGI scope type: {scope['type']!r}"
            raise ConfigurationError(msg)

        request = RequestContext.from_scope(scope)
        headers = dict(scope.get("headers", ()))
        body = await _read_body(receive)
        content_type = headers.get(b"content-type", b"").decode("latin-1")
        if body and content_type.split(";")[0].strip() == _FORM_TYPE:
            # Urlencoded bodies are ASCII; parse_qsl decodes the %xx escapes
            form = body.decode("latin-1")
            request.params.update(parse_qsl(form, keep_blank_values=True))

        response = self.handle(request)
        logger.debug("%s %s -> %d", request.method, request.path, response.status)
        await send_response(response, send)


def _to_response(outcome: DispatchOutcome, request: RequestContext) -> Response:
    if isinstance(outcome, Dispatched):
        response = getattr(outcome.controller, "response", None)
        return response if isinstance(response, Response) else Response()

    result = outcome.result
    if isinstance(result, Response):
        return result.with_status(request.status)
    if isinstance(result, str):
        return Response(result, status=request.status)
    return Response(status=request.status)


async def _read_body(receive: Receive) -> bytes:
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
