"""Dispatcher — run the controller for the current request.

One ``dispatch()`` call walks a small state machine::

    route ──miss──> 404 (callback or plain status)
      │
      hit
      │
    resolve controller, inject router + request
      │
    verb method? ──no──> 405 (callback or plain status), no hooks run
      │
      yes
      │
    before_all, before_<verb>, <verb>, after_<verb>, after_all

The outcome is returned as a value; the status code is also written to
``request.status`` for the transport to send.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from iota.context import request_var
from iota.controller.hooks import resolve_hooks
from iota.controller.outcome import (
    Dispatched,
    DispatchOutcome,
    MethodNotAllowedOutcome,
    NotFoundOutcome,
)
from iota.controller.registry import ControllerRegistry, ControllerResolver
from iota.errors import ConfigurationError
from iota.http.request import RequestContext
from iota.routing.router import Router

logger = logging.getLogger("iota.dispatch")

type Callback = Callable[[], Any]


def _check_callback(callback: object, status: int) -> None:
    """Reject anything that cannot be called with no arguments."""
    if not callable(callback):
        msg = f"{status} handler must be callable, got {type(callback).__name__}"
        raise ConfigurationError(msg)
    try:
        inspect.signature(callback).bind()
    except TypeError:
        msg = f"{status} handler must be callable without arguments"
        raise ConfigurationError(msg) from None
    except ValueError:
        # No introspectable signature (some builtins); trust callable()
        pass


class Dispatcher:
    """Resolves a request to a controller and invokes it.

    The 404 and 405 callbacks are configuration: set them once at startup.
    Re-registering replaces the previous callback.
    """

    __slots__ = ("_controllers", "_not_allowed_callback", "_not_found_callback", "_router")

    def __init__(
        self,
        router: Router,
        controllers: ControllerResolver | None = None,
    ) -> None:
        self._router = router
        self._controllers: ControllerResolver = (
            controllers if controllers is not None else ControllerRegistry()
        )
        self._not_found_callback: Callback | None = None
        self._not_allowed_callback: Callback | None = None

    @property
    def router(self) -> Router:
        return self._router

    @router.setter
    def router(self, router: Router) -> None:
        self._router = router

    @property
    def controllers(self) -> ControllerResolver:
        return self._controllers

    # -- Fallback configuration --

    @property
    def not_found_callback(self) -> Callback | None:
        return self._not_found_callback

    @property
    def method_not_allowed_callback(self) -> Callback | None:
        return self._not_allowed_callback

    def handle_404_with(self, callback: Callback) -> None:
        """Call *callback* whenever no route matches.

        Raises ``ConfigurationError`` if *callback* is not a zero-argument
        callable.
        """
        _check_callback(callback, 404)
        self._not_found_callback = callback

    def handle_405_with(self, callback: Callback) -> None:
        """Call *callback* whenever the controller lacks the request's verb.

        Raises ``ConfigurationError`` if *callback* is not a zero-argument
        callable.
        """
        _check_callback(callback, 405)
        self._not_allowed_callback = callback

    # -- Dispatch --

    def dispatch(self, request: RequestContext) -> DispatchOutcome:
        """Route *request* and run the matching controller."""
        token = request_var.set(request)
        try:
            return self._dispatch(request)
        finally:
            request_var.reset(token)

    def _dispatch(self, request: RequestContext) -> DispatchOutcome:
        controller_id = self._router.route(request)
        if controller_id is None:
            return self.dispatch_404(request)

        controller = self._controllers.resolve(controller_id)
        controller.router = self._router
        controller.request = request

        verb = request.verb
        sequence = resolve_hooks(type(controller), verb)
        if sequence is None:
            return self.dispatch_405(request, controller_id)

        logger.debug("Dispatching %s to %s: %s", request.method, controller_id, sequence)
        for name in sequence:
            getattr(controller, name)()

        return Dispatched(
            controller=controller,
            controller_id=controller_id,
            route_name=request.matched_route,
        )

    def dispatch_404(self, request: RequestContext) -> NotFoundOutcome:
        """Signal 404 and run the configured callback, if any."""
        logger.info("404 Not Found: %s %s", request.method, request.path)
        request.status = 404
        result = None
        if self._not_found_callback is not None:
            result = self._not_found_callback()
        return NotFoundOutcome(path=request.path, result=result)

    def dispatch_405(
        self, request: RequestContext, controller_id: str = ""
    ) -> MethodNotAllowedOutcome:
        """Signal 405 and run the configured callback, if any."""
        logger.info(
            "405 Method Not Allowed: %s %s (%s)", request.method, request.path, controller_id
        )
        request.status = 405
        result = None
        if self._not_allowed_callback is not None:
            result = self._not_allowed_callback()
        return MethodNotAllowedOutcome(
            controller_id=controller_id, method=request.method, result=result
        )
