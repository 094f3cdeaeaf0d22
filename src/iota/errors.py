"""Iota exception hierarchy.

Shared across Router, Dispatcher, SearchCriteria and the view layer so every
module raises and catches the same types.

Routing misses and unsupported HTTP methods are *not* exceptions: they are
ordinary outcomes of a request and are returned as values. Everything here
signals a programming or configuration fault.
"""


class IotaError(Exception):
    """Base for all iota-specific errors."""


class ConfigurationError(IotaError):
    """Raised when the application is wired up incorrectly.

    Typically raised at startup: a non-callable 404/405 handler, a malformed
    route table, or an absolute URL requested without a known host.
    """


class RouteNotFoundError(IotaError, LookupError):
    """No route exists for the name or controller given to ``Router.url()``."""

    def __init__(self, target: str, index: int = 0, available: int = 0) -> None:
        self.target = target
        self.index = index
        self.available = available
        if available:
            detail = (
                f"Route index {index} out of range for {target!r} "
                f"({available} route(s) defined)"
            )
        else:
            detail = f"No route found named {target!r}"
        super().__init__(detail)


class ControllerNotFoundError(ConfigurationError):
    """A matched route names a controller that cannot be resolved."""

    def __init__(self, controller: str, reason: str = "") -> None:
        self.controller = controller
        detail = f"Controller {controller!r} cannot be resolved"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


class RouteFileError(IotaError, OSError):
    """A route file could not be opened for reading."""


class TemplateError(IotaError):
    """A view could not be rendered (no environment, missing template)."""
