"""Controllers and request dispatch.

A controller is any object exposing lower-case HTTP verb methods (``get``,
``post``...) plus optional ``before_*``/``after_*`` hooks. The ``Dispatcher``
routes a request, resolves the controller through a ``ControllerRegistry``
and runs the hook sequence around the verb method.
"""

from iota.controller.base import Controller
from iota.controller.dispatcher import Dispatcher
from iota.controller.outcome import (
    Dispatched,
    DispatchOutcome,
    MethodNotAllowedOutcome,
    NotFoundOutcome,
)
from iota.controller.registry import ControllerRegistry, ControllerResolver

__all__ = [
    "Controller",
    "ControllerRegistry",
    "ControllerResolver",
    "DispatchOutcome",
    "Dispatched",
    "Dispatcher",
    "MethodNotAllowedOutcome",
    "NotFoundOutcome",
]
