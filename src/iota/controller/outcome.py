"""Dispatch outcomes — the terminal state of one request.

Not finding a route and not supporting a verb are ordinary results, so they
are values rather than exceptions. Each outcome reports the HTTP status the
transport should send.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Dispatched:
    """The controller ran; *controller* is the instance after all hooks."""

    controller: Any
    controller_id: str
    route_name: str | None = None

    status = 200


@dataclass(frozen=True, slots=True)
class NotFoundOutcome:
    """No route matched the request path."""

    path: str
    result: Any = None

    status = 404


@dataclass(frozen=True, slots=True)
class MethodNotAllowedOutcome:
    """A route matched but the controller has no method for the verb."""

    controller_id: str
    method: str
    result: Any = None

    status = 405


type DispatchOutcome = Dispatched | NotFoundOutcome | MethodNotAllowedOutcome
