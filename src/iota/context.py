"""Request-scoped context via ContextVar.

Provides ``request_var``: the ``RequestContext`` currently being dispatched.
Set by the dispatcher for the duration of ``dispatch()`` so that
``Router.abs_url()`` and views can default to the current request's host and
scheme without a process-wide registry.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local otherwise.
    No locks needed.
"""

from contextvars import ContextVar

from iota.http.request import RequestContext

request_var: ContextVar[RequestContext] = ContextVar("iota_request")
"""The current request. Set by the dispatcher before invoking a controller."""


def get_request() -> RequestContext:
    """Return the current request.

    Raises ``LookupError`` if called outside a dispatch.
    """
    return request_var.get()
