"""Per-request context handed to the router and dispatcher.

Unlike the route table, a ``RequestContext`` is deliberately mutable: the
router merges path variables into ``params`` and records ``matched_route``,
and the dispatcher records the response ``status``. One context lives for
exactly one request.
"""

from dataclasses import dataclass, field
from urllib.parse import parse_qsl, unquote

from iota._internal.asgi import Scope


@dataclass(slots=True)
class RequestContext:
    """What the transport knows about the current request.

    ``path`` may carry a query string; the router strips it before matching.
    ``params`` holds request parameters (query string values plus, after
    routing, the captured route variables, which take precedence).
    ``matched_route`` is the name of the route that matched, set by
    ``Router.route()``.
    """

    path: str
    method: str = "GET"
    host: str = ""
    https: bool = False
    params: dict[str, str] = field(default_factory=dict)
    status: int = 200
    matched_route: str | None = None

    @classmethod
    def from_target(
        cls,
        target: str,
        method: str = "GET",
        *,
        host: str = "",
        https: bool = False,
    ) -> RequestContext:
        """Build a context from a raw request target.

        The path is percent-decoded the way an ASGI server decodes
        ``scope["path"]``; the query string is parsed into ``params``.
        """
        path, sep, query = target.partition("?")
        return cls(
            path=f"{unquote(path)}{sep}{query}",
            method=method,
            host=host,
            https=https,
            params=dict(parse_qsl(query, keep_blank_values=True)),
        )

    @classmethod
    def from_scope(cls, scope: Scope) -> RequestContext:
        """Build a context from a raw ASGI HTTP scope."""
        headers = {
            name.decode("latin-1").lower(): value.decode("latin-1")
            for name, value in scope.get("headers", ())
        }
        host = headers.get("host", "")
        if not host and scope.get("server"):
            server_host, port = scope["server"]
            host = f"{server_host}:{port}" if port not in (80, 443) else server_host

        path = scope.get("root_path", "") + scope["path"]
        query = scope.get("query_string", b"").decode("latin-1")
        return cls(
            path=f"{path}?{query}" if query else path,
            method=scope["method"],
            host=host,
            https=scope.get("scheme", "http") == "https",
            params=dict(parse_qsl(query, keep_blank_values=True)),
        )

    @property
    def path_info(self) -> str:
        """The path without its query string."""
        return self.path.partition("?")[0]

    @property
    def verb(self) -> str:
        """The HTTP method, lower-cased (``"get"``, ``"post"``...)."""
        return self.method.lower()

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"
