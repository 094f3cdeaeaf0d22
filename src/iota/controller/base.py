"""Optional controller base class.

Controllers do not have to inherit from anything; the dispatcher only needs
verb methods. Subclassing ``Controller`` adds the attributes the dispatcher
injects plus small helpers for producing a response.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from iota.http.response import Response

if TYPE_CHECKING:
    from iota.http.request import RequestContext
    from iota.routing.router import Router
    from iota.view.view import View


class Controller:
    """Base class for request handlers.

    Define one method per HTTP verb you accept, and optionally hooks::

        class UserController(Controller):
            def before_all(self) -> None:
                self.user_id = self.request.params["id"]

            def get(self) -> None:
                self.write(f"user {self.user_id}")

    ``router`` and ``request`` are injected by the dispatcher before any
    hook runs.
    """

    router: Router
    request: RequestContext
    response: Response | None = None

    @property
    def params(self) -> dict[str, str]:
        """Shortcut for ``self.request.params``."""
        return self.request.params

    def write(self, text: str) -> None:
        """Append *text* to the response body."""
        if self.response is None:
            self.response = Response(text)
        else:
            self.response = self.response.with_body(self.response.text + text)

    def render(self, view: View) -> None:
        """Render *view* and append it to the response body."""
        self.write(view.render())

    def redirect(
        self,
        target: str,
        params: Mapping[str, Any] | None = None,
        *,
        status: int = 303,
    ) -> None:
        """Respond with a redirect to the URL of route *target*."""
        location = self.router.url(target, params)
        self.response = Response(status=status).with_header("Location", location)
