"""View — a kida template plus the variables it renders with.

Assignment escapes by default::

    view = View("user.html", env, router=router)
    view["name"] = "<b>Ann</b>"          # rendered as &lt;b&gt;Ann&lt;/b&gt;
    view.set_raw("bio", "<p>hi</p>")      # rendered as-is
    view["sidebar"] = view.subview("sidebar.html", {"items": items})
    html = view.render()

Templates see every assigned variable plus ``url``, ``abs_url`` (the
router's URL builders), ``assets`` (the shared ``PageAssets``) and ``view``.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from kida import Environment
from kida.template import Markup

from iota.errors import ConfigurationError, TemplateError
from iota.view.assets import PageAssets
from iota.view.escape import escape

if TYPE_CHECKING:
    from iota.routing.router import Router


class View:
    """A renderable template with escaped and raw variables.

    Escaped values win over raw values of the same name when rendering.
    Placeholders set on a view propagate to all of its ancestors, so a
    subview can hand values up to the layout that contains it.
    """

    __slots__ = (
        "_assets",
        "_data",
        "_env",
        "_parent",
        "_placeholders",
        "_raw",
        "_router",
        "template",
    )

    def __init__(
        self,
        template: str,
        env: Environment | None = None,
        *,
        router: Router | None = None,
        assets: PageAssets | None = None,
    ) -> None:
        self.template = template
        self._env = env
        self._router = router
        self._assets = assets if assets is not None else PageAssets()
        self._parent: View | None = None
        self._data: dict[str, Any] = {}
        self._raw: dict[str, Any] = {}
        self._placeholders: dict[str, Any] = {}

    # -- Tree --

    @property
    def parent(self) -> View | None:
        return self._parent

    @property
    def assets(self) -> PageAssets:
        return self._assets

    def set_parent(self, parent: View) -> None:
        """Attach this view under *parent*, sharing its page assets."""
        self._parent = parent
        if self._assets is not parent._assets:
            parent._assets.merge(self._assets)
            self._assets = parent._assets

    def subview(self, template: str, data: Mapping[str, Any] | None = None) -> View:
        """Create a child view of the same class, sharing env, router and assets."""
        view = type(self)(template, self._env, router=self._router, assets=self._assets)
        view.set_parent(self)
        if data:
            view.update(data)
        return view

    # -- Variables --

    def __setitem__(self, name: str, value: Any) -> None:
        if isinstance(value, View):
            value.set_parent(self)
            self._data[name] = Markup(value.render())
        else:
            self._data[name] = escape(value)

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def get(self, name: str, default: Any = None) -> Any:
        """Return the escaped value of *name*, or *default*."""
        return self._data.get(name, default)

    def assign(self, name: str, value: Any) -> None:
        """Same as ``view[name] = value``."""
        self[name] = value

    def update(self, data: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Assign many values at once; each is escaped like a single assignment."""
        items = data.items() if isinstance(data, Mapping) else data
        for name, value in items:
            self[name] = value

    def set_raw(self, name: str, value: Any) -> None:
        """Assign *value* without escaping. Make sure it is safe for HTML."""
        self._raw[name] = Markup(value) if isinstance(value, str) else value

    def get_raw(self, name: str, default: Any = None) -> Any:
        return self._raw.get(name, default)

    # -- Placeholders --

    def set_placeholder(self, name: str, value: Any) -> None:
        """Set a placeholder here and on every ancestor view."""
        view: View | None = self
        while view is not None:
            view._placeholders[name] = value
            view = view._parent

    def get_placeholder(self, name: str, default: Any = None) -> Any:
        return self._placeholders.get(name, default)

    # -- URL helpers --

    def url(self, *args: Any, **kwargs: Any) -> str:
        """Proxy to ``Router.url()``."""
        return self._require_router().url(*args, **kwargs)

    def abs_url(self, *args: Any, **kwargs: Any) -> str:
        """Proxy to ``Router.abs_url()``."""
        return self._require_router().abs_url(*args, **kwargs)

    def _require_router(self) -> Router:
        if self._router is None:
            msg = f"View {self.template!r} has no router; pass router= to build URLs"
            raise ConfigurationError(msg)
        return self._router

    # -- Rendering --

    def context(self) -> dict[str, Any]:
        """The variables the template renders with."""
        return {
            "view": self,
            "url": self.url,
            "abs_url": self.abs_url,
            "assets": self._assets,
            **self._raw,
            **self._data,
        }

    def render(self) -> str:
        """Render the template to a string."""
        if self._env is None:
            msg = f"View {self.template!r} has no template environment"
            raise TemplateError(msg)

        from kida.environment.exceptions import TemplateNotFoundError

        try:
            template = self._env.get_template(self.template)
        except TemplateNotFoundError as exc:
            msg = f"Template {self.template!r} not found"
            raise TemplateError(msg) from exc
        return template.render(self.context())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"View({self.template!r})"
