"""Tests for iota.view — escaping, raw values, subviews, placeholders and assets."""

from pathlib import Path

import pytest
from kida import DictLoader, Environment
from kida.template import Markup

from iota.config import AppConfig
from iota.errors import ConfigurationError, TemplateError
from iota.http.request import RequestContext
from iota.routing.router import Router
from iota.view import PageAssets, View, create_environment, escape

TEMPLATES = {
    "page.html": "<h1>{{ title }}</h1>{{ body }}",
    "bio.html": "<div>{{ bio }}</div>",
    "sidebar.html": "<aside>{{ item }}</aside>",
    "layout.html": "<main>{{ sidebar }}</main>",
    "link.html": '<a href="{{ url("User") }}">me</a>',
    "head.html": "<head>{{ assets.head() }}</head>",
}


@pytest.fixture
def env() -> Environment:
    return Environment(loader=DictLoader(TEMPLATES), autoescape=True)


@pytest.fixture
def router() -> Router:
    return Router({"/users/:id": "User"})


class TestEscape:
    def test_string(self) -> None:
        assert escape("<b>\"Ann\" & 'Bob'</b>") == (
            "&lt;b&gt;&quot;Ann&quot; &amp; &#x27;Bob&#x27;&lt;/b&gt;"
        )

    def test_result_is_markup(self) -> None:
        assert isinstance(escape("<b>"), Markup)

    def test_markup_untouched(self) -> None:
        value = Markup("<b>safe</b>")
        assert escape(value) is value

    def test_recursive(self) -> None:
        assert escape({"a": ["<x>", ("<y>",)]}) == {"a": ["&lt;x&gt;", ("&lt;y&gt;",)]}

    def test_passthrough(self) -> None:
        assert escape("") == ""
        assert escape(None) is None
        assert escape(42) == 42
        obj = object()
        assert escape(obj) is obj


class TestVariables:
    def test_assignment_escapes(self, env: Environment) -> None:
        view = View("page.html", env)
        view["title"] = "<b>Ann</b>"
        view["body"] = ""
        assert view.render() == "<h1>&lt;b&gt;Ann&lt;/b&gt;</h1>"

    def test_get_returns_escaped(self) -> None:
        view = View("page.html")
        view.assign("title", "a&b")
        assert view["title"] == "a&amp;b"
        assert view.get("title") == "a&amp;b"
        assert view.get("missing", "x") == "x"
        assert "title" in view

    def test_raw_not_escaped(self, env: Environment) -> None:
        view = View("bio.html", env)
        view.set_raw("bio", "<p>hi</p>")
        assert view.render() == "<div><p>hi</p></div>"
        assert view.get_raw("bio") == "<p>hi</p>"

    def test_escaped_wins_over_raw(self, env: Environment) -> None:
        view = View("bio.html", env)
        view.set_raw("bio", "<p>raw</p>")
        view["bio"] = "<p>escaped</p>"
        assert view.render() == "<div>&lt;p&gt;escaped&lt;/p&gt;</div>"

    def test_update(self, env: Environment) -> None:
        view = View("page.html", env)
        view.update({"title": "T", "body": "<br>"})
        assert view.render() == "<h1>T</h1>&lt;br&gt;"


class TestSubviews:
    def test_assign_view_renders_child(self, env: Environment) -> None:
        layout = View("layout.html", env)
        child = View("sidebar.html", env)
        child["item"] = "<i>"
        layout["sidebar"] = child
        assert child.parent is layout
        assert layout.render() == "<main><aside>&lt;i&gt;</aside></main>"

    def test_subview_shares_assets(self, env: Environment) -> None:
        layout = View("layout.html", env)
        child = layout.subview("sidebar.html", {"item": "x"})
        assert child.assets is layout.assets
        assert child.parent is layout
        assert child.render() == "<aside>x</aside>"

    def test_set_parent_merges_assets(self, env: Environment) -> None:
        layout = View("layout.html", env)
        child = View("sidebar.html", env)
        child.assets.include_js("/child.js")
        child.set_parent(layout)
        assert child.assets is layout.assets
        assert "/child.js" in layout.assets.scripts()


class TestPlaceholders:
    def test_propagate_to_ancestors(self) -> None:
        root = View("layout.html")
        middle = root.subview("layout.html")
        leaf = middle.subview("sidebar.html")
        leaf.set_placeholder("title", "Leaf title")
        assert leaf.get_placeholder("title") == "Leaf title"
        assert middle.get_placeholder("title") == "Leaf title"
        assert root.get_placeholder("title") == "Leaf title"

    def test_do_not_propagate_down(self) -> None:
        root = View("layout.html")
        leaf = root.subview("sidebar.html")
        root.set_placeholder("title", "Root")
        assert leaf.get_placeholder("title") is None
        assert leaf.get_placeholder("title", "default") == "default"


class TestUrlHelpers:
    def test_url_proxy(self, router: Router) -> None:
        view = View("link.html", router=router)
        assert view.url("User", {"id": 5}) == "/users/5"

    def test_abs_url_proxy(self, router: Router) -> None:
        view = View("link.html", router=router)
        request = RequestContext("/", host="example.com")
        assert view.abs_url("User", {"id": 5}, request=request) == "http://example.com/users/5"

    def test_url_in_template(self, env: Environment) -> None:
        view = View("link.html", env, router=Router({"/me": "User"}))
        assert view.render() == '<a href="/me">me</a>'

    def test_no_router(self) -> None:
        with pytest.raises(ConfigurationError, match="no router"):
            View("link.html").url("User")


class TestRendering:
    def test_no_environment(self) -> None:
        with pytest.raises(TemplateError, match="no template environment"):
            View("page.html").render()

    def test_missing_template(self, env: Environment) -> None:
        with pytest.raises(TemplateError, match="not found"):
            View("nope.html", env).render()

    def test_str_renders(self, env: Environment) -> None:
        view = View("sidebar.html", env)
        view["item"] = "x"
        assert str(view) == "<aside>x</aside>"

    def test_assets_in_template(self, env: Environment) -> None:
        view = View("head.html", env)
        view.assets.include_css("/site.css")
        assert view.render() == (
            '<head><link rel="stylesheet" type="text/css" href="/site.css"></head>'
        )

    def test_file_system_environment(self, tmp_path: Path) -> None:
        (tmp_path / "hello.html").write_text("Hello, {{ name }}!")
        env = create_environment(AppConfig(template_dir=tmp_path))
        view = View("hello.html", env)
        view["name"] = "<World>"
        assert view.render() == "Hello, &lt;World&gt;!"


class TestPageAssets:
    def test_include_js_dedupes(self) -> None:
        assets = PageAssets()
        assets.include_js("/a.js")
        assets.include_js("/b.js")
        assets.include_js("/a.js")
        assert assets.scripts() == (
            '<script type="text/javascript" src="/a.js"></script>\n'
            '<script type="text/javascript" src="/b.js"></script>'
        )

    def test_include_css_media(self) -> None:
        assets = PageAssets()
        assets.include_css("/print.css", "print")
        assert assets.styles() == (
            '<link rel="stylesheet" type="text/css" media="print" href="/print.css">'
        )

    def test_head_js_always_appends(self) -> None:
        assets = PageAssets()
        assets.add_head_js("go();")
        assets.add_head_js("go();")
        assert assets.head_js().count("go();") == 2

    def test_head_js_once(self) -> None:
        assets = PageAssets()
        assets.add_head_js_once("go();")
        assets.add_head_js_once("go();")
        assert assets.head_js() == '<script type="text/javascript">go();</script>'

    def test_head_css_once(self) -> None:
        assets = PageAssets()
        assets.add_head_css_once("p { color: red }", "screen")
        assets.add_head_css_once("p { color: red }", "screen")
        assert assets.head_css() == (
            '<style type="text/css" media="screen">p { color: red }</style>'
        )

    def test_head_order(self) -> None:
        assets = PageAssets()
        assets.add_head_js("js();")
        assets.include_js("/a.js")
        assets.add_head_css("css {}")
        assets.include_css("/a.css")
        head = assets.head()
        assert head.index("/a.css") < head.index("css {}") < head.index("/a.js")
        assert head.index("/a.js") < head.index("js();")

    def test_empty(self) -> None:
        assert PageAssets().head() == ""
