"""Page assets — scripts and styles collected while a view tree renders.

One ``PageAssets`` instance is shared by a view and all of its subviews, so a
partial rendered deep in the tree can ask for a script tag in the page head.
Each render gets its own instance; nothing is held at module level.
"""

import hashlib
import html

from kida.template import Markup


def _media_attr(media: str | None) -> str:
    return f' media="{html.escape(media)}"' if media else ""


def _digest(code: str) -> str:
    return hashlib.md5(code.encode("utf-8"), usedforsecurity=False).hexdigest()


class PageAssets:
    """Ordered, de-duplicated script and style markup for one page.

    ``include_*`` methods reference files and are de-duplicated by path.
    ``add_head_*`` methods add inline code on every call; their ``*_once``
    variants de-duplicate by content.
    """

    __slots__ = ("_css", "_head_css", "_head_css_once", "_head_js", "_head_js_once", "_js")

    def __init__(self) -> None:
        self._js: dict[str, str] = {}
        self._css: dict[str, str] = {}
        self._head_js: list[str] = []
        self._head_js_once: dict[str, str] = {}
        self._head_css: list[str] = []
        self._head_css_once: dict[str, str] = {}

    # -- Files --

    def include_js(self, path: str) -> None:
        """Reference the script at *path* once."""
        if path not in self._js:
            self._js[path] = f'<script type="text/javascript" src="{html.escape(path)}"></script>'

    def include_css(self, path: str, media: str | None = None) -> None:
        """Reference the stylesheet at *path* once, optionally for *media*."""
        if path not in self._css:
            self._css[path] = (
                f'<link rel="stylesheet" type="text/css"{_media_attr(media)}'
                f' href="{html.escape(path)}">'
            )

    # -- Inline code --

    def add_head_js(self, code: str) -> None:
        self._head_js.append(f'<script type="text/javascript">{code}</script>')

    def add_head_js_once(self, code: str) -> None:
        key = _digest(code)
        if key not in self._head_js_once:
            self._head_js_once[key] = f'<script type="text/javascript">{code}</script>'

    def add_head_css(self, code: str, media: str | None = None) -> None:
        self._head_css.append(f'<style type="text/css"{_media_attr(media)}>{code}</style>')

    def add_head_css_once(self, code: str, media: str | None = None) -> None:
        key = _digest(code)
        if key not in self._head_css_once:
            self._head_css_once[key] = (
                f'<style type="text/css"{_media_attr(media)}>{code}</style>'
            )

    # -- Markup --

    def scripts(self) -> Markup:
        """``<script src>`` tags, in first-inclusion order."""
        return Markup("\n".join(self._js.values()))

    def styles(self) -> Markup:
        """``<link rel="stylesheet">`` tags, in first-inclusion order."""
        return Markup("\n".join(self._css.values()))

    def head_js(self) -> Markup:
        return Markup("\n".join([*self._head_js, *self._head_js_once.values()]))

    def head_css(self) -> Markup:
        return Markup("\n".join([*self._head_css, *self._head_css_once.values()]))

    def head(self) -> Markup:
        """Everything for the page ``<head>``: styles first, then scripts."""
        parts = [self.styles(), self.head_css(), self.scripts(), self.head_js()]
        return Markup("\n".join(p for p in parts if p))

    def merge(self, other: PageAssets) -> None:
        """Fold *other*'s assets into this collection, keeping de-duplication."""
        for path, tag in other._js.items():
            self._js.setdefault(path, tag)
        for path, tag in other._css.items():
            self._css.setdefault(path, tag)
        self._head_js.extend(other._head_js)
        self._head_css.extend(other._head_css)
        for key, tag in other._head_js_once.items():
            self._head_js_once.setdefault(key, tag)
        for key, tag in other._head_css_once.items():
            self._head_css_once.setdefault(key, tag)
