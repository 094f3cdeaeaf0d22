"""Recursive HTML escaping for view variables."""

import html
from collections.abc import Mapping

from kida.template import Markup


def escape(value: object) -> object:
    """Escape *value* for output into HTML.

    Strings are entity-escaped (quotes included) and returned as ``Markup``
    so the template engine does not escape them a second time. Lists,
    tuples and mappings are escaped recursively. Empty values, non-string
    scalars and other objects pass through unchanged, which keeps their type
    (``None`` stays distinguishable from ``""`` in a template). Objects are
    opaque: escaping their fields is up to the template.
    """
    if isinstance(value, Markup):
        return value
    if isinstance(value, str):
        if not value:
            return value
        return Markup(html.escape(value, quote=True))
    if isinstance(value, Mapping):
        return {key: escape(item) for key, item in value.items()}
    if isinstance(value, list):
        return [escape(item) for item in value]
    if isinstance(value, tuple):
        return tuple(escape(item) for item in value)
    return value
