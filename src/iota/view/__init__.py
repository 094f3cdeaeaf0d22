"""HTML views backed by kida templates.

A ``View`` is a template plus the variables it renders with. Values are
HTML-escaped on assignment unless set through the raw channel; nested views
share one ``PageAssets`` collection so subviews can add scripts and styles
to the page head.
"""

from iota.view.assets import PageAssets
from iota.view.environment import create_environment
from iota.view.escape import escape
from iota.view.view import View

__all__ = ["PageAssets", "View", "create_environment", "escape"]
