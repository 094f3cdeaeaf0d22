"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(base_url="/app", routes_file="routes.txt")
    """

    # Routing
    base_url: str = ""  # Prefix stripped before matching, prepended by url()
    routes_file: str | Path | None = None  # Loaded when App gets no explicit routes

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Diagnostics
    debug: bool = False
