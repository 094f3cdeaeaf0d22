"""Kida environment setup.

Creates a kida Environment from iota's AppConfig. The environment is created
once at startup and shared by every view.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, FileSystemLoader

from iota.config import AppConfig


def create_environment(
    config: AppConfig,
    globals_: Mapping[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment loading templates from ``config.template_dir``."""
    env = Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)
    return env
