"""
dryview runtime

Template environment, configuration, and host integration.

This module provides:
- Jinja2 environment with built-in helper partials and project overrides
- ViewConfig read from DRYVIEW_* environment variables
- FastAPI helpers for rendering pages with a per-request helper
"""

from dryview.runtime.config import ViewConfig
from dryview.runtime.template_renderer import (
    configure_project_templates,
    create_jinja_env,
    get_jinja_env,
    helper_globals,
    install_helpers,
    render_fragment,
    render_partial,
)

__all__ = [
    "ViewConfig",
    "configure_project_templates",
    "create_jinja_env",
    "get_jinja_env",
    "helper_globals",
    "install_helpers",
    "render_fragment",
    "render_partial",
]
