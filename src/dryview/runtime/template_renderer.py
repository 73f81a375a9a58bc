"""
Jinja2 environment for helper partials and host templates.

Sets up the Jinja2 environment with the helper partials, project-level
template overrides, and the helper globals/filters.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PrefixLoader, select_autoescape
from jinja2 import TemplateNotFound
from markupsafe import Markup

from dryview.core.errors import ErrorContext, TemplateError

if TYPE_CHECKING:
    from dryview.helpers.standard import StandardHelper

logger = logging.getLogger(__name__)

# Template directory
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# Helper operations exposed to templates as globals
HELPER_GLOBALS = (
    "f",
    "format_attr",
    "format_assoc",
    "format_type",
    "labeled",
    "captionize",
    "render_attrs",
    "table",
    "standard_form",
    "tr_alt",
    "link_action",
    "link_action_show",
    "link_action_edit",
    "link_action_destroy",
    "link_action_index",
    "link_action_add",
)


def create_jinja_env(
    project_templates_dir: Path | None = None,
    *,
    auto_reload: bool = False,
) -> Environment:
    """Create and configure the Jinja2 environment.

    Args:
        project_templates_dir: Optional path to project-level templates.
            When provided, project templates take priority over the
            built-in partials.  Built-ins remain accessible via the
            ``dv://`` prefix (e.g. ``{% include "dv://shared/_labeled.html" %}``).
        auto_reload: Re-check template mtimes on every load.
    """
    framework_loader = FileSystemLoader(str(TEMPLATES_DIR))

    if project_templates_dir and project_templates_dir.is_dir():
        project_loader = FileSystemLoader(str(project_templates_dir))
        # Project templates searched first, built-ins as fallback
        main_loader = ChoiceLoader([project_loader, framework_loader])
    else:
        main_loader = ChoiceLoader([framework_loader])

    loader = PrefixLoader({"dv": framework_loader}, delimiter="://")
    combined = ChoiceLoader([loader, main_loader])

    env = Environment(
        loader=combined,
        autoescape=select_autoescape(["html"], default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
        auto_reload=auto_reload,
    )
    logger.info(
        "Created Jinja2 environment (project templates: %s)",
        project_templates_dir or "none",
    )
    return env


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def configure_project_templates(project_templates_dir: Path, *, auto_reload: bool = False) -> None:
    """Reconfigure the Jinja2 environment with project-level template overrides.

    Call this during app startup.  Built-in partials remain accessible via ``dv://``.
    """
    global _env
    _env = create_jinja_env(project_templates_dir, auto_reload=auto_reload)


def helper_globals(helper: StandardHelper) -> dict[str, Any]:
    """Template variables exposing a helper's operations for one render call."""
    variables: dict[str, Any] = {name: getattr(helper, name) for name in HELPER_GLOBALS}
    variables["helper"] = helper
    return variables


def install_helpers(env: Environment, helper: StandardHelper) -> Environment:
    """Expose a helper's operations as template globals and ``f`` as a filter.

    The helper holds per-render state (the row cycle), so a shared
    environment should get its helper per render via ``helper_globals``.
    """
    env.globals.update(helper_globals(helper))
    env.filters["f"] = helper.f
    return env


def render_partial(env: Environment, template_name: str, **kwargs: Any) -> Markup:
    """Render a partial to markup-safe HTML.

    Raises:
        TemplateError: The partial does not exist in any loader.
    """
    try:
        template = env.get_template(template_name)
    except TemplateNotFound as e:
        raise TemplateError(
            f"partial not found: {e.name}", ErrorContext(template=template_name)
        ) from e
    return Markup(template.render(**kwargs))


def render_fragment(template_name: str, **kwargs: Any) -> str:
    """
    Render an HTML fragment with the shared environment.

    Args:
        template_name: Template path relative to the template directories.
        **kwargs: Template variables.

    Returns:
        Rendered HTML fragment string.
    """
    env = get_jinja_env()
    template = env.get_template(template_name)
    return template.render(**kwargs)
