"""
FastAPI glue: one helper per request, rendered into an HTMLResponse.

    router = Router.from_app(app)
    base = StandardHelper(router, create_jinja_env(templates_dir))

    @app.get("/tasks", name="task_index")
    def task_index(request: Request) -> HTMLResponse:
        return template_response(request, "tasks/index.html", base, resource=Task, tasks=TASKS)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse

from dryview.helpers.standard import StandardHelper
from dryview.routing import Router
from dryview.runtime.template_renderer import helper_globals

logger = logging.getLogger(__name__)


def helper_for_request(
    request: Request,
    base: StandardHelper | Router,
    resource: type | None = None,
) -> StandardHelper:
    """Fresh helper for this request.

    ``base`` is either a configured helper (its class, env, router and
    config are reused) or a bare router.
    """
    if isinstance(base, Router):
        helper = StandardHelper(base, resource=resource)
    else:
        helper = base.for_request(resource)
    logger.debug("Helper for %s %s (resource=%s)", request.method, request.url.path, resource)
    return helper


def template_response(
    request: Request,
    template_name: str,
    base: StandardHelper | Router,
    *,
    resource: type | None = None,
    status_code: int = 200,
    **context: Any,
) -> HTMLResponse:
    """Render ``template_name`` with the helper operations in scope.

    Args:
        request: The current request, also exposed to the template.
        template_name: Template path relative to the environment loaders.
        base: Helper or router to derive the per-request helper from.
        resource: Model class for relative links (``link_action_index``).
        status_code: HTTP status code (default 200).
        **context: Template variables.

    Returns:
        HTMLResponse with the rendered page.
    """
    helper = helper_for_request(request, base, resource)
    template = helper.env.get_template(template_name)
    html = template.render({**helper_globals(helper), **context, "request": request})
    return HTMLResponse(content=html, status_code=status_code)
