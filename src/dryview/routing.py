"""
Route table consumed by the view helpers for link generation.

dryview does not dispatch requests. The host (FastAPI, Starlette, or a
hand-built table) owns routing; the helpers only need to answer "is
there a page for this record type?" and "what is its path?".

Route names follow ``<resource>_<action>`` where ``resource`` is the
snake_case model name:

    task_index  -> /tasks
    task_new    -> /tasks/new
    task_show   -> /tasks/{id}
    task_edit   -> /tasks/{id}/edit
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from dryview.core.errors import make_routing_error
from dryview.core.strings import pluralize, underscore

logger = logging.getLogger(__name__)

ACTIONS = ("index", "new", "show", "edit")

# Starlette path params may carry a converter: {id:int}
_PARAM_RE = re.compile(r"\{(\w+)(?::\w+)?\}")


def resource_name(target: Any) -> str:
    """Snake_case resource name for a model class or instance."""
    cls = target if isinstance(target, type) else type(target)
    return underscore(cls.__name__)


def route_name(target: Any, action: str) -> str:
    return f"{resource_name(target)}_{action}"


def _param_of(record: Any) -> str:
    to_param = getattr(record, "to_param", None)
    value = to_param() if callable(to_param) else getattr(record, "id", None)
    if value is None:
        raise make_routing_error(
            "cannot build a member path for an unsaved record", resource_name(record)
        )
    return str(value)


class Router:
    """Named path templates with reverse lookup."""

    def __init__(self, routes: Mapping[str, str] | None = None) -> None:
        self._routes: dict[str, str] = dict(routes or {})

    @classmethod
    def from_app(cls, app: Any) -> Router:
        """Build a router from the named routes of a FastAPI/Starlette app."""
        router = cls()
        router.add_routes(app.routes)
        logger.debug("Loaded %d named routes from %r", len(router.names()), app)
        return router

    def add(self, name: str, path: str) -> None:
        self._routes[name] = path

    def add_routes(self, routes: Iterable[Any]) -> None:
        for route in routes:
            name = getattr(route, "name", None)
            path = getattr(route, "path", None)
            if name and path:
                self.add(name, path)

    def resources(self, model: type, *, only: Iterable[str] = ACTIONS, prefix: str = "") -> None:
        """Register the conventional page routes for ``model``."""
        resource = resource_name(model)
        collection = f"{prefix}/{pluralize(resource)}"
        paths = {
            "index": collection,
            "new": f"{collection}/new",
            "show": f"{collection}/{{id}}",
            "edit": f"{collection}/{{id}}/edit",
        }
        for action in only:
            self.add(f"{resource}_{action}", paths[action])

    # -- lookup --------------------------------------------------------------

    def has(self, name: str) -> bool:
        return name in self._routes

    def has_route_for(self, target: Any, action: str = "show") -> bool:
        return self.has(route_name(target, action))

    def path_for(self, name: str, **params: Any) -> str:
        template = self._routes.get(name)
        if template is None:
            raise make_routing_error(f"no route named {name!r}")

        def _substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in params:
                raise make_routing_error(f"route {name!r} needs parameter {key!r}")
            return str(params[key])

        return _PARAM_RE.sub(_substitute, template)

    def polymorphic_path(self, record: Any) -> str:
        return self.path_for(route_name(record, "show"), id=_param_of(record))

    def edit_polymorphic_path(self, record: Any) -> str:
        return self.path_for(route_name(record, "edit"), id=_param_of(record))

    def url_for(self, target: Any, resource: type | None = None) -> str:
        """Resolve a link target.

        Args:
            target: A URL string (returned as-is), a record (its show
                path), or an options dict ``{"action": ..., "id": ...}``.
            resource: Model class used to resolve an options dict that
                does not name its own ``resource``.
        """
        if isinstance(target, str):
            return target
        if isinstance(target, Mapping):
            options = dict(target)
            action = options.pop("action", "index")
            model = options.pop("resource", resource)
            if model is None:
                raise make_routing_error(f"no resource to resolve action {action!r} against")
            name = f"{model}_{action}" if isinstance(model, str) else route_name(model, action)
            return self.path_for(name, **options)
        return self.polymorphic_path(target)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def names(self) -> list[str]:
        return sorted(self._routes)
