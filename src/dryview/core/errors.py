"""
Error types for dryview routing, template loading, and configuration.

Formatting itself never raises: missing capabilities degrade to a
fallback branch. These errors cover the places where the host asked for
something that cannot exist.
"""

from __future__ import annotations

from dataclasses import dataclass


class DryviewError(Exception):
    """Base exception for all dryview errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class RoutingError(DryviewError):
    """
    Raised when a path cannot be generated.

    Examples:
    - Unknown route name
    - Missing path parameter (e.g. ``id`` for a show route)
    - Record without a show route passed as a link target
    """

    pass


class TemplateError(DryviewError):
    """
    Raised when a helper partial cannot be loaded.

    Examples:
    - ``shared/_labeled.html`` missing from a project override directory
    """

    pass


class ConfigError(DryviewError):
    """
    Raised when environment configuration is invalid.

    Examples:
    - ``DRYVIEW_ROW_CLASSES`` does not name exactly two classes
    - ``DRYVIEW_TEMPLATES_DIR`` points at a missing directory
    """

    pass


@dataclass
class ErrorContext:
    """
    Where an error happened, in helper terms.

    Attributes:
        resource: Route resource name (e.g. "task")
        attribute: Record attribute being rendered
        template: Template name being loaded
    """

    resource: str | None = None
    attribute: str | None = None
    template: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "resource=task attribute=city_id"
        """
        parts = []
        if self.resource:
            parts.append(f"resource={self.resource}")
        if self.attribute:
            parts.append(f"attribute={self.attribute}")
        if self.template:
            parts.append(f"template={self.template}")
        return " ".join(parts) or "<unknown>"


def make_routing_error(
    message: str,
    resource: str | None = None,
) -> RoutingError:
    """
    Helper to create a RoutingError with optional context.

    Args:
        message: Error description
        resource: Optional resource name the lookup was for

    Returns:
        RoutingError with context if a resource was given
    """
    if resource:
        return RoutingError(message, ErrorContext(resource=resource))
    return RoutingError(message)
