"""
dryview - standard view helpers for server-rendered Jinja2 pages.

Formats record attributes, renders labeled attribute blocks, tables and
generated forms, and emits uniform action links.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core.errors import ConfigError, DryviewError, RoutingError, TemplateError
from .helpers.standard import StandardHelper
from .records import Association, Column, ColumnType, Errors, Macro, Record, belongs_to, column
from .routing import Router

try:
    __version__ = _metadata_version("dryview")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = [
    "Association",
    "Column",
    "ColumnType",
    "ConfigError",
    "DryviewError",
    "Errors",
    "Macro",
    "Record",
    "Router",
    "RoutingError",
    "StandardHelper",
    "TemplateError",
    "__version__",
    "belongs_to",
    "column",
]
