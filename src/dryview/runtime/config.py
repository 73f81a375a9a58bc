"""
View helper configuration from environment variables.

Read once at startup; the helpers receive the resulting ``ViewConfig``
instead of touching the environment themselves.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dryview.core.errors import ConfigError


@dataclass(frozen=True)
class ViewConfig:
    """Configuration for template loading and value formatting."""

    templates_dir: Path | None = None
    number_delimiter: str = ","
    row_classes: tuple[str, str] = ("even", "odd")
    auto_reload: bool = False

    @classmethod
    def from_env(cls) -> ViewConfig:
        """Load configuration from environment variables."""
        templates = os.environ.get("DRYVIEW_TEMPLATES_DIR", "").strip()
        templates_dir = Path(templates) if templates else None
        if templates_dir is not None and not templates_dir.is_dir():
            raise ConfigError(f"DRYVIEW_TEMPLATES_DIR is not a directory: {templates_dir}")

        raw_classes = os.environ.get("DRYVIEW_ROW_CLASSES", "even,odd")
        row_classes = tuple(c.strip() for c in raw_classes.split(",") if c.strip())
        if len(row_classes) != 2:
            raise ConfigError(f"DRYVIEW_ROW_CLASSES must name two classes, got {raw_classes!r}")

        return cls(
            templates_dir=templates_dir,
            number_delimiter=os.environ.get("DRYVIEW_NUMBER_DELIMITER", ","),
            row_classes=(row_classes[0], row_classes[1]),
            auto_reload=os.environ.get("DRYVIEW_AUTO_RELOAD", "0") == "1",
        )
