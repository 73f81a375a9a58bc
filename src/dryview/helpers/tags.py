"""
Low-level HTML fragment builders.

Everything here returns ``markupsafe.Markup`` so fragments compose
inside autoescaped Jinja2 templates without double escaping.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from markupsafe import Markup, escape

from dryview.core.strings import humanize, titleize, underscore

__all__ = [
    "attr_name",
    "content_tag",
    "humanize",
    "link_to",
    "link_to_unless",
    "number_with_delimiter",
    "simple_format",
    "tag",
    "tag_attributes",
    "titleize",
    "underscore",
]

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_VOID_ELEMENTS = frozenset({"br", "hr", "img", "input", "link", "meta"})


def attr_name(name: str) -> str:
    # class_ -> class, hx_get -> hx-get, data_confirm -> data-confirm
    return name.rstrip("_").replace("_", "-")


def tag_attributes(attrs: Mapping[str, Any]) -> Markup:
    """Render an attribute mapping as `` key="value"`` pairs.

    ``None`` and ``False`` drop the attribute; ``True`` renders it bare.
    """
    parts = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        name = attr_name(key)
        if value is True:
            parts.append(Markup(" {}").format(name))
        else:
            parts.append(Markup(' {}="{}"').format(name, value))
    return Markup("").join(parts)


def tag(name: str, /, **attrs: Any) -> Markup:
    """Render a void element such as ``<input>`` or ``<br>``."""
    return Markup("<{}{} />").format(Markup(name), tag_attributes(attrs))


def content_tag(name: str, content: Any = "", /, **attrs: Any) -> Markup:
    """Render ``<name attrs>content</name>``, escaping unsafe content."""
    if name in _VOID_ELEMENTS:
        return tag(name, **attrs)
    return Markup("<{0}{1}>{2}</{0}>").format(Markup(name), tag_attributes(attrs), content)


def link_to(label: Any, url: str, html_options: Mapping[str, Any] | None = None) -> Markup:
    """Render an anchor.

    Two options are translated instead of passed through:

    - ``confirm``: becomes ``hx-confirm`` with the prompt text.
    - ``method``: a non-GET method becomes ``hx-<method>`` pointing at the
      same URL, with ``rel="nofollow"`` so crawlers skip it.
    """
    options = dict(html_options or {})
    confirm = options.pop("confirm", None)
    method = str(options.pop("method", "get") or "get").lower()

    attrs: dict[str, Any] = {"href": url}
    attrs.update(options)
    if confirm:
        attrs["hx-confirm"] = confirm
    if method != "get":
        attrs[f"hx-{method}"] = url
        attrs.setdefault("rel", "nofollow")
    return content_tag("a", label, **attrs)


def link_to_unless(
    condition: bool,
    label: Any,
    url: str | None,
    html_options: Mapping[str, Any] | None = None,
) -> Markup:
    """Render ``label`` alone when ``condition`` holds, else a link to ``url``."""
    if condition or url is None:
        return escape(label)
    return link_to(label, url, html_options)


def simple_format(text: Any) -> Markup:
    """Wrap text in paragraphs: blank lines split ``<p>``, single newlines become ``<br />``."""
    text = escape(text)
    text = Markup(str(text).replace("\r\n", "\n").replace("\r", "\n"))
    paragraphs = [p for p in _PARAGRAPH_SPLIT.split(str(text)) if p.strip()] or [""]
    return Markup("\n\n").join(
        Markup("<p>{}</p>").format(Markup(p.strip("\n").replace("\n", "<br />\n")))
        for p in paragraphs
    )


def number_with_delimiter(value: int, delimiter: str = ",") -> str:
    """Group thousands: ``1234567`` -> ``"1,234,567"``."""
    grouped = f"{value:,}"
    if delimiter != ",":
        grouped = grouped.replace(",", delimiter)
    return grouped
