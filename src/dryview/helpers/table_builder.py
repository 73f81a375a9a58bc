"""
Table builder used by ``StandardHelper.table``.

Columns are declared by a builder callback, usually a Jinja2 call block:

    {% call(t) table(tasks) %}
      {{ t.attrs("title", "due_on") }}
      {% call(task) t.col("Owner") %}{{ task.owner.name }}{% endcall %}
      {{ t.actions() }}
    {% endcall %}

Declarations render nothing; the table is assembled once the callback
returns.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from dryview.helpers.tags import content_tag
from dryview.records import ColumnType

if TYPE_CHECKING:
    from dryview.helpers.standard import StandardHelper

_NUMERIC_TYPES = (ColumnType.INTEGER, ColumnType.FLOAT, ColumnType.DECIMAL)


@dataclass
class TableColumn:
    """Header plus a cell renderer called with each entry."""

    header: str
    render: Callable[[Any], Any]
    html_options: dict[str, Any] = field(default_factory=dict)


class StandardTableBuilder:
    """Collects column declarations for a list of entries and renders them."""

    def __init__(self, entries: Sequence[Any], helper: StandardHelper) -> None:
        self.entries = entries
        self.helper = helper
        self.cols: list[TableColumn] = []

    @classmethod
    def table(
        cls,
        entries: Sequence[Any],
        helper: StandardHelper,
        builder: Callable[[StandardTableBuilder], Any] | None = None,
    ) -> Markup:
        t = cls(entries, helper)
        if builder is not None:
            builder(t)
        return t.to_html()

    # -- declarations --------------------------------------------------------

    def col(
        self,
        header: str = "",
        render: Callable[[Any], Any] | None = None,
        caller: Callable[[Any], Any] | None = None,
        **html_options: Any,
    ) -> Markup:
        """Add a column whose cells come from ``render(entry)`` or a call block."""
        renderer = render or caller
        if renderer is None:
            raise TypeError("col() needs a render function or a call block")
        self.cols.append(TableColumn(header, renderer, html_options))
        return Markup("")

    def attr(self, name: str, header: str | None = None) -> Markup:
        """Add a column showing the formatted attribute ``name``."""
        helper = self.helper
        sample = self.entries[0]
        if header is None:
            header = helper.captionize(name, type(sample))
        html_options: dict[str, Any] = {}
        if helper.column_type(sample, name) in _NUMERIC_TYPES:
            html_options["class_"] = "right"
        return self.col(header, lambda entry: helper.format_attr(entry, name), **html_options)

    def attrs(self, *names: str) -> Markup:
        for name in names:
            self.attr(name)
        return Markup("")

    def actions(self) -> Markup:
        """Add a column with show, edit and delete links."""
        helper = self.helper

        def _links(entry: Any) -> Markup:
            return Markup(" ").join(
                [
                    helper.link_action_show(entry),
                    helper.link_action_edit(entry),
                    helper.link_action_destroy(entry),
                ]
            )

        return self.col("", _links, class_="actions")

    # -- rendering -----------------------------------------------------------

    def to_html(self) -> Markup:
        header = content_tag(
            "tr",
            Markup("").join(content_tag("th", c.header, **c.html_options) for c in self.cols),
        )
        rows = [
            self.helper.tr_alt(
                Markup("").join(
                    content_tag("td", c.render(entry), **c.html_options) for c in self.cols
                ),
                index=i,
            )
            for i, entry in enumerate(self.entries)
        ]
        return content_tag("table", header + Markup("").join(rows), class_="list")
