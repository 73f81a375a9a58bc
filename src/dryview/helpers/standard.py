"""
Standard view helper: formatting, HTML sections and action links.

One ``StandardHelper`` serves one render pass. Expose it to templates
with ``install_helpers`` (or ``helper_globals``) and call the operations
from Jinja2:

    {{ render_attrs(task, ["title", "due_on", "project_id"]) }}

    {% call(t) table(tasks) %}{{ t.attrs("title", "done") }}{{ t.actions() }}{% endcall %}

    {% call labeled("Owner") %}<b>{{ task.owner }}</b>{% endcall %}

    {{ link_action_destroy(task) }}

Custom per-attribute formatting is a method named ``format_<attr>`` on a
subclass; it wins over association links and type-based formatting:

    class TaskHelper(StandardHelper):
        no_assoc_links = ("owner",)

        def format_priority(self, task):
            return Markup("<b>{}</b>").format(task.priority)
"""

from __future__ import annotations

import datetime as dt
import itertools
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, ClassVar

from jinja2 import Environment
from markupsafe import Markup, escape

from dryview.helpers.form_builder import StandardFormBuilder, form_for
from dryview.helpers.table_builder import StandardTableBuilder
from dryview.helpers.tags import (
    attr_name,
    content_tag,
    link_to,
    link_to_unless,
    number_with_delimiter,
    simple_format,
    titleize,
)
from dryview.records import (
    Association,
    ColumnType,
    HasColumns,
    HasLabel,
    HumanizesAttributes,
    Macro,
    ReflectsAssociations,
)
from dryview.routing import Router
from dryview.runtime.config import ViewConfig
from dryview.runtime.template_renderer import create_jinja_env, get_jinja_env, render_partial

logger = logging.getLogger(__name__)

NO_LIST_ENTRIES_MESSAGE = "No entries available"
CONFIRM_DELETE_MESSAGE = "Do you really want to delete this entry?"
NO_ASSOC_VALUE = "(none)"
SAVE_CAPTION = "Save"

FLOAT_FORMAT = "%.2f"
TIME_FORMAT = "%H:%M"
EMPTY_STRING = Markup("&nbsp;")  # non-breaking space keeps empty cells styled

# format_attr must not dispatch "type" to format_type(obj) and so on
_RESERVED_FORMATTERS = frozenset({"attr", "assoc", "type"})


class StandardHelper:
    """View helper bound to a router, a Jinja2 environment and one render pass."""

    # Association names that are never rendered as links
    no_assoc_links: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        router: Router | None = None,
        env: Environment | None = None,
        *,
        resource: type | None = None,
        config: ViewConfig | None = None,
    ) -> None:
        self.router = router if router is not None else Router()
        self.config = config if config is not None else ViewConfig.from_env()
        if env is None:
            if self.config.templates_dir is not None:
                env = create_jinja_env(
                    self.config.templates_dir, auto_reload=self.config.auto_reload
                )
            else:
                env = get_jinja_env()
        self.env = env
        self.resource = resource
        self._cycles: dict[str, Iterator[str]] = {}

    def for_request(self, resource: type | None = None) -> StandardHelper:
        """A fresh helper for the next render pass, sharing router, env and config."""
        return type(self)(
            self.router,
            self.env,
            resource=resource if resource is not None else self.resource,
            config=self.config,
        )

    # ================================================================
    # Formatting
    # ================================================================

    def f(self, value: Any) -> Markup:
        """Format a single value for display."""
        if value is None:
            return EMPTY_STRING
        if isinstance(value, bool):
            return Markup("yes" if value else "no")
        if isinstance(value, int):
            return Markup(number_with_delimiter(value, self.config.number_delimiter))
        if isinstance(value, float):
            return Markup(FLOAT_FORMAT % value)
        if isinstance(value, (dt.datetime, dt.time)):
            return Markup(value.strftime(TIME_FORMAT))
        if isinstance(value, dt.date):
            return Markup(str(value))
        if isinstance(value, HasLabel):
            return escape(self.label_of(value))
        return escape(value if isinstance(value, str) else str(value))

    def format_attr(self, obj: Any, attr: str) -> Markup:
        """Format an attribute of ``obj``.

        Resolution order: a ``format_<attr>`` method on this helper, then
        a belongs-to association link, then type-based formatting.
        """
        attr = str(attr)
        if attr not in _RESERVED_FORMATTERS:
            custom = getattr(self, f"format_{attr}", None)
            if callable(custom):
                return escape(custom(obj))
        assoc = self.belongs_to_association(obj, attr)
        if assoc is not None:
            return self.format_assoc(obj, assoc)
        return self.format_type(obj, attr)

    def format_assoc(self, obj: Any, assoc: Association) -> Markup:
        """Render the associated record's label, linked to its page when possible."""
        value = getattr(obj, assoc.name)
        if value is None:
            return Markup(NO_ASSOC_VALUE)
        plain = self.no_assoc_link(assoc, value)
        url = None if plain else self.router.polymorphic_path(value)
        return link_to_unless(plain, self.label_of(value), url)

    def no_assoc_link(self, assoc: Association, value: Any = None) -> bool:
        """True if the association must be rendered as plain text.

        With a ``value`` the route check uses its actual class, so a
        subclass instance without its own show route is not linked.
        """
        if assoc.name in self.no_assoc_links:
            return True
        if value is not None and getattr(value, "id", None) is None:
            return True
        target = value if value is not None else assoc.target
        if not self.router.has_route_for(target):
            target_name = target.__name__ if isinstance(target, type) else type(target).__name__
            logger.debug("No show route for %s, not linking %r", target_name, assoc.name)
            return True
        return False

    def format_type(self, obj: Any, attr: str) -> Markup:
        """Format an attribute depending on its declared column type."""
        value = getattr(obj, attr)
        if value is None:
            return EMPTY_STRING
        column_type = self.column_type(obj, attr)
        if column_type == ColumnType.TIME:
            return Markup(value.strftime(TIME_FORMAT))
        if column_type == ColumnType.DATE:
            if isinstance(value, dt.datetime):
                value = value.date()
            return Markup(str(value))
        if column_type == ColumnType.TEXT:
            return simple_format(escape(value))
        if column_type == ColumnType.DECIMAL:
            return self.f(float(str(value)))
        if column_type in (ColumnType.BINARY, ColumnType.JSON):
            logger.debug("No dedicated format for %s column %r", column_type, attr)
        return self.f(value)

    def column_type(self, obj: Any, attr: str) -> ColumnType | str | None:
        """The declared column type of ``attr``, or None."""
        return self.column_property(obj, attr, "type")

    def column_property(self, obj: Any, attr: str, prop: str) -> Any:
        """A column property (type, limit, null, default) for ``attr``, or None."""
        if not isinstance(obj, HasColumns):
            return None
        column = obj.column_for_attribute(str(attr))
        if column is None:
            return None
        return getattr(column, prop, None)

    def belongs_to_association(self, obj: Any, attr: str) -> Association | None:
        """The belongs-to association behind ``attr``, or None."""
        assoc = self.association(obj, attr)
        if assoc is not None and assoc.macro == Macro.BELONGS_TO:
            return assoc
        return None

    def association(self, obj: Any, attr: str) -> Association | None:
        """The association named by ``attr``, which may be the ``_id`` column."""
        cls = type(obj)
        if not isinstance(cls, ReflectsAssociations):
            return None
        name = str(attr)
        if name.endswith("_id"):
            name = name[:-3]
        return cls.reflect_on_association(name)

    def label_of(self, value: Any) -> str:
        label = value.label
        return str(label() if callable(label) else label)

    # ================================================================
    # Standard HTML sections
    # ================================================================

    def labeled(
        self,
        label: Any,
        content: Any = None,
        caller: Callable[[], Any] | None = None,
    ) -> Markup:
        """Render content with a caption, either passed in or captured from ``caller``."""
        if caller is not None:
            content = Markup(caller())
        return render_partial(self.env, "shared/_labeled.html", label=label, content=content)

    def captionize(self, text: Any, cls: Any = None) -> str:
        """Caption for labels and table headers."""
        if cls is not None and isinstance(cls, HumanizesAttributes):
            return cls.human_attribute_name(str(text))
        return titleize(str(text))

    def render_attrs(self, obj: Any, attrs: Iterable[str], div: bool = True) -> Markup:
        """Labeled values for each attribute, optionally inside ``div.attributes``."""
        html = Markup("").join(
            self.labeled(self.captionize(a, type(obj)), self.format_attr(obj, a)) for a in attrs
        )
        if div:
            return content_tag("div", html, class_="attributes")
        return html

    def table(
        self,
        entries: Iterable[Any] | None,
        caller: Callable[[StandardTableBuilder], Any] | None = None,
    ) -> Markup:
        """Render a table built by ``caller``, or a notice when there are no entries."""
        rows = list(entries) if entries is not None else []
        if rows:
            return StandardTableBuilder.table(rows, self, caller)
        return content_tag("div", NO_LIST_ENTRIES_MESSAGE, class_="list")

    def standard_form(
        self,
        obj: Any,
        attrs: Iterable[str] = (),
        caller: Callable[[StandardFormBuilder], Any] | None = None,
        **options: Any,
    ) -> Markup:
        """Render a form for ``obj``: error messages, fields, and a Save button.

        With a ``caller`` the custom fields it renders replace the
        generated ones and ``attrs`` is ignored.
        """
        attrs = list(attrs)
        builder = options.pop("builder", StandardFormBuilder)

        def body(form: StandardFormBuilder) -> Markup:
            parts = [
                render_partial(
                    self.env,
                    "shared/_error_messages.html",
                    errors=getattr(obj, "errors", None),
                )
            ]
            if caller is not None:
                parts.append(Markup(caller(form)))
            else:
                parts.append(form.labeled_input_fields(*attrs))
            parts.append(self.labeled(EMPTY_STRING, form.submit(SAVE_CAPTION)))
            return Markup("").join(parts)

        return form_for(self, obj, body, builder=builder, **options)

    def tr_alt(
        self,
        content: Any = None,
        caller: Callable[[], Any] | None = None,
        index: int | None = None,
    ) -> Markup:
        """Table row whose class alternates even/odd.

        Pass the row ``index`` to take parity from it; without it the
        class follows this helper's ``row_class`` cycle.
        """
        if index is not None:
            css = self.config.row_classes[index % 2]
        else:
            css = self.cycle(*self.config.row_classes, name="row_class")
        if caller is not None:
            content = Markup(caller())
        return content_tag("tr", content if content is not None else "", class_=css)

    def cycle(self, *values: str, name: str = "default") -> str:
        """Next value of the named cycle for this render pass."""
        it = self._cycles.get(name)
        if it is None:
            it = itertools.cycle(values)
            self._cycles[name] = it
        return next(it)

    def reset_cycle(self, name: str = "default") -> None:
        self._cycles.pop(name, None)

    # ================================================================
    # Action links
    # ================================================================

    def link_action_show(self, record: Any) -> Markup:
        return self.link_action("Show", record)

    def link_action_edit(self, record: Any) -> Markup:
        return self.link_action("Edit", self.router.edit_polymorphic_path(record))

    def link_action_destroy(self, record: Any) -> Markup:
        return self.link_action(
            "Delete", record, confirm=CONFIRM_DELETE_MESSAGE, method="delete"
        )

    def link_action_index(self, url_options: Any = None) -> Markup:
        return self.link_action("List", url_options if url_options is not None else {"action": "index"})

    def link_action_add(self, url_options: Any = None) -> Markup:
        return self.link_action("Add", url_options if url_options is not None else {"action": "new"})

    def link_action(self, label: str, target: Any, /, **html_options: Any) -> Markup:
        """Generic action link, styled via the ``action`` class."""
        options: dict[str, Any] = {"class": "action"}
        for key, value in html_options.items():
            options[attr_name(key)] = value
        return link_to(f"[{label}]", self.url_for(target), options)

    def url_for(self, target: Any) -> str:
        return self.router.url_for(target, resource=self.resource)
