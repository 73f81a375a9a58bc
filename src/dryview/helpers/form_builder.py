"""
Form builder used by ``StandardHelper.standard_form``.

Input controls are chosen from the record's column types; belongs-to
associations become a ``<select>`` over the choices passed in the form
options. Field names follow ``<model>[<attr>]`` and ids ``<model>_<attr>``.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from dryview.helpers.tags import content_tag, tag
from dryview.records import Association, ColumnType, HasLabel
from dryview.routing import resource_name

if TYPE_CHECKING:
    from dryview.helpers.standard import StandardHelper

_INPUT_TYPES = {
    ColumnType.DATE: "date",
    ColumnType.TIME: "time",
    ColumnType.DATETIME: "datetime-local",
    ColumnType.INTEGER: "number",
    ColumnType.FLOAT: "number",
    ColumnType.DECIMAL: "number",
}


class StandardFormBuilder:
    """Renders labeled inputs for one record."""

    def __init__(
        self,
        object_name: str,
        record: Any,
        helper: StandardHelper,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.object_name = object_name
        self.record = record
        self.helper = helper
        self.options = dict(options or {})

    # -- naming --------------------------------------------------------------

    def field_name(self, attr: str) -> str:
        return f"{self.object_name}[{attr}]"

    def field_id(self, attr: str) -> str:
        return f"{self.object_name}_{attr}"

    # -- controls ------------------------------------------------------------

    def label(self, attr: str, text: str | None = None) -> Markup:
        if text is None:
            text = self.helper.captionize(attr, type(self.record))
        return content_tag("label", text, for_=self.field_id(attr))

    def input_field(self, attr: str, **html_options: Any) -> Markup:
        """The control matching the attribute's association or column type."""
        assoc = self.helper.belongs_to_association(self.record, attr)
        if assoc is not None:
            return self.belongs_to_field(assoc, **html_options)

        column_type = self.helper.column_type(self.record, attr)
        if column_type == ColumnType.TEXT:
            return self.text_area(attr, **html_options)
        if column_type == ColumnType.BOOLEAN:
            return self.check_box(attr, **html_options)
        input_type = _INPUT_TYPES.get(column_type) if column_type is not None else None
        if input_type == "number":
            step = "1" if column_type == ColumnType.INTEGER else "any"
            html_options.setdefault("step", step)
        if input_type is not None:
            return self.text_field(attr, type=input_type, **html_options)
        limit = self.helper.column_property(self.record, attr, "limit")
        if limit:
            html_options.setdefault("maxlength", limit)
        return self.text_field(attr, **html_options)

    def text_field(self, attr: str, type: str = "text", **html_options: Any) -> Markup:
        return tag(
            "input",
            type=type,
            name=self.field_name(attr),
            id=self.field_id(attr),
            value=self._value_for(attr),
            **html_options,
        )

    def text_area(self, attr: str, **html_options: Any) -> Markup:
        value = getattr(self.record, attr, None)
        return content_tag(
            "textarea",
            "" if value is None else value,
            name=self.field_name(attr),
            id=self.field_id(attr),
            **html_options,
        )

    def check_box(self, attr: str, **html_options: Any) -> Markup:
        # unchecked boxes are not submitted; the hidden field sends "0"
        hidden = tag("input", type="hidden", name=self.field_name(attr), value="0")
        box = tag(
            "input",
            type="checkbox",
            name=self.field_name(attr),
            id=self.field_id(attr),
            value="1",
            checked=bool(getattr(self.record, attr, False)),
            **html_options,
        )
        return hidden + box

    def belongs_to_field(self, assoc: Association, **html_options: Any) -> Markup:
        """``<select>`` over ``options["choices"][<foreign key>]``, with a blank entry."""
        key = assoc.foreign_key or f"{assoc.name}_id"
        current = getattr(self.record, key, None)
        choices = self.options.get("choices", {}).get(key, [])
        option_tags = [content_tag("option", "", value="")]
        for value, text in self._normalize_choices(choices):
            option_tags.append(
                content_tag(
                    "option",
                    text,
                    value=value,
                    selected=current is not None and str(value) == str(current),
                )
            )
        return content_tag(
            "select",
            Markup("").join(option_tags),
            name=self.field_name(key),
            id=self.field_id(key),
            **html_options,
        )

    def submit(self, caption: str = "Save") -> Markup:
        return tag("input", type="submit", name="commit", value=caption)

    # -- labeled -------------------------------------------------------------

    def labeled_input_field(self, attr: str, **html_options: Any) -> Markup:
        field_attr = attr
        assoc = self.helper.belongs_to_association(self.record, attr)
        if assoc is not None:
            field_attr = assoc.foreign_key or f"{assoc.name}_id"
        return self.helper.labeled(
            self.label(field_attr, self.helper.captionize(attr, type(self.record))),
            self.input_field(attr, **html_options),
        )

    def labeled_input_fields(self, *attrs: str) -> Markup:
        return Markup("").join(self.labeled_input_field(a) for a in attrs)

    # -- values --------------------------------------------------------------

    def _value_for(self, attr: str) -> str | None:
        value = getattr(self.record, attr, None)
        if value is None:
            return None
        if isinstance(value, dt.datetime):
            return value.strftime("%Y-%m-%dT%H:%M")
        if isinstance(value, dt.time):
            return value.strftime("%H:%M")
        if isinstance(value, dt.date):
            return value.isoformat()
        return str(value)

    def _normalize_choices(self, choices: Iterable[Any]) -> list[tuple[Any, str]]:
        normalized = []
        for choice in choices:
            if isinstance(choice, tuple):
                normalized.append((choice[0], str(choice[1])))
            elif isinstance(choice, HasLabel):
                normalized.append((getattr(choice, "id", None), self.helper.label_of(choice)))
            else:
                normalized.append((choice, str(choice)))
        return normalized


def form_for(
    helper: StandardHelper,
    record: Any,
    body: Callable[[StandardFormBuilder], Any],
    *,
    builder: type[StandardFormBuilder] = StandardFormBuilder,
    url: str | None = None,
    method: str | None = None,
    html: Mapping[str, Any] | None = None,
    **builder_options: Any,
) -> Markup:
    """Render ``<form>`` bound to ``record`` around ``body(builder)``.

    New records post to the collection path; saved records post to their
    member path with a ``_method=patch`` override.
    """
    object_name = resource_name(record)
    new_record = getattr(record, "new_record", None)
    is_new = new_record() if callable(new_record) else getattr(record, "id", None) is None

    if is_new:
        action = url or helper.router.url_for({"action": "index"}, resource=type(record))
        method = (method or "post").lower()
        form_id = f"new_{object_name}"
        css = f"new_{object_name}"
    else:
        action = url or helper.router.polymorphic_path(record)
        method = (method or "patch").lower()
        form_id = f"edit_{object_name}_{record.id}"
        css = f"edit_{object_name}"

    form = builder(object_name, record, helper, builder_options)
    content = Markup("")
    if method not in ("get", "post"):
        content += tag("input", type="hidden", name="_method", value=method)
    content += Markup(body(form))

    attrs: dict[str, Any] = {
        "action": action,
        "method": "get" if method == "get" else "post",
        "id": form_id,
        "class": css,
    }
    attrs.update(html or {})
    return content_tag("form", content, **attrs)
