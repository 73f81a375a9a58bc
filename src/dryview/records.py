"""
Record abstraction consumed by the view helpers.

The helpers never require this module's ``Record`` class: they probe the
capability protocols below, so any host object that implements
``column_for_attribute`` or ``reflect_on_association`` takes part in
type-aware formatting. ``Record`` is the batteries-included Pydantic
implementation of all four capabilities.

Example:
    >>> class City(Record):
    ...     name: str
    >>> class Person(Record):
    ...     name: str
    ...     bio: str | None = column(ColumnType.TEXT, default=None)
    ...     city: City | None = None
    ...     city_id: int | None = None
    ...     associations = (belongs_to("city", City),)
"""

from __future__ import annotations

import datetime as dt
import types
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Protocol, Union, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from dryview.core.strings import humanize

# =============================================================================
# Schema metadata
# =============================================================================


class ColumnType(str, Enum):
    """Declared storage type of a record attribute."""

    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    STRING = "string"
    TEXT = "text"
    BINARY = "binary"
    JSON = "json"


class Macro(str, Enum):
    """Relation kind of an association."""

    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"


@dataclass(frozen=True)
class Column:
    """Schema metadata for one attribute."""

    name: str
    type: ColumnType
    null: bool = True
    default: Any = None
    limit: int | None = None


@dataclass(frozen=True)
class Association:
    """A declared relation from one record type to another."""

    name: str
    macro: Macro
    target: type
    foreign_key: str | None = None


def belongs_to(name: str, target: type, foreign_key: str | None = None) -> Association:
    """Declare a belongs-to relation; the foreign key defaults to ``<name>_id``."""
    return Association(name, Macro.BELONGS_TO, target, foreign_key or f"{name}_id")


def has_one(name: str, target: type) -> Association:
    return Association(name, Macro.HAS_ONE, target)


def has_many(name: str, target: type) -> Association:
    return Association(name, Macro.HAS_MANY, target)


def column(type: ColumnType | str, default: Any = ..., **kwargs: Any) -> Any:
    """Pydantic ``Field`` carrying an explicit column type.

    Use it where the annotation alone is ambiguous, e.g. ``str`` stored as
    long text or ``datetime`` displayed as a time of day.
    """
    extra = {"column_type": ColumnType(type).value}
    return Field(default, json_schema_extra=extra, **kwargs)


# =============================================================================
# Capability protocols
# =============================================================================


@runtime_checkable
class HasLabel(Protocol):
    """Objects that know their own display label."""

    def label(self) -> str: ...


@runtime_checkable
class HasColumns(Protocol):
    """Records exposing schema metadata per attribute."""

    def column_for_attribute(self, attr: str) -> Column | None: ...


@runtime_checkable
class ReflectsAssociations(Protocol):
    """Record classes exposing relation metadata."""

    def reflect_on_association(self, name: str) -> Association | None: ...


@runtime_checkable
class HumanizesAttributes(Protocol):
    """Record classes providing their own attribute captions."""

    def human_attribute_name(self, attr: str) -> str: ...


# =============================================================================
# Errors collection
# =============================================================================


class Errors:
    """Validation messages keyed by attribute, rendered above forms."""

    BASE = "base"

    def __init__(self, model: type | None = None) -> None:
        self._model = model
        self._messages: dict[str, list[str]] = {}

    def add(self, attr: str, message: str) -> None:
        self._messages.setdefault(str(attr), []).append(message)

    def on(self, attr: str) -> list[str]:
        return list(self._messages.get(str(attr), []))

    def clear(self) -> None:
        self._messages.clear()

    def add_validation_error(self, exc: ValidationError) -> None:
        """Copy every entry of a Pydantic ``ValidationError`` into this collection."""
        for err in exc.errors():
            loc = err.get("loc") or ()
            attr = str(loc[0]) if loc else self.BASE
            msg = err.get("msg", "is invalid")
            self.add(attr, msg[:1].lower() + msg[1:])

    def full_messages(self) -> list[str]:
        """Messages prefixed with the attribute caption, base messages as-is."""
        messages = []
        for attr, entries in self._messages.items():
            for message in entries:
                if attr == self.BASE:
                    messages.append(message)
                else:
                    messages.append(f"{self._caption(attr)} {message}")
        return messages

    def _caption(self, attr: str) -> str:
        if isinstance(self._model, HumanizesAttributes):
            return self._model.human_attribute_name(attr)
        return humanize(attr)

    def __bool__(self) -> bool:
        return any(self._messages.values())

    def __len__(self) -> int:
        return sum(len(v) for v in self._messages.values())

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for attr, entries in self._messages.items():
            for message in entries:
                yield attr, message


# =============================================================================
# Record base
# =============================================================================

_PYTHON_COLUMN_TYPES: list[tuple[type, ColumnType]] = [
    # bool before int, datetime before date: subclass order matters
    (bool, ColumnType.BOOLEAN),
    (int, ColumnType.INTEGER),
    (float, ColumnType.FLOAT),
    (Decimal, ColumnType.DECIMAL),
    (dt.datetime, ColumnType.DATETIME),
    (dt.date, ColumnType.DATE),
    (dt.time, ColumnType.TIME),
    (str, ColumnType.STRING),
    (bytes, ColumnType.BINARY),
    (dict, ColumnType.JSON),
    (list, ColumnType.JSON),
]

_COLUMN_CACHE: dict[type, dict[str, Column]] = {}


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``X | None`` down to ``X`` and report nullability."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        non_none = [a for a in args if a is not type(None)]
        nullable = len(non_none) != len(args)
        if len(non_none) == 1:
            return non_none[0], nullable
        return annotation, nullable
    return annotation, False


def _infer_column_type(annotation: Any) -> ColumnType | None:
    base = get_origin(annotation) or annotation
    if not isinstance(base, type):
        return None
    for python_type, column_type in _PYTHON_COLUMN_TYPES:
        if issubclass(base, python_type):
            return column_type
    return None


class Record(BaseModel):
    """Pydantic base model implementing every record capability."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: int | None = None

    associations: ClassVar[tuple[Association, ...]] = ()

    _errors: Errors | None = PrivateAttr(default=None)

    # -- labels --------------------------------------------------------------

    def label(self) -> str:
        for name in ("name", "title"):
            value = getattr(self, name, None)
            if value:
                return str(value)
        return f"{type(self).__name__} #{self.id}"

    @classmethod
    def human_attribute_name(cls, attr: str) -> str:
        field = cls.model_fields.get(str(attr))
        if field is not None and field.title:
            return field.title
        return humanize(attr)

    # -- identity ------------------------------------------------------------

    def new_record(self) -> bool:
        return self.id is None

    def to_param(self) -> str | None:
        return None if self.id is None else str(self.id)

    @property
    def errors(self) -> Errors:
        if self._errors is None:
            self._errors = Errors(type(self))
        return self._errors

    # -- schema reflection ---------------------------------------------------

    @classmethod
    def columns_hash(cls) -> dict[str, Column]:
        """Columns by attribute name, inferred from field annotations once per class."""
        cached = _COLUMN_CACHE.get(cls)
        if cached is not None:
            return cached

        assoc_names = {a.name for a in cls.associations}
        columns: dict[str, Column] = {}
        for name, field in cls.model_fields.items():
            if name in assoc_names:
                continue
            annotation, nullable = _unwrap_optional(field.annotation)
            extra = field.json_schema_extra if isinstance(field.json_schema_extra, dict) else {}
            if "column_type" in extra:
                column_type: ColumnType | None = ColumnType(extra["column_type"])
            else:
                column_type = _infer_column_type(annotation)
            if column_type is None:
                continue
            limit = None
            for meta in field.metadata:
                limit = getattr(meta, "max_length", None) or limit
            default = None if field.is_required() else field.get_default(call_default_factory=False)
            columns[name] = Column(
                name=name,
                type=column_type,
                null=nullable,
                default=default,
                limit=limit,
            )

        _COLUMN_CACHE[cls] = columns
        return columns

    def column_for_attribute(self, attr: str) -> Column | None:
        return self.columns_hash().get(str(attr))

    @classmethod
    def reflect_on_association(cls, name: str) -> Association | None:
        for assoc in cls.associations:
            if assoc.name == str(name):
                return assoc
        return None

    @classmethod
    def reflect_on_all_associations(cls, macro: Macro | None = None) -> list[Association]:
        return [a for a in cls.associations if macro is None or a.macro == macro]
