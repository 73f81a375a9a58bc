"""
Unit tests for the Record base: column inference, associations,
labels and the errors collection.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sample_models import City, Note, Person, Pet

from dryview import ColumnType, Errors, Macro


class TestColumns:
    def test_inferred_types(self) -> None:
        columns = Person.columns_hash()
        assert columns["id"].type == ColumnType.INTEGER
        assert columns["first_name"].type == ColumnType.STRING
        assert columns["age"].type == ColumnType.INTEGER
        assert columns["income"].type == ColumnType.FLOAT
        assert columns["salary"].type == ColumnType.DECIMAL
        assert columns["birthday"].type == ColumnType.DATE
        assert columns["active"].type == ColumnType.BOOLEAN
        assert columns["avatar"].type == ColumnType.BINARY

    def test_explicit_column_type_overrides_annotation(self) -> None:
        columns = Person.columns_hash()
        assert columns["bio"].type == ColumnType.TEXT
        assert columns["last_seen"].type == ColumnType.TIME
        assert columns["registered_at"].type == ColumnType.DATE

    def test_associations_are_not_columns(self) -> None:
        columns = Person.columns_hash()
        assert "city" not in columns
        assert "pets" not in columns
        assert "city_id" in columns

    def test_limit_null_default(self) -> None:
        first_name = Person.columns_hash()["first_name"]
        assert first_name.limit == 50
        assert first_name.null is False
        assert first_name.default is None
        assert Person.columns_hash()["active"].default is True

    def test_column_for_attribute(self) -> None:
        person = Person(first_name="Ada")
        column = person.column_for_attribute("age")
        assert column is not None
        assert column.name == "age"
        assert person.column_for_attribute("missing") is None


class TestAssociations:
    def test_belongs_to(self) -> None:
        assoc = Person.reflect_on_association("city")
        assert assoc is not None
        assert assoc.macro == Macro.BELONGS_TO
        assert assoc.target is City
        assert assoc.foreign_key == "city_id"

    def test_unknown(self) -> None:
        assert Person.reflect_on_association("employer") is None

    def test_all_by_macro(self) -> None:
        has_many = Person.reflect_on_all_associations(Macro.HAS_MANY)
        assert [a.name for a in has_many] == ["pets"]
        assert has_many[0].target is Pet
        assert len(Person.reflect_on_all_associations()) == 3


class TestIdentity:
    def test_label_from_name(self) -> None:
        assert City(id=1, name="Berlin").label() == "Berlin"

    def test_label_fallback(self) -> None:
        assert Note(id=3, body="x").label() == "Note #3"

    def test_label_override(self) -> None:
        assert Person(first_name="Ada", last_name="Lovelace").label() == "Ada Lovelace"

    def test_new_record_and_param(self) -> None:
        assert City(name="x").new_record() is True
        assert City(name="x").to_param() is None
        assert City(id=4, name="x").new_record() is False
        assert City(id=4, name="x").to_param() == "4"

    def test_human_attribute_name(self) -> None:
        assert Person.human_attribute_name("first_name") == "First name"
        assert Person.human_attribute_name("last_name") == "Surname"
        assert Person.human_attribute_name("city_id") == "City"


class TestErrors:
    def test_empty(self) -> None:
        errors = Errors(Person)
        assert not errors
        assert len(errors) == 0
        assert errors.full_messages() == []

    def test_add_and_full_messages(self) -> None:
        errors = Errors(Person)
        errors.add("last_name", "is too short")
        errors.add("base", "Entry is locked")
        assert errors
        assert len(errors) == 2
        assert errors.on("last_name") == ["is too short"]
        assert errors.full_messages() == ["Surname is too short", "Entry is locked"]
        assert list(errors) == [("last_name", "is too short"), ("base", "Entry is locked")]

    def test_clear(self) -> None:
        errors = Errors()
        errors.add("a", "b")
        errors.clear()
        assert not errors

    def test_from_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Person.model_validate({"age": "not a number"})
        errors = Errors(Person)
        errors.add_validation_error(exc_info.value)
        assert errors.on("first_name") == ["field required"]
        messages = errors.full_messages()
        assert "First name field required" in messages
        assert any(m.startswith("Age input should be a valid integer") for m in messages)

    def test_record_errors_property(self) -> None:
        person = Person(first_name="Ada")
        person.errors.add("age", "is required")
        assert person.errors.full_messages() == ["Age is required"]
        assert not Person(first_name="Bob").errors
