"""
Unit tests for inflection helpers.
"""

from __future__ import annotations

import pytest

from dryview.core.strings import humanize, pluralize, titleize, underscore


class TestUnderscore:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Task", "task"), ("LineItem", "line_item"), ("HTTPRequest", "http_request")],
    )
    def test_camel_case(self, name: str, expected: str) -> None:
        assert underscore(name) == expected


class TestPluralize:
    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("task", "tasks"),
            ("city", "cities"),
            ("day", "days"),
            ("box", "boxes"),
            ("person", "people"),
            ("knife", "knives"),
            ("line_item", "line_items"),
            ("sales_person", "sales_people"),
        ],
    )
    def test_plural(self, word: str, expected: str) -> None:
        assert pluralize(word) == expected

    def test_empty(self) -> None:
        assert pluralize("") == ""


class TestCaptions:
    def test_humanize(self) -> None:
        assert humanize("first_name") == "First name"
        assert humanize("city_id") == "City"
        assert humanize("id") == "Id"
        assert humanize("HTML_body") == "Html body"

    def test_titleize(self) -> None:
        assert titleize("first_name") == "First Name"
        assert titleize("country_id") == "Country"
