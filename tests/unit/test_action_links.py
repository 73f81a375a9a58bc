"""
Unit tests for the standard action links.
"""

from __future__ import annotations

import pytest
from sample_models import City, Person

from dryview import RoutingError, StandardHelper
from dryview.helpers.standard import CONFIRM_DELETE_MESSAGE


class TestLinkAction:
    def test_label_in_brackets_with_action_class(self, helper: StandardHelper) -> None:
        assert helper.link_action("Print", "/print") == '<a href="/print" class="action">[Print]</a>'

    def test_html_options_merged(self, helper: StandardHelper) -> None:
        html = helper.link_action("Print", "/print", data_id=3, target="_blank")
        assert 'data-id="3"' in html
        assert 'target="_blank"' in html
        assert 'class="action"' in html

    def test_class_override(self, helper: StandardHelper) -> None:
        html = helper.link_action("Print", "/print", class_="button")
        assert 'class="button"' in html
        assert 'class="action"' not in html

    def test_label_escaped(self, helper: StandardHelper) -> None:
        assert "[&lt;x&gt;]" in helper.link_action("<x>", "/x")


class TestNamedActions:
    def test_show(self, helper: StandardHelper, city: City) -> None:
        assert helper.link_action_show(city) == '<a href="/cities/7" class="action">[Show]</a>'

    def test_edit(self, helper: StandardHelper, city: City) -> None:
        assert (
            helper.link_action_edit(city)
            == '<a href="/cities/7/edit" class="action">[Edit]</a>'
        )

    def test_destroy_confirms_and_deletes(self, helper: StandardHelper, city: City) -> None:
        html = helper.link_action_destroy(city)
        assert f'hx-confirm="{CONFIRM_DELETE_MESSAGE}"' in html
        assert 'hx-confirm="Do you really want to delete this entry?"' in html
        assert 'hx-delete="/cities/7"' in html
        assert 'href="/cities/7"' in html
        assert 'rel="nofollow"' in html
        assert "[Delete]" in html

    def test_index_uses_current_resource(self, helper: StandardHelper) -> None:
        assert helper.link_action_index() == '<a href="/people" class="action">[List]</a>'

    def test_add_uses_current_resource(self, helper: StandardHelper) -> None:
        assert helper.link_action_add() == '<a href="/people/new" class="action">[Add]</a>'

    def test_index_with_explicit_target(self, helper: StandardHelper) -> None:
        html = helper.link_action_index({"action": "index", "resource": City})
        assert 'href="/cities"' in html

    def test_add_with_url_string(self, helper: StandardHelper) -> None:
        assert 'href="/signup"' in helper.link_action_add("/signup")

    def test_index_without_resource_raises(self, router, env) -> None:
        with pytest.raises(RoutingError):
            StandardHelper(router, env).link_action_index()

    def test_show_unsaved_record_raises(self, helper: StandardHelper) -> None:
        with pytest.raises(RoutingError):
            helper.link_action_show(Person(first_name="Ada"))
