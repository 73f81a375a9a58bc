"""
Unit tests for the route table used by link generation.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from sample_models import City, LineItem, Person

from dryview import Router, RoutingError
from dryview.routing import resource_name, route_name


class TestNaming:
    def test_resource_name(self) -> None:
        assert resource_name(City) == "city"
        assert resource_name(LineItem) == "line_item"
        assert resource_name(City(name="x")) == "city"

    def test_route_name(self) -> None:
        assert route_name(Person, "edit") == "person_edit"


class TestResources:
    def test_conventional_paths(self) -> None:
        router = Router()
        router.resources(City)
        assert router.path_for("city_index") == "/cities"
        assert router.path_for("city_new") == "/cities/new"
        assert router.path_for("city_show", id=7) == "/cities/7"
        assert router.path_for("city_edit", id=7) == "/cities/7/edit"

    def test_irregular_and_compound_plurals(self) -> None:
        router = Router()
        router.resources(Person)
        router.resources(LineItem)
        assert router.path_for("person_index") == "/people"
        assert router.path_for("line_item_index") == "/line_items"

    def test_only_and_prefix(self) -> None:
        router = Router()
        router.resources(City, only=("show",), prefix="/admin")
        assert router.names() == ["city_show"]
        assert router.path_for("city_show", id=1) == "/admin/cities/1"

    def test_has_route_for(self) -> None:
        router = Router()
        router.resources(City, only=("index",))
        assert router.has_route_for(City, "index")
        assert not router.has_route_for(City)
        assert "city_index" in router


class TestPathFor:
    def test_unknown_route(self) -> None:
        with pytest.raises(RoutingError, match="no route named"):
            Router().path_for("nope")

    def test_missing_parameter(self) -> None:
        router = Router({"city_show": "/cities/{id}"})
        with pytest.raises(RoutingError, match="needs parameter 'id'"):
            router.path_for("city_show")

    def test_converter_in_template(self) -> None:
        router = Router({"city_show": "/cities/{id:int}"})
        assert router.path_for("city_show", id=5) == "/cities/5"


class TestUrlFor:
    @pytest.fixture
    def router(self) -> Router:
        router = Router()
        router.resources(City)
        return router

    def test_string_passthrough(self, router: Router) -> None:
        assert router.url_for("/anywhere") == "/anywhere"

    def test_record_is_show_path(self, router: Router) -> None:
        assert router.url_for(City(id=2, name="x")) == "/cities/2"

    def test_options_with_resource(self, router: Router) -> None:
        assert router.url_for({"action": "edit", "id": 3}, resource=City) == "/cities/3/edit"

    def test_options_name_resource(self, router: Router) -> None:
        assert router.url_for({"action": "new", "resource": "city"}) == "/cities/new"

    def test_options_without_resource(self, router: Router) -> None:
        with pytest.raises(RoutingError):
            router.url_for({"action": "index"})

    def test_unsaved_record(self, router: Router) -> None:
        with pytest.raises(RoutingError, match="unsaved"):
            router.polymorphic_path(City(name="x"))


class TestFromApp:
    def test_reads_named_routes(self) -> None:
        app = FastAPI()

        @app.get("/towns/{id}", name="city_show")
        def show_city(id: int) -> dict[str, int]:
            return {"id": id}

        router = Router.from_app(app)
        assert router.has_route_for(City)
        assert router.polymorphic_path(City(id=4, name="x")) == "/towns/4"
