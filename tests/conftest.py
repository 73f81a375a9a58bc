"""Shared pytest fixtures for dryview tests."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest
from jinja2 import Environment
from sample_models import City, Country, Person

from dryview import Router, StandardHelper
from dryview.runtime.template_renderer import create_jinja_env


@pytest.fixture
def router() -> Router:
    """Routes for cities and people; countries deliberately have none."""
    router = Router()
    router.resources(City)
    router.resources(Person)
    return router


@pytest.fixture
def env() -> Environment:
    return create_jinja_env()


@pytest.fixture
def helper(router: Router, env: Environment) -> StandardHelper:
    return StandardHelper(router, env, resource=Person)


@pytest.fixture
def city() -> City:
    return City(id=7, name="Berlin")


@pytest.fixture
def country() -> Country:
    return Country(id=3, name="Germany")


@pytest.fixture
def person(city: City, country: Country) -> Person:
    return Person(
        id=1,
        first_name="Ada",
        last_name="Lovelace",
        age=1234,
        income=3.14159,
        salary=Decimal("1234.5"),
        birthday=dt.date(1980, 5, 17),
        last_seen=dt.datetime(2024, 1, 2, 8, 5),
        registered_at=dt.datetime(2024, 1, 2, 8, 5),
        bio="Hello\n\nWorld <b>",
        active=True,
        city=city,
        city_id=city.id,
        country=country,
        country_id=country.id,
    )
