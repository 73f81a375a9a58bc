"""Record models shared by the test suite."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import Field

from dryview import ColumnType, Record, belongs_to, column
from dryview.records import has_many


class City(Record):
    name: str


class Country(Record):
    name: str


class Pet(Record):
    name: str


class Note(Record):
    body: str


class LineItem(Record):
    quantity: int = 1


class Person(Record):
    first_name: str = Field(max_length=50)
    last_name: str | None = Field(default=None, title="Surname")
    age: int | None = None
    income: float | None = None
    salary: Decimal | None = None
    birthday: dt.date | None = None
    last_seen: dt.datetime | None = column(ColumnType.TIME, default=None)
    registered_at: dt.datetime | None = column(ColumnType.DATE, default=None)
    bio: str | None = column(ColumnType.TEXT, default=None)
    avatar: bytes | None = None
    active: bool = True
    city: City | None = None
    city_id: int | None = None
    country: Country | None = None
    country_id: int | None = None
    pets: list[Pet] = Field(default_factory=list)

    associations = (
        belongs_to("city", City),
        belongs_to("country", Country),
        has_many("pets", Pet),
    )

    def label(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)
