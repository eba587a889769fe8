"""Cat Schemas — Pydantic models for the /cats wire format.

Invariants:
    - JSON keys are camelCase (birthDate, deathDate, isAlive); attributes snake_case
    - CatCreate never carries an id; CatUpdate ignores one if sent
    - All datetimes normalized to UTC before reaching the service
    - CatUpdate.changes() only contains fields the client actually sent

Design Decisions:
    - Schemas do shape checks (types, blank strings); date ordering and
      "birth in the past" stay in core/cat.py so every entry point shares them
    - exclude_unset over Optional sentinels: "deathDate": null clears a death
      date, an absent deathDate leaves it alone
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cats_api.core.cat import Cat
from cats_api.core.clock import to_utc


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _normalize_datetime(v: datetime | None) -> datetime | None:
    return to_utc(v) if v is not None else None


class CatCreate(_CamelModel):
    """Cat creation payload — everything but the id."""
    name: str = Field(min_length=1, max_length=200)
    breed: str = Field(min_length=1, max_length=200)
    birth_date: datetime
    death_date: datetime | None = None

    @field_validator("name", "breed")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("birth_date", "death_date")
    @classmethod
    def normalize_utc(cls, v: datetime | None) -> datetime | None:
        return _normalize_datetime(v)


class CatUpdate(_CamelModel):
    """Partial update payload — any subset of the mutable fields."""
    name: str | None = Field(None, min_length=1, max_length=200)
    breed: str | None = Field(None, min_length=1, max_length=200)
    birth_date: datetime | None = None
    death_date: datetime | None = None

    @field_validator("name", "breed")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("birth_date", "death_date")
    @classmethod
    def normalize_utc(cls, v: datetime | None) -> datetime | None:
        return _normalize_datetime(v)

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class CatResponse(_CamelModel):
    """Cat as returned by the API, with age computed at response time."""
    id: int
    name: str
    breed: str
    birth_date: datetime
    death_date: datetime | None = None
    age: int
    is_alive: bool

    @classmethod
    def from_cat(cls, cat: Cat, now: datetime) -> "CatResponse":
        return cls(
            id=cat.id,
            name=cat.name,
            breed=cat.breed,
            birth_date=cat.birth_date,
            death_date=cat.death_date,
            age=cat.get_age_at(now),
            is_alive=cat.is_alive,
        )
