"""Cat Entity — identity, descriptive fields, and date-based age arithmetic.

Invariants:
    - name and breed are non-empty and stored trimmed
    - birth_date < now at validation time
    - death_date is None OR death_date > birth_date
    - All dates are aware UTC datetimes; year/month/day always read in UTC
    - get_age_at never returns a negative age and is frozen at death

Design Decisions:
    - Cat() itself enforces every rule that does not depend on "now" and
      normalizes dates to UTC; the past-birth rule needs a clock, so it
      lives in validate_cat/make_cat
    - validate_cat returns a tagged Valid | Invalid result with every violated
      rule, make_cat is the raising wrapper used by the repository
    - "now" is an argument, never read from the wall clock here
    - Feb 29 birthdays compare by raw (month, day): not yet reached on Feb 28
      of a non-leap year, reached on Mar 1
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime

from cats_api.core.clock import Clock, to_utc, utc_now
from cats_api.core.domain_types import CatId, MUTABLE_CAT_FIELDS
from cats_api.core.errors import CatInvalidError

NAME_REQUIRED = "Name must not be empty"
BREED_REQUIRED = "Breed must not be empty"
BIRTH_DATE_REQUIRED = "Birth date is required"
BIRTH_DATE_IN_PAST = "Birth date must be in the past"
DEATH_AFTER_BIRTH = "Death date must be after birth date"


@dataclass(frozen=True)
class Cat:
    """A named, bred cat with a birth date and an optional death date."""

    id: CatId
    name: str
    breed: str
    birth_date: datetime
    death_date: datetime | None = None

    def __post_init__(self) -> None:
        name = _clean_text(self.name)
        breed = _clean_text(self.breed)
        birth = _utc_or_none(self.birth_date)
        death = _utc_or_none(self.death_date)
        violations = _rule_violations(name, breed, birth, death)
        if violations:
            raise CatInvalidError(violations)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "breed", breed)
        object.__setattr__(self, "birth_date", birth)
        object.__setattr__(self, "death_date", death)

    @property
    def is_alive(self) -> bool:
        return self.death_date is None

    def get_age_at(self, at: datetime | date) -> int:
        """Whole years elapsed between birth and `at`, frozen at death."""
        effective = to_utc(at)
        if self.death_date is not None and effective > self.death_date:
            effective = self.death_date
        if effective < self.birth_date:
            return 0

        years = effective.year - self.birth_date.year
        birthday = (self.birth_date.month, self.birth_date.day)
        if (effective.month, effective.day) < birthday:
            years -= 1
        return years

    def age(self, clock: Clock = utc_now) -> int:
        """Current age according to `clock`."""
        return self.get_age_at(clock())

    def merged(self, changes: Mapping[str, object]) -> dict[str, object]:
        """Field values after laying `changes` over this cat.

        Only MUTABLE_CAT_FIELDS are taken from `changes`; id always stays.
        """
        fields: dict[str, object] = {
            "name": self.name,
            "breed": self.breed,
            "birth_date": self.birth_date,
            "death_date": self.death_date,
        }
        for key in MUTABLE_CAT_FIELDS:
            if key in changes:
                fields[key] = changes[key]
        fields["id"] = self.id
        return fields


# ─── Validation ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Valid:
    cat: Cat


@dataclass(frozen=True)
class Invalid:
    violations: tuple[str, ...]


ValidationResult = Valid | Invalid


def _clean_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _utc_or_none(value: datetime | date | None) -> datetime | None:
    return to_utc(value) if value is not None else None


def _rule_violations(
    name: str,
    breed: str,
    birth: datetime | None,
    death: datetime | None,
    now: datetime | None = None,
) -> list[str]:
    """Violated rules in reporting order. The past-birth rule needs `now`."""
    violations: list[str] = []
    if not name:
        violations.append(NAME_REQUIRED)
    if not breed:
        violations.append(BREED_REQUIRED)
    if birth is None:
        violations.append(BIRTH_DATE_REQUIRED)
    else:
        if now is not None and birth >= to_utc(now):
            violations.append(BIRTH_DATE_IN_PAST)
        if death is not None and death <= birth:
            violations.append(DEATH_AFTER_BIRTH)
    return violations


def validate_cat(
    cat_id: CatId,
    name: object,
    breed: object,
    birth_date: datetime | date | None,
    death_date: datetime | date | None,
    now: datetime,
) -> ValidationResult:
    """Check every construction rule and collect all violations."""
    clean_name = _clean_text(name)
    clean_breed = _clean_text(breed)
    birth = _utc_or_none(birth_date)
    death = _utc_or_none(death_date)
    violations = _rule_violations(clean_name, clean_breed, birth, death, now)

    if violations:
        return Invalid(tuple(violations))
    return Valid(Cat(
        id=cat_id, name=clean_name, breed=clean_breed,
        birth_date=birth, death_date=death,
    ))


def make_cat(
    cat_id: CatId,
    name: object,
    breed: object,
    birth_date: datetime | date | None,
    death_date: datetime | date | None,
    now: datetime,
) -> Cat:
    """Construct a Cat or raise CatInvalidError listing every violation."""
    result = validate_cat(cat_id, name, breed, birth_date, death_date, now)
    if isinstance(result, Invalid):
        raise CatInvalidError(list(result.violations))
    return result.cat
