"""Cat construction rules — validate_cat (tagged result) and make_cat (raising).

Tests:
    - Valid input returns Valid(cat) with trimmed text and UTC dates
    - Each rule reports its own description; all violations are collected
    - make_cat raises CatInvalidError carrying every violation
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from cats_api.core.cat import (
    BIRTH_DATE_IN_PAST,
    BIRTH_DATE_REQUIRED,
    BREED_REQUIRED,
    DEATH_AFTER_BIRTH,
    NAME_REQUIRED,
    Invalid,
    Valid,
    make_cat,
    validate_cat,
)
from cats_api.core.domain_types import CatId
from cats_api.core.errors import CatInvalidError
from tests.factories import NOW, utc


def _validate(**overrides):
    fields = {
        "cat_id": CatId(1),
        "name": "Whiskers",
        "breed": "Siamese",
        "birth_date": utc(2020, 1, 1),
        "death_date": None,
        "now": NOW,
    }
    fields.update(overrides)
    return validate_cat(**fields)


def test_valid_cat():
    result = _validate()
    assert isinstance(result, Valid)
    assert result.cat.id == 1
    assert result.cat.name == "Whiskers"
    assert result.cat.death_date is None


def test_valid_cat_with_death_date():
    result = _validate(death_date=utc(2022, 1, 1))
    assert isinstance(result, Valid)
    assert not result.cat.is_alive


def test_name_and_breed_are_trimmed():
    result = _validate(name="  Felix ", breed="\tBombay\n")
    assert isinstance(result, Valid)
    assert result.cat.name == "Felix"
    assert result.cat.breed == "Bombay"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_rejected(name):
    result = _validate(name=name)
    assert isinstance(result, Invalid)
    assert result.violations == (NAME_REQUIRED,)


@pytest.mark.parametrize("breed", ["", " \t", None])
def test_blank_breed_rejected(breed):
    result = _validate(breed=breed)
    assert isinstance(result, Invalid)
    assert result.violations == (BREED_REQUIRED,)


def test_birth_date_required():
    result = _validate(birth_date=None)
    assert isinstance(result, Invalid)
    assert result.violations == (BIRTH_DATE_REQUIRED,)


@pytest.mark.parametrize(
    "birth",
    [NOW, NOW + timedelta(seconds=1), NOW + timedelta(days=365)],
)
def test_birth_date_not_in_past_rejected(birth):
    result = _validate(birth_date=birth)
    assert isinstance(result, Invalid)
    assert BIRTH_DATE_IN_PAST in result.violations


def test_birth_date_just_before_now_accepted():
    assert isinstance(_validate(birth_date=NOW - timedelta(seconds=1)), Valid)


@pytest.mark.parametrize(
    "death",
    [utc(2020, 1, 1), utc(2019, 12, 31)],
)
def test_death_not_after_birth_rejected(death):
    result = _validate(birth_date=utc(2020, 1, 1), death_date=death)
    assert isinstance(result, Invalid)
    assert result.violations == (DEATH_AFTER_BIRTH,)


def test_all_violations_collected_in_order():
    result = _validate(
        name="", breed=" ",
        birth_date=utc(2030, 1, 1), death_date=utc(2029, 1, 1),
    )
    assert isinstance(result, Invalid)
    assert result.violations == (
        NAME_REQUIRED, BREED_REQUIRED, BIRTH_DATE_IN_PAST, DEATH_AFTER_BIRTH,
    )


def test_naive_and_plain_dates_normalized_to_utc():
    result = _validate(
        birth_date=date(2020, 1, 1), death_date=datetime(2021, 1, 1, 12),
    )
    assert isinstance(result, Valid)
    assert result.cat.birth_date == utc(2020, 1, 1)
    assert result.cat.death_date == utc(2021, 1, 1, 12)
    assert result.cat.death_date.tzinfo == timezone.utc


def test_make_cat_returns_cat():
    cat = make_cat(CatId(7), "Mittens", "Persian", utc(2019, 4, 1), None, NOW)
    assert cat.id == 7
    assert cat.breed == "Persian"


def test_make_cat_future_birth_raises():
    with pytest.raises(CatInvalidError) as exc_info:
        make_cat(
            CatId(1), "Whiskers", "Siamese",
            NOW + timedelta(days=365), None, NOW,
        )
    assert "Birth date must be in the past" in exc_info.value.message
    assert exc_info.value.violations == [BIRTH_DATE_IN_PAST]
    assert exc_info.value.http_status == 400


def test_make_cat_reports_every_violation():
    with pytest.raises(CatInvalidError) as exc_info:
        make_cat(CatId(1), "", "", utc(2020, 1, 1), utc(2019, 1, 1), NOW)
    assert exc_info.value.violations == [
        NAME_REQUIRED, BREED_REQUIRED, DEATH_AFTER_BIRTH,
    ]
