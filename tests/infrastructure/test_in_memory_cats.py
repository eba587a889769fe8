"""In-memory repository — CRUD semantics, id allocation and concurrency.

Invariants:
    - Ids start at 1 and are never reused, even after remove
    - Failed creates do not consume ids or store anything
    - update preserves id, re-validates, leaves the stored cat alone on failure
    - Concurrent creates never share an id
"""

import threading
from datetime import timedelta

import pytest

from cats_api.core.clock import fixed_clock
from cats_api.core.domain_types import CatId
from cats_api.core.errors import CatInvalidError, CatNotFoundError
from cats_api.infrastructure.in_memory_cats import InMemoryCatRepository
from tests.factories import NOW, utc


def test_create_then_get_round_trip(repository):
    cat = repository.create("Whiskers", "Siamese", utc(2020, 1, 1))
    assert cat.id == 1
    assert repository.get_by_id(CatId(1)) == cat


def test_remove_then_get_raises_not_found(repository):
    repository.create("Whiskers", "Siamese", utc(2020, 1, 1))
    repository.remove(CatId(1))
    with pytest.raises(CatNotFoundError) as exc_info:
        repository.get_by_id(CatId(1))
    assert exc_info.value.cat_id == 1


def test_remove_twice_raises_not_found(repository):
    cat = repository.create("Felix", "Bombay", utc(2019, 3, 3))
    repository.remove(cat.id)
    with pytest.raises(CatNotFoundError):
        repository.remove(cat.id)


def test_get_all_empty(repository):
    assert repository.get_all() == []


def test_get_all_in_insertion_order(repository):
    names = ["A", "B", "C"]
    for name in names:
        repository.create(name, "Tabby", utc(2020, 1, 1))
    assert [cat.name for cat in repository.get_all()] == names


def test_get_all_returns_snapshot(repository):
    repository.create("A", "Tabby", utc(2020, 1, 1))
    snapshot = repository.get_all()
    repository.create("B", "Tabby", utc(2020, 1, 1))
    assert len(snapshot) == 1


def test_ids_are_monotonic_and_never_reused(repository):
    first = repository.create("A", "Tabby", utc(2020, 1, 1))
    second = repository.create("B", "Tabby", utc(2020, 1, 1))
    repository.remove(second.id)
    third = repository.create("C", "Tabby", utc(2020, 1, 1))
    assert (first.id, second.id, third.id) == (1, 2, 3)


def test_invalid_create_stores_nothing_and_keeps_counter(repository):
    with pytest.raises(CatInvalidError) as exc_info:
        repository.create("Whiskers", "Siamese", NOW + timedelta(days=365))
    assert "Birth date must be in the past" in exc_info.value.violations
    assert repository.get_all() == []
    assert repository.create("Whiskers", "Siamese", utc(2020, 1, 1)).id == 1


def test_birth_check_uses_injected_clock():
    repo = InMemoryCatRepository(fixed_clock(utc(2000, 1, 1)))
    with pytest.raises(CatInvalidError):
        repo.create("Early", "Tabby", utc(2010, 1, 1))


def test_get_unknown_id_raises(repository):
    with pytest.raises(CatNotFoundError) as exc_info:
        repository.get_by_id(CatId(404))
    assert exc_info.value.context.operation == "get"


def test_update_merges_fields(repository):
    cat = repository.create("Whiskers", "Siamese", utc(2020, 1, 1))
    updated = repository.update(cat.id, {"name": "Sir Whiskers"})
    assert updated.name == "Sir Whiskers"
    assert updated.breed == "Siamese"
    assert repository.get_by_id(cat.id) == updated


def test_update_never_changes_id(repository):
    cat = repository.create("Whiskers", "Siamese", utc(2020, 1, 1))
    updated = repository.update(cat.id, {"id": 999, "breed": "Persian"})
    assert updated.id == cat.id
    with pytest.raises(CatNotFoundError):
        repository.get_by_id(CatId(999))


def test_update_unknown_id_raises(repository):
    with pytest.raises(CatNotFoundError) as exc_info:
        repository.update(CatId(5), {"name": "Shadow"})
    assert exc_info.value.context.operation == "update"


def test_update_revalidates_merged_cat(repository):
    cat = repository.create("Whiskers", "Siamese", utc(2020, 1, 1))
    with pytest.raises(CatInvalidError) as exc_info:
        repository.update(cat.id, {"death_date": utc(2019, 1, 1)})
    assert exc_info.value.violations == ["Death date must be after birth date"]
    assert repository.get_by_id(cat.id) == cat


def test_update_can_record_and_clear_death(repository):
    cat = repository.create("Whiskers", "Siamese", utc(2010, 1, 1))
    dead = repository.update(cat.id, {"death_date": utc(2015, 1, 1)})
    assert not dead.is_alive
    assert dead.get_age_at(NOW) == 5
    alive = repository.update(cat.id, {"death_date": None})
    assert alive.is_alive


def test_update_blank_name_rejected(repository):
    cat = repository.create("Whiskers", "Siamese", utc(2020, 1, 1))
    with pytest.raises(CatInvalidError):
        repository.update(cat.id, {"name": "   "})


def test_concurrent_creates_get_unique_ids(repository):
    per_thread = 50
    threads_count = 8
    created = []
    created_lock = threading.Lock()

    def worker():
        for i in range(per_thread):
            cat = repository.create(f"cat-{i}", "Tabby", utc(2020, 1, 1))
            with created_lock:
                created.append(cat.id)

    threads = [threading.Thread(target=worker) for _ in range(threads_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == per_thread * threads_count
    assert len(set(created)) == len(created)
    assert sorted(created) == list(range(1, len(created) + 1))
    assert len(repository.get_all()) == len(created)
