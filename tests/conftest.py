"""Root conftest — shared clock, repository and service fixtures.

Invariants:
    - "now" is pinned to 2023-06-15T10:00Z for every test (tests.factories.NOW)
    - Every test gets a fresh repository (ids restart at 1)
"""

import os

import pytest

from cats_api.core.clock import fixed_clock
from cats_api.infrastructure.in_memory_cats import InMemoryCatRepository
from cats_api.services.cats_service import CatsService
from tests.factories import NOW

# Human-readable logs in test output, regardless of a developer's .env
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def repository(clock):
    return InMemoryCatRepository(clock)


@pytest.fixture
def service(repository, clock):
    return CatsService(repository, clock)
