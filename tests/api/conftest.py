"""API test fixtures — isolated app per test + async ASGI client.

Invariants:
    - Every test gets a fresh app (fresh repository, ids restart at 1)
    - The app clock is pinned to tests.factories.NOW

Design Decisions:
    - create_app() instead of the module-level app: no shared store between tests
    - ASGITransport does not run lifespan; logging setup is not under test here
"""

import pytest
from httpx import ASGITransport, AsyncClient

from cats_api.config import Settings
from cats_api.main import create_app


@pytest.fixture
def app(clock):
    return create_app(Settings(log_format="text"), clock=clock)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def created_cat(client):
    """POST one valid cat and return the response body."""
    res = await client.post("/cats", json={
        "name": "Whiskers",
        "breed": "Siamese",
        "birthDate": "2020-01-01T00:00:00Z",
    })
    assert res.status_code == 201
    return res.json()
