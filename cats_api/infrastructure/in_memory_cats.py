"""In-Memory Cat Repository — authoritative store of cats for one process.

Invariants:
    - _cats and _next_id are owned by the instance; nothing else touches them
    - Ids start at 1, only advance on a successful create, never reused
    - Every read-modify-write runs under _lock (no duplicate ids, read-your-writes)
    - update keeps the stored id and re-validates the merged cat; an invalid
      merge leaves the stored cat untouched

Design Decisions:
    - threading.Lock over asyncio.Lock: methods are synchronous and may be
      called from the event loop or from FastAPI's threadpool
    - Injected clock: "birth date in the past" is checked against clock(),
      so tests pin "now" instead of patching datetime
"""

import logging
import threading
from collections.abc import Mapping
from datetime import datetime

from cats_api.core.cat import Cat, make_cat
from cats_api.core.clock import Clock, utc_now
from cats_api.core.domain_types import CatId, RepositoryOperation
from cats_api.core.errors import CatNotFoundError

logger = logging.getLogger(__name__)


class InMemoryCatRepository:
    """CatRepository backed by a dict and a monotonically increasing counter."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._cats: dict[CatId, Cat] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get_all(self) -> list[Cat]:
        with self._lock:
            return list(self._cats.values())

    def get_by_id(self, cat_id: CatId) -> Cat:
        with self._lock:
            return self._get_or_raise(cat_id, RepositoryOperation.GET)

    def create(
        self,
        name: str,
        breed: str,
        birth_date: datetime,
        death_date: datetime | None = None,
    ) -> Cat:
        with self._lock:
            cat_id = CatId(self._next_id)
            cat = make_cat(
                cat_id, name, breed, birth_date, death_date, self._clock(),
            )
            self._cats[cat_id] = cat
            self._next_id += 1
        logger.debug(
            f"Stored cat {cat_id}",
            extra={"cat_id": cat_id, "operation": RepositoryOperation.CREATE.value},
        )
        return cat

    def update(self, cat_id: CatId, changes: Mapping[str, object]) -> Cat:
        with self._lock:
            existing = self._get_or_raise(cat_id, RepositoryOperation.UPDATE)
            fields = existing.merged(changes)
            updated = make_cat(
                existing.id,
                fields["name"],
                fields["breed"],
                fields["birth_date"],  # type: ignore[arg-type]
                fields["death_date"],  # type: ignore[arg-type]
                self._clock(),
            )
            self._cats[cat_id] = updated
        logger.debug(
            f"Updated cat {cat_id}",
            extra={"cat_id": cat_id, "operation": RepositoryOperation.UPDATE.value},
        )
        return updated

    def remove(self, cat_id: CatId) -> None:
        with self._lock:
            self._get_or_raise(cat_id, RepositoryOperation.REMOVE)
            del self._cats[cat_id]
        logger.debug(
            f"Removed cat {cat_id}",
            extra={"cat_id": cat_id, "operation": RepositoryOperation.REMOVE.value},
        )

    def _get_or_raise(self, cat_id: CatId, operation: RepositoryOperation) -> Cat:
        """Caller must hold _lock."""
        cat = self._cats.get(cat_id)
        if cat is None:
            raise CatNotFoundError(cat_id, operation.value)
        return cat
