"""Cats Service — application entry point for cat use cases.

Invariants:
    - Every call delegates to the injected CatRepository; no state of its own
    - CatNotFoundError / CatInvalidError are logged and re-raised unchanged
    - now() is the same clock the repository validates against

Design Decisions:
    - Service owns logging of use-case outcomes so routes stay thin
"""

import logging
from collections.abc import Mapping
from datetime import datetime

from cats_api.core.cat import Cat
from cats_api.core.clock import Clock, utc_now
from cats_api.core.domain_types import CatId
from cats_api.core.errors import CatInvalidError, CatNotFoundError
from cats_api.core.repository_protocols import CatRepository

logger = logging.getLogger(__name__)


class CatsService:
    """List, get, create, update and delete cats."""

    def __init__(self, repository: CatRepository, clock: Clock = utc_now):
        self._repository = repository
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def list_cats(self) -> list[Cat]:
        logger.debug("list_cats called")
        cats = self._repository.get_all()
        logger.info(f"Retrieved {len(cats)} cats", extra={"count": len(cats)})
        return cats

    def get_cat(self, cat_id: CatId) -> Cat:
        logger.debug(f"get_cat called with id: {cat_id}", extra={"cat_id": cat_id})
        try:
            cat = self._repository.get_by_id(cat_id)
        except CatNotFoundError as e:
            logger.warning(
                f"Cat with id: {cat_id} not found",
                extra={"cat_id": cat_id, "error_code": e.code},
            )
            raise
        logger.info(f"Retrieved cat {cat.id}", extra={"cat_id": cat.id})
        return cat

    def create_cat(
        self,
        name: str,
        breed: str,
        birth_date: datetime,
        death_date: datetime | None = None,
    ) -> Cat:
        logger.debug(f"create_cat called with name: {name}")
        try:
            cat = self._repository.create(name, breed, birth_date, death_date)
        except CatInvalidError as e:
            logger.warning(
                f"Rejected cat {name!r}: {e.message}",
                extra={"error_code": e.code},
            )
            raise
        logger.info(
            f"Created cat: {cat.name} with id: {cat.id}",
            extra={"cat_id": cat.id},
        )
        return cat

    def update_cat(self, cat_id: CatId, changes: Mapping[str, object]) -> Cat:
        logger.debug(f"update_cat called with id: {cat_id}", extra={"cat_id": cat_id})
        try:
            cat = self._repository.update(cat_id, changes)
        except CatNotFoundError as e:
            logger.warning(
                f"Cat with id: {cat_id} not found during update",
                extra={"cat_id": cat_id, "error_code": e.code},
            )
            raise
        except CatInvalidError as e:
            logger.warning(
                f"Rejected update of cat {cat_id}: {e.message}",
                extra={"cat_id": cat_id, "error_code": e.code},
            )
            raise
        logger.info(f"Updated cat: {cat.name}", extra={"cat_id": cat.id})
        return cat

    def delete_cat(self, cat_id: CatId) -> None:
        logger.debug(f"delete_cat called with id: {cat_id}", extra={"cat_id": cat_id})
        try:
            self._repository.remove(cat_id)
        except CatNotFoundError as e:
            logger.warning(
                f"Cat with id: {cat_id} not found for deletion",
                extra={"cat_id": cat_id, "error_code": e.code},
            )
            raise
        logger.info(f"Deleted cat with id: {cat_id}", extra={"cat_id": cat_id})
