"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The repository is the sole writer of stored cats
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: the only implementation is in-memory, every call is
      bounded and total (success or a typed CatsApiError)
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Protocol

from cats_api.core.cat import Cat
from cats_api.core.domain_types import CatId


class CatRepository(Protocol):
    """Contract for cat persistence — implemented by shell.

    get_by_id/update/remove raise CatNotFoundError on a miss;
    create/update raise CatInvalidError when the result breaks an invariant.
    """
    def get_all(self) -> list[Cat]: ...
    def get_by_id(self, cat_id: CatId) -> Cat: ...
    def create(
        self,
        name: str,
        breed: str,
        birth_date: datetime,
        death_date: datetime | None = None,
    ) -> Cat: ...
    def update(self, cat_id: CatId, changes: Mapping[str, object]) -> Cat: ...
    def remove(self, cat_id: CatId) -> None: ...
