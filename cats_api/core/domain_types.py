"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CatId wraps a positive int — assigned by the repository, never reused
    - MUTABLE_CAT_FIELDS never contains "id"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CatId = NewType("CatId", int)


# ─── Field Sets ──────────────────────────────────────────────────

MUTABLE_CAT_FIELDS: tuple[str, ...] = (
    "name", "breed", "birth_date", "death_date",
)


# ─── Enums ───────────────────────────────────────────────────────

class RepositoryOperation(str, Enum):
    """Repository operations — surfaced in error context and logs."""
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"
