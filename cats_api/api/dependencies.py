"""Route Dependencies — hand the per-app CatsService to route handlers.

Invariants:
    - The service lives on app.state, built once by create_app()
    - Routes never construct repositories or services themselves
"""

from fastapi import Request

from cats_api.services.cats_service import CatsService


def get_cats_service(request: Request) -> CatsService:
    """FastAPI dependency for the cats application service."""
    return request.app.state.cats_service
