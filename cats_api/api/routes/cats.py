"""Cats Routes — REST mapping of the cats use cases.

Invariants:
    - GET /cats, GET /cats/{id}, POST /cats, PATCH /cats/{id}, DELETE /cats/{id}
    - CatNotFoundError → 404, CatInvalidError → 400 (via global error handlers)
    - Path ids are integers >= 1; anything else is a 400 VALIDATION_ERROR
    - Responses carry age computed with the service clock at response time
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from cats_api.api.dependencies import get_cats_service
from cats_api.core.domain_types import CatId
from cats_api.schemas.cat import CatCreate, CatResponse, CatUpdate
from cats_api.services.cats_service import CatsService

router = APIRouter(prefix="/cats", tags=["cats"])

CatIdParam = Annotated[int, Path(ge=1, description="Cat identifier")]


@router.get("", response_model=list[CatResponse])
async def list_cats(service: CatsService = Depends(get_cats_service)):
    """List every stored cat in insertion order."""
    now = service.now()
    return [CatResponse.from_cat(cat, now) for cat in service.list_cats()]


@router.get("/{cat_id}", response_model=CatResponse)
async def get_cat(
    cat_id: CatIdParam,
    service: CatsService = Depends(get_cats_service),
):
    cat = service.get_cat(CatId(cat_id))
    return CatResponse.from_cat(cat, service.now())


@router.post(
    "", response_model=CatResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_cat(
    body: CatCreate, service: CatsService = Depends(get_cats_service),
):
    """Create a cat. The id is assigned by the repository."""
    cat = service.create_cat(
        body.name, body.breed, body.birth_date, body.death_date,
    )
    return CatResponse.from_cat(cat, service.now())


@router.patch("/{cat_id}", response_model=CatResponse)
async def update_cat(
    cat_id: CatIdParam,
    body: CatUpdate,
    service: CatsService = Depends(get_cats_service),
):
    """Apply a partial update. The id in the path is the only identity."""
    cat = service.update_cat(CatId(cat_id), body.changes())
    return CatResponse.from_cat(cat, service.now())


@router.delete("/{cat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cat(
    cat_id: CatIdParam,
    service: CatsService = Depends(get_cats_service),
):
    service.delete_cat(CatId(cat_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
