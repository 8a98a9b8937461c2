"""Favorite Routes — the caller's bookmarked animals."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap, unwrap_page
from seepaw.core.domain_types import Caller
from seepaw.schemas.common import PagedResponse
from seepaw.schemas.favorite import FavoriteResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])


@router.get("", response_model=PagedResponse[FavoriteResponse])
async def list_favorites(
    page: int = Query(1),
    size: int = Query(10),
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap_page(await mediator.send(
        m.ListFavorites(caller, page=page, size=size),
    ))


@router.post(
    "/{animal_id}", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED,
)
async def add_favorite(
    animal_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.AddFavorite(caller, animal_id)))


@router.patch("/{animal_id}/deactivate", response_model=FavoriteResponse)
async def deactivate_favorite(
    animal_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.DeactivateFavorite(caller, animal_id)))
