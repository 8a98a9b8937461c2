"""Shelter Routes — shelter info, admin edit, the shelter's animals, and its gallery."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap, unwrap_page
from seepaw.core.domain_types import Caller
from seepaw.schemas.animal import AnimalSummary
from seepaw.schemas.common import PagedResponse
from seepaw.schemas.image import ImageBatchCreate, ImageResponse
from seepaw.schemas.shelter import ShelterResponse, ShelterUpdate
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/shelters", tags=["shelters"])


@router.get("/{shelter_id}", response_model=ShelterResponse)
async def get_shelter(shelter_id: UUID, mediator: Mediator = Depends(get_mediator)):
    return unwrap(await mediator.send(m.GetShelter(shelter_id)))


@router.put("/{shelter_id}", response_model=ShelterResponse)
async def edit_shelter(
    shelter_id: UUID,
    body: ShelterUpdate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.EditShelter(caller, shelter_id, body)))


@router.get("/{shelter_id}/animals", response_model=PagedResponse[AnimalSummary])
async def list_shelter_animals(
    shelter_id: UUID,
    page: int = Query(1),
    size: int = Query(10),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap_page(await mediator.send(
        m.ListShelterAnimals(shelter_id, page=page, size=size),
    ))


@router.post(
    "/{shelter_id}/images",
    response_model=list[ImageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_shelter_images(
    shelter_id: UUID,
    body: ImageBatchCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        m.AddShelterImages(caller, shelter_id, tuple(body.images)),
    ))
