"""Animal Routes — public catalogue, admin lifecycle, gallery, eligibility and weekly schedule.

Invariants:
    - Listing and details are anonymous; every write needs X-User-Id of a shelter admin
    - Routes build a message, send it through the Mediator, unwrap the Result
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap, unwrap_page
from seepaw.core.domain_types import Caller, Species, SizeType, SexType
from seepaw.schemas.animal import (
    AnimalCreate, AnimalUpdate, AnimalSummary, AnimalDetails, EligibilityResponse,
)
from seepaw.schemas.common import PagedResponse
from seepaw.schemas.image import ImageBatchCreate, ImageResponse
from seepaw.schemas.schedule import WeeklyScheduleResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/animals", tags=["animals"])


@router.get("", response_model=PagedResponse[AnimalSummary])
async def list_animals(
    page: int = Query(1),
    size: int = Query(10),
    species: Species | None = Query(None),
    age: int | None = Query(None, ge=0),
    size_type: SizeType | None = Query(None),
    sex: SexType | None = Query(None),
    name: str | None = Query(None),
    shelter_name: str | None = Query(None),
    breed_id: UUID | None = Query(None),
    mediator: Mediator = Depends(get_mediator),
):
    """Visible animals, filtered and paged."""
    return unwrap_page(await mediator.send(m.ListAnimals(
        page=page, size=size, species=species, age=age, size_type=size_type,
        sex=sex, name=name, shelter_name=shelter_name, breed_id=breed_id,
    )))


@router.get("/{animal_id}", response_model=AnimalDetails)
async def get_animal(animal_id: UUID, mediator: Mediator = Depends(get_mediator)):
    return unwrap(await mediator.send(m.GetAnimalDetails(animal_id)))


@router.post("", response_model=AnimalDetails, status_code=status.HTTP_201_CREATED)
async def create_animal(
    body: AnimalCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CreateAnimal(caller, body)))


@router.put("/{animal_id}", response_model=AnimalDetails)
async def edit_animal(
    animal_id: UUID,
    body: AnimalUpdate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.EditAnimal(caller, animal_id, body)))


@router.patch("/{animal_id}/deactivate", response_model=AnimalDetails)
async def deactivate_animal(
    animal_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.DeactivateAnimal(caller, animal_id)))


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal(
    animal_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    unwrap(await mediator.send(m.DeleteAnimal(caller, animal_id)))


@router.get("/{animal_id}/eligibility", response_model=EligibilityResponse)
async def check_eligibility(
    animal_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    """Can the caller open an ownership request for this animal right now?"""
    return unwrap(await mediator.send(m.CheckEligibility(caller, animal_id)))


@router.get("/{animal_id}/schedule", response_model=WeeklyScheduleResponse)
async def get_weekly_schedule(
    animal_id: UUID,
    start_date: date = Query(...),
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    """Free, reserved and closed time for the week starting on `start_date` (a Monday)."""
    return unwrap(await mediator.send(
        m.GetAnimalWeeklySchedule(caller, animal_id, start_date),
    ))


# ─── Gallery ─────────────────────────────────────────────────────

@router.get("/{animal_id}/images", response_model=list[ImageResponse])
async def list_images(animal_id: UUID, mediator: Mediator = Depends(get_mediator)):
    return unwrap(await mediator.send(m.ListAnimalImages(animal_id)))


@router.post(
    "/{animal_id}/images",
    response_model=list[ImageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_images(
    animal_id: UUID,
    body: ImageBatchCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        m.AddAnimalImages(caller, animal_id, tuple(body.images)),
    ))


@router.delete(
    "/{animal_id}/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_image(
    animal_id: UUID,
    image_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    unwrap(await mediator.send(m.DeleteAnimalImage(caller, animal_id, image_id)))


@router.patch("/{animal_id}/images/{image_id}/principal", response_model=ImageResponse)
async def set_principal_image(
    animal_id: UUID,
    image_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        m.SetAnimalPrincipalImage(caller, animal_id, image_id),
    ))
