"""Fostering Routes — the caller's monthly sponsorships."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap
from seepaw.core.domain_types import Caller
from seepaw.schemas.fostering import FosteringCreate, FosteringResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/fosterings", tags=["fosterings"])


@router.get("", response_model=list[FosteringResponse])
async def list_active_fosterings(
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.ListActiveFosterings(caller)))


@router.post("", response_model=FosteringResponse, status_code=status.HTTP_201_CREATED)
async def add_fostering(
    body: FosteringCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        m.AddFostering(caller, body.animal_id, body.month_value),
    ))


@router.patch("/{fostering_id}/cancel", response_model=FosteringResponse)
async def cancel_fostering(
    fostering_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CancelFostering(caller, fostering_id)))
