"""Breed Routes — reference data and catalogue sync."""

from fastapi import APIRouter, Depends, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap
from seepaw.core.domain_types import Caller
from seepaw.schemas.breed import BreedCreate, BreedResponse, BreedSyncResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/breeds", tags=["breeds"])


@router.get("", response_model=list[BreedResponse])
async def list_breeds(mediator: Mediator = Depends(get_mediator)):
    return unwrap(await mediator.send(m.ListBreeds()))


@router.post("", response_model=BreedResponse, status_code=status.HTTP_201_CREATED)
async def create_breed(
    body: BreedCreate,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.CreateBreed(caller, body)))


@router.post("/sync", response_model=BreedSyncResponse)
async def sync_breeds(
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    """Pull the external catalogue; 502 when it stays unreachable after retries."""
    return unwrap(await mediator.send(m.SyncBreeds(caller)))
