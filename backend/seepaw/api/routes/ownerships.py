"""Ownership Routes — the caller's own requests and adopted animals."""

from fastapi import APIRouter, Depends

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap
from seepaw.core.domain_types import Caller
from seepaw.schemas.ownership import OwnershipRequestResponse, OwnedAnimalResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/ownerships", tags=["ownerships"])


@router.get("/requests", response_model=list[OwnershipRequestResponse])
async def list_my_requests(
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    """Open requests plus recently rejected ones."""
    return unwrap(await mediator.send(m.ListUserOwnershipRequests(caller)))


@router.get("/owned-animals", response_model=list[OwnedAnimalResponse])
async def list_owned_animals(
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.ListOwnedAnimals(caller)))
